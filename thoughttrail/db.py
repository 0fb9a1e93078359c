"""
Database client for the blogging API.

Accepts any SQLAlchemy URL (Postgres in production, SQLite for development
and tests). Every public method opens its own session; methods that touch
more than one table do so inside a single transaction.
"""

from __future__ import annotations

import logging
import random
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import create_engine, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from thoughttrail import comments
from thoughttrail.errors import Conflict, Forbidden, NotFound
from thoughttrail.models import (
    Base,
    BlogLikeRow,
    BlogRow,
    BlogTagRow,
    CommentRow,
    NotificationRow,
    UserRow,
    adjust_counters,
    empty_social_links,
)

logger = logging.getLogger(__name__)

IN_MEMORY_URL = "sqlite+pysqlite:///:memory:"

PROFILE_IMG_NAMES = [
    "Garfield", "Tinkerbell", "Annie", "Loki", "Cleo", "Angel", "Bob", "Mia",
    "Coco", "Gracie", "Bear", "Bella", "Abby", "Harley", "Cali", "Leo", "Luna",
    "Jack", "Felix", "Kiki",
]
PROFILE_IMG_COLLECTIONS = ["notionists-neutral", "adventurer-neutral", "fun-emoji"]


def default_profile_img() -> str:
    collection = random.choice(PROFILE_IMG_COLLECTIONS)
    seed = random.choice(PROFILE_IMG_NAMES)
    return f"https://api.dicebear.com/6.x/{collection}/svg?seed={seed}"


def slugify_title(title: str) -> str:
    slug = re.sub(r"[^a-zA-Z0-9]", " ", title)
    slug = re.sub(r"\s+", "-", slug.strip())
    return f"{slug}-{uuid.uuid4().hex[:10]}"


def _skip(page: int, limit: int, deleted_doc_count: int = 0) -> int:
    return max((max(page, 1) - 1) * limit - (deleted_doc_count or 0), 0)


@dataclass
class AuthorRecord:
    fullname: str
    username: str
    profile_img: str


@dataclass
class UserRecord:
    id: str
    fullname: str
    email: str
    username: str
    password: Optional[str]
    bio: str
    profile_img: str
    social_links: dict
    total_posts: int
    total_reads: int
    google_auth: bool
    joined_at: datetime

    @property
    def author(self) -> AuthorRecord:
        return AuthorRecord(self.fullname, self.username, self.profile_img)


@dataclass
class BlogRecord:
    id: str
    blog_id: str
    title: str
    des: str
    banner: str
    content: dict
    tags: list[str]
    author_id: str
    author: Optional[AuthorRecord]
    total_likes: int
    total_comments: int
    total_reads: int
    total_parent_comments: int
    draft: bool
    published_at: datetime


@dataclass
class CommentRecord:
    id: str
    blog_pk: str
    blog_author_id: str
    comment: str
    commented_by: str
    author: Optional[AuthorRecord]
    is_reply: bool
    parent_id: Optional[str]
    commented_at: datetime
    children: list[str] = field(default_factory=list)


@dataclass
class NotificationRecord:
    id: str
    type: str
    seen: bool
    created_at: datetime
    blog: dict
    user: AuthorRecord
    comment: Optional[dict] = None
    replied_on_comment: Optional[dict] = None
    reply: Optional[dict] = None


def _to_user_record(row: UserRow) -> UserRecord:
    return UserRecord(
        id=row.id,
        fullname=row.fullname,
        email=row.email,
        username=row.username,
        password=row.password,
        bio=row.bio or "",
        profile_img=row.profile_img,
        social_links={**empty_social_links(), **(row.social_links or {})},
        total_posts=row.total_posts,
        total_reads=row.total_reads,
        google_auth=row.google_auth,
        joined_at=row.joined_at,
    )


def _to_author(row: Optional[UserRow]) -> Optional[AuthorRecord]:
    if row is None:
        return None
    return AuthorRecord(row.fullname, row.username, row.profile_img)


def _to_blog_record(row: BlogRow, author: Optional[UserRow] = None) -> BlogRecord:
    return BlogRecord(
        id=row.id,
        blog_id=row.blog_id,
        title=row.title,
        des=row.des,
        banner=row.banner,
        content=row.content or {},
        tags=list(row.tags or []),
        author_id=row.author_id,
        author=_to_author(author),
        total_likes=row.total_likes,
        total_comments=row.total_comments,
        total_reads=row.total_reads,
        total_parent_comments=row.total_parent_comments,
        draft=row.draft,
        published_at=row.published_at,
    )


def _to_comment_record(
    row: CommentRow, author: Optional[UserRow] = None, children: Iterable[str] = ()
) -> CommentRecord:
    return CommentRecord(
        id=row.id,
        blog_pk=row.blog_pk,
        blog_author_id=row.blog_author_id,
        comment=row.comment,
        commented_by=row.commented_by,
        author=_to_author(author),
        is_reply=row.is_reply,
        parent_id=row.parent_id,
        commented_at=row.commented_at,
        children=list(children),
    )


class DbClient:
    """SQLAlchemy-backed store for every collection the API touches."""

    def __init__(self, database_url: Optional[str] = None):
        url = database_url or IN_MEMORY_URL
        if url.startswith("sqlite"):
            engine_kwargs: dict = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # One shared connection, otherwise every pooled connection
                # would see its own empty in-memory database.
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {"pool_pre_ping": True, "pool_recycle": 1800}
        self.engine = create_engine(url, future=True, **engine_kwargs)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def reset(self) -> None:
        """Drop and recreate every table (useful in tests)."""
        Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _generate_username(self, session: Session, email: str) -> str:
        username = email.split("@")[0]
        while session.execute(
            select(UserRow.id).where(UserRow.username == username)
        ).first():
            username = f"{email.split('@')[0]}{uuid.uuid4().hex[:5]}"
        return username

    def create_user(
        self,
        *,
        fullname: str,
        email: str,
        password_hash: Optional[str] = None,
        google_auth: bool = False,
        profile_img: Optional[str] = None,
    ) -> UserRecord:
        email = email.lower()
        try:
            with self.Session.begin() as session:
                if session.execute(
                    select(UserRow.id).where(UserRow.email == email)
                ).first():
                    raise Conflict("Email already exists")
                row = UserRow(
                    fullname=fullname.lower(),
                    email=email,
                    password=password_hash,
                    username=self._generate_username(session, email),
                    profile_img=profile_img or default_profile_img(),
                    social_links=empty_social_links(),
                    google_auth=google_auth,
                )
                session.add(row)
                session.flush()
                record = _to_user_record(row)
        except IntegrityError as exc:
            raise Conflict("Email already exists") from exc
        logger.info("Created user %s (google_auth=%s)", record.username, google_auth)
        return record

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.get(UserRow, user_id)
            return _to_user_record(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.execute(
                select(UserRow).where(UserRow.email == email.lower())
            ).scalar_one_or_none()
            return _to_user_record(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.execute(
                select(UserRow).where(UserRow.username == username)
            ).scalar_one_or_none()
            return _to_user_record(row) if row else None

    def set_password(self, user_id: str, password_hash: str) -> None:
        with self.Session.begin() as session:
            row = session.get(UserRow, user_id)
            if row is None:
                raise NotFound("User not found")
            row.password = password_hash

    def update_profile_img(self, user_id: str, url: str) -> None:
        with self.Session.begin() as session:
            row = session.get(UserRow, user_id)
            if row is None:
                raise NotFound("User not found")
            row.profile_img = url

    def update_profile(
        self, user_id: str, *, username: str, bio: str, social_links: dict
    ) -> UserRecord:
        try:
            with self.Session.begin() as session:
                row = session.get(UserRow, user_id)
                if row is None:
                    raise NotFound("User not found")
                taken = session.execute(
                    select(UserRow.id).where(
                        UserRow.username == username, UserRow.id != user_id
                    )
                ).first()
                if taken:
                    raise Conflict("username is already taken")
                row.username = username
                row.bio = bio
                row.social_links = {**empty_social_links(), **social_links}
                session.flush()
                return _to_user_record(row)
        except IntegrityError as exc:
            raise Conflict("username is already taken") from exc

    def search_users(self, query: str, limit: int = 50) -> list[AuthorRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(UserRow)
                .where(func.lower(UserRow.username).contains(query.lower(), autoescape=True))
                .order_by(UserRow.username)
                .limit(limit)
            ).scalars()
            return [_to_author(row) for row in rows]

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    def _replace_tags(self, session: Session, blog_pk: str, tags: list[str]) -> None:
        session.execute(delete(BlogTagRow).where(BlogTagRow.blog_pk == blog_pk))
        for position, tag in enumerate(tags):
            session.add(BlogTagRow(blog_pk=blog_pk, position=position, tag=tag))

    def save_blog(
        self,
        author_id: str,
        *,
        title: str,
        des: str,
        banner: str,
        content: dict,
        tags: list[str],
        draft: bool,
        blog_id: Optional[str] = None,
    ) -> str:
        """
        Create a blog, or update the one named by ``blog_id``, and return its slug.

        The author's ``total_posts`` follows the number of published blogs,
        so publishing a draft counts and saving a draft never does.
        """
        tags = [tag.lower() for tag in tags]
        with self.Session.begin() as session:
            if blog_id:
                row = session.execute(
                    select(BlogRow).where(BlogRow.blog_id == blog_id)
                ).scalar_one_or_none()
                if row is None:
                    raise NotFound("Blog not found")
                if row.author_id != author_id:
                    raise Forbidden("You can not edit this blog")
                was_published = not row.draft
                row.title = title
                row.des = des
                row.banner = banner
                row.content = content
                row.tags = tags
                row.draft = draft
                self._replace_tags(session, row.id, tags)
                delta = int(not draft) - int(was_published)
            else:
                row = BlogRow(
                    blog_id=slugify_title(title),
                    title=title,
                    des=des,
                    banner=banner,
                    content=content,
                    tags=tags,
                    author_id=author_id,
                    draft=draft,
                )
                session.add(row)
                session.flush()
                self._replace_tags(session, row.id, tags)
                delta = 0 if draft else 1
            adjust_counters(session, UserRow, author_id, total_posts=delta)
            slug = row.blog_id
        logger.info("Saved blog %s (draft=%s)", slug, draft)
        return slug

    def read_blog(
        self, blog_id: str, *, count_read: bool = True, allow_draft: bool = False
    ) -> BlogRecord:
        """Fetch a blog by slug, counting the read on the blog and its author."""
        with self.Session.begin() as session:
            row = session.execute(
                select(BlogRow).where(BlogRow.blog_id == blog_id)
            ).scalar_one_or_none()
            if row is None:
                raise NotFound("Blog not found")
            if row.draft and not allow_draft:
                raise Forbidden("you can not access draft blogs")
            if count_read:
                adjust_counters(session, BlogRow, row.id, total_reads=1)
                adjust_counters(session, UserRow, row.author_id, total_reads=1)
                session.refresh(row)
            author = session.get(UserRow, row.author_id)
            return _to_blog_record(row, author)

    def get_blog(self, blog_pk: str) -> Optional[BlogRecord]:
        with self.Session() as session:
            row = session.get(BlogRow, blog_pk)
            if row is None:
                return None
            return _to_blog_record(row, session.get(UserRow, row.author_id))

    def _list_blogs(self, where: list, order_by: list, offset: int, limit: int) -> list[BlogRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(BlogRow, UserRow)
                .join(UserRow, BlogRow.author_id == UserRow.id)
                .where(*where)
                .order_by(*order_by)
                .offset(offset)
                .limit(limit)
            ).all()
            return [_to_blog_record(blog, author) for blog, author in rows]

    def _count_blogs(self, where: list) -> int:
        with self.Session() as session:
            return session.execute(
                select(func.count()).select_from(BlogRow).where(*where)
            ).scalar_one()

    def list_latest_blogs(self, page: int = 1, limit: int = 5) -> list[BlogRecord]:
        return self._list_blogs(
            [BlogRow.draft.is_(False)],
            [BlogRow.published_at.desc(), BlogRow.id.desc()],
            _skip(page, limit),
            limit,
        )

    def count_latest_blogs(self) -> int:
        return self._count_blogs([BlogRow.draft.is_(False)])

    def list_trending_blogs(self, limit: int = 5) -> list[BlogRecord]:
        return self._list_blogs(
            [BlogRow.draft.is_(False)],
            [
                BlogRow.total_reads.desc(),
                BlogRow.total_likes.desc(),
                BlogRow.published_at.desc(),
            ],
            0,
            limit,
        )

    @staticmethod
    def _search_filter(
        tag: Optional[str] = None,
        query: Optional[str] = None,
        author: Optional[str] = None,
        eliminate_blog: Optional[str] = None,
    ) -> list:
        where = [BlogRow.draft.is_(False)]
        if tag:
            where.append(
                BlogRow.id.in_(
                    select(BlogTagRow.blog_pk).where(BlogTagRow.tag == tag.lower())
                )
            )
            if eliminate_blog:
                where.append(BlogRow.blog_id != eliminate_blog)
        elif query:
            where.append(
                func.lower(BlogRow.title).contains(query.lower(), autoescape=True)
            )
        elif author:
            where.append(BlogRow.author_id == author)
        return where

    def search_blogs(
        self,
        *,
        tag: Optional[str] = None,
        query: Optional[str] = None,
        author: Optional[str] = None,
        eliminate_blog: Optional[str] = None,
        page: int = 1,
        limit: int = 2,
    ) -> list[BlogRecord]:
        return self._list_blogs(
            self._search_filter(tag, query, author, eliminate_blog),
            [BlogRow.published_at.desc(), BlogRow.id.desc()],
            _skip(page, limit),
            limit,
        )

    def count_search_blogs(
        self,
        *,
        tag: Optional[str] = None,
        query: Optional[str] = None,
        author: Optional[str] = None,
    ) -> int:
        return self._count_blogs(self._search_filter(tag, query, author))

    @staticmethod
    def _user_blogs_filter(author_id: str, draft: bool, query: str) -> list:
        where = [BlogRow.author_id == author_id, BlogRow.draft.is_(draft)]
        if query:
            where.append(
                func.lower(BlogRow.title).contains(query.lower(), autoescape=True)
            )
        return where

    def list_user_blogs(
        self,
        author_id: str,
        *,
        draft: bool = False,
        query: str = "",
        page: int = 1,
        deleted_doc_count: int = 0,
        limit: int = 5,
    ) -> list[BlogRecord]:
        return self._list_blogs(
            self._user_blogs_filter(author_id, draft, query),
            [BlogRow.published_at.desc(), BlogRow.id.desc()],
            _skip(page, limit, deleted_doc_count),
            limit,
        )

    def count_user_blogs(self, author_id: str, *, draft: bool = False, query: str = "") -> int:
        return self._count_blogs(self._user_blogs_filter(author_id, draft, query))

    def delete_blog(self, user_id: str, blog_id: str) -> None:
        """Delete a blog with its tags, likes, comments and notifications."""
        with self.Session.begin() as session:
            row = session.execute(
                select(BlogRow).where(BlogRow.blog_id == blog_id)
            ).scalar_one_or_none()
            if row is None:
                raise NotFound("Blog not found")
            if row.author_id != user_id:
                raise Forbidden("You can not delete this blog")
            blog_pk, was_published = row.id, not row.draft
            blog_comments = select(CommentRow.id).where(CommentRow.blog_pk == blog_pk)
            for statement in (
                delete(NotificationRow).where(NotificationRow.blog_pk == blog_pk),
                # Notifications on other blogs may still point at these comments.
                update(NotificationRow)
                .where(NotificationRow.reply_id.in_(blog_comments))
                .values(reply_id=None),
                update(NotificationRow)
                .where(NotificationRow.replied_on_comment_id.in_(blog_comments))
                .values(replied_on_comment_id=None),
                delete(CommentRow).where(CommentRow.blog_pk == blog_pk),
                delete(BlogLikeRow).where(BlogLikeRow.blog_pk == blog_pk),
                delete(BlogTagRow).where(BlogTagRow.blog_pk == blog_pk),
                delete(BlogRow).where(BlogRow.id == blog_pk),
            ):
                session.execute(statement.execution_options(synchronize_session=False))
            session.expunge_all()
            adjust_counters(
                session, UserRow, user_id, total_posts=-1 if was_published else 0
            )
        logger.info("Deleted blog %s", blog_id)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    def is_liked(self, user_id: str, blog_pk: str) -> bool:
        with self.Session() as session:
            return session.get(BlogLikeRow, (user_id, blog_pk)) is not None

    def toggle_like(self, user_id: str, blog_pk: str, is_liked_by_user: bool) -> bool:
        """
        Move the (user, blog) like to the opposite of ``is_liked_by_user``.

        The stored like record decides whether anything changes, so a stale
        client flag can neither double count nor leave a second notification.
        Returns the resulting liked state.
        """
        want_liked = not is_liked_by_user
        try:
            with self.Session.begin() as session:
                blog = session.get(BlogRow, blog_pk)
                if blog is None:
                    raise NotFound("Blog not found")
                like = session.get(BlogLikeRow, (user_id, blog_pk))
                if (like is not None) == want_liked:
                    return want_liked
                if want_liked:
                    session.add(BlogLikeRow(user_id=user_id, blog_pk=blog_pk))
                    session.add(
                        NotificationRow(
                            type="like",
                            blog_pk=blog_pk,
                            notification_for=blog.author_id,
                            user_id=user_id,
                        )
                    )
                    adjust_counters(session, BlogRow, blog_pk, total_likes=1)
                else:
                    session.delete(like)
                    session.execute(
                        delete(NotificationRow)
                        .where(
                            NotificationRow.type == "like",
                            NotificationRow.user_id == user_id,
                            NotificationRow.blog_pk == blog_pk,
                        )
                        .execution_options(synchronize_session=False)
                    )
                    adjust_counters(session, BlogRow, blog_pk, total_likes=-1)
                return want_liked
        except IntegrityError:
            # A concurrent request stored the same like first.
            return True

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def add_comment(
        self,
        user_id: str,
        blog_pk: str,
        text: str,
        *,
        replying_to: Optional[str] = None,
        notification_id: Optional[str] = None,
    ) -> CommentRecord:
        with self.Session.begin() as session:
            row = comments.add_comment(
                session,
                user_id=user_id,
                blog_pk=blog_pk,
                text=text,
                replying_to=replying_to,
                notification_id=notification_id,
            )
            return _to_comment_record(row, session.get(UserRow, user_id))

    def delete_comment(self, user_id: str, comment_id: str) -> int:
        with self.Session.begin() as session:
            return comments.delete_comment(
                session, user_id=user_id, comment_id=comment_id
            )

    def get_comment(self, comment_id: str) -> Optional[CommentRecord]:
        with self.Session() as session:
            row = session.get(CommentRow, comment_id)
            if row is None:
                return None
            children = self._children_of(session, [row.id]).get(row.id, [])
            return _to_comment_record(row, session.get(UserRow, row.commented_by), children)

    @staticmethod
    def _children_of(session: Session, comment_ids: list[str]) -> dict[str, list[str]]:
        children: dict[str, list[str]] = {}
        if not comment_ids:
            return children
        rows = session.execute(
            select(CommentRow.parent_id, CommentRow.id)
            .where(CommentRow.parent_id.in_(comment_ids))
            .order_by(CommentRow.commented_at.asc())
        ).all()
        for parent_id, child_id in rows:
            children.setdefault(parent_id, []).append(child_id)
        return children

    def _list_comments(self, session: Session, where: list, skip: int, limit: int) -> list[CommentRecord]:
        rows = session.execute(
            select(CommentRow, UserRow)
            .join(UserRow, CommentRow.commented_by == UserRow.id)
            .where(*where)
            .order_by(CommentRow.commented_at.desc(), CommentRow.id.desc())
            .offset(max(skip, 0))
            .limit(limit)
        ).all()
        children = self._children_of(session, [comment.id for comment, _ in rows])
        return [
            _to_comment_record(comment, author, children.get(comment.id, []))
            for comment, author in rows
        ]

    def list_blog_comments(self, blog_pk: str, skip: int = 0, limit: int = 5) -> list[CommentRecord]:
        with self.Session() as session:
            return self._list_comments(
                session,
                [CommentRow.blog_pk == blog_pk, CommentRow.parent_id.is_(None)],
                skip,
                limit,
            )

    def list_replies(self, comment_id: str, skip: int = 0, limit: int = 5) -> list[CommentRecord]:
        with self.Session() as session:
            if session.get(CommentRow, comment_id) is None:
                raise NotFound("Comment not found")
            return self._list_comments(
                session, [CommentRow.parent_id == comment_id], skip, limit
            )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    @staticmethod
    def _notification_filter(user_id: str, type_filter: str = "all") -> list:
        where = [
            NotificationRow.notification_for == user_id,
            NotificationRow.user_id != user_id,
        ]
        if type_filter and type_filter != "all":
            where.append(NotificationRow.type == type_filter)
        return where

    def has_new_notifications(self, user_id: str) -> bool:
        with self.Session() as session:
            found = session.execute(
                select(NotificationRow.id)
                .where(
                    *self._notification_filter(user_id),
                    NotificationRow.seen.is_(False),
                )
                .limit(1)
            ).first()
            return found is not None

    def count_notifications(self, user_id: str, type_filter: str = "all") -> int:
        with self.Session() as session:
            return session.execute(
                select(func.count())
                .select_from(NotificationRow)
                .where(*self._notification_filter(user_id, type_filter))
            ).scalar_one()

    def list_notifications(
        self,
        user_id: str,
        *,
        page: int = 1,
        type_filter: str = "all",
        deleted_doc_count: int = 0,
        limit: int = 10,
    ) -> list[NotificationRecord]:
        """Return one page of the user's notifications and mark that page as seen."""
        with self.Session.begin() as session:
            rows = list(
                session.execute(
                    select(NotificationRow)
                    .where(*self._notification_filter(user_id, type_filter))
                    .order_by(NotificationRow.created_at.desc(), NotificationRow.id.desc())
                    .offset(_skip(page, limit, deleted_doc_count))
                    .limit(limit)
                ).scalars()
            )
            if not rows:
                return []

            blogs = {
                blog.id: blog
                for blog in session.execute(
                    select(BlogRow).where(BlogRow.id.in_({row.blog_pk for row in rows}))
                ).scalars()
            }
            actors = {
                user.id: user
                for user in session.execute(
                    select(UserRow).where(UserRow.id.in_({row.user_id for row in rows}))
                ).scalars()
            }
            comment_ids = {
                ref
                for row in rows
                for ref in (row.comment_id, row.replied_on_comment_id, row.reply_id)
                if ref
            }
            texts = dict(
                session.execute(
                    select(CommentRow.id, CommentRow.comment).where(
                        CommentRow.id.in_(comment_ids)
                    )
                ).all()
            ) if comment_ids else {}

            def comment_ref(ref: Optional[str]) -> Optional[dict]:
                if not ref or ref not in texts:
                    return None
                return {"id": ref, "comment": texts[ref]}

            records = []
            for row in rows:
                blog = blogs.get(row.blog_pk)
                records.append(
                    NotificationRecord(
                        id=row.id,
                        type=row.type,
                        seen=row.seen,
                        created_at=row.created_at,
                        blog={
                            "id": row.blog_pk,
                            "blog_id": blog.blog_id if blog else None,
                            "title": blog.title if blog else None,
                        },
                        user=_to_author(actors.get(row.user_id)),
                        comment=comment_ref(row.comment_id),
                        replied_on_comment=comment_ref(row.replied_on_comment_id),
                        reply=comment_ref(row.reply_id),
                    )
                )

            session.execute(
                update(NotificationRow)
                .where(NotificationRow.id.in_([row.id for row in rows]))
                .values(seen=True)
                .execution_options(synchronize_session=False)
            )
            return records
