"""
Comment threads: creating comments/replies and deleting whole comment subtrees.

Both routines run inside the caller's transaction so the comment rows, the
blog counters and the notifications either all change or none do.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from thoughttrail.errors import Forbidden, NotFound, ValidationFailed
from thoughttrail.models import BlogRow, CommentRow, NotificationRow, adjust_counters

logger = logging.getLogger(__name__)

EMPTY_COMMENT_MESSAGE = "Write something to leave a comment"


def add_comment(
    session: Session,
    *,
    user_id: str,
    blog_pk: str,
    text: str,
    replying_to: Optional[str] = None,
    notification_id: Optional[str] = None,
) -> CommentRow:
    """
    Persist a comment (or a reply when ``replying_to`` is set) and its notification.

    Top-level comments notify the blog author; replies notify the author of
    the parent comment. ``notification_id`` names the notification the
    caller is answering from their inbox, which gets the new comment attached
    as its ``reply``.
    """
    if not text or not text.strip():
        raise ValidationFailed(EMPTY_COMMENT_MESSAGE)

    blog = session.get(BlogRow, blog_pk)
    if blog is None:
        raise NotFound("Blog not found")

    parent = None
    recipient = blog.author_id
    if replying_to:
        parent = session.get(CommentRow, replying_to)
        if parent is None:
            raise NotFound("Comment not found")
        if parent.blog_pk != blog.id:
            raise Forbidden("You can only reply to comments on the same blog")
        recipient = parent.commented_by

    # The answered notification must be about the very comment being replied to.
    answered = None
    if notification_id:
        answered = session.get(NotificationRow, notification_id)
        if answered is None:
            raise NotFound("Notification not found")
        if (
            answered.notification_for != user_id
            or answered.blog_pk != blog.id
            or parent is None
            or answered.comment_id != parent.id
        ):
            raise Forbidden("You can not reply from this notification")

    row = CommentRow(
        blog_pk=blog.id,
        blog_author_id=blog.author_id,
        comment=text,
        commented_by=user_id,
        is_reply=parent is not None,
        parent_id=parent.id if parent else None,
    )
    session.add(row)
    session.flush()

    adjust_counters(
        session,
        BlogRow,
        blog.id,
        total_comments=1,
        total_parent_comments=0 if parent else 1,
    )

    session.add(
        NotificationRow(
            type="reply" if parent else "comment",
            blog_pk=blog.id,
            notification_for=recipient,
            user_id=user_id,
            comment_id=row.id,
            replied_on_comment_id=parent.id if parent else None,
        )
    )

    if answered is not None:
        answered.reply_id = row.id

    session.flush()
    return row


def collect_subtree(session: Session, root_id: str) -> list[str]:
    """Return ``root_id`` followed by every descendant id, level by level."""
    collected = [root_id]
    frontier = [root_id]
    while frontier:
        children = list(
            session.execute(
                select(CommentRow.id).where(CommentRow.parent_id.in_(frontier))
            ).scalars()
        )
        collected.extend(children)
        frontier = children
    return collected


def delete_comment_tree(session: Session, comment_id: str) -> int:
    """
    Remove a comment with all of its replies and return how many comments went away.

    Notifications about removed comments are deleted; notifications that
    merely point at one as their ``reply`` or ``replied_on_comment`` keep
    existing with that reference cleared.
    """
    root = session.get(CommentRow, comment_id)
    if root is None:
        raise NotFound("Comment not found")
    blog_pk = root.blog_pk
    was_top_level = root.parent_id is None

    removed = collect_subtree(session, root.id)

    session.execute(
        delete(NotificationRow)
        .where(NotificationRow.comment_id.in_(removed))
        .execution_options(synchronize_session=False)
    )
    session.execute(
        update(NotificationRow)
        .where(NotificationRow.reply_id.in_(removed))
        .values(reply_id=None)
        .execution_options(synchronize_session=False)
    )
    session.execute(
        update(NotificationRow)
        .where(NotificationRow.replied_on_comment_id.in_(removed))
        .values(replied_on_comment_id=None)
        .execution_options(synchronize_session=False)
    )
    # Deleting the rows also drops them from their parents' child lists.
    session.execute(
        delete(CommentRow)
        .where(CommentRow.id.in_(removed))
        .execution_options(synchronize_session=False)
    )
    session.expunge_all()

    adjust_counters(
        session,
        BlogRow,
        blog_pk,
        total_comments=-len(removed),
        total_parent_comments=-1 if was_top_level else 0,
    )
    logger.info("Deleted comment %s with %d replies", comment_id, len(removed) - 1)
    return len(removed)


def delete_comment(session: Session, *, user_id: str, comment_id: str) -> int:
    """Delete a comment subtree if ``user_id`` wrote the comment or owns the blog."""
    comment = session.get(CommentRow, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    if user_id not in (comment.commented_by, comment.blog_author_id):
        raise Forbidden("You can not delete this comment")
    return delete_comment_tree(session, comment_id)
