"""
SQLAlchemy tables for users, blogs, likes, comments and notifications.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    case,
    update,
)
from sqlalchemy.orm import Session, declarative_base

Base = declarative_base()

SOCIAL_LINK_KEYS = ("youtube", "instagram", "facebook", "twitter", "github", "website")
NOTIFICATION_TYPES = ("like", "comment", "reply")


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def empty_social_links() -> dict:
    return {key: "" for key in SOCIAL_LINK_KEYS}


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)
    fullname = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=True)
    username = Column(String, nullable=False, unique=True)
    bio = Column(String(150), nullable=False, default="")
    profile_img = Column(String, nullable=False)
    social_links = Column(JSON, nullable=False, default=empty_social_links)
    total_posts = Column(Integer, nullable=False, default=0)
    total_reads = Column(Integer, nullable=False, default=0)
    google_auth = Column(Boolean, nullable=False, default=False)
    joined_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class BlogRow(Base):
    __tablename__ = "blogs"

    id = Column(String, primary_key=True, default=new_id)
    blog_id = Column(String, nullable=False, unique=True)
    title = Column(String, nullable=False)
    banner = Column(String, nullable=False, default="")
    des = Column(String(200), nullable=False, default="")
    content = Column(JSON, nullable=False, default=dict)
    tags = Column(JSON, nullable=False, default=list)
    author_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    total_likes = Column(Integer, nullable=False, default=0)
    total_comments = Column(Integer, nullable=False, default=0)
    total_reads = Column(Integer, nullable=False, default=0)
    total_parent_comments = Column(Integer, nullable=False, default=0)
    draft = Column(Boolean, nullable=False, default=False, index=True)
    published_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class BlogTagRow(Base):
    __tablename__ = "blog_tags"

    blog_pk = Column(
        String, ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True
    )
    position = Column(Integer, primary_key=True)
    tag = Column(String, nullable=False, index=True)


class BlogLikeRow(Base):
    __tablename__ = "blog_likes"

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    blog_pk = Column(
        String, ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class CommentRow(Base):
    __tablename__ = "comments"

    id = Column(String, primary_key=True, default=new_id)
    blog_pk = Column(String, ForeignKey("blogs.id"), nullable=False, index=True)
    blog_author_id = Column(String, ForeignKey("users.id"), nullable=False)
    comment = Column(Text, nullable=False)
    commented_by = Column(String, ForeignKey("users.id"), nullable=False)
    is_reply = Column(Boolean, nullable=False, default=False)
    parent_id = Column(String, ForeignKey("comments.id"), nullable=True, index=True)
    commented_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class NotificationRow(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=new_id)
    type = Column(String, nullable=False)
    blog_pk = Column(String, ForeignKey("blogs.id"), nullable=False, index=True)
    notification_for = Column(
        String, ForeignKey("users.id"), nullable=False, index=True
    )
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    comment_id = Column(String, ForeignKey("comments.id"), nullable=True, index=True)
    reply_id = Column(String, ForeignKey("comments.id"), nullable=True)
    replied_on_comment_id = Column(String, ForeignKey("comments.id"), nullable=True)
    seen = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )


def adjust_counters(session: Session, row_cls, pk: str, **deltas: int) -> None:
    """
    Apply ``column += delta`` for each keyword in a single UPDATE, never going below zero.
    """
    values = {}
    for name, delta in deltas.items():
        if not delta:
            continue
        column = getattr(row_cls, name)
        values[name] = case((column + delta < 0, 0), else_=column + delta)
    if not values:
        return
    session.execute(
        update(row_cls)
        .where(row_cls.id == pk)
        .values(**values)
        .execution_options(synchronize_session="fetch")
    )
