"""
Pydantic schemas for the blogging API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NotificationFilter = Literal["all", "like", "comment", "reply"]


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------


class SignupRequest(BaseModel):
    fullname: str = ""
    email: str = ""
    password: str = ""


class SigninRequest(BaseModel):
    email: str = ""
    password: str = ""


class GoogleAuthRequest(BaseModel):
    access_token: str


class ChangePasswordRequest(BaseModel):
    current_password: str = ""
    new_password: str = ""


class AuthResponse(BaseModel):
    access_token: str
    profile_img: str
    username: str
    fullname: str


class StatusResponse(BaseModel):
    status: str


class UploadUrlResponse(BaseModel):
    uploadURL: str


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------


class Author(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fullname: str
    username: str
    profile_img: str


class SearchUsersRequest(BaseModel):
    query: str = ""


class SearchUsersResponse(BaseModel):
    users: list[Author]


class GetProfileRequest(BaseModel):
    username: str


class AccountInfo(BaseModel):
    total_posts: int
    total_reads: int


class ProfileResponse(BaseModel):
    fullname: str
    username: str
    bio: str
    profile_img: str
    social_links: dict[str, str]
    account_info: AccountInfo
    joined_at: datetime


class UpdateProfileImgRequest(BaseModel):
    url: str


class UpdateProfileImgResponse(BaseModel):
    profile_img: str


class UpdateProfileRequest(BaseModel):
    username: str = ""
    bio: str = ""
    social_links: dict[str, str] = Field(default_factory=dict)


class UpdateProfileResponse(BaseModel):
    username: str


# ----------------------------------------------------------------------
# Blogs
# ----------------------------------------------------------------------


class CreateBlogRequest(BaseModel):
    title: str = ""
    des: str = ""
    banner: str = ""
    content: dict = Field(default_factory=lambda: {"blocks": []})
    tags: list[str] = Field(default_factory=list)
    draft: bool = False
    id: Optional[str] = Field(default=None, description="Slug of the blog being edited")


class CreateBlogResponse(BaseModel):
    id: str


class BlogActivity(BaseModel):
    total_likes: int = 0
    total_comments: int = 0
    total_reads: int = 0
    total_parent_comments: int = 0


class BlogCard(BaseModel):
    id: str
    blog_id: str
    title: str
    des: str
    banner: str
    tags: list[str]
    activity: BlogActivity
    draft: bool
    published_at: datetime
    author: Optional[Author] = None

    @classmethod
    def from_record(cls, record) -> "BlogCard":
        return cls(
            id=record.id,
            blog_id=record.blog_id,
            title=record.title,
            des=record.des,
            banner=record.banner,
            tags=record.tags,
            activity=BlogActivity(
                total_likes=record.total_likes,
                total_comments=record.total_comments,
                total_reads=record.total_reads,
                total_parent_comments=record.total_parent_comments,
            ),
            draft=record.draft,
            published_at=record.published_at,
            author=Author.model_validate(record.author) if record.author else None,
        )


class BlogDetail(BlogCard):
    content: dict

    @classmethod
    def from_record(cls, record) -> "BlogDetail":
        card = BlogCard.from_record(record)
        return cls(**card.model_dump(), content=record.content)


class BlogListResponse(BaseModel):
    blogs: list[BlogCard]


class BlogDetailResponse(BaseModel):
    blog: BlogDetail


class CountResponse(BaseModel):
    totalDocs: int


class PageRequest(BaseModel):
    page: int = Field(default=1, ge=1)


class GetBlogRequest(BaseModel):
    blog_id: str
    draft: bool = False
    mode: Optional[str] = None


class SearchBlogsCountRequest(BaseModel):
    tag: Optional[str] = None
    query: Optional[str] = None
    author: Optional[str] = None


class SearchBlogsRequest(SearchBlogsCountRequest):
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)
    eliminate_blog: Optional[str] = None


class UserBlogsCountRequest(BaseModel):
    draft: bool = False
    query: str = ""


class UserBlogsRequest(UserBlogsCountRequest):
    page: int = Field(default=1, ge=1)
    deleted_doc_count: int = Field(default=0, ge=0)


class DeleteBlogRequest(BaseModel):
    blog_id: str


class LikeBlogRequest(BaseModel):
    id: str
    is_liked_by_user: bool = False


class LikeBlogResponse(BaseModel):
    liked_by_user: bool


class IsLikedRequest(BaseModel):
    id: str


class IsLikedResponse(BaseModel):
    result: bool


# ----------------------------------------------------------------------
# Comments
# ----------------------------------------------------------------------


class AddCommentRequest(BaseModel):
    id: str = Field(..., description="Internal id of the blog being commented on")
    comment: str = ""
    replying_to: Optional[str] = None
    notification_id: Optional[str] = None


class AddCommentResponse(BaseModel):
    id: str
    comment: str
    commented_at: datetime
    user_id: str
    children: list[str]


class CommentOut(BaseModel):
    id: str
    blog_pk: str
    comment: str
    commented_at: datetime
    commented_by: Optional[Author] = None
    is_reply: bool
    parent_id: Optional[str] = None
    children: list[str]

    @classmethod
    def from_record(cls, record) -> "CommentOut":
        return cls(
            id=record.id,
            blog_pk=record.blog_pk,
            comment=record.comment,
            commented_at=record.commented_at,
            commented_by=Author.model_validate(record.author) if record.author else None,
            is_reply=record.is_reply,
            parent_id=record.parent_id,
            children=record.children,
        )


class BlogCommentsRequest(BaseModel):
    blog_id: str = Field(..., description="Internal id of the blog")
    skip: int = Field(default=0, ge=0)


class RepliesRequest(BaseModel):
    id: str
    skip: int = Field(default=0, ge=0)


class RepliesResponse(BaseModel):
    replies: list[CommentOut]


class DeleteCommentRequest(BaseModel):
    id: str


# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------


class NotificationBlog(BaseModel):
    id: str
    blog_id: Optional[str] = None
    title: Optional[str] = None


class CommentRef(BaseModel):
    id: str
    comment: str


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    seen: bool
    created_at: datetime
    blog: NotificationBlog
    user: Optional[Author] = None
    comment: Optional[CommentRef] = None
    replied_on_comment: Optional[CommentRef] = None
    reply: Optional[CommentRef] = None


class NotificationsCountRequest(BaseModel):
    filter: NotificationFilter = "all"


class NotificationsRequest(NotificationsCountRequest):
    page: int = Field(default=1, ge=1)
    deleted_doc_count: int = Field(default=0, ge=0)


class NotificationsResponse(BaseModel):
    notifications: list[NotificationOut]


class NewNotificationResponse(BaseModel):
    new_notification_available: bool
