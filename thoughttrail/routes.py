"""
HTTP routes for the blogging API.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, HTTPException

from thoughttrail.config import get_settings
from thoughttrail.db import DbClient, UserRecord
from thoughttrail.dependencies import (
    get_current_user_id,
    get_db_client,
    get_identity_verifier,
    get_storage_client,
)
from thoughttrail.identity import IdentityVerifier
from thoughttrail.models import SOCIAL_LINK_KEYS
from thoughttrail.schemas import (
    AccountInfo,
    AddCommentRequest,
    AddCommentResponse,
    Author,
    AuthResponse,
    BlogCard,
    BlogCommentsRequest,
    BlogDetail,
    BlogDetailResponse,
    BlogListResponse,
    ChangePasswordRequest,
    CommentOut,
    CountResponse,
    CreateBlogRequest,
    CreateBlogResponse,
    DeleteBlogRequest,
    DeleteCommentRequest,
    GetBlogRequest,
    GetProfileRequest,
    GoogleAuthRequest,
    IsLikedRequest,
    IsLikedResponse,
    LikeBlogRequest,
    LikeBlogResponse,
    NewNotificationResponse,
    NotificationOut,
    NotificationsCountRequest,
    NotificationsRequest,
    NotificationsResponse,
    PageRequest,
    ProfileResponse,
    RepliesRequest,
    RepliesResponse,
    SearchBlogsCountRequest,
    SearchBlogsRequest,
    SearchUsersRequest,
    SearchUsersResponse,
    SigninRequest,
    SignupRequest,
    StatusResponse,
    UpdateProfileImgRequest,
    UpdateProfileImgResponse,
    UpdateProfileRequest,
    UpdateProfileResponse,
    UploadUrlResponse,
    UserBlogsCountRequest,
    UserBlogsRequest,
)
from thoughttrail.security import (
    PASSWORD_RULE_MESSAGE,
    create_access_token,
    hash_password,
    is_valid_email,
    is_valid_password,
    verify_password,
)
from thoughttrail.storage import StorageClient, new_image_key

logger = logging.getLogger(__name__)

router = APIRouter()

LATEST_PAGE_SIZE = 5
TRENDING_LIMIT = 5
SEARCH_PAGE_SIZE = 2
USER_BLOGS_PAGE_SIZE = 5
COMMENTS_PAGE_SIZE = 5
NOTIFICATIONS_PAGE_SIZE = 10
USER_SEARCH_LIMIT = 50
BIO_LIMIT = 150
DES_LIMIT = 200
TAGS_LIMIT = 10


def _auth_response(user: UserRecord) -> AuthResponse:
    settings = get_settings()
    token = create_access_token(
        user.id, settings.secret_access_key, settings.access_token_expire_minutes
    )
    return AuthResponse(
        access_token=token,
        profile_img=user.profile_img,
        username=user.username,
        fullname=user.fullname,
    )


def _validate_blog(payload: CreateBlogRequest) -> None:
    """Check a blog before it is saved; drafts only need a title and a description that fits."""
    des_error = f"You must provide blog description under {DES_LIMIT} characters"
    if not payload.title.strip():
        raise HTTPException(status_code=403, detail="You must provide a title")
    if len(payload.des) > DES_LIMIT:
        raise HTTPException(status_code=403, detail=des_error)
    if payload.draft:
        return
    if not payload.des:
        raise HTTPException(status_code=403, detail=des_error)
    if not payload.banner:
        raise HTTPException(
            status_code=403, detail="You must provide blog banner to publish it"
        )
    if not payload.content.get("blocks"):
        raise HTTPException(
            status_code=403, detail="There must be some blog content to publish it"
        )
    if not payload.tags or len(payload.tags) > TAGS_LIMIT:
        raise HTTPException(
            status_code=403,
            detail=f"Provide tags in order to publish the blog, Maximum {TAGS_LIMIT}",
        )


def _validate_social_links(links: dict[str, str]) -> None:
    for key, link in links.items():
        if key not in SOCIAL_LINK_KEYS:
            raise HTTPException(
                status_code=403, detail=f"{key} is not a supported social link"
            )
        if not link:
            continue
        parsed = urlparse(link)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise HTTPException(
                status_code=403,
                detail="You must provide full social links with http(s) included",
            )
        if key != "website" and f"{key}.com" not in parsed.hostname:
            raise HTTPException(
                status_code=403,
                detail=f"{key} link is invalid. You must enter a full link",
            )


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------


@router.post("/signup", response_model=AuthResponse)
def signup(payload: SignupRequest, db: DbClient = Depends(get_db_client)):
    if len(payload.fullname.strip()) < 3:
        raise HTTPException(
            status_code=403, detail="Fullname must be at least 3 letters long"
        )
    if not payload.email:
        raise HTTPException(status_code=403, detail="Enter Email")
    if not is_valid_email(payload.email):
        raise HTTPException(status_code=403, detail="Email is invalid")
    if not is_valid_password(payload.password):
        raise HTTPException(status_code=403, detail=PASSWORD_RULE_MESSAGE)

    user = db.create_user(
        fullname=payload.fullname.strip(),
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    return _auth_response(user)


@router.post("/signin", response_model=AuthResponse)
def signin(payload: SigninRequest, db: DbClient = Depends(get_db_client)):
    user = db.get_user_by_email(payload.email)
    if not user:
        raise HTTPException(status_code=403, detail="Email not found")
    if user.google_auth:
        raise HTTPException(
            status_code=403,
            detail="Account was created using google. Try logging in with google.",
        )
    if not verify_password(payload.password, user.password):
        raise HTTPException(status_code=403, detail="Incorrect password")
    return _auth_response(user)


@router.post("/google-auth", response_model=AuthResponse)
def google_auth(
    payload: GoogleAuthRequest,
    db: DbClient = Depends(get_db_client),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
):
    identity = verifier.verify(payload.access_token)
    user = db.get_user_by_email(identity.email)
    if user:
        if not user.google_auth:
            raise HTTPException(
                status_code=403,
                detail=(
                    "This email was signed up without google. "
                    "Please log in with password to access the account"
                ),
            )
    else:
        user = db.create_user(
            fullname=identity.name,
            email=identity.email,
            google_auth=True,
            profile_img=identity.picture or None,
        )
    return _auth_response(user)


@router.post("/change-password", response_model=StatusResponse)
def change_password(
    payload: ChangePasswordRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    if not is_valid_password(payload.current_password) or not is_valid_password(
        payload.new_password
    ):
        raise HTTPException(status_code=403, detail=PASSWORD_RULE_MESSAGE)
    user = db.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.google_auth:
        raise HTTPException(
            status_code=403,
            detail="You can't change account's password because you logged in through google",
        )
    if not verify_password(payload.current_password, user.password):
        raise HTTPException(status_code=403, detail="Incorrect current password")
    db.set_password(user_id, hash_password(payload.new_password))
    return StatusResponse(status="password changed")


@router.get("/get-upload-url", response_model=UploadUrlResponse)
def get_upload_url(
    user_id: str = Depends(get_current_user_id),
    storage: StorageClient = Depends(get_storage_client),
):
    try:
        url = storage.presign_put(new_image_key())
    except (BotoCoreError, ClientError) as exc:
        logger.exception("Failed to presign upload for %s: %s", user_id, exc)
        raise HTTPException(status_code=500, detail="Could not create an upload url")
    return UploadUrlResponse(uploadURL=url)


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------


@router.post("/search-users", response_model=SearchUsersResponse)
def search_users(payload: SearchUsersRequest, db: DbClient = Depends(get_db_client)):
    users = db.search_users(payload.query, limit=USER_SEARCH_LIMIT)
    return SearchUsersResponse(users=[Author.model_validate(u) for u in users])


@router.post("/get-profile", response_model=ProfileResponse)
def get_profile(payload: GetProfileRequest, db: DbClient = Depends(get_db_client)):
    user = db.get_user_by_username(payload.username)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse(
        fullname=user.fullname,
        username=user.username,
        bio=user.bio,
        profile_img=user.profile_img,
        social_links=user.social_links,
        account_info=AccountInfo(
            total_posts=user.total_posts, total_reads=user.total_reads
        ),
        joined_at=user.joined_at,
    )


@router.post("/update-profile-img", response_model=UpdateProfileImgResponse)
def update_profile_img(
    payload: UpdateProfileImgRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    db.update_profile_img(user_id, payload.url)
    return UpdateProfileImgResponse(profile_img=payload.url)


@router.post("/update-profile", response_model=UpdateProfileResponse)
def update_profile(
    payload: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    if len(payload.username) < 3:
        raise HTTPException(
            status_code=403, detail="Username should be at least 3 letters long"
        )
    if len(payload.bio) > BIO_LIMIT:
        raise HTTPException(
            status_code=403,
            detail=f"Bio should not be more than {BIO_LIMIT} characters",
        )
    _validate_social_links(payload.social_links)
    user = db.update_profile(
        user_id,
        username=payload.username,
        bio=payload.bio,
        social_links=payload.social_links,
    )
    return UpdateProfileResponse(username=user.username)


# ----------------------------------------------------------------------
# Blogs
# ----------------------------------------------------------------------


@router.post("/create-blog", response_model=CreateBlogResponse)
def create_blog(
    payload: CreateBlogRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    _validate_blog(payload)
    blog_id = db.save_blog(
        user_id,
        title=payload.title.strip(),
        des=payload.des,
        banner=payload.banner,
        content=payload.content,
        tags=payload.tags,
        draft=payload.draft,
        blog_id=payload.id,
    )
    return CreateBlogResponse(id=blog_id)


@router.post("/get-blog", response_model=BlogDetailResponse)
def get_blog(payload: GetBlogRequest, db: DbClient = Depends(get_db_client)):
    record = db.read_blog(
        payload.blog_id,
        count_read=payload.mode != "edit",
        allow_draft=payload.draft,
    )
    return BlogDetailResponse(blog=BlogDetail.from_record(record))


@router.post("/latest-blogs", response_model=BlogListResponse)
def latest_blogs(payload: PageRequest, db: DbClient = Depends(get_db_client)):
    blogs = db.list_latest_blogs(page=payload.page, limit=LATEST_PAGE_SIZE)
    return BlogListResponse(blogs=[BlogCard.from_record(b) for b in blogs])


@router.post("/all-latest-blogs-count", response_model=CountResponse)
def all_latest_blogs_count(db: DbClient = Depends(get_db_client)):
    return CountResponse(totalDocs=db.count_latest_blogs())


@router.get("/trending-blogs", response_model=BlogListResponse)
def trending_blogs(db: DbClient = Depends(get_db_client)):
    blogs = db.list_trending_blogs(limit=TRENDING_LIMIT)
    return BlogListResponse(blogs=[BlogCard.from_record(b) for b in blogs])


@router.post("/search-blogs", response_model=BlogListResponse)
def search_blogs(payload: SearchBlogsRequest, db: DbClient = Depends(get_db_client)):
    blogs = db.search_blogs(
        tag=payload.tag,
        query=payload.query,
        author=payload.author,
        eliminate_blog=payload.eliminate_blog,
        page=payload.page,
        limit=payload.limit or SEARCH_PAGE_SIZE,
    )
    return BlogListResponse(blogs=[BlogCard.from_record(b) for b in blogs])


@router.post("/search-blogs-count", response_model=CountResponse)
def search_blogs_count(
    payload: SearchBlogsCountRequest, db: DbClient = Depends(get_db_client)
):
    total = db.count_search_blogs(
        tag=payload.tag, query=payload.query, author=payload.author
    )
    return CountResponse(totalDocs=total)


@router.post("/user-written-blogs", response_model=BlogListResponse)
def user_written_blogs(
    payload: UserBlogsRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    blogs = db.list_user_blogs(
        user_id,
        draft=payload.draft,
        query=payload.query,
        page=payload.page,
        deleted_doc_count=payload.deleted_doc_count,
        limit=USER_BLOGS_PAGE_SIZE,
    )
    return BlogListResponse(blogs=[BlogCard.from_record(b) for b in blogs])


@router.post("/user-written-blogs-count", response_model=CountResponse)
def user_written_blogs_count(
    payload: UserBlogsCountRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    total = db.count_user_blogs(user_id, draft=payload.draft, query=payload.query)
    return CountResponse(totalDocs=total)


@router.post("/delete-blog", response_model=StatusResponse)
def delete_blog(
    payload: DeleteBlogRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    db.delete_blog(user_id, payload.blog_id)
    return StatusResponse(status="done")


@router.post("/like-blog", response_model=LikeBlogResponse)
def like_blog(
    payload: LikeBlogRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    liked = db.toggle_like(user_id, payload.id, payload.is_liked_by_user)
    return LikeBlogResponse(liked_by_user=liked)


@router.post("/isliked-by-user", response_model=IsLikedResponse)
def isliked_by_user(
    payload: IsLikedRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    return IsLikedResponse(result=db.is_liked(user_id, payload.id))


# ----------------------------------------------------------------------
# Comments
# ----------------------------------------------------------------------


@router.post("/add-comment", response_model=AddCommentResponse)
def add_comment(
    payload: AddCommentRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    record = db.add_comment(
        user_id,
        payload.id,
        payload.comment,
        replying_to=payload.replying_to,
        notification_id=payload.notification_id,
    )
    return AddCommentResponse(
        id=record.id,
        comment=record.comment,
        commented_at=record.commented_at,
        user_id=user_id,
        children=record.children,
    )


@router.post("/get-blog-comments", response_model=list[CommentOut])
def get_blog_comments(
    payload: BlogCommentsRequest, db: DbClient = Depends(get_db_client)
):
    comments = db.list_blog_comments(
        payload.blog_id, skip=payload.skip, limit=COMMENTS_PAGE_SIZE
    )
    return [CommentOut.from_record(c) for c in comments]


@router.post("/get-replies", response_model=RepliesResponse)
def get_replies(payload: RepliesRequest, db: DbClient = Depends(get_db_client)):
    replies = db.list_replies(payload.id, skip=payload.skip, limit=COMMENTS_PAGE_SIZE)
    return RepliesResponse(replies=[CommentOut.from_record(c) for c in replies])


@router.post("/delete-comment", response_model=StatusResponse)
def delete_comment(
    payload: DeleteCommentRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    db.delete_comment(user_id, payload.id)
    return StatusResponse(status="done")


# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------


@router.get("/new-notification", response_model=NewNotificationResponse)
def new_notification(
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    return NewNotificationResponse(
        new_notification_available=db.has_new_notifications(user_id)
    )


@router.post("/notifications", response_model=NotificationsResponse)
def notifications(
    payload: NotificationsRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    records = db.list_notifications(
        user_id,
        page=payload.page,
        type_filter=payload.filter,
        deleted_doc_count=payload.deleted_doc_count,
        limit=NOTIFICATIONS_PAGE_SIZE,
    )
    return NotificationsResponse(
        notifications=[NotificationOut.model_validate(r) for r in records]
    )


@router.post("/all-notifications-count", response_model=CountResponse)
def all_notifications_count(
    payload: NotificationsCountRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    return CountResponse(
        totalDocs=db.count_notifications(user_id, type_filter=payload.filter)
    )
