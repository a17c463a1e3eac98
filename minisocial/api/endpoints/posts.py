"""Post and like endpoints."""

import logging
from typing import Iterable, List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from minisocial.api.deps import get_current_active_user, get_db
from minisocial.core.exceptions import (
    DuplicateLikeException,
    NotPostAuthorException,
    PostNotFoundError,
    PostNotFoundException,
    UserNotFoundException,
)
from minisocial.crud import crud_post, crud_post_like, crud_user
from minisocial.models.post import Post
from minisocial.models.user import User
from minisocial.schemas.post import (
    LikedPostSummary,
    LikerResponse,
    LikeToggleResponse,
    MessageResponse,
    Pagination,
    PostCreate,
    PostCreateResponse,
    PostDetailResponse,
    PostLikersResponse,
    PostListResponse,
    PostResponse,
    UserPostListResponse,
)
from minisocial.schemas.user import UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)

MAX_PAGE_SIZE = 50


def _post_response(post: Post, has_liked: bool = False) -> PostResponse:
    return PostResponse(
        id=post.id,
        content=post.content,
        author=UserPublic.from_user(post.author),
        like_count=post.like_count,
        has_liked=has_liked,
        is_active=post.is_active,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def enrich_posts(db: Session, posts: Iterable[Post], viewer_id: int) -> List[PostResponse]:
    """Annotate a page of posts with the viewer's like state (one query per page)."""
    posts = list(posts)
    liked_ids = crud_post_like.get_liked_post_ids(
        db, user_id=viewer_id, post_ids=[post.id for post in posts]
    )
    return [_post_response(post, post.id in liked_ids) for post in posts]


@router.post(
    "",
    response_model=PostCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostCreateResponse:
    """Create a new post authored by the current user."""
    post = crud_post.create_post(
        db,
        author_user_id=current_user.id,
        content=post_in.content,
    )
    return PostCreateResponse(
        message="Post created successfully",
        post=_post_response(post),
    )


@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="Timeline",
    description="""
    All active posts, newest first.

    **Query Parameters:**
    - `page`: 1-based page number
    - `limit`: posts per page (1-50, default 10)
    """,
)
def get_timeline(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE, description="Posts per page"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    posts = crud_post.get_page(db, page=page, limit=limit)
    total = crud_post.count_active(db)

    return PostListResponse(
        message="Posts retrieved successfully",
        posts=enrich_posts(db, posts, current_user.id),
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get(
    "/user/{user_id}",
    response_model=UserPostListResponse,
    status_code=status.HTTP_200_OK,
    summary="Posts by user",
)
def get_user_posts(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UserPostListResponse:
    """Active posts written by one user, newest first."""
    author = crud_user.get(db, user_id)
    if not author:
        raise UserNotFoundException()

    posts = crud_post.get_page(db, page=page, limit=limit, author_user_id=user_id)
    total = crud_post.count_active(db, author_user_id=user_id)

    return UserPostListResponse(
        message="User posts retrieved successfully",
        posts=enrich_posts(db, posts, current_user.id),
        user=UserPublic.from_user(author),
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post detail",
)
def get_post(
    post_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostDetailResponse:
    """Get one active post with the current user's like state."""
    post = crud_post.get_active(db, post_id=post_id)
    if not post:
        raise PostNotFoundException()

    has_liked = crud_post_like.has_liked(db, post_id=post.id, user_id=current_user.id)
    return PostDetailResponse(
        message="Post retrieved successfully",
        post=_post_response(post, has_liked),
    )


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="""
    Soft delete a post. Only the author can delete their own post.
    Likes on the post are kept.
    """,
)
def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    try:
        deleted_post = crud_post.soft_delete(
            db, post_id=post_id, user_id=current_user.id
        )
    except PermissionError:
        raise NotPostAuthorException()

    if not deleted_post:
        raise PostNotFoundException()
    return MessageResponse(message="Post deleted successfully")


@router.post(
    "/{post_id}/like",
    response_model=LikeToggleResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on post",
    description="""
    Like or unlike a post. If already liked, it will unlike. If not liked, it will like.

    Returns 409 when a concurrent toggle by the same user on the same post won the race.
    """,
)
def toggle_like(
    post_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeToggleResponse:
    try:
        result = crud_post_like.toggle_like(
            db, post_id=post_id, user_id=current_user.id
        )
    except PostNotFoundError:
        raise PostNotFoundException()

    if result.is_conflict:
        if result.liked:
            raise DuplicateLikeException()
        raise DuplicateLikeException("This post is no longer liked")

    return LikeToggleResponse(
        message="Post liked successfully" if result.liked else "Post unliked successfully",
        action=result.action,
        liked=result.liked,
        post=LikedPostSummary(
            id=post_id,
            like_count=result.like_count,
            has_liked=result.liked,
        ),
    )


@router.get(
    "/{post_id}/likes",
    response_model=PostLikersResponse,
    status_code=status.HTTP_200_OK,
    summary="Users who liked a post",
)
def get_post_likers(
    post_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostLikersResponse:
    """Likers of an active post, most recent like first."""
    post = crud_post.get_active(db, post_id=post_id)
    if not post:
        raise PostNotFoundException()

    likers = crud_post_like.get_post_likers(db, post_id=post_id, page=page, limit=limit)
    total = crud_post_like.count_post_likers(db, post_id=post_id)

    return PostLikersResponse(
        message="Post likers retrieved successfully",
        users=[
            LikerResponse(**UserPublic.from_user(user).model_dump(), liked_at=liked_at)
            for user, liked_at in likers
        ],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


__all__ = ["router"]
