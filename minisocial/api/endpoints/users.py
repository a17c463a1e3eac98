"""User endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from minisocial.api.deps import get_current_active_user, get_db
from minisocial.api.endpoints.posts import MAX_PAGE_SIZE, enrich_posts
from minisocial.core.exceptions import UserNotFoundException
from minisocial.crud import crud_post_like, crud_user
from minisocial.models.user import User
from minisocial.schemas.post import Pagination, PostListResponse
from minisocial.schemas.user import PublicProfileResponse, UserPublic

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "/{user_id}",
    response_model=PublicProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get public profile",
)
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PublicProfileResponse:
    user = crud_user.get(db, user_id)
    if not user:
        raise UserNotFoundException()
    return PublicProfileResponse(
        message="User retrieved successfully",
        user=UserPublic.from_user(user),
    )


@router.get(
    "/{user_id}/liked-posts",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="Posts liked by user",
)
def get_liked_posts(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    """
    Active posts the user has liked, most recently liked first.

    ``hasLiked`` on each post reflects the requesting user, not ``user_id``.
    """
    if not crud_user.get(db, user_id):
        raise UserNotFoundException()

    posts = crud_post_like.get_user_liked_posts(db, user_id=user_id, page=page, limit=limit)
    total = crud_post_like.count_user_liked_posts(db, user_id=user_id)

    return PostListResponse(
        message="Liked posts retrieved successfully",
        posts=enrich_posts(db, posts, current_user.id),
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


__all__ = ["router"]
