"""Statistics endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from minisocial.api.deps import get_current_active_user, get_db
from minisocial.crud import crud_post_like
from minisocial.models.user import User
from minisocial.schemas.statistics import LikeStatisticsResponse

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.get(
    "/likes",
    response_model=LikeStatisticsResponse,
    summary="Get Like Statistics",
)
def get_like_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> LikeStatisticsResponse:
    """
    Platform-wide like statistics:
    - Total likes
    - Distinct users who liked something
    - Distinct posts with at least one like
    - Average likes per liked post
    """
    return LikeStatisticsResponse(**crud_post_like.get_stats(db))
