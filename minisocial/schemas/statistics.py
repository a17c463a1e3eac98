"""Statistics schemas."""

from pydantic import Field

from .base import APIModel


class LikeStatisticsResponse(APIModel):
    """Response schema for like statistics."""

    total_likes: int = Field(..., description="Total like rows")
    unique_users: int = Field(..., description="Distinct users who liked at least one post")
    unique_posts: int = Field(..., description="Distinct posts with at least one like")
    average_likes_per_post: float = Field(..., description="total_likes / unique_posts, 2 decimals")
