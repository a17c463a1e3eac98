"""Pydantic schemas for Post and PostLike."""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .base import APIModel
from .user import UserPublic


class PostCreate(APIModel):
    """Schema for creating a new post."""
    content: str = Field(..., min_length=1, max_length=500, description="Post text")

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Post content is required")
        return v


class PostResponse(APIModel):
    """Schema for Post response."""
    id: int = Field(..., alias="_id")
    content: str
    author: UserPublic
    like_count: int
    has_liked: bool = False  # Populated for the requesting user
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(APIModel):
    current_page: int
    total_pages: int
    total_posts: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_posts=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class PostCreateResponse(APIModel):
    message: str
    post: PostResponse


class PostDetailResponse(APIModel):
    message: str
    post: PostResponse


class PostListResponse(APIModel):
    """Response for listing posts."""
    message: str
    posts: List[PostResponse]
    pagination: Pagination


class UserPostListResponse(PostListResponse):
    user: UserPublic


class LikedPostSummary(APIModel):
    id: int = Field(..., alias="_id")
    like_count: int
    has_liked: bool


class LikeToggleResponse(APIModel):
    """Response for like action."""
    message: str
    action: str
    liked: bool
    post: LikedPostSummary


class LikerResponse(UserPublic):
    liked_at: Optional[datetime] = None


class PostLikersResponse(APIModel):
    message: str
    users: List[LikerResponse]
    pagination: Pagination


class MessageResponse(APIModel):
    message: str
