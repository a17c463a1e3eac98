from .base import APIModel
from .user import (
	ProfileInfo,
	UserPublic,
	UserResponse,
	UserCreate,
	UserLogin,
	AuthResponse,
	ProfileResponse,
	PublicProfileResponse,
)
from .post import (
	PostCreate,
	PostResponse,
	Pagination,
	PostCreateResponse,
	PostDetailResponse,
	PostListResponse,
	UserPostListResponse,
	LikedPostSummary,
	LikeToggleResponse,
	LikerResponse,
	PostLikersResponse,
	MessageResponse,
)
from .statistics import LikeStatisticsResponse

__all__ = [
	"APIModel",
	"ProfileInfo",
	"UserPublic",
	"UserResponse",
	"UserCreate",
	"UserLogin",
	"AuthResponse",
	"ProfileResponse",
	"PublicProfileResponse",
	"PostCreate",
	"PostResponse",
	"Pagination",
	"PostCreateResponse",
	"PostDetailResponse",
	"PostListResponse",
	"UserPostListResponse",
	"LikedPostSummary",
	"LikeToggleResponse",
	"LikerResponse",
	"PostLikersResponse",
	"MessageResponse",
	"LikeStatisticsResponse",
]
