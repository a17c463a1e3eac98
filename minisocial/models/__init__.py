"""
SQLAlchemy Models for MiniSocial
"""

from ..database import Base
from .user import User
from .post import Post
from .post_like import PostLike

# Export all models
__all__ = [
    "Base",
    "User",
    "Post",
    "PostLike",
]
