"""PostLike model for post likes."""

from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class PostLike(Base):
    """One row per (user, post) pair the user currently likes."""

    __tablename__ = "post_likes"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    post_id = Column(
        Integer,
        ForeignKey("posts.id"),
        nullable=False,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        # A user can like a post at most once
        UniqueConstraint('user_id', 'post_id', name='uq_post_like'),
        # Index for likers of a post
        Index('idx_post_like_post', 'post_id', 'created_at'),
        # Index for posts liked by a user
        Index('idx_post_like_user', 'user_id', 'created_at'),
    )

    # Relationships
    post = relationship("Post", back_populates="likes")
    user = relationship("User", foreign_keys=[user_id])
