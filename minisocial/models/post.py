"""Post model for the timeline."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Boolean, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Post(Base):
    """Short text post written by a user."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys (no ON DELETE CASCADE: posts are only ever soft-deleted)
    author_user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    # Post Content
    content = Column(Text, nullable=False)

    # Denormalized count of post_likes rows for this post
    like_count = Column(Integer, default=0, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Soft delete
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Constraints & Indexes
    __table_args__ = (
        CheckConstraint("like_count >= 0", name="check_post_like_count_non_negative"),
        # Index for user's posts sorted by date
        Index('idx_post_author_created', 'author_user_id', 'created_at'),
        # Index for active posts by user
        Index('idx_post_author_active', 'author_user_id', 'is_active'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_user_id], lazy="joined")
    likes = relationship("PostLike", back_populates="post")
