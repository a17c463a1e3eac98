"""CRUD operations for Post."""

import logging
from typing import List, Optional

from sqlalchemy import select, func, desc
from sqlalchemy.orm import Session

from minisocial.crud.base import CRUDBase
from minisocial.models.post import Post

logger = logging.getLogger(__name__)


class CRUDPost(CRUDBase[Post]):
    """CRUD operations for Post."""

    def create_post(
        self,
        db: Session,
        *,
        author_user_id: int,
        content: str
    ) -> Post:
        """Create a new post."""
        post = self.save(db, Post(
            author_user_id=author_user_id,
            content=content,
            like_count=0,
            is_active=True,
        ))
        logger.info(f"[POST] Created post id={post.id} by user_id={author_user_id}")
        return post

    def _active(self, author_user_id: Optional[int] = None):
        stmt = select(Post).where(Post.is_active == True)
        if author_user_id is not None:
            stmt = stmt.where(Post.author_user_id == author_user_id)
        return stmt

    def get_active(self, db: Session, *, post_id: int) -> Optional[Post]:
        """Get post by ID unless it was soft-deleted."""
        stmt = self._active().where(Post.id == post_id)
        return db.scalars(stmt).first()

    def get_page(
        self,
        db: Session,
        *,
        page: int = 1,
        limit: int = 10,
        author_user_id: Optional[int] = None
    ) -> List[Post]:
        """Active posts newest first; the whole timeline unless an author is given."""
        stmt = (
            self._active(author_user_id)
            .order_by(desc(Post.created_at), desc(Post.id))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_active(self, db: Session, *, author_user_id: Optional[int] = None) -> int:
        """Count active posts, optionally for one author."""
        stmt = select(func.count(Post.id)).where(Post.is_active == True)
        if author_user_id is not None:
            stmt = stmt.where(Post.author_user_id == author_user_id)
        return db.scalar(stmt) or 0

    def soft_delete(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Optional[Post]:
        """Soft delete a post (only by author). Its likes are left in place."""
        post = self.get_active(db, post_id=post_id)
        if not post:
            return None

        if post.author_user_id != user_id:
            raise PermissionError("Only post author can delete the post")

        post.is_active = False
        post = self.save(db, post)
        logger.info(f"[POST] Soft-deleted post id={post_id} by user_id={user_id}")
        return post


# Singleton instance
crud_post = CRUDPost(Post)
