"""CRUD operations for PostLike.

``toggle_like`` is the one operation that writes to two tables: the like row
and the post's denormalized ``like_count``. Both writes share a single
transaction. A duplicate insert caused by the same user toggling twice
concurrently comes back as a ``conflict`` result rather than an error.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union
from datetime import datetime

from sqlalchemy import select, and_, delete, update, func, desc, distinct
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from minisocial.core.exceptions import PostNotFoundError
from minisocial.crud.base import CRUDBase, is_unique_violation
from minisocial.models.post import Post
from minisocial.models.post_like import PostLike
from minisocial.models.user import User

logger = logging.getLogger(__name__)

ACTION_LIKED = "liked"
ACTION_UNLIKED = "unliked"
ACTION_CONFLICT = "conflict"


@dataclass(frozen=True)
class LikeToggleResult:
    action: str
    liked: bool
    like_count: int

    @property
    def is_conflict(self) -> bool:
        return self.action == ACTION_CONFLICT


class CRUDPostLike(CRUDBase[PostLike]):
    """CRUD operations for PostLike."""

    def get_like(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Optional[PostLike]:
        """Get like record if exists."""
        stmt = select(PostLike).where(
            and_(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        return db.scalars(stmt).first()

    def has_liked(self, db: Session, *, post_id: int, user_id: int) -> bool:
        """Check if user has liked a post."""
        stmt = select(PostLike.id).where(
            PostLike.post_id == post_id,
            PostLike.user_id == user_id,
        ).limit(1)
        return db.scalar(stmt) is not None

    def get_liked_post_ids(
        self,
        db: Session,
        *,
        user_id: int,
        post_ids: Iterable[int]
    ) -> Set[int]:
        """Which of ``post_ids`` the user has liked, in one query."""
        post_ids = list(post_ids)
        if not post_ids:
            return set()
        stmt = select(PostLike.post_id).where(
            PostLike.user_id == user_id,
            PostLike.post_id.in_(post_ids),
        )
        return set(db.scalars(stmt).all())

    def toggle_like(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> LikeToggleResult:
        """
        Toggle like on a post.

        Raises:
            PostNotFoundError: post is missing or soft-deleted
        """
        post = db.get(Post, post_id)
        if not post or not post.is_active:
            raise PostNotFoundError(post_id)

        existing_like = self.get_like(db, post_id=post_id, user_id=user_id)

        try:
            if existing_like:
                removed = db.execute(
                    delete(PostLike).where(
                        PostLike.post_id == post_id,
                        PostLike.user_id == user_id,
                    )
                ).rowcount
                if removed == 0:
                    # A concurrent toggle already removed it
                    db.rollback()
                    return self._conflict(db, post, user_id)

                db.execute(
                    update(Post)
                    .where(Post.id == post_id, Post.like_count > 0)
                    .values(like_count=Post.like_count - 1)
                )
                action, liked = ACTION_UNLIKED, False
            else:
                db.add(PostLike(post_id=post_id, user_id=user_id))
                try:
                    db.flush()
                except IntegrityError as exc:
                    db.rollback()
                    if not is_unique_violation(exc):
                        raise
                    return self._conflict(db, post, user_id)

                db.execute(
                    update(Post)
                    .where(Post.id == post_id)
                    .values(like_count=Post.like_count + 1)
                )
                action, liked = ACTION_LIKED, True

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(post)
        logger.info(
            f"[LIKE] user_id={user_id} {action} post_id={post_id}, like_count={post.like_count}"
        )
        return LikeToggleResult(action=action, liked=liked, like_count=post.like_count)

    def _conflict(self, db: Session, post: Post, user_id: int) -> LikeToggleResult:
        db.refresh(post)
        logger.warning(
            f"[LIKE] Concurrent toggle conflict for user_id={user_id} post_id={post.id}"
        )
        return LikeToggleResult(
            action=ACTION_CONFLICT,
            liked=self.has_liked(db, post_id=post.id, user_id=user_id),
            like_count=post.like_count,
        )

    # ----- Listings -----
    def get_post_likers(
        self,
        db: Session,
        *,
        post_id: int,
        page: int = 1,
        limit: int = 20
    ) -> List[Tuple[User, datetime]]:
        """Users who liked a post with the like time, most recent first."""
        stmt = (
            select(User, PostLike.created_at)
            .join(PostLike, PostLike.user_id == User.id)
            .where(PostLike.post_id == post_id)
            .order_by(desc(PostLike.created_at), desc(PostLike.id))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [(row[0], row[1]) for row in db.execute(stmt).all()]

    def count_post_likers(self, db: Session, *, post_id: int) -> int:
        stmt = select(func.count(PostLike.id)).where(PostLike.post_id == post_id)
        return db.scalar(stmt) or 0

    def get_user_liked_posts(
        self,
        db: Session,
        *,
        user_id: int,
        page: int = 1,
        limit: int = 10
    ) -> List[Post]:
        """Active posts the user liked, most recently liked first."""
        stmt = (
            select(Post)
            .join(PostLike, PostLike.post_id == Post.id)
            .where(PostLike.user_id == user_id, Post.is_active == True)
            .order_by(desc(PostLike.created_at), desc(PostLike.id))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_user_liked_posts(self, db: Session, *, user_id: int) -> int:
        stmt = (
            select(func.count(PostLike.id))
            .join(Post, PostLike.post_id == Post.id)
            .where(PostLike.user_id == user_id, Post.is_active == True)
        )
        return db.scalar(stmt) or 0

    # ----- Maintenance -----
    def recount_like_count(self, db: Session, *, post_id: int) -> int:
        """Reset a post's like_count to the number of like rows for it."""
        actual = self.count_post_likers(db, post_id=post_id)
        try:
            db.execute(
                update(Post).where(Post.id == post_id).values(like_count=actual)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        return actual

    def reconcile_like_counts(self, db: Session) -> int:
        """Fix every post whose like_count drifted. Returns how many changed."""
        counts = (
            select(PostLike.post_id, func.count(PostLike.id).label("n"))
            .group_by(PostLike.post_id)
            .subquery()
        )
        stmt = (
            select(Post.id, Post.like_count, func.coalesce(counts.c.n, 0))
            .outerjoin(counts, counts.c.post_id == Post.id)
        )
        drifted = [
            (post_id, actual)
            for post_id, stored, actual in db.execute(stmt).all()
            if stored != actual
        ]
        try:
            for post_id, actual in drifted:
                logger.warning(f"[LIKE] Reconciling like_count for post_id={post_id} -> {actual}")
                db.execute(
                    update(Post).where(Post.id == post_id).values(like_count=actual)
                )
            db.commit()
        except Exception:
            db.rollback()
            raise
        return len(drifted)

    def get_stats(self, db: Session) -> Dict[str, Union[int, float]]:
        """Aggregate like statistics."""
        total_likes = db.scalar(select(func.count(PostLike.id))) or 0
        unique_users = db.scalar(select(func.count(distinct(PostLike.user_id)))) or 0
        unique_posts = db.scalar(select(func.count(distinct(PostLike.post_id)))) or 0
        return {
            "total_likes": total_likes,
            "unique_users": unique_users,
            "unique_posts": unique_posts,
            "average_likes_per_post": round(total_likes / unique_posts, 2) if unique_posts else 0.0,
        }


# Singleton instance
crud_post_like = CRUDPostLike(PostLike)
