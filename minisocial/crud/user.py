"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from minisocial.core.security import get_password_hash, verify_password
from minisocial.crud.base import CRUDBase
from minisocial.models.user import User
from minisocial.schemas.user import UserCreate


class CRUDUser(CRUDBase[User]):
    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        return self.get_by_field(db, "username", username)

    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        return self.get_by_field(db, "email", email.lower())

    def get_by_identifier(self, db: Session, identifier: str) -> Optional[User]:
        """Find a user whose email or username equals ``identifier``."""
        identifier = identifier.strip()
        stmt = select(User).where(
            or_(User.email == identifier.lower(), User.username == identifier)
        ).limit(1)
        return db.scalars(stmt).first()

    def create_user(self, db: Session, *, user_in: UserCreate) -> User:
        user_data = user_in.model_dump(exclude_unset=True)
        raw_password = user_data.pop("password")
        user_data["password_hash"] = get_password_hash(raw_password)
        return self.save(db, User(**user_data))

    def authenticate(self, db: Session, *, identifier: str, password: str) -> Optional[User]:
        user = self.get_by_identifier(db, identifier)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user


# Singleton instance
crud_user = CRUDUser(User)
