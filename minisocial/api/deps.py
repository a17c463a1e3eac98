"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from minisocial.core.security import decode_token
from minisocial.crud import crud_user
from minisocial.database import SessionLocal
from minisocial.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_preview = token[:20] + "..." if len(token) > 20 else token
    logger.debug(f"[AUTH] Validating token: {token_preview}")

    payload = decode_token(token)
    subject = payload.get("sub")
    if subject is None:
        logger.warning("[AUTH] Subject is None in token payload")
        raise credentials_exception

    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        logger.warning(f"[AUTH] Malformed subject in token: {subject!r}")
        raise credentials_exception

    user = crud_user.get(db, user_id)
    if user is None:
        logger.warning(f"[AUTH] User not found for id: {user_id}")
        raise credentials_exception

    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.

    Raises:
        HTTPException: 401 if the account has been disabled
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Your account has been disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "get_current_active_user",
]
