"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from minisocial.api.deps import get_current_active_user, get_db
from minisocial.core.exceptions import (
    AccountInactiveException,
    InvalidCredentialsException,
    UserAlreadyExistsException,
)
from minisocial.core.security import create_user_token
from minisocial.crud import crud_user
from minisocial.crud.base import is_unique_violation
from minisocial.models.user import User
from minisocial.schemas.user import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> AuthResponse:
    """
    Register a new user and return an access token.

    Raises:
        HTTPException: 409 if email or username is already taken
    """
    if crud_user.get_by_email(db, user_in.email):
        raise UserAlreadyExistsException("Email is already registered")
    if crud_user.get_by_username(db, user_in.username):
        raise UserAlreadyExistsException("Username is already taken")

    try:
        db_user = crud_user.create_user(db, user_in=user_in)
    except IntegrityError as exc:
        # A concurrent registration took the email or username first
        if not is_unique_violation(exc):
            raise
        logger.warning(f"[AUTH] Registration race lost for username={user_in.username}")
        raise UserAlreadyExistsException("Email or username is already taken")
    logger.info(f"[AUTH] Registered user id={db_user.id} username={db_user.username}")

    return AuthResponse(
        message="User registered successfully",
        token=create_user_token(db_user.id),
        user=UserResponse.from_user(db_user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
) -> AuthResponse:
    """
    Login with email or username and password.

    Raises:
        HTTPException: 401 if credentials are invalid or the account is disabled
    """
    user = crud_user.authenticate(
        db, identifier=credentials.identifier, password=credentials.password
    )
    if not user:
        logger.info(f"[AUTH] Failed login for identifier={credentials.identifier}")
        raise InvalidCredentialsException()

    if not user.is_active:
        raise AccountInactiveException()

    return AuthResponse(
        message="Login successful",
        token=create_user_token(user.id),
        user=UserResponse.from_user(user),
    )


@router.get(
    "/profile",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
)
def get_profile(
    current_user: User = Depends(get_current_active_user),
) -> ProfileResponse:
    """Get current authenticated user information."""
    return ProfileResponse(
        message="Profile retrieved successfully",
        user=UserResponse.from_user(current_user),
    )


__all__ = ["router"]
