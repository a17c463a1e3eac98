"""HTTP exceptions and domain errors for the MiniSocial API."""

from fastapi import HTTPException, status


class PostNotFoundError(LookupError):
    """Raised by the CRUD layer when a post is missing or soft-deleted."""

    def __init__(self, post_id: int):
        super().__init__(f"Post {post_id} not found or deleted")
        self.post_id = post_id


class NotFoundException(HTTPException):
    """404 for a missing resource."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class PostNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Post not found"):
        super().__init__(detail=detail)


class UserNotFoundException(NotFoundException):
    def __init__(self, detail: str = "User not found"):
        super().__init__(detail=detail)


class NotPostAuthorException(HTTPException):
    """Exception when a user acts on a post they did not write."""

    def __init__(self, detail: str = "You can only delete your own posts"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class DuplicateLikeException(HTTPException):
    """
    Exception when a like toggle loses a race against the same user's
    concurrent toggle on the same post. The detail follows the state the
    winning toggle left behind ("already liked" or "no longer liked").

    Status Code: 409 Conflict

    Response Body:
        {
            "detail": "You have already liked this post"
        }
    """

    def __init__(self, detail: str = "You have already liked this post"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class InvalidCredentialsException(HTTPException):
    """Exception when identifier or password is wrong."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountInactiveException(HTTPException):
    """Exception when the account has been disabled."""

    def __init__(self, detail: str = "Your account has been disabled"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class UserAlreadyExistsException(HTTPException):
    def __init__(self, detail: str = "User already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


__all__ = [
    "PostNotFoundError",
    "NotFoundException",
    "PostNotFoundException",
    "UserNotFoundException",
    "NotPostAuthorException",
    "DuplicateLikeException",
    "InvalidCredentialsException",
    "AccountInactiveException",
    "UserAlreadyExistsException",
]
