# post_frontend/errors.py
from typing import Optional


class PostClientError(Exception):
    """Base class for every error shown to the user. str(exc) is the message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(PostClientError):
    """The backend could not be reached at all."""

    def __init__(self, base_url: str):
        super().__init__(
            f"Cannot connect to backend API at {base_url}. Make sure the backend is running."
        )
        self.base_url = base_url


class ApiError(PostClientError):
    """The backend answered with a non-success status (or an unreadable body)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class PostValidationError(PostClientError):
    """Client-side form check failed; no request was made."""
