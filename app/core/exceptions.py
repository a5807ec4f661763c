"""
Domain error taxonomy.

Each error kind carries the HTTP status the API boundary reports for it, so
handlers never need to inspect message text. Registered on the app in main.py.
"""

from fastapi import status


class JoblyError(Exception):
    """Base application exception."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers = None

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class InvalidRequestError(JoblyError):
    """Client-supplied data fails a local check (empty update, inverted range, duplicate)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class AuthError(JoblyError):
    """Credential token missing, malformed, forged or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class AccessDeniedError(JoblyError):
    """Valid identity without the privilege or ownership a route requires."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Not permitted"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """Target row absent."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


__all__ = [
    "AccessDeniedError",
    "AuthError",
    "InvalidRequestError",
    "JoblyError",
    "NotFoundError",
]
