"""HTTP-facing errors raised by services, commands and auth dependencies."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException, status

INVALID_CREDENTIALS = "Invalid credentials"
FORBIDDEN = "You do not have permission to access this resource"
TOKEN_MISSING = "Authentication token is missing"
TOKEN_EXPIRED = "Authentication token has expired"
TOKEN_INVALID = "Authentication token is invalid"
SECURITY_CHECK_FAILED = "Security verification failed"


class UnauthenticatedError(HTTPException):
    """Missing, malformed or expired bearer token."""

    def __init__(self, detail: str = TOKEN_INVALID) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(HTTPException):
    """Login failure. Same message whatever the cause."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        )


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = FORBIDDEN) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, resource_id: Any, resource: str = "Resource") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} with id {resource_id} was not found",
        )


class ConflictError(HTTPException):
    def __init__(self, field: str, detail: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail or f"This {field} is already registered",
        )


class ValidationFailedError(HTTPException):
    def __init__(self, detail: Any) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
