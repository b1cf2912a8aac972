"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """HTTP error carrying a stable code alongside the human message."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | str | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def unauthorized(message: str = "Unauthorized") -> AppError:
    """401 without any hint about which check failed."""
    return AppError(
        status_code=status.HTTP_401_UNAUTHORIZED,
        code="UNAUTHORIZED",
        message=message,
    )


def confirmation_required(phrase_hint: str = "confirm") -> AppError:
    """400 for destructive operations called without the confirmation token."""
    return AppError(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="CONFIRMATION_REQUIRED",
        message="This operation deletes every question and must be confirmed",
        details={"field": phrase_hint},
    )
