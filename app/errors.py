"""
Application error taxonomy.

Services and dependencies raise these; the handlers registered in
``main.create_app`` render them as ``{"message": ...}`` JSON bodies with the
matching status code.
"""

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_content(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Malformed input or a violated uniqueness constraint."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_content(self) -> dict:
        content = super().to_content()
        if self.field:
            content["field"] = self.field
        return content


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(AppError):
    """No valid principal where one is required, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Authenticated, but not allowed to act on the target resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
]
