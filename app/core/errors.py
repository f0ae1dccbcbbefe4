"""Error taxonomy shared by services and routers.

Services raise these; ``app.main`` turns them into ``{"message": ..., **detail}``
JSON responses with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, **detail):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self, include_debug: bool = False) -> dict:
        return {"message": self.message, **self.detail}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidState(AppError):
    """The target exists but its current state does not allow the operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation not allowed in the current state"


class AuthenticationRequired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, error: str | None = None, **detail):
        super().__init__(message, **detail)
        self.error = error

    def to_dict(self, include_debug: bool = False) -> dict:
        body = super().to_dict()
        if include_debug and self.error:
            body["error"] = self.error
        return body
