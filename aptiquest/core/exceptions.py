"""
Error taxonomy shared by services and routes.

Services raise these before touching the database; routes turn them into
HTTP errors whose body carries a machine-readable kind and a message.
"""

from typing import Optional

from fastapi import HTTPException, status


class QuizAppError(Exception):
    """Base class for all errors surfaced to API callers"""

    kind = "server_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(QuizAppError, ValueError):
    """Missing or malformed required fields"""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdError(QuizAppError, ValueError):
    """Identifier fails the format check"""

    kind = "invalid_id"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(QuizAppError, LookupError):
    """Entity, or its resolvable question pool, is absent"""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(QuizAppError):
    """Duplicate of an existing record"""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class ServerError(QuizAppError):
    """Persistence-layer failure"""


def to_http_exception(
    error: QuizAppError, status_code: Optional[int] = None
) -> HTTPException:
    """Convert a domain error into an HTTPException (optionally overriding the status)"""
    return HTTPException(
        status_code=status_code or error.status_code, detail=error.to_dict()
    )


def internal_error(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "server_error", "message": f"Internal server error: {error}"},
    )
