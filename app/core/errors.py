"""
Custom exception hierarchy for the Moodtune API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class MoodtuneException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidIdError(MoodtuneException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ID"

    def __init__(self, value: Any, label: str = "mood entry"):
        super().__init__(
            message=f"Invalid {label} ID",
            details={"id": str(value)},
        )


class NotFoundError(MoodtuneException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} not found",
            details={"id": str(entity_id)},
        )


class MissingQueryError(MoodtuneException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "MISSING_QUERY"

    def __init__(self):
        super().__init__(message="Search query is required")


class OperationFailedError(MoodtuneException):
    """A storage or upstream call failed; carries the raw error text."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "OPERATION_FAILED"

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            details={"error": error} if error else {},
        )


@contextmanager
def failure_boundary(message: str) -> Iterator[None]:
    """
    Convert any non-application error raised inside the block into an
    `OperationFailedError` with the given generic message.

    Application errors (`InvalidIdError`, `NotFoundError`, ...) pass through
    untouched. Nothing already committed is rolled back.
    """
    try:
        yield
    except MoodtuneException:
        raise
    except Exception as exc:
        logger.exception("%s: %s", message, exc)
        raise OperationFailedError(message=message, error=str(exc) or type(exc).__name__) from exc


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def moodtune_exception_handler(request: Request, exc: MoodtuneException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 400 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
            "details": {"error": str(exc) or type(exc).__name__},
        },
    )
