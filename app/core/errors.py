"""
Custom exception hierarchy for Carbon Coach.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

The engine services (emissions, windows, joiner, aggregator, report) raise
these directly; they carry no FastAPI state so they are safe to use outside
a request.
"""
from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette import status


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class CarbonCoachException(Exception):
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


class InvalidInputError(CarbonCoachException):
    """Bad category or amount handed to the emission calculator."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_INPUT"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
            details["value"] = str(value)
        super().__init__(message=message, details=details)


class InvalidRangeError(CarbonCoachException):
    """Malformed or out-of-bounds date, month or year."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_RANGE"


class FutureDateError(InvalidRangeError):
    def __init__(self, day: date, today: date):
        super().__init__(
            message=f"Date {day} is in the future (today is {today}).",
            details={"day": str(day), "today": str(today)},
        )


class NotFoundError(CarbonCoachException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class GridFeedError(CarbonCoachException):
    """The external grid operator feed returned nothing usable."""
    http_status = status.HTTP_502_BAD_GATEWAY
    code = "GRID_FEED_ERROR"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def carbon_coach_exception_handler(
    request: Request, exc: CarbonCoachException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
