"""
Response envelopes shared by every endpoint.

All bookmark routes answer with `{success, data}` on success and
`{success, error}` on failure.
"""
from typing import Any, Generic, Literal, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Internal server error"
NOT_FOUND_MESSAGE = "Bookmark not found"
INVALID_BODY_MESSAGE = "Request body must be a JSON object"
INVALID_METADATA_URL_MESSAGE = "Valid URL is required"
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for successful responses."""

    success: Literal[True] = True
    data: T


class ErrorResponse(BaseModel):
    """Envelope for failed responses."""

    success: Literal[False] = False
    error: str = Field(description="Human-readable error message")


class MetadataResponse(BaseModel):
    """Title scraped from a page; null when it could not be determined."""

    title: str | None = None


def success_response(data: Any, status_code: int = 200) -> JSONResponse:
    """Build a success envelope around already JSON-ready data."""
    return JSONResponse(status_code=status_code, content={"success": True, "data": data})


def error_response(
    message: str,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )
