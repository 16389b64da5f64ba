"""Pydantic models for error handling.

Data structures for HTTP error responses and the error type listing.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Unified error response schema."""

    error: str = Field(..., description="Error code (e.g. error.unauthenticated)")
    message: str = Field(..., description="Message suitable for the end user")
    details: dict[str, Any] = Field(default_factory=dict)
    trace_id: str = Field(default="", description="Request correlation ID")


class ErrorTypeInfo(BaseModel):
    """Description of a registered error condition."""

    code: str
    name: str
    category: str | None
    status_code: int
    default_message: str | None
