"""
Common Pydantic schemas.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response.

    Reports service status and the state of its dependencies.
    """

    status: str = Field(
        ...,
        description="Overall health status",
        examples=["healthy", "unhealthy"],
    )
    version: str | None = Field(
        default=None,
        description="Application version",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Time of the check (UTC)",
    )
    dependencies: dict[str, str] | None = Field(
        default=None,
        description="Status of individual dependencies",
    )
