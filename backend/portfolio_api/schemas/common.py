"""
Portfolio API - Shared Schema Building Blocks
==============================================

What:  Base classes and cross-cutting response models used by every entity kind.
How:   Python attributes are snake_case; the wire format is camelCase
       (fullName, fileUrl, currentFocus). Input models forbid unknown keys so a
       typo such as "tittle" is rejected instead of silently ignored.

Base classes:
    - InputSchema:   request bodies (unknown fields → 400)
    - RecordSchema:  records read from ORM objects (serialized by alias)
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on read; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class InputSchema(BaseModel):
    """Base for request payloads: camelCase aliases, unknown fields forbidden."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=False,
    )

    def provided_fields(self) -> Dict[str, Any]:
        """Only the fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class RecordSchema(BaseModel):
    """Base for persisted records returned to clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DeleteResponse(BaseModel):
    """Returned by every DELETE route, whether or not a record was removed."""
    message: str = Field(description="Human-readable confirmation, e.g. 'Project deleted'")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "project with ID '…' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response: service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
