# ==============================================================================
# BASE SCHEMAS - Common Schema Patterns
# ==============================================================================
# Foundation schemas shared by request and response bodies
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All API schemas should inherit from this class
    to ensure consistent serialization behavior.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class HealthResponse(BaseSchema):
    """Health check response schema."""

    status: str = Field(
        ...,
        description="Health status"
    )
    message: str = Field(
        ...,
        description="Service banner"
    )
    database: str = Field(
        ...,
        description="Database connection status"
    )


class StatusResponse(BaseSchema):
    """Root endpoint response."""

    status: str
    env: Optional[str] = None


class MessageResponse(BaseSchema):
    """Acknowledgement of a completed write."""

    message: str


class IdResponse(BaseSchema):
    """Identifier of a newly created record."""

    id: str
