"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "MessageResponse",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to get ORM attribute
    loading and whitespace stripping.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for partial updates.

    Unknown fields are rejected so that a client cannot smuggle in changes
    (such as a booking status) that must go through a dedicated operation.
    """

    model_config = ConfigDict(extra="forbid")


class BaseResponseSchema(BaseSchema):
    """Base schema for persisted entities."""

    id: UUID = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="Creation timestamp")


class MessageResponse(BaseSchema):
    message: str
