"""
Room and room type schemas.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from hotel_backoffice.models.enums import RoomStatus
from hotel_backoffice.schemas.common import BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "RoomTypeCreate",
    "RoomTypeResponse",
    "RoomTypeSummary",
    "RoomCreate",
    "RoomUpdate",
    "RoomStatusUpdate",
    "RoomResponse",
    "RoomSummary",
    "RoomWithTypeSummary",
    "RoomAvailabilityResponse",
]


class RoomTypeCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)
    base_price: Decimal = Field(..., ge=0, description="Nightly base price")
    max_occupancy: int = Field(..., ge=1)
    amenities: Optional[str] = Field(None, max_length=1000)

    @field_validator("base_price")
    @classmethod
    def quantize_price(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"))


class RoomTypeSummary(BaseSchema):
    id: UUID
    name: str
    base_price: Decimal
    max_occupancy: int


class RoomTypeResponse(BaseResponseSchema):
    name: str
    description: Optional[str] = None
    base_price: Decimal
    max_occupancy: int
    amenities: Optional[str] = None


class RoomCreate(BaseSchema):
    room_number: str = Field(..., min_length=1, max_length=10)
    room_type_id: UUID
    floor: int = Field(..., ge=1)
    status: RoomStatus = Field(
        RoomStatus.AVAILABLE,
        description="Initial status; 'occupied' is only set by a check-in",
    )
    notes: Optional[str] = Field(None, max_length=1000)


class RoomUpdate(BaseUpdateSchema):
    """Editable room attributes. Status changes go through the status endpoint."""

    room_number: Optional[str] = Field(None, min_length=1, max_length=10)
    room_type_id: Optional[UUID] = None
    floor: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = Field(None, max_length=1000)


class RoomStatusUpdate(BaseSchema):
    status: RoomStatus


class RoomSummary(BaseSchema):
    id: UUID
    room_number: str
    floor: int


class RoomWithTypeSummary(RoomSummary):
    room_type: RoomTypeSummary


class RoomResponse(BaseResponseSchema):
    room_number: str
    room_type_id: UUID
    floor: int
    status: RoomStatus
    last_cleaned: Optional[datetime] = None
    notes: Optional[str] = None
    updated_at: datetime
    room_type: RoomTypeSummary


class RoomAvailabilityResponse(BaseSchema):
    room_id: UUID
    check_in_date: Date
    check_out_date: Date
    available: bool
