"""
Booking schemas with request validation.

These schemas validate the shape of requests at the HTTP edge. The booking
services re-check everything the availability invariant depends on.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from hotel_backoffice.models.enums import BookingStatus
from hotel_backoffice.schemas.common import BaseResponseSchema, BaseSchema, BaseUpdateSchema
from hotel_backoffice.schemas.customer import CustomerSummary
from hotel_backoffice.schemas.room import RoomSummary
from hotel_backoffice.schemas.service import GuestServiceSummary

__all__ = [
    "BookingServiceLineCreate",
    "BookingServiceLineResponse",
    "BookingCreate",
    "BookingUpdate",
    "BookingResponse",
    "BookingListItem",
    "BookingDetail",
]


class BookingServiceLineCreate(BaseSchema):
    service_id: UUID
    quantity: int = Field(1, ge=1)
    total_price: Decimal = Field(..., ge=0)

    @field_validator("total_price")
    @classmethod
    def quantize_price(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"))


class BookingServiceLineResponse(BaseResponseSchema):
    service_id: UUID
    quantity: int
    total_price: Decimal
    service: GuestServiceSummary


class BookingCreate(BaseSchema):
    """
    New booking request.

    The stay covers the nights from check_in_date up to, but not including,
    check_out_date.
    """

    customer_id: UUID
    room_id: UUID
    check_in_date: Date
    check_out_date: Date
    adults: int = Field(1, ge=1, description="At least one adult is required")
    children: int = Field(0, ge=0)
    total_amount: Decimal = Field(..., ge=0, description="Amount for the whole stay")
    special_requests: Optional[str] = Field(None, max_length=1000)
    created_by: Optional[UUID] = Field(None, description="Staff user creating the booking")
    services: List[BookingServiceLineCreate] = Field(default_factory=list)

    @field_validator("total_amount")
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"))

    @model_validator(mode="after")
    def validate_dates(self) -> "BookingCreate":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("Check-out date must be after check-in date")
        return self


class BookingUpdate(BaseUpdateSchema):
    """
    Editable booking attributes.

    Status is deliberately absent: status only changes through the
    check-in, check-out and cancel operations.
    """

    room_id: Optional[UUID] = None
    check_in_date: Optional[Date] = None
    check_out_date: Optional[Date] = None
    adults: Optional[int] = Field(None, ge=1)
    children: Optional[int] = Field(None, ge=0)
    total_amount: Optional[Decimal] = Field(None, ge=0)
    special_requests: Optional[str] = Field(None, max_length=1000)


class BookingResponse(BaseResponseSchema):
    customer_id: UUID
    room_id: UUID
    check_in_date: Date
    check_out_date: Date
    nights: int
    adults: int
    children: int
    total_amount: Decimal
    status: BookingStatus
    special_requests: Optional[str] = None
    created_by: Optional[UUID] = None
    updated_at: datetime


class BookingListItem(BookingResponse):
    room: RoomSummary
    customer: CustomerSummary


class BookingDetail(BookingListItem):
    service_lines: List[BookingServiceLineResponse] = Field(default_factory=list)
