"""
Customer schemas.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from hotel_backoffice.models.enums import BookingStatus
from hotel_backoffice.schemas.common import BaseResponseSchema, BaseSchema, BaseUpdateSchema
from hotel_backoffice.schemas.room import RoomWithTypeSummary

__all__ = [
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerSummary",
    "CustomerListResponse",
    "CustomerBookingItem",
    "CustomerDetail",
    "LastBookingSummary",
    "CustomerStatsResponse",
]


class CustomerCreate(BaseSchema):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)
    id_number: Optional[str] = Field(None, max_length=50)
    id_type: Optional[str] = Field(None, max_length=20)
    date_of_birth: Optional[Date] = None
    nationality: Optional[str] = Field(None, max_length=50)


class CustomerUpdate(BaseUpdateSchema):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)
    id_number: Optional[str] = Field(None, max_length=50)
    id_type: Optional[str] = Field(None, max_length=20)
    date_of_birth: Optional[Date] = None
    nationality: Optional[str] = Field(None, max_length=50)


class CustomerSummary(BaseSchema):
    id: UUID
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerResponse(BaseResponseSchema):
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    id_number: Optional[str] = None
    id_type: Optional[str] = None
    date_of_birth: Optional[Date] = None
    nationality: Optional[str] = None
    updated_at: datetime


class CustomerListResponse(BaseSchema):
    customers: List[CustomerResponse]
    total: int
    limit: int
    offset: int


class CustomerBookingItem(BaseResponseSchema):
    """One stay in a customer's booking history."""

    check_in_date: Date
    check_out_date: Date
    nights: int
    adults: int
    children: int
    total_amount: Decimal
    status: BookingStatus
    room: RoomWithTypeSummary


class CustomerDetail(CustomerResponse):
    bookings: List[CustomerBookingItem] = Field(
        default_factory=list,
        description="Booking history, newest first",
    )


class LastBookingSummary(BaseSchema):
    check_in_date: Date
    check_out_date: Date
    status: BookingStatus


class CustomerStatsResponse(BaseSchema):
    """
    Booking totals for a customer.

    ``total_spent`` and ``favorite_room_type`` ignore cancelled bookings.
    """

    total_bookings: int
    total_spent: Decimal
    last_booking: Optional[LastBookingSummary] = None
    favorite_room_type: Optional[str] = None
