"""
Bookable service catalogue schemas.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from hotel_backoffice.schemas.common import BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = ["GuestServiceCreate", "GuestServiceUpdate", "GuestServiceResponse", "GuestServiceSummary"]


class GuestServiceCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: Decimal = Field(..., ge=0)
    category: Optional[str] = Field(None, max_length=50)
    is_active: bool = True

    @field_validator("price")
    @classmethod
    def quantize_price(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"))


class GuestServiceUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class GuestServiceResponse(BaseResponseSchema):
    name: str
    description: Optional[str] = None
    price: Decimal
    category: Optional[str] = None
    is_active: bool


class GuestServiceSummary(BaseSchema):
    """Catalogue fields shown on a booking's service lines."""

    id: UUID
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
