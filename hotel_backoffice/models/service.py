"""Bookable extra services and their per-booking line items."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_backoffice.models.base import Base, TimestampMixin, UUIDMixin, utcnow

if TYPE_CHECKING:
    from hotel_backoffice.models.booking import Booking

__all__ = ["GuestService", "BookingServiceLine"]


class GuestService(UUIDMixin, TimestampMixin, Base):
    """Catalogue entry such as room service, laundry or airport transfer."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
    )


class BookingServiceLine(UUIDMixin, Base):
    """A service charged to a booking."""

    __tablename__ = "booking_services"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[UUID] = mapped_column(
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    booking: Mapped["Booking"] = relationship(back_populates="service_lines")
    service: Mapped[GuestService] = relationship()

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_booking_services_quantity_positive"),
        CheckConstraint("total_price >= 0", name="ck_booking_services_total_price_non_negative"),
    )
