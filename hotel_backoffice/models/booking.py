"""
Booking models.

A booking holds its room for the half-open date range
``[check_in_date, check_out_date)`` while it is confirmed or checked in.
Cancelled and checked-out bookings are history and hold nothing.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Date as SQLDate, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.ext.hybrid import hybrid_method
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_backoffice.models.base import Base, TimestampMixin, UUIDMixin, enum_column
from hotel_backoffice.models.enums import BookingStatus

if TYPE_CHECKING:
    from hotel_backoffice.models.customer import Customer
    from hotel_backoffice.models.room import Room
    from hotel_backoffice.models.service import BookingServiceLine

__all__ = ["Booking"]


class Booking(UUIDMixin, TimestampMixin, Base):
    """
    Room reservation for a customer.

    Attributes:
        customer_id: Guest the booking belongs to
        room_id: Room being held
        check_in_date: First night of the stay
        check_out_date: Departure day (exclusive end of the stay)
        adults: Number of adults (at least one)
        children: Number of children
        total_amount: Amount quoted for the whole stay
        status: Lifecycle status
        special_requests: Free-text requests from the guest
        created_by: Staff member who created the booking, if known
    """

    __tablename__ = "bookings"

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    check_in_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    check_out_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        enum_column(BookingStatus),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[UUID]] = mapped_column(
        nullable=True,
        comment="Staff user who created the booking",
    )

    room: Mapped["Room"] = relationship(back_populates="bookings")
    customer: Mapped["Customer"] = relationship(back_populates="bookings")
    service_lines: Mapped[List["BookingServiceLine"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingServiceLine.created_at",
    )

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_bookings_date_range"),
        CheckConstraint("adults >= 1", name="ck_bookings_adults_positive"),
        CheckConstraint("children >= 0", name="ck_bookings_children_non_negative"),
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_amount_non_negative"),
        Index("ix_bookings_room_status_dates", "room_id", "status", "check_in_date", "check_out_date"),
        Index("ix_bookings_check_in_check_out", "check_in_date", "check_out_date"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @hybrid_method
    def overlaps(self, check_in: Date, check_out: Date):
        """
        Half-open overlap with ``[check_in, check_out)``.

        On an instance this evaluates to a bool; on the class it is the SQL
        predicate used by the availability queries.
        """
        return (self.check_in_date < check_out) & (self.check_out_date > check_in)

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, room={self.room_id}, "
            f"{self.check_in_date}..{self.check_out_date}, status={self.status})>"
        )
