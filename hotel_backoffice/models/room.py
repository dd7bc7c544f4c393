"""
Room and room type models.

A room's ``status`` is a cached operational signal (occupied, being
cleaned, under maintenance). It is never used to decide whether a room can
be booked for a date range; that answer always comes from the bookings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_backoffice.models.base import Base, TimestampMixin, UUIDMixin, enum_column, utcnow
from hotel_backoffice.models.enums import RoomStatus

if TYPE_CHECKING:
    from hotel_backoffice.models.booking import Booking

__all__ = ["RoomType", "Room"]


class RoomType(UUIDMixin, Base):
    """Category of room with its base nightly price and occupancy."""

    __tablename__ = "room_types"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Nightly base price",
    )
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False)
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    rooms: Mapped[List["Room"]] = relationship(back_populates="room_type")

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="ck_room_types_base_price_non_negative"),
        CheckConstraint("max_occupancy >= 1", name="ck_room_types_max_occupancy_positive"),
    )

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name={self.name!r})>"


class Room(UUIDMixin, TimestampMixin, Base):
    """Physical room."""

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        unique=True,
        index=True,
        comment="Human-readable room number (e.g. 101)",
    )
    room_type_id: Mapped[UUID] = mapped_column(
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    floor: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[RoomStatus] = mapped_column(
        enum_column(RoomStatus),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )
    last_cleaned: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    room_type: Mapped[RoomType] = relationship(back_populates="rooms")
    bookings: Mapped[List["Booking"]] = relationship(back_populates="room")

    __table_args__ = (
        CheckConstraint("floor >= 1", name="ck_rooms_floor_positive"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number!r}, status={self.status})>"
