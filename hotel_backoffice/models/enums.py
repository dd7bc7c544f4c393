"""Enumerations shared by models, schemas and services."""

import enum


class RoomStatus(str, enum.Enum):
    """Cached operational status of a room."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    CLEANING = "cleaning"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"

    @classmethod
    def active(cls) -> tuple:
        """Statuses that hold a room for their date range."""
        return (cls.CONFIRMED, cls.CHECKED_IN)

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED)


class BookingAction(str, enum.Enum):
    """Lifecycle actions a caller can request on a booking."""
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
    CANCEL = "cancel"


__all__ = ["RoomStatus", "BookingStatus", "BookingAction"]
