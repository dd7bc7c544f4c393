"""SQLAlchemy Base class for all models."""
from hotel_backoffice.models.base import Base


def import_models():
    """Import all models so that they are registered on Base.metadata."""
    from hotel_backoffice.models import (  # noqa: F401
        Booking,
        BookingServiceLine,
        Customer,
        GuestService,
        Room,
        RoomType,
    )


__all__ = ["Base", "import_models"]
