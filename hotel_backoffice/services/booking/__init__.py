from hotel_backoffice.services.booking.availability_service import AvailabilityService
from hotel_backoffice.services.booking.booking_lifecycle_service import (
    BOOKING_TRANSITIONS,
    BookingLifecycleService,
    plan_transition,
)
from hotel_backoffice.services.booking.booking_service import BookingService

__all__ = [
    "AvailabilityService",
    "BOOKING_TRANSITIONS",
    "BookingLifecycleService",
    "BookingService",
    "plan_transition",
]
