from hotel_backoffice.models.base import Base
from hotel_backoffice.models.enums import BookingAction, BookingStatus, RoomStatus
from hotel_backoffice.models.room import Room, RoomType
from hotel_backoffice.models.customer import Customer
from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.service import BookingServiceLine, GuestService

__all__ = [
    "Base",
    "BookingAction",
    "BookingStatus",
    "RoomStatus",
    "Room",
    "RoomType",
    "Customer",
    "Booking",
    "BookingServiceLine",
    "GuestService",
]
