"""
Repository layer: data access for every persisted entity.
"""

from hotel_backoffice.repositories.base_repository import BaseRepository
from hotel_backoffice.repositories.booking_repository import (
    BookingRepository,
    BookingSearchCriteria,
    CustomerBookingStatistics,
)
from hotel_backoffice.repositories.customer_repository import CustomerRepository
from hotel_backoffice.repositories.room_repository import RoomRepository, RoomTypeRepository
from hotel_backoffice.repositories.service_repository import GuestServiceRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "BookingSearchCriteria",
    "CustomerBookingStatistics",
    "CustomerRepository",
    "RoomRepository",
    "RoomTypeRepository",
    "GuestServiceRepository",
]
