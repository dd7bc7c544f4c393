# hotel_backoffice/api/deps.py
"""
Dependencies shared by the v1 routers.

Example usage in a router:
    from fastapi import APIRouter, Depends
    from hotel_backoffice.api import deps

    router = APIRouter()

    @router.get("/rooms")
    def list_rooms(service: RoomService = Depends(deps.get_room_service)):
        return service.list_rooms()
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hotel_backoffice.db.session import get_db
from hotel_backoffice.repositories import (
    BookingRepository,
    CustomerRepository,
    GuestServiceRepository,
    RoomRepository,
)
from hotel_backoffice.services.booking import (
    AvailabilityService,
    BookingLifecycleService,
    BookingService,
)
from hotel_backoffice.services.catalog import ServiceCatalogService
from hotel_backoffice.services.customer import CustomerService
from hotel_backoffice.services.room import RoomService


# --- Services -----------------------------------------------------------------

def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService(RoomRepository(db), db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(BookingRepository(db), db)


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(CustomerRepository(db), db)


def get_catalog_service(db: Session = Depends(get_db)) -> ServiceCatalogService:
    return ServiceCatalogService(GuestServiceRepository(db), db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(BookingRepository(db), db)


def get_booking_lifecycle_service(db: Session = Depends(get_db)) -> BookingLifecycleService:
    return BookingLifecycleService(BookingRepository(db), db)


__all__ = [
    "get_db",
    "get_room_service",
    "get_availability_service",
    "get_customer_service",
    "get_catalog_service",
    "get_booking_service",
    "get_booking_lifecycle_service",
]
