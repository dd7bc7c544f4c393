"""
Booking endpoints: listings, creation, edits, lifecycle actions and service charges.
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hotel_backoffice.api import deps
from hotel_backoffice.models.enums import BookingStatus
from hotel_backoffice.repositories.booking_repository import BookingSearchCriteria
from hotel_backoffice.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingListItem,
    BookingResponse,
    BookingServiceLineCreate,
    BookingServiceLineResponse,
    BookingUpdate,
)
from hotel_backoffice.services.booking import BookingLifecycleService, BookingService

router = APIRouter(prefix="/bookings", tags=["Booking Management"])


@router.get("", response_model=List[BookingListItem])
def list_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    date_from: Optional[date] = Query(None, description="Check-in on or after"),
    date_to: Optional[date] = Query(None, description="Check-out on or before"),
    customer_id: Optional[UUID] = Query(None),
    room_id: Optional[UUID] = Query(None),
    service: BookingService = Depends(deps.get_booking_service),
):
    """Bookings matching the filters, newest first."""
    criteria = BookingSearchCriteria(
        status=booking_status,
        date_from=date_from,
        date_to=date_to,
        customer_id=customer_id,
        room_id=room_id,
    )
    return service.list_bookings(criteria)


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(booking_id: UUID, service: BookingService = Depends(deps.get_booking_service)):
    return service.get_booking(booking_id)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    lifecycle: BookingLifecycleService = Depends(deps.get_booking_lifecycle_service),
):
    return lifecycle.create_booking(
        customer_id=payload.customer_id,
        room_id=payload.room_id,
        check_in_date=payload.check_in_date,
        check_out_date=payload.check_out_date,
        adults=payload.adults,
        children=payload.children,
        total_amount=payload.total_amount,
        special_requests=payload.special_requests,
        created_by=payload.created_by,
        services=payload.services,
    )


@router.put("/{booking_id}", response_model=BookingDetail)
def update_booking(
    booking_id: UUID,
    payload: BookingUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    """Edit a booking. Status only changes through checkin, checkout and cancel."""
    return service.update_booking(booking_id, payload)


# --- Lifecycle ----------------------------------------------------------------

@router.patch("/{booking_id}/checkin", response_model=BookingResponse)
def check_in_booking(
    booking_id: UUID,
    lifecycle: BookingLifecycleService = Depends(deps.get_booking_lifecycle_service),
):
    return lifecycle.check_in(booking_id)


@router.patch("/{booking_id}/checkout", response_model=BookingResponse)
def check_out_booking(
    booking_id: UUID,
    lifecycle: BookingLifecycleService = Depends(deps.get_booking_lifecycle_service),
):
    return lifecycle.check_out(booking_id)


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: UUID,
    lifecycle: BookingLifecycleService = Depends(deps.get_booking_lifecycle_service),
):
    return lifecycle.cancel(booking_id)


# --- Service charges ----------------------------------------------------------

@router.post(
    "/{booking_id}/services",
    response_model=BookingServiceLineResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_booking_service(
    booking_id: UUID,
    payload: BookingServiceLineCreate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.add_service(booking_id, payload)
