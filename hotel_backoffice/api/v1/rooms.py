"""
Room inventory endpoints: room types, rooms, housekeeping status and availability.
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hotel_backoffice.api import deps
from hotel_backoffice.models.enums import RoomStatus
from hotel_backoffice.schemas.room import (
    RoomAvailabilityResponse,
    RoomCreate,
    RoomResponse,
    RoomStatusUpdate,
    RoomTypeCreate,
    RoomTypeResponse,
    RoomUpdate,
)
from hotel_backoffice.services.booking import AvailabilityService
from hotel_backoffice.services.room import RoomService

router = APIRouter(prefix="/rooms", tags=["Room Management"])


# --- Room types ---------------------------------------------------------------

@router.get("/types", response_model=List[RoomTypeResponse])
def list_room_types(service: RoomService = Depends(deps.get_room_service)):
    return service.list_room_types()


@router.post("/types", response_model=RoomTypeResponse, status_code=status.HTTP_201_CREATED)
def create_room_type(
    payload: RoomTypeCreate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.create_room_type(payload)


# --- Availability -------------------------------------------------------------
# Declared before /{room_id} so "availability" is not parsed as a room id

@router.get("/availability", response_model=List[RoomResponse])
def list_available_rooms(
    check_in: date = Query(..., description="First night (YYYY-MM-DD)"),
    check_out: date = Query(..., description="Departure day (YYYY-MM-DD)"),
    room_type_id: Optional[UUID] = Query(None),
    availability: AvailabilityService = Depends(deps.get_availability_service),
):
    """Rooms free for every night from check_in up to check_out, cheapest first."""
    return availability.find_available_rooms(check_in, check_out, room_type_id)


@router.get("/{room_id}/availability", response_model=RoomAvailabilityResponse)
def check_room_availability(
    room_id: UUID,
    check_in: date = Query(...),
    check_out: date = Query(...),
    availability: AvailabilityService = Depends(deps.get_availability_service),
):
    return RoomAvailabilityResponse(
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out,
        available=availability.check_availability(room_id, check_in, check_out),
    )


# --- Rooms --------------------------------------------------------------------

@router.get("", response_model=List[RoomResponse])
def list_rooms(
    room_status: Optional[RoomStatus] = Query(None, alias="status"),
    floor: Optional[int] = Query(None, ge=1),
    room_type_id: Optional[UUID] = Query(None),
    service: RoomService = Depends(deps.get_room_service),
):
    return service.list_rooms(status=room_status, floor=floor, room_type_id=room_type_id)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.create_room(payload)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: UUID, service: RoomService = Depends(deps.get_room_service)):
    return service.get_room(room_id)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: UUID,
    payload: RoomUpdate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.update_room(room_id, payload)


@router.patch("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: UUID,
    payload: RoomStatusUpdate,
    service: RoomService = Depends(deps.get_room_service),
):
    """Housekeeping/maintenance status. 'occupied' is only set by check-in."""
    return service.update_room_status(room_id, payload.status)
