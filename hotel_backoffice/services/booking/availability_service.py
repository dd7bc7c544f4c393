"""
Room availability over date ranges.

Availability is always answered from the bookings of a room: a room is free
for ``[check_in_date, check_out_date)`` when no confirmed or checked-in
booking of that room overlaps the range. The room's cached status is not
consulted. These operations only read.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import InvalidDateRangeError, RoomNotFoundError
from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.room import Room
from hotel_backoffice.repositories.booking_repository import BookingRepository
from hotel_backoffice.repositories.room_repository import RoomRepository
from hotel_backoffice.services.base import BaseService


def validate_date_range(check_in_date: date, check_out_date: date) -> None:
    """Raise InvalidDateRangeError unless check-out is strictly after check-in."""
    if check_out_date <= check_in_date:
        raise InvalidDateRangeError(check_in_date, check_out_date)


class AvailabilityService(BaseService[BookingRepository]):
    """
    Answers "is this room free for these nights" and "which rooms are free".
    """

    def __init__(
        self,
        repository: BookingRepository,
        db_session: Session,
        room_repository: Optional[RoomRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository or RoomRepository(db_session)

    def _require_room(self, room_id: UUID) -> Room:
        room = self.room_repository.get_by_id(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def has_conflict(
        self,
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> bool:
        """
        True if an active booking of the room overlaps the requested nights.

        Back-to-back stays do not conflict: a booking ending on the 10th and
        one starting on the 10th share no night.

        Raises:
            InvalidDateRangeError: check-out is not after check-in
            RoomNotFoundError: room does not exist
        """
        validate_date_range(check_in_date, check_out_date)
        self._require_room(room_id)
        return self.repository.has_conflict(
            room_id, check_in_date, check_out_date, exclude_booking_id
        )

    def check_availability(self, room_id: UUID, check_in_date: date, check_out_date: date) -> bool:
        return not self.has_conflict(room_id, check_in_date, check_out_date)

    def find_conflicts(
        self,
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> List[Booking]:
        """The active bookings that make the room unavailable, earliest first."""
        validate_date_range(check_in_date, check_out_date)
        self._require_room(room_id)
        return self.repository.find_conflicting_bookings(
            room_id, check_in_date, check_out_date, exclude_booking_id
        )

    def find_available_rooms(
        self,
        check_in_date: date,
        check_out_date: date,
        room_type_id: Optional[UUID] = None,
    ) -> List[Room]:
        """
        Rooms free for the whole range, cheapest first.

        Rooms under maintenance are not offered.
        """
        validate_date_range(check_in_date, check_out_date)
        rooms = self.room_repository.find_available_rooms(check_in_date, check_out_date, room_type_id)
        self._logger.debug(
            f"Found {len(rooms)} available rooms",
            extra={
                "check_in_date": check_in_date.isoformat(),
                "check_out_date": check_out_date.isoformat(),
                "room_type_id": str(room_type_id) if room_type_id else None,
            },
        )
        return rooms
