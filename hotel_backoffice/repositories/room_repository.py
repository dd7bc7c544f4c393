# hotel_backoffice/repositories/room_repository.py
"""
Room and room type repositories.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from hotel_backoffice.models.enums import RoomStatus
from hotel_backoffice.models.room import Room, RoomType
from hotel_backoffice.repositories.base_repository import BaseRepository
from hotel_backoffice.repositories.booking_repository import BookingRepository


class RoomTypeRepository(BaseRepository[RoomType]):
    """Repository for room categories."""

    def __init__(self, session: Session):
        super().__init__(RoomType, session)

    def get_by_name(self, name: str) -> Optional[RoomType]:
        with self.storage_errors("get_by_name"):
            return self.session.execute(
                select(RoomType).where(RoomType.name == name)
            ).scalar_one_or_none()

    def list_types(self) -> List[RoomType]:
        with self.storage_errors("list_types"):
            return list(
                self.session.execute(select(RoomType).order_by(RoomType.name)).scalars().all()
            )


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room entity.

    Handles:
    - Room lookups and filtered listings
    - Status writes
    - Date-range availability listing
    """

    def __init__(self, session: Session):
        super().__init__(Room, session)

    # ============================================================================
    # ROOM BASIC OPERATIONS
    # ============================================================================

    def get_by_number(self, room_number: str) -> Optional[Room]:
        with self.storage_errors("get_by_number"):
            return self.session.execute(
                select(Room).where(Room.room_number == room_number)
            ).scalar_one_or_none()

    def get_with_type(self, room_id: UUID) -> Optional[Room]:
        query = (
            select(Room)
            .where(Room.id == room_id)
            .options(joinedload(Room.room_type))
            .execution_options(populate_existing=True)
        )
        with self.storage_errors("get_with_type"):
            return self.session.execute(query).scalar_one_or_none()

    def search_rooms(
        self,
        status: Optional[RoomStatus] = None,
        floor: Optional[int] = None,
        room_type_id: Optional[UUID] = None,
    ) -> List[Room]:
        """
        Rooms matching the filters, ordered by room number.

        Args:
            status: Cached room status
            floor: Floor number
            room_type_id: Room category

        Returns:
            List of rooms with their room type loaded
        """
        query = select(Room).options(joinedload(Room.room_type))

        if status is not None:
            query = query.where(Room.status == status)
        if floor is not None:
            query = query.where(Room.floor == floor)
        if room_type_id is not None:
            query = query.where(Room.room_type_id == room_type_id)

        query = query.order_by(Room.room_number)

        with self.storage_errors("search_rooms"):
            return list(self.session.execute(query).scalars().all())

    def set_status(self, room: Room, status: RoomStatus, **extra) -> Room:
        return self.update(room, status=status, **extra)

    # ============================================================================
    # AVAILABILITY
    # ============================================================================

    def find_available_rooms(
        self,
        check_in_date: date,
        check_out_date: date,
        room_type_id: Optional[UUID] = None,
    ) -> List[Room]:
        """
        Rooms without an active booking overlapping the range.

        Rooms under maintenance are left out. Occupied or cleaning status does
        not matter here: a room occupied today can still be free next week.
        Ordered by nightly base price, then room number.
        """
        booked = BookingRepository(self.session).booked_room_ids(check_in_date, check_out_date)

        query = (
            select(Room)
            .join(Room.room_type)
            .options(joinedload(Room.room_type))
            .where(
                Room.status != RoomStatus.MAINTENANCE,
                Room.id.not_in(booked),
            )
        )
        if room_type_id is not None:
            query = query.where(Room.room_type_id == room_type_id)

        query = query.order_by(RoomType.base_price, Room.room_number)

        with self.storage_errors("find_available_rooms"):
            return list(self.session.execute(query).scalars().all())
