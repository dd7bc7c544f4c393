"""
Room and room type management.

The room status written here is the housekeeping/maintenance signal. Only
check-in may mark a room occupied, so that value is refused.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import (
    DuplicateEntryError,
    RoomNotFoundError,
    RoomTypeNotFoundError,
    ValidationError,
)
from hotel_backoffice.core.locks import RoomLockRegistry, room_locks
from hotel_backoffice.models.base import utcnow
from hotel_backoffice.models.enums import RoomStatus
from hotel_backoffice.models.room import Room, RoomType
from hotel_backoffice.repositories.room_repository import RoomRepository, RoomTypeRepository
from hotel_backoffice.schemas.room import RoomCreate, RoomTypeCreate, RoomUpdate
from hotel_backoffice.services.base import BaseService

MANUAL_ROOM_STATUSES = (RoomStatus.AVAILABLE, RoomStatus.MAINTENANCE, RoomStatus.CLEANING)


class RoomService(BaseService[RoomRepository]):
    """Room inventory: types, rooms and their operational status."""

    def __init__(
        self,
        repository: RoomRepository,
        db_session: Session,
        room_type_repository: Optional[RoomTypeRepository] = None,
        locks: Optional[RoomLockRegistry] = None,
    ):
        super().__init__(repository, db_session)
        self.room_type_repository = room_type_repository or RoomTypeRepository(db_session)
        self.locks = locks or room_locks

    # -------------------------------------------------------------------------
    # Room types
    # -------------------------------------------------------------------------

    def list_room_types(self) -> List[RoomType]:
        return self.room_type_repository.list_types()

    def create_room_type(self, request: RoomTypeCreate) -> RoomType:
        with self.transaction():
            if self.room_type_repository.get_by_name(request.name) is not None:
                raise DuplicateEntryError(
                    f"Room type '{request.name}' already exists",
                    field="name",
                    value=request.name,
                    table="room_types",
                )
            room_type = self.room_type_repository.add(RoomType(**request.model_dump()))

        self._logger.info(f"Room type {room_type.name} created", extra={"room_type_id": str(room_type.id)})
        return room_type

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------

    def list_rooms(
        self,
        status: Optional[RoomStatus] = None,
        floor: Optional[int] = None,
        room_type_id: Optional[UUID] = None,
    ) -> List[Room]:
        return self.repository.search_rooms(status=status, floor=floor, room_type_id=room_type_id)

    def get_room(self, room_id: UUID) -> Room:
        room = self.repository.get_with_type(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def _check_room_number_free(self, room_number: str, room_id: Optional[UUID] = None) -> None:
        existing = self.repository.get_by_number(room_number)
        if existing is not None and existing.id != room_id:
            raise DuplicateEntryError(
                f"Room number {room_number} already exists",
                field="room_number",
                value=room_number,
                table="rooms",
            )

    def _check_room_type(self, room_type_id: UUID) -> None:
        if self.room_type_repository.get_by_id(room_type_id) is None:
            raise RoomTypeNotFoundError(room_type_id)

    def create_room(self, request: RoomCreate) -> Room:
        """
        Add a room to the inventory.

        Raises:
            ValidationError: initial status is occupied
            DuplicateEntryError: room number already in use
            RoomTypeNotFoundError: unknown room type
        """
        if request.status not in MANUAL_ROOM_STATUSES:
            raise ValidationError(
                "A new room cannot start as occupied",
                field_errors={"status": [f"must be one of {[s.value for s in MANUAL_ROOM_STATUSES]}"]},
            )

        with self.transaction():
            self._check_room_number_free(request.room_number)
            self._check_room_type(request.room_type_id)
            room = self.repository.add(Room(**request.model_dump()))

        self._logger.info(
            f"Room {request.room_number} created",
            extra={"room_id": str(room.id), "room_type_id": str(request.room_type_id)},
        )
        return self.get_room(room.id)

    def update_room(self, room_id: UUID, request: RoomUpdate) -> Room:
        changes = request.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        cleared = [f for f in ("room_number", "room_type_id", "floor") if f in changes and changes[f] is None]
        if cleared:
            raise ValidationError(
                "Required room fields cannot be cleared",
                field_errors={field: ["may not be null"] for field in cleared},
            )

        with self.transaction():
            room = self.repository.get_for_update(room_id)
            if room is None:
                raise RoomNotFoundError(room_id)
            if "room_number" in changes:
                self._check_room_number_free(changes["room_number"], room_id=room.id)
            if "room_type_id" in changes:
                self._check_room_type(changes["room_type_id"])
            self.repository.update(room, **changes)

        self._logger.info(f"Room {room_id} updated", extra={"room_id": str(room_id), "fields": sorted(changes)})
        return self.get_room(room_id)

    def update_room_status(self, room_id: UUID, status: RoomStatus) -> Room:
        """
        Set the housekeeping/maintenance status of a room.

        Setting ``available`` records the cleaning time. Runs under the room
        lock so it never interleaves with a check-in or check-out of the room.
        """
        if status not in MANUAL_ROOM_STATUSES:
            raise ValidationError(
                "Room status 'occupied' is set by check-in only",
                field_errors={"status": [f"must be one of {[s.value for s in MANUAL_ROOM_STATUSES]}"]},
            )

        with self.locks.hold(room_id):
            with self.transaction():
                room = self.repository.get_for_update(room_id)
                if room is None:
                    raise RoomNotFoundError(room_id)
                previous = room.status
                extra = {"last_cleaned": utcnow()} if status == RoomStatus.AVAILABLE else {}
                self.repository.set_status(room, status, **extra)

        self._logger.info(
            f"Room {room_id} status {previous.value} -> {status.value}",
            extra={"room_id": str(room_id), "from_status": previous.value, "to_status": status.value},
        )
        return self.get_room(room_id)
