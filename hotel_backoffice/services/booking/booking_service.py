"""
Core booking service: listings, detail, edits and extra service charges.

Status changes are not made here; they belong to BookingLifecycleService.
"""

from typing import Any, Dict, List, Optional

from uuid import UUID

from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import (
    BookingNotFoundError,
    InvalidDateRangeError,
    InvalidTransitionError,
    RoomNotFoundError,
    RoomUnavailableError,
    ServiceNotFoundError,
    StorageError,
    ValidationError,
)
from hotel_backoffice.core.locks import RoomLockRegistry, room_locks
from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.enums import BookingStatus
from hotel_backoffice.models.service import BookingServiceLine
from hotel_backoffice.repositories.booking_repository import BookingRepository, BookingSearchCriteria
from hotel_backoffice.repositories.room_repository import RoomRepository
from hotel_backoffice.repositories.service_repository import GuestServiceRepository
from hotel_backoffice.schemas.booking import BookingServiceLineCreate, BookingUpdate
from hotel_backoffice.services.base import BaseService, track_performance
from hotel_backoffice.services.booking.booking_lifecycle_service import conflict_summary

# Columns that may be omitted from an edit but never cleared
_REQUIRED_FIELDS = ("room_id", "check_in_date", "check_out_date", "adults", "children", "total_amount")


class BookingService(BaseService[BookingRepository]):
    """
    Core booking operations: detail & listings, edits, service lines.
    """

    def __init__(
        self,
        repository: BookingRepository,
        db_session: Session,
        room_repository: Optional[RoomRepository] = None,
        service_repository: Optional[GuestServiceRepository] = None,
        locks: Optional[RoomLockRegistry] = None,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository or RoomRepository(db_session)
        self.service_repository = service_repository or GuestServiceRepository(db_session)
        self.locks = locks or room_locks

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    def list_bookings(self, criteria: Optional[BookingSearchCriteria] = None) -> List[Booking]:
        return self.repository.search_bookings(criteria or BookingSearchCriteria())

    def get_booking(self, booking_id: UUID) -> Booking:
        """Booking with its room, customer and service lines."""
        booking = self.repository.get_detail(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    @track_performance("update_booking")
    def update_booking(self, booking_id: UUID, request: BookingUpdate) -> Booking:
        """
        Edit dates, party size, amount, requests or room of a booking.

        Cancelled and checked-out bookings are read-only. The room can only
        be changed before check-in. When the dates or the room change, the
        new range must be free on the target room, ignoring this booking.

        Raises:
            ValidationError: nothing to change, cleared required field, bad range
            BookingNotFoundError, RoomNotFoundError
            InvalidTransitionError: booking is terminal, or room change after check-in
            RoomUnavailableError: the edited stay overlaps another active booking
        """
        changes: Dict[str, Any] = request.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        cleared = [field for field in _REQUIRED_FIELDS if field in changes and changes[field] is None]
        if cleared:
            raise ValidationError(
                "Required booking fields cannot be cleared",
                field_errors={field: ["may not be null"] for field in cleared},
            )

        current = self.repository.get_by_id(booking_id)
        if current is None:
            raise BookingNotFoundError(booking_id)
        original_room_id = current.room_id
        target_room_id = changes.get("room_id", original_room_id)

        with self.locks.hold(original_room_id, target_room_id):
            with self.transaction():
                booking = self.repository.get_for_update(booking_id)
                if booking is None:
                    raise BookingNotFoundError(booking_id)
                if booking.room_id != original_room_id:
                    raise StorageError(
                        "Booking was modified concurrently; reload and retry",
                        operation="update_booking",
                        details={"booking_id": str(booking_id)},
                    )
                if booking.status.is_terminal:
                    raise InvalidTransitionError(booking.id, booking.status.value, "update")

                room_changed = target_room_id != booking.room_id
                if room_changed and booking.status != BookingStatus.CONFIRMED:
                    raise InvalidTransitionError(
                        booking.id,
                        booking.status.value,
                        "change room",
                        message=f"Cannot change the room of a booking that is {booking.status.value}",
                    )
                if self.room_repository.get_for_update(target_room_id) is None:
                    raise RoomNotFoundError(target_room_id)

                check_in_date = changes.get("check_in_date", booking.check_in_date)
                check_out_date = changes.get("check_out_date", booking.check_out_date)
                if check_out_date <= check_in_date:
                    raise InvalidDateRangeError(check_in_date, check_out_date)

                dates_changed = (check_in_date, check_out_date) != (booking.check_in_date, booking.check_out_date)
                if room_changed or dates_changed:
                    conflicts = self.repository.find_conflicting_bookings(
                        target_room_id, check_in_date, check_out_date, exclude_booking_id=booking.id
                    )
                    if conflicts:
                        raise RoomUnavailableError(
                            target_room_id,
                            check_in_date,
                            check_out_date,
                            conflicts=[conflict_summary(b) for b in conflicts],
                        )

                self.repository.update(booking, **changes)

        self._logger.info(
            f"Booking {booking_id} updated",
            extra={"booking_id": str(booking_id), "fields": sorted(changes)},
        )
        return self.get_booking(booking_id)

    # -------------------------------------------------------------------------
    # Service lines
    # -------------------------------------------------------------------------

    def add_service(self, booking_id: UUID, request: BookingServiceLineCreate) -> BookingServiceLine:
        """Charge an active catalogue service to a booking that is not cancelled."""
        with self.transaction():
            booking = self.repository.get_for_update(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if booking.status == BookingStatus.CANCELLED:
                raise InvalidTransitionError(
                    booking.id,
                    booking.status.value,
                    "add service",
                    message="Cannot add services to a cancelled booking",
                )

            service = self.service_repository.get_by_id(request.service_id)
            if service is None:
                raise ServiceNotFoundError(request.service_id)
            if not service.is_active:
                raise ValidationError(
                    f"Service '{service.name}' is not available",
                    field_errors={"service_id": ["service is inactive"]},
                )

            line = self.repository.add_service_line(
                BookingServiceLine(
                    booking_id=booking.id,
                    service_id=service.id,
                    service=service,
                    quantity=request.quantity,
                    total_price=request.total_price,
                )
            )

        self._logger.info(
            f"Service {request.service_id} added to booking {booking_id}",
            extra={"booking_id": str(booking_id), "service_id": str(request.service_id)},
        )
        return line
