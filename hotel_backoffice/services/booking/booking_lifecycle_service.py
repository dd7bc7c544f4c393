"""
Booking lifecycle: creation and status transitions with their room side effects.

Every write here runs inside the room's critical section (in-process lock
plus a row lock on the room) held through commit, so the check that a room
is free and the insert that takes it cannot interleave with another writer
of the same room.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Sequence, Tuple, Union
from uuid import UUID

from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import (
    BookingNotFoundError,
    CustomerNotFoundError,
    InvalidTransitionError,
    RoomNotFoundError,
    RoomUnavailableError,
    ServiceNotFoundError,
    StorageError,
    ValidationError,
)
from hotel_backoffice.core.locks import RoomLockRegistry, room_locks
from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.enums import BookingAction, BookingStatus, RoomStatus
from hotel_backoffice.models.service import BookingServiceLine
from hotel_backoffice.repositories.booking_repository import BookingRepository
from hotel_backoffice.repositories.customer_repository import CustomerRepository
from hotel_backoffice.repositories.room_repository import RoomRepository
from hotel_backoffice.repositories.service_repository import GuestServiceRepository
from hotel_backoffice.schemas.booking import BookingServiceLineCreate
from hotel_backoffice.services.base import BaseService, track_performance
from hotel_backoffice.services.booking.availability_service import (
    AvailabilityService,
    validate_date_range,
)

# (current status, action) -> (next status, room status side effect)
BOOKING_TRANSITIONS: Dict[
    Tuple[BookingStatus, BookingAction], Tuple[BookingStatus, Optional[RoomStatus]]
] = {
    (BookingStatus.CONFIRMED, BookingAction.CHECK_IN): (BookingStatus.CHECKED_IN, RoomStatus.OCCUPIED),
    (BookingStatus.CHECKED_IN, BookingAction.CHECK_OUT): (BookingStatus.CHECKED_OUT, RoomStatus.CLEANING),
    (BookingStatus.CONFIRMED, BookingAction.CANCEL): (BookingStatus.CANCELLED, None),
    (BookingStatus.CHECKED_IN, BookingAction.CANCEL): (BookingStatus.CANCELLED, RoomStatus.CLEANING),
}

# Attempts to pin a booking's room before giving up when its room keeps moving
_ROOM_PIN_ATTEMPTS = 3


def plan_transition(
    booking_id: UUID,
    current: BookingStatus,
    action: BookingAction,
) -> Tuple[BookingStatus, Optional[RoomStatus]]:
    """
    Look up the target status and room side effect for an action.

    Raises:
        InvalidTransitionError: the action is not legal from ``current``
    """
    try:
        return BOOKING_TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidTransitionError(booking_id, current.value, action.value) from None


def conflict_summary(booking: Booking) -> Dict[str, str]:
    return {
        "booking_id": str(booking.id),
        "check_in_date": booking.check_in_date.isoformat(),
        "check_out_date": booking.check_out_date.isoformat(),
        "status": booking.status.value,
    }


class BookingLifecycleService(BaseService[BookingRepository]):
    """
    Creates bookings and moves them through their lifecycle.

    confirmed -> checked_in -> checked_out, with cancellation allowed from
    confirmed or checked_in. Check-in marks the room occupied; check-out and
    cancelling a checked-in stay mark it for cleaning. The booking write and
    the room write of a transition commit together or not at all.
    """

    def __init__(
        self,
        repository: BookingRepository,
        db_session: Session,
        room_repository: Optional[RoomRepository] = None,
        customer_repository: Optional[CustomerRepository] = None,
        service_repository: Optional[GuestServiceRepository] = None,
        locks: Optional[RoomLockRegistry] = None,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository or RoomRepository(db_session)
        self.customer_repository = customer_repository or CustomerRepository(db_session)
        self.service_repository = service_repository or GuestServiceRepository(db_session)
        self.availability = AvailabilityService(repository, db_session, self.room_repository)
        self.locks = locks or room_locks

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(
        self,
        customer_id: UUID,
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        adults: int = 1,
        children: int = 0,
        total_amount: Decimal = Decimal("0.00"),
        special_requests: Optional[str] = None,
        created_by: Optional[UUID] = None,
        services: Optional[Sequence[BookingServiceLineCreate]] = None,
    ) -> Booking:
        """
        Create a confirmed booking if the room is free for the requested nights.

        Args:
            customer_id: Guest making the booking
            room_id: Room to book
            check_in_date: First night
            check_out_date: Departure day (not a night of the stay)
            adults: Number of adults (at least one)
            children: Number of children
            total_amount: Amount for the whole stay
            special_requests: Free-text requests
            created_by: Staff user creating the booking
            services: Service lines to attach in the same transaction

        Returns:
            The persisted booking

        Raises:
            ValidationError: bad date range or party size
            CustomerNotFoundError, RoomNotFoundError, ServiceNotFoundError
            RoomUnavailableError: an active booking overlaps the range
            StorageError: store failure or lock timeout
        """
        validate_date_range(check_in_date, check_out_date)
        if adults < 1:
            raise ValidationError("At least one adult is required", field_errors={"adults": ["must be >= 1"]})
        if children < 0:
            raise ValidationError("Children cannot be negative", field_errors={"children": ["must be >= 0"]})
        if total_amount < 0:
            raise ValidationError(
                "Total amount cannot be negative", field_errors={"total_amount": ["must be >= 0"]}
            )

        with self.locks.hold(room_id):
            with self.transaction():
                if self.customer_repository.get_by_id(customer_id) is None:
                    raise CustomerNotFoundError(customer_id)
                if self.room_repository.get_for_update(room_id) is None:
                    raise RoomNotFoundError(room_id)

                conflicts = self.availability.find_conflicts(room_id, check_in_date, check_out_date)
                if conflicts:
                    raise RoomUnavailableError(
                        room_id,
                        check_in_date,
                        check_out_date,
                        conflicts=[conflict_summary(b) for b in conflicts],
                    )

                booking = self.repository.add(
                    Booking(
                        customer_id=customer_id,
                        room_id=room_id,
                        check_in_date=check_in_date,
                        check_out_date=check_out_date,
                        adults=adults,
                        children=children,
                        total_amount=total_amount,
                        status=BookingStatus.CONFIRMED,
                        special_requests=special_requests,
                        created_by=created_by,
                    )
                )
                for line in services or ():
                    self._attach_service(booking, line)

        self._logger.info(
            f"Booking {booking.id} created for room {room_id}",
            extra={
                "booking_id": str(booking.id),
                "room_id": str(room_id),
                "customer_id": str(customer_id),
                "check_in_date": check_in_date.isoformat(),
                "check_out_date": check_out_date.isoformat(),
            },
        )
        return booking

    def _attach_service(self, booking: Booking, line: BookingServiceLineCreate) -> BookingServiceLine:
        service = self.service_repository.get_by_id(line.service_id)
        if service is None:
            raise ServiceNotFoundError(line.service_id)
        if not service.is_active:
            raise ValidationError(
                f"Service '{service.name}' is not available",
                field_errors={"service_id": ["service is inactive"]},
            )
        return self.repository.add_service_line(
            BookingServiceLine(
                booking_id=booking.id,
                service_id=service.id,
                service=service,
                quantity=line.quantity,
                total_price=line.total_price,
            )
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    @track_performance("transition_booking")
    def transition_booking(self, booking_id: UUID, action: Union[BookingAction, str]) -> Booking:
        """
        Apply a lifecycle action to a booking.

        The status before the change is captured first; the room side effect
        is taken from the transition table for that status, never from the
        booking after it was modified.

        Raises:
            ValidationError: unknown action
            BookingNotFoundError: booking does not exist
            InvalidTransitionError: action not legal from the current status
            StorageError: store failure or lock timeout; nothing is written
        """
        try:
            action = BookingAction(action)
        except ValueError:
            raise ValidationError(
                f"Unknown booking action '{action}'",
                field_errors={"action": [f"must be one of {[a.value for a in BookingAction]}"]},
            ) from None

        booking = self.repository.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)

        for _ in range(_ROOM_PIN_ATTEMPTS):
            room_id = booking.room_id
            with self.locks.hold(room_id):
                with self.transaction():
                    booking = self.repository.get_for_update(booking_id)
                    if booking is None:
                        raise BookingNotFoundError(booking_id)
                    if booking.room_id != room_id:
                        # Moved to another room while we waited; lock that one instead
                        continue

                    previous = booking.status
                    target, room_effect = plan_transition(booking.id, previous, action)

                    self.repository.set_status(booking, target)
                    if room_effect is not None:
                        room = self.room_repository.get_for_update(room_id)
                        if room is None:
                            raise RoomNotFoundError(room_id)
                        self.room_repository.set_status(room, room_effect)

            self._logger.info(
                f"Booking {booking_id} {action.value}: {previous.value} -> {target.value}",
                extra={
                    "booking_id": str(booking_id),
                    "room_id": str(room_id),
                    "action": action.value,
                    "from_status": previous.value,
                    "to_status": target.value,
                    "room_status": room_effect.value if room_effect else None,
                },
            )
            return booking

        raise StorageError(
            "Booking room changed repeatedly during the update; reload and retry",
            operation="transition_booking",
            details={"booking_id": str(booking_id)},
        )

    def check_in(self, booking_id: UUID) -> Booking:
        return self.transition_booking(booking_id, BookingAction.CHECK_IN)

    def check_out(self, booking_id: UUID) -> Booking:
        return self.transition_booking(booking_id, BookingAction.CHECK_OUT)

    def cancel(self, booking_id: UUID) -> Booking:
        return self.transition_booking(booking_id, BookingAction.CANCEL)
