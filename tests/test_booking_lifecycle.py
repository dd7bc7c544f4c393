from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from hotel_backoffice.core.exceptions import (
    BookingNotFoundError,
    CustomerNotFoundError,
    InvalidTransitionError,
    RoomNotFoundError,
    RoomUnavailableError,
    ServiceNotFoundError,
    ValidationError,
)
from hotel_backoffice.models import Booking, BookingAction, BookingServiceLine, BookingStatus, RoomStatus
from hotel_backoffice.services.booking import BOOKING_TRANSITIONS, plan_transition


def count_bookings(db):
    return db.execute(select(func.count(Booking.id))).scalar_one()


def create(lifecycle, room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5), **kwargs):
    kwargs.setdefault("total_amount", Decimal("400.00"))
    return lifecycle.create_booking(customer.id, room.id, check_in, check_out, **kwargs)


class TestCreateBooking:
    def test_creates_confirmed_booking(self, lifecycle, room, customer):
        booking = create(lifecycle, room, customer, adults=2, children=1, special_requests="Late arrival")

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.nights == 4
        assert booking.adults == 2
        assert booking.children == 1
        assert booking.total_amount == Decimal("400.00")
        assert booking.special_requests == "Late arrival"

    def test_does_not_change_room_status(self, lifecycle, db, room, customer):
        create(lifecycle, room, customer)

        db.refresh(room)
        assert room.status == RoomStatus.AVAILABLE

    def test_back_to_back_stays_are_accepted(self, lifecycle, room, customer):
        create(lifecycle, room, customer, date(2024, 6, 5), date(2024, 6, 10))
        later = create(lifecycle, room, customer, date(2024, 6, 10), date(2024, 6, 12))

        assert later.status == BookingStatus.CONFIRMED

    def test_overlap_is_rejected_without_writing(self, lifecycle, db, room, customer):
        existing = create(lifecycle, room, customer, date(2024, 6, 1), date(2024, 6, 5))
        before = count_bookings(db)

        with pytest.raises(RoomUnavailableError) as exc_info:
            create(lifecycle, room, customer, date(2024, 6, 3), date(2024, 6, 7))

        assert count_bookings(db) == before
        details = exc_info.value.details
        assert details["room_id"] == str(room.id)
        assert details["check_in_date"] == "2024-06-03"
        assert details["conflicting_bookings"][0]["booking_id"] == str(existing.id)
        assert exc_info.value.status_code == 409

    def test_cancelled_booking_frees_the_dates(self, lifecycle, room, customer):
        first = create(lifecycle, room, customer)
        lifecycle.cancel(first.id)

        again = create(lifecycle, room, customer)
        assert again.status == BookingStatus.CONFIRMED

    def test_cached_occupied_status_does_not_block_future_dates(self, lifecycle, make, customer):
        occupied = make.room(status=RoomStatus.OCCUPIED)

        booking = create(lifecycle, occupied, customer, date(2024, 9, 1), date(2024, 9, 3))
        assert booking.status == BookingStatus.CONFIRMED

    def test_invalid_range_is_rejected(self, lifecycle, db, room, customer):
        with pytest.raises(ValidationError):
            create(lifecycle, room, customer, date(2024, 6, 5), date(2024, 6, 5))
        assert count_bookings(db) == 0

    def test_requires_an_adult(self, lifecycle, room, customer):
        with pytest.raises(ValidationError):
            create(lifecycle, room, customer, adults=0)

    def test_unknown_room(self, lifecycle, customer, make):
        with pytest.raises(RoomNotFoundError):
            lifecycle.create_booking(customer.id, uuid4(), date(2024, 6, 1), date(2024, 6, 2))

    def test_unknown_customer(self, lifecycle, room):
        with pytest.raises(CustomerNotFoundError):
            lifecycle.create_booking(uuid4(), room.id, date(2024, 6, 1), date(2024, 6, 2))

    def test_service_lines_are_stored_with_the_booking(self, lifecycle, db, make, room, customer):
        from hotel_backoffice.schemas.booking import BookingServiceLineCreate

        laundry = make.service()
        booking = create(
            lifecycle,
            room,
            customer,
            services=[BookingServiceLineCreate(service_id=laundry.id, quantity=2, total_price=Decimal("30"))],
        )

        lines = db.execute(select(BookingServiceLine).where(BookingServiceLine.booking_id == booking.id)).scalars().all()
        assert [(line.quantity, line.total_price) for line in lines] == [(2, Decimal("30.00"))]

    def test_unknown_service_rolls_back_the_booking(self, lifecycle, db, room, customer):
        from hotel_backoffice.schemas.booking import BookingServiceLineCreate

        with pytest.raises(ServiceNotFoundError):
            create(
                lifecycle,
                room,
                customer,
                services=[BookingServiceLineCreate(service_id=uuid4(), total_price=Decimal("10"))],
            )
        assert count_bookings(db) == 0


class TestTransitions:
    def test_check_in_marks_room_occupied(self, lifecycle, db, make, room, customer):
        booking = make.booking(room, customer)

        result = lifecycle.check_in(booking.id)

        assert result.status == BookingStatus.CHECKED_IN
        db.refresh(room)
        assert room.status == RoomStatus.OCCUPIED

    def test_check_out_marks_room_for_cleaning(self, lifecycle, db, make, customer):
        occupied = make.room(status=RoomStatus.OCCUPIED)
        booking = make.booking(occupied, customer, status=BookingStatus.CHECKED_IN)

        result = lifecycle.check_out(booking.id)

        assert result.status == BookingStatus.CHECKED_OUT
        db.refresh(occupied)
        assert occupied.status == RoomStatus.CLEANING

    def test_cancel_confirmed_leaves_room_alone(self, lifecycle, db, make, customer):
        under_repair = make.room(status=RoomStatus.MAINTENANCE)
        booking = make.booking(under_repair, customer)

        result = lifecycle.cancel(booking.id)

        assert result.status == BookingStatus.CANCELLED
        db.refresh(under_repair)
        assert under_repair.status == RoomStatus.MAINTENANCE

    def test_cancel_checked_in_marks_room_for_cleaning(self, lifecycle, db, make, customer):
        occupied = make.room(status=RoomStatus.OCCUPIED)
        booking = make.booking(occupied, customer, status=BookingStatus.CHECKED_IN)

        result = lifecycle.cancel(booking.id)

        assert result.status == BookingStatus.CANCELLED
        db.refresh(occupied)
        assert occupied.status == RoomStatus.CLEANING

    def test_full_stay(self, lifecycle, db, room, customer):
        booking = create(lifecycle, room, customer)

        lifecycle.check_in(booking.id)
        lifecycle.check_out(booking.id)

        db.refresh(room)
        assert lifecycle.repository.get_by_id(booking.id).status == BookingStatus.CHECKED_OUT
        assert room.status == RoomStatus.CLEANING

    def test_accepts_action_strings(self, lifecycle, make, room, customer):
        booking = make.booking(room, customer)

        assert lifecycle.transition_booking(booking.id, "check-in").status == BookingStatus.CHECKED_IN

    def test_unknown_action_is_a_validation_error(self, lifecycle, make, room, customer):
        booking = make.booking(room, customer)

        with pytest.raises(ValidationError):
            lifecycle.transition_booking(booking.id, "upgrade")

    def test_unknown_booking(self, lifecycle):
        with pytest.raises(BookingNotFoundError):
            lifecycle.check_in(uuid4())


ILLEGAL_PAIRS = [
    (status, action)
    for status in BookingStatus
    for action in BookingAction
    if (status, action) not in BOOKING_TRANSITIONS
]


@pytest.mark.parametrize("status, action", ILLEGAL_PAIRS, ids=lambda v: v.value)
def test_illegal_transitions_change_nothing(lifecycle, db, make, customer, status, action):
    room = make.room(status=RoomStatus.CLEANING)
    booking = make.booking(room, customer, status=status)

    with pytest.raises(InvalidTransitionError) as exc_info:
        lifecycle.transition_booking(booking.id, action)

    error = exc_info.value
    assert error.current_status == status.value
    assert error.action == action.value
    assert error.details["booking_id"] == str(booking.id)
    db.refresh(booking)
    db.refresh(room)
    assert booking.status == status
    assert room.status == RoomStatus.CLEANING


def test_illegal_pairs_cover_terminal_states():
    assert (BookingStatus.CHECKED_OUT, BookingAction.CANCEL) in ILLEGAL_PAIRS
    assert all((BookingStatus.CANCELLED, action) in ILLEGAL_PAIRS for action in BookingAction)
    assert (BookingStatus.CONFIRMED, BookingAction.CHECK_OUT) in ILLEGAL_PAIRS


def test_plan_transition_reports_the_attempt():
    booking_id = uuid4()

    assert plan_transition(booking_id, BookingStatus.CONFIRMED, BookingAction.CHECK_IN) == (
        BookingStatus.CHECKED_IN,
        RoomStatus.OCCUPIED,
    )
    with pytest.raises(InvalidTransitionError, match="Cannot check-in a booking that is checked_out"):
        plan_transition(booking_id, BookingStatus.CHECKED_OUT, BookingAction.CHECK_IN)
