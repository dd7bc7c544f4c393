from datetime import date
from uuid import uuid4

import pytest

from hotel_backoffice.core.exceptions import InvalidDateRangeError, RoomNotFoundError, ValidationError
from hotel_backoffice.models import BookingStatus, RoomStatus


def test_room_without_bookings_is_available(availability, room):
    assert availability.check_availability(room.id, date(2024, 6, 1), date(2024, 6, 5)) is True


def test_checkout_day_can_be_next_check_in(availability, make, room, customer):
    make.booking(room, customer, check_in=date(2024, 6, 5), check_out=date(2024, 6, 10))

    assert availability.has_conflict(room.id, date(2024, 6, 10), date(2024, 6, 12)) is False
    assert availability.has_conflict(room.id, date(2024, 6, 1), date(2024, 6, 5)) is False


def test_overlapping_range_conflicts(availability, make, room, customer):
    existing = make.booking(room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))

    assert availability.has_conflict(room.id, date(2024, 6, 3), date(2024, 6, 7)) is True
    conflicts = availability.find_conflicts(room.id, date(2024, 6, 3), date(2024, 6, 7))
    assert [b.id for b in conflicts] == [existing.id]


@pytest.mark.parametrize(
    "check_in, check_out",
    [
        (date(2024, 5, 28), date(2024, 6, 2)),   # overlaps the start
        (date(2024, 6, 4), date(2024, 6, 8)),    # overlaps the end
        (date(2024, 6, 2), date(2024, 6, 3)),    # inside
        (date(2024, 5, 30), date(2024, 6, 9)),   # encloses
        (date(2024, 6, 1), date(2024, 6, 5)),    # identical
    ],
)
def test_every_kind_of_overlap_is_detected(availability, make, room, customer, check_in, check_out):
    make.booking(room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))

    assert availability.has_conflict(room.id, check_in, check_out) is True


@pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT])
def test_finished_bookings_do_not_block(availability, make, room, customer, status):
    make.booking(room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5), status=status)

    assert availability.check_availability(room.id, date(2024, 6, 2), date(2024, 6, 4)) is True


def test_checked_in_booking_blocks(availability, make, room, customer):
    make.booking(room, customer, status=BookingStatus.CHECKED_IN)

    assert availability.check_availability(room.id, date(2024, 6, 2), date(2024, 6, 4)) is False


def test_bookings_of_other_rooms_are_ignored(availability, make, room, customer):
    other = make.room()
    make.booking(other, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))

    assert availability.check_availability(room.id, date(2024, 6, 1), date(2024, 6, 5)) is True


def test_cached_room_status_is_not_consulted(availability, make, customer):
    occupied = make.room(status=RoomStatus.OCCUPIED)

    assert availability.check_availability(occupied.id, date(2024, 7, 1), date(2024, 7, 3)) is True


def test_repeated_checks_are_stable(availability, make, room, customer):
    make.booking(room, customer)

    first = availability.check_availability(room.id, date(2024, 6, 3), date(2024, 6, 7))
    second = availability.check_availability(room.id, date(2024, 6, 3), date(2024, 6, 7))
    assert first == second is False


@pytest.mark.parametrize(
    "check_in, check_out",
    [(date(2024, 6, 5), date(2024, 6, 5)), (date(2024, 6, 5), date(2024, 6, 1))],
)
def test_empty_or_reversed_range_is_a_validation_error(availability, room, check_in, check_out):
    with pytest.raises(InvalidDateRangeError) as exc_info:
        availability.has_conflict(room.id, check_in, check_out)

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.status_code == 422


def test_unknown_room_is_not_found(availability):
    with pytest.raises(RoomNotFoundError):
        availability.check_availability(uuid4(), date(2024, 6, 1), date(2024, 6, 5))


def test_excluding_a_booking_ignores_it(availability, make, room, customer):
    existing = make.booking(room, customer)

    assert availability.has_conflict(
        room.id, date(2024, 6, 2), date(2024, 6, 6), exclude_booking_id=existing.id
    ) is False


class TestFindAvailableRooms:
    def test_lists_free_rooms_cheapest_first(self, availability, make, customer):
        suite = make.room_type(name="Suite", base_price="300.00")
        single = make.room_type(name="Single", base_price="80.00")
        suite_room = make.room(room_type=suite, room_number="301")
        single_b = make.room(room_type=single, room_number="202")
        single_a = make.room(room_type=single, room_number="201")
        booked = make.room(room_type=single, room_number="203")
        make.booking(booked, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))

        rooms = availability.find_available_rooms(date(2024, 6, 3), date(2024, 6, 4))

        assert [r.room_number for r in rooms] == [single_a.room_number, single_b.room_number, suite_room.room_number]

    def test_skips_rooms_under_maintenance_but_not_occupied_ones(self, availability, make):
        rt = make.room_type(name="Double")
        make.room(room_type=rt, room_number="401", status=RoomStatus.MAINTENANCE)
        make.room(room_type=rt, room_number="402", status=RoomStatus.OCCUPIED)
        make.room(room_type=rt, room_number="403", status=RoomStatus.CLEANING)

        rooms = availability.find_available_rooms(date(2024, 8, 1), date(2024, 8, 2))

        assert [r.room_number for r in rooms] == ["402", "403"]

    def test_filters_by_room_type(self, availability, make):
        suite = make.room_type(name="Suite", base_price="300.00")
        single = make.room_type(name="Single", base_price="80.00")
        make.room(room_type=suite, room_number="301")
        make.room(room_type=single, room_number="201")

        rooms = availability.find_available_rooms(date(2024, 8, 1), date(2024, 8, 2), room_type_id=suite.id)

        assert [r.room_number for r in rooms] == ["301"]

    def test_rejects_invalid_range(self, availability):
        with pytest.raises(ValidationError):
            availability.find_available_rooms(date(2024, 8, 2), date(2024, 8, 1))


@pytest.mark.parametrize(
    "check_in, check_out, expected",
    [
        (date(2024, 6, 5), date(2024, 6, 7), False),
        (date(2024, 5, 30), date(2024, 6, 1), False),
        (date(2024, 6, 4), date(2024, 6, 7), True),
        (date(2024, 5, 30), date(2024, 6, 2), True),
    ],
)
def test_booking_overlap_matches_availability_query(availability, make, room, customer, check_in, check_out, expected):
    booking = make.booking(room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))

    assert booking.overlaps(check_in, check_out) is expected
    assert availability.has_conflict(room.id, check_in, check_out) is expected
