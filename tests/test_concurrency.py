import threading
from datetime import date
from decimal import Decimal

from sqlalchemy import select

from hotel_backoffice.core.exceptions import RoomUnavailableError
from hotel_backoffice.models import Booking, BookingStatus
from hotel_backoffice.repositories import BookingRepository
from hotel_backoffice.services.booking import BookingLifecycleService

ATTEMPTS = 4


def run_concurrently(session_factory, locks, room_id, customer_id, ranges):
    barrier = threading.Barrier(len(ranges))
    outcomes = []
    outcomes_guard = threading.Lock()

    def attempt(check_in, check_out):
        session = session_factory()
        try:
            service = BookingLifecycleService(BookingRepository(session), session, locks=locks)
            barrier.wait()
            try:
                service.create_booking(
                    customer_id, room_id, check_in, check_out, total_amount=Decimal("100.00")
                )
                outcome = "created"
            except RoomUnavailableError:
                outcome = "unavailable"
        except Exception as e:  # surfaced through the outcome list
            outcome = f"error: {e!r}"
        finally:
            session.close()
        with outcomes_guard:
            outcomes.append(outcome)

    threads = [threading.Thread(target=attempt, args=r) for r in ranges]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


def test_overlapping_creates_yield_exactly_one_booking(session_factory, db, locks, room, customer):
    ranges = [(date(2024, 6, 1), date(2024, 6, 5 + i)) for i in range(ATTEMPTS)]

    outcomes = run_concurrently(session_factory, locks, room.id, customer.id, ranges)

    assert sorted(outcomes) == ["created"] + ["unavailable"] * (ATTEMPTS - 1)
    bookings = db.execute(select(Booking).where(Booking.room_id == room.id)).scalars().all()
    assert len(bookings) == 1
    assert bookings[0].status == BookingStatus.CONFIRMED


def test_disjoint_creates_all_succeed(session_factory, db, locks, room, customer):
    ranges = [(date(2024, 6, 1 + 2 * i), date(2024, 6, 3 + 2 * i)) for i in range(ATTEMPTS)]

    outcomes = run_concurrently(session_factory, locks, room.id, customer.id, ranges)

    assert outcomes == ["created"] * ATTEMPTS
    stays = sorted(
        (b.check_in_date, b.check_out_date)
        for b in db.execute(select(Booking).where(Booking.room_id == room.id)).scalars()
    )
    for (_, previous_out), (next_in, _) in zip(stays, stays[1:]):
        assert previous_out <= next_in
