from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from hotel_backoffice.core.exceptions import LockTimeoutError, StorageError
from hotel_backoffice.core.locks import RoomLockRegistry
from hotel_backoffice.models import BookingStatus, RoomStatus
from hotel_backoffice.repositories import BookingRepository, RoomRepository
from hotel_backoffice.services.booking import BookingLifecycleService


def failing_room_write(self, room, status, **extra):
    raise OperationalError("UPDATE rooms SET status=?", {}, Exception("disk I/O error"))


def test_failed_room_write_rolls_back_check_in(lifecycle, db, make, room, customer, monkeypatch):
    booking = make.booking(room, customer)
    monkeypatch.setattr(RoomRepository, "set_status", failing_room_write)

    with pytest.raises(StorageError) as exc_info:
        lifecycle.check_in(booking.id)

    assert exc_info.value.status_code == 503
    db.expire_all()
    assert booking.status == BookingStatus.CONFIRMED
    assert room.status == RoomStatus.AVAILABLE


def test_failed_room_write_rolls_back_check_out(lifecycle, db, make, customer, monkeypatch):
    occupied = make.room(status=RoomStatus.OCCUPIED)
    booking = make.booking(occupied, customer, status=BookingStatus.CHECKED_IN)
    monkeypatch.setattr(RoomRepository, "set_status", failing_room_write)

    with pytest.raises(StorageError):
        lifecycle.check_out(booking.id)

    db.expire_all()
    assert booking.status == BookingStatus.CHECKED_IN
    assert occupied.status == RoomStatus.OCCUPIED


def test_store_failure_during_lookup_is_a_storage_error(availability, room, monkeypatch):
    def broken(self, *args, **kwargs):
        with self.storage_errors("has_conflict"):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(BookingRepository, "has_conflict", broken)

    with pytest.raises(StorageError) as exc_info:
        availability.has_conflict(room.id, date(2024, 6, 1), date(2024, 6, 5))

    assert exc_info.value.details["operation"] == "has_conflict"
    assert exc_info.value.message == "Database error during has_conflict"
    assert "SELECT" not in exc_info.value.message


def test_lock_timeout_surfaces_as_storage_error(db, make, room, customer):
    impatient = RoomLockRegistry(timeout=0.05)
    lifecycle = BookingLifecycleService(BookingRepository(db), db, locks=impatient)
    booking = make.booking(room, customer)
    held = impatient.lock_for(room.id)
    held.acquire()
    try:
        with pytest.raises(LockTimeoutError) as exc_info:
            lifecycle.check_in(booking.id)
    finally:
        held.release()

    assert isinstance(exc_info.value, StorageError)
    assert exc_info.value.details["room_id"] == str(room.id)
    db.refresh(booking)
    assert booking.status == BookingStatus.CONFIRMED


def test_unique_violation_becomes_duplicate_entry(db):
    from hotel_backoffice.core.exceptions import DuplicateEntryError
    from hotel_backoffice.models import RoomType
    from hotel_backoffice.repositories import RoomTypeRepository

    repository = RoomTypeRepository(db)
    repository.add(RoomType(name="Twin", base_price=50, max_occupancy=2))
    with pytest.raises(DuplicateEntryError) as exc_info:
        repository.add(RoomType(name="Twin", base_price=60, max_occupancy=2))
    assert "INSERT" not in exc_info.value.message
    assert "Twin" not in exc_info.value.message
    db.rollback()


def test_cancel_unknown_booking_is_not_found(lifecycle):
    from hotel_backoffice.core.exceptions import BookingNotFoundError

    with pytest.raises(BookingNotFoundError):
        lifecycle.cancel(uuid4())
