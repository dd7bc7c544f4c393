"""
Shared fixtures: a fresh SQLite database file per test, data builders and an
API client bound to that database.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hotel_backoffice.core.locks import RoomLockRegistry
from hotel_backoffice.db.init_db import drop_db, init_db
from hotel_backoffice.db.session import build_engine, get_db
from hotel_backoffice.models import (
    Booking,
    BookingStatus,
    Customer,
    GuestService,
    Room,
    RoomStatus,
    RoomType,
)
from hotel_backoffice.repositories import BookingRepository
from hotel_backoffice.services.booking import (
    AvailabilityService,
    BookingLifecycleService,
    BookingService,
)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'hotel.db'}")
    init_db(bind=engine)
    yield engine
    drop_db(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class DataBuilder:
    """Inserts committed rows for tests."""

    def __init__(self, session):
        self.session = session
        self._room_numbers = 900

    def _save(self, entity):
        self.session.add(entity)
        self.session.commit()
        return entity

    def room_type(self, name="Standard", base_price="100.00", max_occupancy=2):
        return self._save(
            RoomType(name=name, base_price=Decimal(base_price), max_occupancy=max_occupancy)
        )

    def room(self, room_type=None, room_number=None, floor=1, status=RoomStatus.AVAILABLE):
        if room_type is None:
            room_type = self.room_type(name=f"Type-{self._room_numbers}")
        if room_number is None:
            self._room_numbers += 1
            room_number = str(self._room_numbers)
        return self._save(
            Room(room_number=room_number, room_type_id=room_type.id, floor=floor, status=status)
        )

    def customer(self, first_name="Ada", last_name="Lovelace", email=None):
        return self._save(Customer(first_name=first_name, last_name=last_name, email=email))

    def service(self, name="Laundry", price="15.00", is_active=True, category="housekeeping"):
        return self._save(
            GuestService(name=name, price=Decimal(price), is_active=is_active, category=category)
        )

    def booking(
        self,
        room,
        customer,
        check_in=date(2024, 6, 1),
        check_out=date(2024, 6, 5),
        status=BookingStatus.CONFIRMED,
        total_amount="400.00",
    ):
        return self._save(
            Booking(
                room_id=room.id,
                customer_id=customer.id,
                check_in_date=check_in,
                check_out_date=check_out,
                status=status,
                total_amount=Decimal(total_amount),
            )
        )


@pytest.fixture
def make(db):
    return DataBuilder(db)


@pytest.fixture
def room(make):
    return make.room(room_type=make.room_type(), room_number="101")


@pytest.fixture
def customer(make):
    return make.customer(email="ada@example.com")


@pytest.fixture
def locks():
    return RoomLockRegistry(timeout=5)


@pytest.fixture
def availability(db):
    return AvailabilityService(BookingRepository(db), db)


@pytest.fixture
def lifecycle(db, locks):
    return BookingLifecycleService(BookingRepository(db), db, locks=locks)


@pytest.fixture
def booking_service(db, locks):
    return BookingService(BookingRepository(db), db, locks=locks)


@pytest.fixture
def client(session_factory):
    from hotel_backoffice.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
