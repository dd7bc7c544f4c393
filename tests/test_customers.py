from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from hotel_backoffice.core.exceptions import (
    CustomerNotFoundError,
    DuplicateEntryError,
    ResourceInUseError,
)
from hotel_backoffice.models import BookingStatus
from hotel_backoffice.repositories import CustomerRepository
from hotel_backoffice.schemas.customer import CustomerCreate, CustomerUpdate
from hotel_backoffice.services.customer import CustomerService


@pytest.fixture
def customers(db):
    return CustomerService(CustomerRepository(db), db)


def test_create_and_fetch(customers):
    created = customers.create_customer(
        CustomerCreate(first_name="Grace", last_name="Hopper", email="grace@example.com", phone="555-0100")
    )

    fetched = customers.get_customer(created.id)
    assert fetched.full_name == "Grace Hopper"
    assert fetched.email == "grace@example.com"


def test_emails_are_unique_ignoring_case(customers):
    customers.create_customer(CustomerCreate(first_name="Grace", last_name="Hopper", email="grace@example.com"))

    with pytest.raises(DuplicateEntryError):
        customers.create_customer(CustomerCreate(first_name="G", last_name="H", email="GRACE@example.com"))


def test_customers_without_email_can_coexist(customers):
    customers.create_customer(CustomerCreate(first_name="A", last_name="One"))
    customers.create_customer(CustomerCreate(first_name="B", last_name="Two"))

    _, total = customers.list_customers()
    assert total == 2


def test_search_and_paging(customers):
    for first, last in [("Alan", "Turing"), ("Ada", "Lovelace"), ("Alan", "Kay"), ("Barbara", "Liskov")]:
        customers.create_customer(CustomerCreate(first_name=first, last_name=last))

    found, total = customers.list_customers(search="alan")
    assert total == 2
    assert [c.last_name for c in found] == ["Kay", "Turing"]

    page, total = customers.list_customers(limit=2, offset=1)
    assert total == 4
    assert [c.last_name for c in page] == ["Liskov", "Lovelace"]


def test_update_customer(customers, customer):
    updated = customers.update_customer(customer.id, CustomerUpdate(phone="555-0199"))

    assert updated.phone == "555-0199"
    assert updated.email == "ada@example.com"


def test_update_rejects_taken_email(customers, make, customer):
    other = make.customer(first_name="Grace", last_name="Hopper", email="grace@example.com")

    with pytest.raises(DuplicateEntryError):
        customers.update_customer(other.id, CustomerUpdate(email="ada@example.com"))


def test_delete_customer_without_bookings(customers, customer):
    customers.delete_customer(customer.id)

    with pytest.raises(CustomerNotFoundError):
        customers.get_customer(customer.id)


@pytest.mark.parametrize("status", list(BookingStatus))
def test_delete_customer_with_bookings_is_refused(customers, make, room, customer, status):
    make.booking(room, customer, status=status)

    with pytest.raises(ResourceInUseError) as exc_info:
        customers.delete_customer(customer.id)

    assert exc_info.value.details["reference_count"] == 1
    assert customers.get_customer(customer.id) is not None


def test_unknown_customer(customers):
    with pytest.raises(CustomerNotFoundError):
        customers.get_customer(uuid4())


@pytest.fixture
def suite_room(make):
    return make.room(room_type=make.room_type(name="Suite", base_price="300.00"), room_number="301")


def test_booking_history_is_newest_first(customers, make, room, suite_room, customer):
    june = make.booking(room, customer, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5))
    march = make.booking(suite_room, customer, check_in=date(2024, 3, 1), check_out=date(2024, 3, 2),
                         status=BookingStatus.CHECKED_OUT)
    make.booking(room, make.customer(first_name="Other", email="other@example.com"))

    fetched, history = customers.get_customer_history(customer.id)

    assert fetched.id == customer.id
    assert [b.id for b in history] == [march.id, june.id]
    assert history[0].room.room_number == "301"
    assert history[0].room.room_type.name == "Suite"


def test_booking_history_of_unknown_customer(customers):
    with pytest.raises(CustomerNotFoundError):
        customers.get_customer_history(uuid4())


def test_statistics_ignore_cancelled_bookings(customers, make, room, suite_room, customer):
    make.booking(room, customer, total_amount="400.00")
    make.booking(room, customer, check_in=date(2024, 5, 1), check_out=date(2024, 5, 3),
                 status=BookingStatus.CHECKED_OUT, total_amount="300.00")
    for month in (8, 9):
        make.booking(suite_room, customer, check_in=date(2024, month, 1), check_out=date(2024, month, 3),
                     status=BookingStatus.CANCELLED, total_amount="900.00")
    latest = make.booking(suite_room, customer, check_in=date(2024, 10, 1), check_out=date(2024, 10, 3),
                          status=BookingStatus.CANCELLED, total_amount="900.00")

    stats = customers.get_customer_statistics(customer.id)

    assert stats.total_bookings == 5
    assert stats.total_spent == Decimal("700.00")
    assert stats.favorite_room_type == "Standard"
    assert stats.last_booking.id == latest.id


def test_statistics_without_bookings(customers, customer):
    stats = customers.get_customer_statistics(customer.id)

    assert stats.total_bookings == 0
    assert stats.total_spent == Decimal("0.00")
    assert stats.last_booking is None
    assert stats.favorite_room_type is None


def test_statistics_of_unknown_customer(customers):
    with pytest.raises(CustomerNotFoundError):
        customers.get_customer_statistics(uuid4())
