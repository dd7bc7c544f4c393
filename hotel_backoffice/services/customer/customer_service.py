"""
Customer (guest) management.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import (
    CustomerNotFoundError,
    DuplicateEntryError,
    ResourceInUseError,
    ValidationError,
)
from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.customer import Customer
from hotel_backoffice.repositories.booking_repository import BookingRepository, CustomerBookingStatistics
from hotel_backoffice.repositories.customer_repository import CustomerRepository
from hotel_backoffice.schemas.customer import CustomerCreate, CustomerUpdate
from hotel_backoffice.services.base import BaseService


class CustomerService(BaseService[CustomerRepository]):
    def __init__(
        self,
        repository: CustomerRepository,
        db_session: Session,
        booking_repository: Optional[BookingRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.booking_repository = booking_repository or BookingRepository(db_session)

    def list_customers(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Customer], int]:
        return self.repository.search_customers(search=search, limit=limit, offset=offset)

    def get_customer(self, customer_id: UUID) -> Customer:
        customer = self.repository.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    def get_customer_history(self, customer_id: UUID) -> Tuple[Customer, List[Booking]]:
        """Customer together with every booking they made, newest first."""
        customer = self.get_customer(customer_id)
        return customer, self.booking_repository.history_for_customer(customer.id)

    def get_customer_statistics(self, customer_id: UUID) -> CustomerBookingStatistics:
        customer = self.get_customer(customer_id)
        return self.booking_repository.get_customer_statistics(customer.id)

    def _check_email_free(self, email: Optional[str], customer_id: Optional[UUID] = None) -> None:
        if not email:
            return
        existing = self.repository.get_by_email(email)
        if existing is not None and existing.id != customer_id:
            raise DuplicateEntryError(
                "Customer with this email already exists",
                field="email",
                value=email,
                table="customers",
            )

    def create_customer(self, request: CustomerCreate) -> Customer:
        with self.transaction():
            self._check_email_free(request.email)
            customer = self.repository.add(Customer(**request.model_dump()))

        self._logger.info(f"Customer {customer.id} created", extra={"customer_id": str(customer.id)})
        return customer

    def update_customer(self, customer_id: UUID, request: CustomerUpdate) -> Customer:
        changes = request.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        cleared = [f for f in ("first_name", "last_name") if f in changes and changes[f] is None]
        if cleared:
            raise ValidationError(
                "Customer name cannot be cleared",
                field_errors={field: ["may not be null"] for field in cleared},
            )

        with self.transaction():
            customer = self.get_customer(customer_id)
            if "email" in changes:
                self._check_email_free(changes["email"], customer_id=customer.id)
            self.repository.update(customer, **changes)

        self._logger.info(f"Customer {customer_id} updated", extra={"customer_id": str(customer_id)})
        return customer

    def delete_customer(self, customer_id: UUID) -> None:
        """
        Remove a customer who has never booked.

        Raises:
            ResourceInUseError: the customer has bookings (any status)
        """
        with self.transaction():
            customer = self.get_customer(customer_id)
            booking_count = self.booking_repository.count_for_customer(customer.id)
            if booking_count:
                raise ResourceInUseError(
                    "Cannot delete customer with existing bookings",
                    resource_type="Customer",
                    resource_id=customer.id,
                    reference_count=booking_count,
                )
            self.repository.delete(customer)

        self._logger.info(f"Customer {customer_id} deleted", extra={"customer_id": str(customer_id)})
