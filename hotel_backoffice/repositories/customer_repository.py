# hotel_backoffice/repositories/customer_repository.py
"""
Customer repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from hotel_backoffice.models.customer import Customer
from hotel_backoffice.repositories.base_repository import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    """Repository for guests."""

    def __init__(self, session: Session):
        super().__init__(Customer, session)

    def get_by_email(self, email: str) -> Optional[Customer]:
        with self.storage_errors("get_by_email"):
            return self.session.execute(
                select(Customer).where(func.lower(Customer.email) == email.lower())
            ).scalar_one_or_none()

    def search_customers(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Customer], int]:
        """
        Page through customers, optionally matching a search term.

        The term matches first name, last name, email or phone
        (case-insensitive substring).

        Returns:
            Tuple of (page of customers, total matching count)
        """
        query = select(Customer)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Customer.first_name).like(pattern),
                    func.lower(Customer.last_name).like(pattern),
                    func.lower(Customer.email).like(pattern),
                    func.lower(Customer.phone).like(pattern),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        page_query = (
            query.order_by(Customer.last_name, Customer.first_name, Customer.created_at)
            .limit(limit)
            .offset(offset)
        )

        with self.storage_errors("search_customers"):
            total = self.session.execute(count_query).scalar_one()
            customers = list(self.session.execute(page_query).scalars().all())
        return customers, total
