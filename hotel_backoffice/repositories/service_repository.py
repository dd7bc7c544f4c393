# hotel_backoffice/repositories/service_repository.py
"""
Bookable service catalogue repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from hotel_backoffice.models.service import GuestService
from hotel_backoffice.repositories.base_repository import BaseRepository


class GuestServiceRepository(BaseRepository[GuestService]):
    def __init__(self, session: Session):
        super().__init__(GuestService, session)

    def list_services(self, active_only: bool = False) -> List[GuestService]:
        """Catalogue entries grouped by category, then by name."""
        query = select(GuestService)
        if active_only:
            query = query.where(GuestService.is_active.is_(True))
        query = query.order_by(GuestService.category, GuestService.name)

        with self.storage_errors("list_services"):
            return list(self.session.execute(query).scalars().all())
