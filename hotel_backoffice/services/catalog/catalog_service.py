"""
Catalogue of bookable extra services (room service, laundry, transfers...).
"""

from typing import List
from uuid import UUID

from hotel_backoffice.core.exceptions import ServiceNotFoundError, ValidationError
from hotel_backoffice.models.service import GuestService
from hotel_backoffice.repositories.service_repository import GuestServiceRepository
from hotel_backoffice.schemas.service import GuestServiceCreate, GuestServiceUpdate
from hotel_backoffice.services.base import BaseService


class ServiceCatalogService(BaseService[GuestServiceRepository]):
    def list_services(self, active_only: bool = False) -> List[GuestService]:
        return self.repository.list_services(active_only=active_only)

    def get_service(self, service_id: UUID) -> GuestService:
        service = self.repository.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return service

    def create_service(self, request: GuestServiceCreate) -> GuestService:
        with self.transaction():
            service = self.repository.add(GuestService(**request.model_dump()))

        self._logger.info(f"Service {service.name} added to catalogue", extra={"service_id": str(service.id)})
        return service

    def update_service(self, service_id: UUID, request: GuestServiceUpdate) -> GuestService:
        changes = request.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        cleared = [f for f in ("name", "price", "is_active") if f in changes and changes[f] is None]
        if cleared:
            raise ValidationError(
                "Required service fields cannot be cleared",
                field_errors={field: ["may not be null"] for field in cleared},
            )

        with self.transaction():
            service = self.get_service(service_id)
            self.repository.update(service, **changes)

        self._logger.info(f"Service {service_id} updated", extra={"service_id": str(service_id)})
        return service
