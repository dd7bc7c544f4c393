"""
Bookable services catalogue endpoints.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hotel_backoffice.api import deps
from hotel_backoffice.schemas.service import (
    GuestServiceCreate,
    GuestServiceResponse,
    GuestServiceUpdate,
)
from hotel_backoffice.services.catalog import ServiceCatalogService

router = APIRouter(prefix="/services", tags=["Services Catalogue"])


@router.get("", response_model=List[GuestServiceResponse])
def list_services(
    active_only: bool = Query(False),
    catalog: ServiceCatalogService = Depends(deps.get_catalog_service),
):
    return catalog.list_services(active_only=active_only)


@router.post("", response_model=GuestServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    payload: GuestServiceCreate,
    catalog: ServiceCatalogService = Depends(deps.get_catalog_service),
):
    return catalog.create_service(payload)


@router.put("/{service_id}", response_model=GuestServiceResponse)
def update_service(
    service_id: UUID,
    payload: GuestServiceUpdate,
    catalog: ServiceCatalogService = Depends(deps.get_catalog_service),
):
    return catalog.update_service(service_id, payload)
