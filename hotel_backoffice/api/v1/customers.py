"""
Customer endpoints.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from hotel_backoffice.api import deps
from hotel_backoffice.schemas.common import MessageResponse
from hotel_backoffice.schemas.customer import (
    CustomerBookingItem,
    CustomerCreate,
    CustomerDetail,
    CustomerListResponse,
    CustomerResponse,
    CustomerStatsResponse,
    CustomerUpdate,
)
from hotel_backoffice.services.customer import CustomerService

router = APIRouter(prefix="/customers", tags=["Customer Management"])


@router.get("", response_model=CustomerListResponse)
def list_customers(
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: CustomerService = Depends(deps.get_customer_service),
):
    customers, total = service.list_customers(search=search, limit=limit, offset=offset)
    return CustomerListResponse(
        customers=[CustomerResponse.model_validate(c) for c in customers],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{customer_id}", response_model=CustomerDetail)
def get_customer(customer_id: UUID, service: CustomerService = Depends(deps.get_customer_service)):
    customer, bookings = service.get_customer_history(customer_id)
    return CustomerDetail(
        **CustomerResponse.model_validate(customer).model_dump(),
        bookings=[CustomerBookingItem.model_validate(b) for b in bookings],
    )


@router.get("/{customer_id}/stats", response_model=CustomerStatsResponse)
def get_customer_stats(customer_id: UUID, service: CustomerService = Depends(deps.get_customer_service)):
    return CustomerStatsResponse.model_validate(service.get_customer_statistics(customer_id))


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(deps.get_customer_service),
):
    return service.create_customer(payload)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: UUID,
    payload: CustomerUpdate,
    service: CustomerService = Depends(deps.get_customer_service),
):
    return service.update_customer(customer_id, payload)


@router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(customer_id: UUID, service: CustomerService = Depends(deps.get_customer_service)):
    service.delete_customer(customer_id)
    return MessageResponse(message="Customer deleted successfully")
