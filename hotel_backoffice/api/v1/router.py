"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel back-office
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_backoffice.api import deps
from hotel_backoffice.api.v1 import bookings, customers, rooms, services
from hotel_backoffice.config.settings import settings
from hotel_backoffice.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        503: {"description": "Storage Unavailable"},
    }
)

router.include_router(rooms.router)
router.include_router(customers.router)
router.include_router(services.router)
router.include_router(bookings.router)


@router.get("/health", tags=["System Health"])
def api_health_check(db: Session = Depends(deps.get_db)):
    """
    API health check including database connectivity
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "version": settings.API_VERSION,
        "api_version": "v1",
        "database": database,
        "description": "Hotel back-office API v1",
    }
