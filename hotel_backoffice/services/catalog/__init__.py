from hotel_backoffice.services.catalog.catalog_service import ServiceCatalogService

__all__ = ["ServiceCatalogService"]
