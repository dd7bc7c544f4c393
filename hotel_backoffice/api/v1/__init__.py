from hotel_backoffice.api.v1.router import router

__all__ = ["router"]
