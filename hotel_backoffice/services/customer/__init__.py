from hotel_backoffice.services.customer.customer_service import CustomerService

__all__ = ["CustomerService"]
