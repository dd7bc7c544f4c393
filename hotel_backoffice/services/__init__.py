"""
Service layer: business operations over the repositories.

Services own transaction boundaries and raise application exceptions from
hotel_backoffice.core.exceptions.
"""
