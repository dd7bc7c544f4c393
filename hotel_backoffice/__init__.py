"""Hotel back-office: bookings, rooms and availability."""

__version__ = "1.0.0"
