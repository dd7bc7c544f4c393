"""
Custom Exceptions for the Hotel Back-Office Application

This module defines the exception taxonomy used by repositories, services
and the HTTP layer. Every exception carries a machine-readable code, an HTTP
status and enough details for a client to explain the failure without
re-querying.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    LOCK_TIMEOUT = "LOCK_TIMEOUT"

    # Business logic errors
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    RESOURCE_IN_USE = "RESOURCE_IN_USE"

    # Resource specific errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_TYPE_NOT_FOUND = "ROOM_TYPE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Validation Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 422
    ):
        details = dict(details or {})
        if field_errors:
            details["field_errors"] = field_errors
        super().__init__(message, error_code, details, status_code)


class InvalidDateRangeError(ValidationError):
    """Exception raised when check-out is not strictly after check-in"""

    def __init__(
        self,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
        message: str = "Check-out date must be after check-in date"
    ):
        super().__init__(
            message,
            error_code=ErrorCode.INVALID_DATE_RANGE,
            details={
                "check_in_date": check_in.isoformat() if check_in else None,
                "check_out_date": check_out.isoformat() if check_out else None,
            },
        )


# ========================================
# Resource Not Found Exceptions
# ========================================

class NotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id) if resource_id is not None else None
        }
        super().__init__(message, error_code, details, 404)


class RoomNotFoundError(NotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[Any] = None):
        super().__init__("Room", room_id, error_code=ErrorCode.ROOM_NOT_FOUND)


class RoomTypeNotFoundError(NotFoundError):
    """Exception raised when a room type is not found"""

    def __init__(self, room_type_id: Optional[Any] = None):
        super().__init__("Room type", room_type_id, error_code=ErrorCode.ROOM_TYPE_NOT_FOUND)


class BookingNotFoundError(NotFoundError):
    """Exception raised when a booking is not found"""

    def __init__(self, booking_id: Optional[Any] = None):
        super().__init__("Booking", booking_id, error_code=ErrorCode.BOOKING_NOT_FOUND)


class CustomerNotFoundError(NotFoundError):
    """Exception raised when a customer is not found"""

    def __init__(self, customer_id: Optional[Any] = None):
        super().__init__("Customer", customer_id, error_code=ErrorCode.CUSTOMER_NOT_FOUND)


class ServiceNotFoundError(NotFoundError):
    """Exception raised when a bookable service is not found"""

    def __init__(self, service_id: Optional[Any] = None):
        super().__init__("Service", service_id, error_code=ErrorCode.SERVICE_NOT_FOUND)


# ========================================
# Storage Exceptions
# ========================================

class StorageError(BaseAppException):
    """Exception raised when the durable store fails"""

    def __init__(
        self,
        message: str = "Storage operation failed",
        operation: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.STORAGE_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 503
    ):
        details = dict(details or {})
        details.setdefault("operation", operation)
        super().__init__(message, error_code, details, status_code)


class LockTimeoutError(StorageError):
    """Exception raised when a room lock cannot be acquired in time"""

    def __init__(self, room_id: Any, timeout: float):
        super().__init__(
            f"Timed out after {timeout:.1f}s waiting for room {room_id}",
            operation="acquire_room_lock",
            error_code=ErrorCode.LOCK_TIMEOUT,
            details={"room_id": str(room_id), "timeout_seconds": timeout},
        )


class DuplicateEntryError(BaseAppException):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        table: Optional[str] = None
    ):
        details = {
            "field": field,
            "value": str(value) if value is not None else None,
            "table": table
        }
        super().__init__(message, ErrorCode.DUPLICATE_ENTRY, details, 409)


# ========================================
# Business Logic Exceptions
# ========================================

class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        booking_id: Optional[Any] = None,
        room_id: Optional[Any] = None,
        status_code: int = 409
    ):
        details = {
            "booking_id": str(booking_id) if booking_id is not None else None,
            "room_id": str(room_id) if room_id is not None else None
        }
        super().__init__(message, error_code, details, status_code)


class RoomUnavailableError(BookingError):
    """Exception raised when a room is already booked for overlapping dates"""

    def __init__(
        self,
        room_id: Any,
        check_in: date,
        check_out: date,
        conflicts: Optional[List[Dict[str, Any]]] = None,
        message: str = "Room is not available for the selected dates"
    ):
        super().__init__(
            message,
            ErrorCode.ROOM_UNAVAILABLE,
            room_id=room_id,
        )
        self.details.update({
            "check_in_date": check_in.isoformat(),
            "check_out_date": check_out.isoformat(),
            "conflicting_bookings": conflicts or [],
        })


class InvalidTransitionError(BookingError):
    """Exception raised when a lifecycle action is not legal from the current status"""

    def __init__(
        self,
        booking_id: Any,
        current_status: str,
        action: str,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Cannot {action} a booking that is {current_status}"
        super().__init__(
            message,
            ErrorCode.INVALID_TRANSITION,
            booking_id=booking_id,
        )
        self.current_status = current_status
        self.action = action
        self.details.update({
            "current_status": current_status,
            "action": action,
        })


class ResourceInUseError(BaseAppException):
    """Exception raised when deleting a record that is still referenced"""

    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: Any,
        reference_count: int
    ):
        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            "reference_count": reference_count,
        }
        super().__init__(message, ErrorCode.RESOURCE_IN_USE, details, 409)


# ========================================
# Utility Functions
# ========================================

def handle_database_exception(exc: Exception, operation: Optional[str] = None) -> BaseAppException:
    """
    Convert database exceptions to application exceptions.

    The driver text (statement and parameters included) stays out of the
    returned message; callers log it before translating.
    """
    error_message = str(exc).lower()

    if "duplicate" in error_message or "unique constraint" in error_message:
        return DuplicateEntryError("A record with the same unique value already exists")
    if operation:
        return StorageError(f"Database error during {operation}", operation=operation)
    return StorageError("Database error", operation=operation)


# Export all exception classes
__all__ = [
    # Enums
    'ErrorCode',

    # Base exceptions
    'BaseAppException',

    # Validation exceptions
    'ValidationError',
    'InvalidDateRangeError',

    # Not found exceptions
    'NotFoundError',
    'RoomNotFoundError',
    'RoomTypeNotFoundError',
    'BookingNotFoundError',
    'CustomerNotFoundError',
    'ServiceNotFoundError',

    # Storage exceptions
    'StorageError',
    'LockTimeoutError',
    'DuplicateEntryError',

    # Business logic exceptions
    'BookingError',
    'RoomUnavailableError',
    'InvalidTransitionError',
    'ResourceInUseError',

    # Utility functions
    'handle_database_exception',
]
