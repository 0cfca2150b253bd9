"""
Custom Exception Classes for the voice table booking service.

This module defines exception classes for different error categories:
- Request validation errors (unparseable dates, times and guest counts)
- Lookup errors (unknown booking ids)
- Technical errors (database, weather provider)

Each exception carries a machine-readable ``reason`` code, the HTTP status
it maps to, and context for logging.
"""

from typing import Optional, Any, Dict, List


class BookingSystemError(Exception):
    """Base exception for all booking system errors."""

    reason = "booking_error"
    status_code = 500

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = True
    ):
        """
        Initialize booking system error.

        Args:
            message: Technical error message for logging
            user_message: User-friendly message for the API response
            context: Additional context for logging
            recoverable: Whether the request can be retried with other input
        """
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message
        self.context = context or {}
        self.recoverable = recoverable


# ============================================================================
# Request Validation Errors
# ============================================================================

class BookingValidationError(BookingSystemError):
    """
    Raised when a booking request cannot be accepted as given.

    Examples:
    - A date phrase no format understands
    - A time phrase no format understands
    - A guest count that decodes to nothing
    - Required fields missing
    """

    reason = "invalid_request"
    status_code = 400

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        """
        Initialize booking validation error.

        Args:
            message: Technical error message
            user_message: User-friendly message
            field: Field that failed validation
            value: Invalid value
            **kwargs: Additional context
        """
        context = {
            "field": field,
            "value": value,
            **kwargs
        }
        super().__init__(message, user_message, context, recoverable=True)
        self.field = field
        self.value = value


class InvalidDateError(BookingValidationError):
    """Raised when no date format matches the spoken date."""

    reason = "invalid_date"

    def __init__(self, value: Any, reason: str = "no date format matched", **kwargs):
        super().__init__(
            message=f"Could not parse bookingDate {value!r}: {reason}",
            user_message="Sorry, I couldn't understand the booking date.",
            field="bookingDate",
            value=value,
            **kwargs
        )


class InvalidTimeError(BookingValidationError):
    """Raised when no time format matches the spoken time."""

    reason = "invalid_time"

    def __init__(self, value: Any, reason: str = "no time format matched", **kwargs):
        super().__init__(
            message=f"Could not parse bookingTime {value!r}: {reason}",
            user_message="Sorry, I couldn't understand the booking time.",
            field="bookingTime",
            value=value,
            **kwargs
        )


class InvalidGuestCountError(BookingValidationError):
    """Raised when the number of guests does not decode to a positive integer."""

    reason = "invalid_guests"

    def __init__(self, value: Any, **kwargs):
        super().__init__(
            message=f"Invalid numberOfGuests {value!r}",
            user_message="Sorry, I couldn't understand how many guests are coming.",
            field="numberOfGuests",
            value=value,
            **kwargs
        )


class MissingRequiredFieldError(BookingValidationError):
    """Raised when required booking fields are absent."""

    reason = "missing_fields"

    def __init__(self, missing_fields: List[str], **kwargs):
        fields = ", ".join(missing_fields)
        super().__init__(
            message=f"Missing required fields: {fields}",
            field="missing_fields",
            value=list(missing_fields),
            **kwargs
        )
        self.missing_fields = list(missing_fields)


# ============================================================================
# Lookup Errors
# ============================================================================

class BookingNotFoundError(BookingSystemError):
    """Raised when no booking exists for the requested id."""

    reason = "not_found"
    status_code = 404

    def __init__(self, booking_id: str):
        super().__init__(
            f"Booking {booking_id} not found",
            user_message="Not found",
            context={"booking_id": booking_id},
        )
        self.booking_id = booking_id


# ============================================================================
# Technical Errors - Database
# ============================================================================

class DatabaseError(BookingSystemError):
    """
    Raised when database operations fail.

    Examples:
    - Connection failure
    - Constraint violation
    - Transaction rollback
    """

    reason = "database_error"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **kwargs
    ):
        """
        Initialize database error.

        Args:
            message: Error message
            operation: Database operation that failed
            original_error: Original exception if any
            **kwargs: Additional context
        """
        context = {
            "operation": operation,
            "original_error": str(original_error) if original_error else None,
            **kwargs
        }
        super().__init__(
            message,
            user_message="Server error",
            context=context,
            recoverable=False
        )
        self.operation = operation
        self.original_error = original_error


class DatabaseConnectionError(DatabaseError):
    """Raised when the database connection fails."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, operation="connection", **kwargs)


# ============================================================================
# Technical Errors - Weather Provider
# ============================================================================

class WeatherServiceError(BookingSystemError):
    """
    Raised inside the weather client when a forecast cannot be produced.

    Never escapes the client: ``WeatherClient.fetch`` converts it into
    "no observation available".
    """

    reason = "weather_unavailable"
    status_code = 503

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        **kwargs
    ):
        context = {
            "original_error": str(original_error) if original_error else None,
            **kwargs
        }
        super().__init__(message, context=context, recoverable=True)
        self.original_error = original_error
