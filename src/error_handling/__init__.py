"""
Error handling module for the voice table booking service.

This module provides the error handling infrastructure:
- Custom exception hierarchy with machine-readable reason codes
- Centralized error handlers and graceful degradation
- Logging configuration

Main Components:
    - exceptions: Custom exception classes for all error scenarios
    - handlers: Decorators and utilities for error handling
    - logging_config: loguru sinks and audit helpers
"""

from .exceptions import (
    # Base exceptions
    BookingSystemError,

    # Request validation errors
    BookingValidationError,
    InvalidDateError,
    InvalidTimeError,
    InvalidGuestCountError,
    MissingRequiredFieldError,

    # Lookup errors
    BookingNotFoundError,

    # Database errors
    DatabaseError,
    DatabaseConnectionError,

    # Weather provider errors
    WeatherServiceError,
)

from .handlers import (
    log_error,
    build_error_payload,
    graceful_degradation,
)

from .logging_config import (
    configure_logging,
    init_logging,
    log_booking_event,
    log_api_call,
)

__all__ = [
    # Exceptions
    "BookingSystemError",
    "BookingValidationError",
    "InvalidDateError",
    "InvalidTimeError",
    "InvalidGuestCountError",
    "MissingRequiredFieldError",
    "BookingNotFoundError",
    "DatabaseError",
    "DatabaseConnectionError",
    "WeatherServiceError",

    # Error Handlers
    "log_error",
    "build_error_payload",
    "graceful_degradation",

    # Logging
    "configure_logging",
    "init_logging",
    "log_booking_event",
    "log_api_call",
]
