"""
Centralized error handling utilities for the booking system.

This module provides utilities for:
- Error logging with context
- Graceful degradation around optional collaborators
- Converting exceptions into API error payloads
"""
import inspect
import functools
from typing import Optional, Callable, Any, Dict
from loguru import logger

from error_handling.exceptions import (
    BookingSystemError,
    BookingValidationError,
    DatabaseError,
)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    severity: Optional[str] = None
) -> None:
    """
    Log error with full context.

    Validation errors are expected per-request outcomes and log at WARNING;
    everything else logs at ERROR with a stack trace.

    Args:
        error: Exception that occurred
        context: Additional context information
        severity: Override for the log level
    """
    if severity is None:
        severity = "WARNING" if isinstance(error, BookingValidationError) else "ERROR"

    details = dict(context or {})
    if isinstance(error, BookingSystemError):
        details.update({k: v for k, v in error.context.items() if v is not None})
        details["reason"] = error.reason

    logger.bind(category="ERROR", **details).log(
        severity,
        f"{type(error).__name__}: {error} | context={details}"
    )

    if severity in ("ERROR", "CRITICAL") and not isinstance(error, BookingValidationError):
        logger.opt(exception=error).debug("Stack trace:")


def build_error_payload(error: BookingSystemError) -> Dict[str, Any]:
    """
    Build the JSON body returned to API callers for a booking error.

    Returns:
        Dictionary with ``success``, ``error`` and ``reason`` keys, plus
        ``fields`` for missing-field rejections.
    """
    payload: Dict[str, Any] = {
        "success": False,
        "error": error.message if isinstance(error, BookingValidationError) else error.user_message,
        "reason": error.reason,
    }
    missing = getattr(error, "missing_fields", None)
    if missing:
        payload["fields"] = missing
    return payload


def graceful_degradation(
    fallback_value: Any = None,
    log_message: Optional[str] = None
):
    """
    Decorator for graceful degradation when a function fails.

    Works for plain functions and coroutine functions alike. Database
    errors are never swallowed.

    Args:
        fallback_value: Value to return if the wrapped function fails
        log_message: Custom log message for degradation

    Returns:
        Decorated function with fallback logic
    """
    def decorator(func: Callable) -> Callable:
        def _degrade(e: Exception) -> Any:
            message = log_message or f"Function {func.__name__} failed, using fallback"
            logger.warning(f"{message}: {type(e).__name__}: {e}")
            return fallback_value

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except DatabaseError:
                    raise
                except Exception as e:
                    return _degrade(e)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DatabaseError:
                raise
            except Exception as e:
                return _degrade(e)

        return wrapper
    return decorator
