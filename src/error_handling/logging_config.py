"""
Centralized logging configuration for the booking system.

This module configures loguru for structured logging with different
levels and formats for development, test and production.
"""
import sys
from pathlib import Path
from typing import Optional
from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    log_dir: str = "logs",
    rotation: str = "100 MB",
    retention: str = "30 days",
    format_type: str = "detailed"
) -> None:
    """
    Configure loguru logging for the application.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        log_dir: Directory for log files
        rotation: When to rotate log files (e.g., "100 MB", "1 day")
        retention: How long to keep old log files
        format_type: Format style ("simple", "detailed")
    """
    logger.remove()

    if format_type == "simple":
        format_string = "<level>{level: <8}</level> | <level>{message}</level>"
    else:  # detailed
        format_string = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        format=format_string,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=False
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "booking_api_{time:YYYY-MM-DD}.log",
            format=format_string,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

        logger.add(
            log_path / "errors_{time:YYYY-MM-DD}.log",
            format=format_string,
            level="ERROR",
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
        )

        # Audit trail of created/cancelled bookings
        logger.add(
            log_path / "bookings_{time:YYYY-MM-DD}.log",
            format=format_string,
            level="INFO",
            rotation="1 day",
            retention="1 year",
            compression="zip",
            filter=lambda record: record["extra"].get("category") == "BOOKING"
        )

    logger.info(
        f"Logging configured: level={log_level}, "
        f"file_logging={log_to_file}, "
        f"format={format_type}"
    )


def log_booking_event(
    event_type: str,
    booking_id: Optional[str] = None,
    customer_name: Optional[str] = None,
    details: Optional[dict] = None
) -> None:
    """
    Log a booking-related event for audit trail.

    Args:
        event_type: Type of event (e.g., "CREATED", "PREVIEWED", "DELETED")
        booking_id: Booking identifier
        customer_name: Name the booking was made under
        details: Additional event details
    """
    details = details or {}

    logger.bind(category="BOOKING").info(
        f"BOOKING {event_type} | "
        f"booking_id={booking_id} | "
        f"customer={customer_name} | "
        f"details={details}"
    )


def log_api_call(
    service: str,
    operation: str,
    success: bool,
    duration: float,
    details: Optional[dict] = None
) -> None:
    """
    Log an external API call.

    Args:
        service: Service name (e.g., "openweathermap")
        operation: Operation performed (e.g., "onecall")
        success: Whether the call succeeded
        duration: Duration in seconds
        details: Additional call details
    """
    details = details or {}
    level = "INFO" if success else "WARNING"

    logger.bind(category="API").log(
        level,
        f"API {service}.{operation} | "
        f"success={success} | "
        f"duration={duration:.3f}s | "
        f"details={details}"
    )


def init_logging(
    environment: str = "development",
    log_level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_dir: str = "logs"
) -> None:
    """
    Initialize logging with environment-specific settings.

    Args:
        environment: Environment name ("development", "production", "test")
        log_level: Optional override of the preset level
        log_to_file: Optional override of the preset file logging flag
        log_dir: Directory for log files
    """
    if environment == "production":
        preset = dict(log_level="INFO", log_to_file=True, format_type="detailed",
                      rotation="100 MB", retention="90 days")
    elif environment == "test":
        preset = dict(log_level="WARNING", log_to_file=False, format_type="simple")
    else:  # development
        preset = dict(log_level="DEBUG", log_to_file=True, format_type="detailed",
                      rotation="50 MB", retention="7 days")

    if log_level is not None:
        preset["log_level"] = log_level
    if log_to_file is not None:
        preset["log_to_file"] = log_to_file

    configure_logging(log_dir=log_dir, **preset)
    logger.info(f"Logging initialized for {environment} environment")
