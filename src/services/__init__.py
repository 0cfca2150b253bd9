"""
Services package - Business logic and external integrations.
"""
from .booking_service import (
    BookingService,
    build_weather_info,
    REQUIRED_FIELDS,
)

__all__ = [
    "BookingService",
    "build_weather_info",
    "REQUIRED_FIELDS",
]
