"""
API package - FastAPI routes for the booking service.
"""
from .app import create_app, get_booking_service, API_VERSION

__all__ = ["create_app", "get_booking_service", "API_VERSION"]
