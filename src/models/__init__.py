"""
Models package - SQLAlchemy ORM models and Pydantic schemas.
"""
from .database import (
    Base,
    Booking,
    init_db,
    init_db_with_retry,
    create_tables,
    get_db_session,
    get_db,
)

from .schemas import (
    BookingRequest,
    BookingResponse,
    BookingPreview,
    SeatingDecisionResponse,
    BookingEnvelope,
    PreviewEnvelope,
    BookingListEnvelope,
    SuccessResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Database models
    "Base",
    "Booking",
    # Database utilities
    "init_db",
    "init_db_with_retry",
    "create_tables",
    "get_db_session",
    "get_db",
    # Pydantic schemas
    "BookingRequest",
    "BookingResponse",
    "BookingPreview",
    "SeatingDecisionResponse",
    "BookingEnvelope",
    "PreviewEnvelope",
    "BookingListEnvelope",
    "SuccessResponse",
    "ErrorResponse",
    "HealthResponse",
]
