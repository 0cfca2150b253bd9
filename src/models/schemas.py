"""
Pydantic models for data validation and serialization.

Field names are snake_case in Python and camelCase on the wire
(``customerName``, ``numberOfGuests``, ...), matching the browser client.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingRequest(CamelModel):
    """
    Pydantic model for incoming booking requests.

    Every field is optional at this layer: spoken phrases are checked and
    normalized by the booking service, which reports missing fields with
    a ``missing_fields`` reason.
    """
    customer_name: Optional[str] = Field(None, max_length=255, description="Customer name")
    number_of_guests: Optional[Union[int, str]] = Field(
        None, description="Guest count as a number, digits or words (\"four\")"
    )
    booking_date: Optional[str] = Field(None, description="e.g. \"August 20\" or \"2025-08-20\"")
    booking_time: Optional[str] = Field(None, description="e.g. \"evening 6:00 p.m.\" or \"18:00\"")
    cuisine_preference: Optional[str] = Field(None, max_length=255)
    special_requests: Optional[str] = Field(None, description="Special requests or dietary restrictions")
    location: Optional[str] = Field(None, description="\"lat,lon\" for the weather lookup")
    preview: bool = Field(False, description="Return weather and seating without saving")

    @field_validator(
        "customer_name", "booking_date", "booking_time",
        "cuisine_preference", "special_requests", "location",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank strings as absent."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("number_of_guests")
    @classmethod
    def blank_guests_to_none(cls, v: Optional[Union[int, str]]) -> Optional[Union[int, str]]:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "customerName": "Asha Rao",
                "numberOfGuests": "four",
                "bookingDate": "August 20",
                "bookingTime": "evening 7 p.m.",
                "cuisinePreference": "South Indian",
                "specialRequests": "Window seat preferred",
                "location": "12.9716,77.5946"
            }
        }
    )


class SeatingDecisionResponse(CamelModel):
    """Seating recommendation derived from the forecast."""
    category: Literal["good", "moderate", "bad"]
    recommendation: str
    suggest_outdoor: bool
    is_default: bool


class BookingResponse(CamelModel):
    """
    Pydantic model for formatting booking data in API responses.
    """
    booking_id: str
    customer_name: str
    number_of_guests: int
    booking_date: datetime
    booking_time: str
    cuisine_preference: Optional[str] = None
    special_requests: Optional[str] = None
    weather_info: Optional[Dict[str, Any]] = None
    seating_preference: str
    status: str
    created_at: datetime

    @field_validator("booking_date", "created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite drops tzinfo; stored datetimes are always UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Enable ORM mode for SQLAlchemy models
        json_schema_extra={
            "example": {
                "bookingId": "6f1c0f8e-4b8e-4d55-9b7a-3d0c2f1e9a10",
                "customerName": "Asha Rao",
                "numberOfGuests": 4,
                "bookingDate": "2025-08-20T13:30:00Z",
                "bookingTime": "7:00 PM",
                "cuisinePreference": "South Indian",
                "specialRequests": "Window seat preferred",
                "weatherInfo": {"condition": "clear", "rainProbability": 0.05},
                "seatingPreference": "outdoor",
                "status": "confirmed",
                "createdAt": "2025-08-18T09:12:44Z"
            }
        }
    )


class BookingPreview(CamelModel):
    """
    Weather and seating suggestion for a booking that was not saved.
    """
    booking_date: str = Field(..., description="Local booking time with offset")
    booking_date_utc: str = Field(..., alias="bookingDateUTC", description="Absolute booking time")
    booking_time: str
    number_of_guests: Optional[int] = None
    weather_info: Dict[str, Any]
    seating_preference: str
    seating: SeatingDecisionResponse


class BookingEnvelope(BaseModel):
    success: bool = True
    booking: BookingResponse


class PreviewEnvelope(BaseModel):
    success: bool = True
    preview: BookingPreview


class BookingListEnvelope(BaseModel):
    success: bool = True
    bookings: List[BookingResponse]


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    reason: str
    fields: Optional[List[str]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
