"""
BookingService - Core booking business logic for the voice booking service.

This service handles:
- Required-field checks on spoken booking requests
- Normalizing guest counts, dates and times
- Looking up the booking-day forecast and deciding seating
- Creating, listing, fetching and deleting bookings
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, OperationalError
from loguru import logger

from config import Settings, get_settings
from error_handling.exceptions import (
    BookingNotFoundError,
    DatabaseConnectionError,
    DatabaseError,
    MissingRequiredFieldError,
)
from error_handling.handlers import graceful_degradation
from error_handling.logging_config import log_booking_event
from models.database import Booking, new_booking_id
from models.schemas import BookingPreview, BookingRequest, SeatingDecisionResponse
from nlu.moment import BookingMoment
from nlu.normalizer import BookingIntentNormalizer
from nlu.numbers import parse_guest_count
from weather.client import WeatherClient
from weather.policy import (
    SeatingDecision,
    WeatherObservation,
    WeatherThresholds,
    decide_or_default,
)


REQUIRED_FIELDS = {
    "customerName": "customer_name",
    "numberOfGuests": "number_of_guests",
    "bookingDate": "booking_date",
    "bookingTime": "booking_time",
}

PREVIEW_REQUIRED_FIELDS = {
    "bookingDate": "booking_date",
    "bookingTime": "booking_time",
}


def build_weather_info(
    observation: Optional[WeatherObservation],
    decision: SeatingDecision
) -> Dict[str, Any]:
    """
    Build the weather summary stored with a booking and returned in previews.

    Observation fields are None when the default decision was substituted.
    """
    return {
        "date": observation.forecast_date.isoformat() if observation and observation.forecast_date else None,
        "condition": observation.condition if observation else None,
        "rainProbability": observation.precipitation_probability if observation else None,
        "temp": observation.temperature if observation else {},
        "category": decision.category,
        "suggestion": decision.recommendation,
        "suggestOutdoor": decision.suggest_outdoor,
        "isDefault": decision.is_default,
        "raw": observation.raw if observation else None,
    }


class BookingService:
    """
    Service class that encapsulates all booking business logic.

    This service is responsible for:
    - Rejecting incomplete requests before anything is written
    - Running the booking intent normalizer
    - Deriving a seating suggestion from the forecast
    - Persisting bookings atomically
    """

    def __init__(
        self,
        session: Session,
        weather_client: Optional[WeatherClient] = None,
        settings: Optional[Settings] = None,
        normalizer: Optional[BookingIntentNormalizer] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the booking service.

        Args:
            session: SQLAlchemy database session
            weather_client: Forecast collaborator (None disables weather lookups)
            settings: Application settings
            normalizer: Date/time normalizer (built from settings by default)
            clock: Returns the aware "now" used as the reference instant
        """
        self.session = session
        self.settings = settings or get_settings()
        self.weather_client = weather_client
        self.normalizer = normalizer or BookingIntentNormalizer.from_settings(self.settings)
        self.thresholds = WeatherThresholds.from_settings(self.settings)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @staticmethod
    def _check_required(request: BookingRequest, required: Dict[str, str]) -> None:
        missing = [
            wire_name for wire_name, attr in required.items()
            if getattr(request, attr) is None
        ]
        if missing:
            raise MissingRequiredFieldError(missing)

    def _save(self, booking: Booking) -> None:
        self.session.add(booking)
        self.session.commit()

    @graceful_degradation(fallback_value=None, log_message="Weather fetch failed")
    async def _fetch_observation(
        self,
        moment: BookingMoment,
        location: Optional[str]
    ) -> Optional[WeatherObservation]:
        if not self.settings.weather_enabled or self.weather_client is None:
            return None
        return await self.weather_client.fetch(moment.instant, location)

    async def create_booking(
        self,
        request: BookingRequest,
        preview: bool = False
    ) -> Union[Booking, BookingPreview]:
        """
        Normalize a booking request, decide seating and store the booking.

        With ``preview`` the weather and seating suggestion are returned
        without saving anything.

        Args:
            request: Raw booking request
            preview: Whether to skip persistence

        Returns:
            Created Booking, or BookingPreview when previewing

        Raises:
            MissingRequiredFieldError: If required fields are absent
            InvalidGuestCountError: If numberOfGuests does not decode
            InvalidDateError: If bookingDate cannot be parsed
            InvalidTimeError: If bookingTime cannot be parsed
            DatabaseError: If the booking cannot be saved
        """
        preview = preview or request.preview
        self._check_required(request, PREVIEW_REQUIRED_FIELDS if preview else REQUIRED_FIELDS)

        guests = None
        if request.number_of_guests is not None:
            guests = parse_guest_count(request.number_of_guests, max_guests=self.settings.max_guests)

        normalized = self.normalizer.normalize(
            request.booking_date,
            request.booking_time,
            reference=self.clock(),
        )
        moment = normalized.moment

        observation = await self._fetch_observation(moment, request.location)
        decision = decide_or_default(observation, self.thresholds)
        weather_info = build_weather_info(observation, decision)

        if preview:
            log_booking_event(
                "PREVIEWED",
                customer_name=request.customer_name,
                details={"bookingDate": moment.local_iso, "seating": decision.seating_preference},
            )
            return BookingPreview(
                booking_date=moment.local_iso,
                booking_date_utc=moment.instant_iso,
                booking_time=moment.display_time,
                number_of_guests=guests,
                weather_info=weather_info,
                seating_preference=decision.seating_preference,
                seating=SeatingDecisionResponse(**decision.to_dict()),
            )

        booking = Booking(
            booking_id=new_booking_id(),
            customer_name=request.customer_name,
            number_of_guests=guests,
            booking_date=moment.instant,
            booking_time=moment.display_time,
            cuisine_preference=request.cuisine_preference,
            special_requests=request.special_requests,
            weather_info=weather_info,
            seating_preference=decision.seating_preference,
            status="confirmed",
            created_at=datetime.now(timezone.utc),
        )

        try:
            # Blocking I/O stays off the event loop
            await asyncio.to_thread(self._save, booking)
        except OperationalError as e:
            self.session.rollback()
            raise DatabaseConnectionError(
                f"Database operation failed: {str(e)}",
                original_error=e
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(
                f"Unexpected error creating booking: {str(e)}",
                operation="create_booking",
                original_error=e
            )

        log_booking_event(
            "CREATED",
            booking_id=booking.booking_id,
            customer_name=booking.customer_name,
            details={
                "guests": guests,
                "bookingDate": moment.local_iso,
                "seating": booking.seating_preference,
                "weatherDefault": decision.is_default,
            },
        )
        return booking

    def list_bookings(self) -> List[Booking]:
        """
        Return all bookings, newest first.

        Raises:
            DatabaseError: If the query fails
        """
        try:
            return (
                self.session.query(Booking)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database query failed: {str(e)}", operation="list_bookings", original_error=e)

    def get_booking(self, booking_id: str) -> Booking:
        """
        Fetch a booking by its public id.

        Raises:
            BookingNotFoundError: If no booking has this id
            DatabaseError: If the query fails
        """
        try:
            booking = self.session.query(Booking).filter(Booking.booking_id == booking_id).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database query failed: {str(e)}", operation="get_booking", original_error=e)

        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def delete_booking(self, booking_id: str) -> None:
        """
        Delete a booking by its public id.

        Raises:
            BookingNotFoundError: If no booking has this id
            DatabaseError: If the delete fails
        """
        booking = self.get_booking(booking_id)
        try:
            self.session.delete(booking)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete booking: {str(e)}", operation="delete_booking", original_error=e)

        logger.debug(f"Deleted booking {booking_id}")
        log_booking_event("DELETED", booking_id=booking_id, customer_name=booking.customer_name)
