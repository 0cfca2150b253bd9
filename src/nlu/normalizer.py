"""
Booking intent normalizer.

Turns the raw bookingDate / bookingTime phrases of a single request into
one unambiguous BookingMoment in the reference timezone. The reference
instant ("now") is always passed in by the caller.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from loguru import logger

from nlu.dates import DateFields, DatePhraseResolver
from nlu.moment import BookingMoment, compose_booking_moment
from nlu.times import ResolvedTime, TimeFields, TimePhraseResolver


@dataclass(frozen=True)
class NormalizedBooking:
    """Resolved date, time and composed moment for one request."""

    date: DateFields
    time: TimeFields
    day_part: Optional[str]
    moment: BookingMoment

    def debug_info(self, booking_date: str, booking_time: str) -> Dict[str, Any]:
        return {
            "input": {"bookingDate": booking_date, "bookingTime": booking_time},
            "dayPart": self.day_part,
            "parsedLocal": self.moment.local_iso,
            "parsedUTC": self.moment.instant_iso,
        }


class BookingIntentNormalizer:
    """
    Resolve spoken booking dates and times against a reference timezone.

    Example:
        normalizer = BookingIntentNormalizer(ZoneInfo("Asia/Kolkata"))
        result = normalizer.normalize("August 20", "evening", reference=now)
        result.moment.local_iso  # '2025-08-20T18:00:00+05:30'
    """

    def __init__(
        self,
        timezone: tzinfo,
        date_resolver: Optional[DatePhraseResolver] = None,
        day_part_defaults: Optional[Dict[Optional[str], Tuple[int, int]]] = None
    ):
        """
        Initialize the normalizer.

        Args:
            timezone: Reference timezone for interpreting local dates and times
            date_resolver: Date resolver (defaults to the standard strategy list)
            day_part_defaults: Clock times for day-part hints without digits
        """
        self.timezone = timezone
        self.date_resolver = date_resolver or DatePhraseResolver()
        self.time_resolver = TimePhraseResolver(timezone, day_part_defaults)

    @classmethod
    def from_settings(cls, settings) -> "BookingIntentNormalizer":
        return cls(ZoneInfo(settings.reference_timezone), day_part_defaults=settings.day_part_defaults)

    def normalize(self, booking_date: str, booking_time: str, reference: datetime) -> NormalizedBooking:
        """
        Resolve a booking date and time.

        Args:
            booking_date: Raw date phrase
            booking_time: Raw time phrase
            reference: Aware "now" of the request

        Returns:
            NormalizedBooking

        Raises:
            InvalidDateError: If the date phrase cannot be parsed
            InvalidTimeError: If the time phrase cannot be parsed
        """
        if reference.tzinfo is None:
            raise ValueError("reference must be timezone-aware")

        reference_date = reference.astimezone(self.timezone).date()

        date_fields = self.date_resolver.resolve(booking_date, reference_date)
        resolved_time: ResolvedTime = self.time_resolver.resolve(
            booking_time, on=date_fields.to_date()
        )
        if resolved_time.day_offset:
            # A zone spoken with the time moved it across local midnight
            date_fields = DateFields.from_date(
                date_fields.to_date() + timedelta(days=resolved_time.day_offset)
            )
        moment = compose_booking_moment(date_fields, resolved_time.fields, self.timezone)

        result = NormalizedBooking(
            date=date_fields,
            time=resolved_time.fields,
            day_part=resolved_time.day_part,
            moment=moment,
        )
        logger.info(f"Parsed booking date/time: {result.debug_info(booking_date, booking_time)}")
        return result
