"""
Composition of a resolved date and time into a single booking moment.
"""
from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone, tzinfo

from nlu.dates import DateFields
from nlu.times import TimeFields


@dataclass(frozen=True)
class BookingMoment:
    """
    A booking's point in time, in both absolute and local form.

    ``local`` is the wall-clock time in the reference timezone and
    ``instant`` the same moment in UTC. Both come from one composition,
    so converting ``instant`` back to the reference timezone reproduces
    ``local``.
    """

    local: datetime
    instant: datetime

    @property
    def local_iso(self) -> str:
        """Local time with offset, e.g. ``2025-08-20T18:00:00+05:30``."""
        return self.local.isoformat()

    @property
    def instant_iso(self) -> str:
        """UTC instant, e.g. ``2025-08-20T12:30:00.000Z``."""
        return self.instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{self.instant.microsecond // 1000:03d}Z"

    @property
    def display_time(self) -> str:
        """Local clock time for people, e.g. ``6:00 PM``."""
        return self.local.strftime("%I:%M %p").lstrip("0")

    @property
    def display_date(self) -> str:
        return self.local.strftime("%A, %B %d, %Y")

    @property
    def date_fields(self) -> DateFields:
        return DateFields(self.local.year, self.local.month, self.local.day)

    @property
    def time_fields(self) -> TimeFields:
        return TimeFields(self.local.hour, self.local.minute)


def compose_booking_moment(
    date_fields: DateFields,
    time_fields: TimeFields,
    timezone: tzinfo
) -> BookingMoment:
    """
    Build the booking moment for a date and time in the reference timezone.

    Times that fall in a DST gap or overlap resolve the way the timezone
    database does for ``fold=0``.

    Args:
        date_fields: Resolved calendar date (year must be set)
        time_fields: Resolved hour and minute
        timezone: Reference timezone

    Returns:
        BookingMoment with local and UTC forms
    """
    local = datetime(
        date_fields.year,
        date_fields.month,
        date_fields.day,
        time_fields.hour,
        time_fields.minute,
        tzinfo=timezone,
    )
    instant = local.astimezone(dt_timezone.utc)
    return BookingMoment(local=local, instant=instant)
