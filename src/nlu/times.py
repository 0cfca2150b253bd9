"""
Time phrase resolution for spoken booking times.

Handles phrases like "6:00 p.m.", "18:00", "7 pm", "evening 6:00 pm" and
bare day-parts like "evening". A day-part hint supplies a default clock
time when the phrase carries no digits at all, and the meridiem when
only a bare hour is given ("evening 7").
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Dict, Optional, Sequence, Tuple

from dateutil import parser as date_parser
from loguru import logger

from error_handling.exceptions import InvalidTimeError


DAY_PARTS = ("morning", "afternoon", "evening", "night")

# Keyed by day-part hint; None is the fallback when no hint was spoken.
DEFAULT_DAY_PART_TIMES: Dict[Optional[str], Tuple[int, int]] = {
    "morning": (9, 0),
    "afternoon": (14, 0),
    "evening": (18, 0),
    "night": (18, 0),
    None: (18, 0),
}

# Tried in order against the normalized phrase; first match wins.
TIME_FORMATS = (
    "%I:%M %p",  # 6:30 pm
    "%H:%M",     # 18:30
    "%I %p",     # 7 pm
)

_DAY_PART_PATTERN = re.compile(r"\b(" + "|".join(DAY_PARTS) + r")\b", re.IGNORECASE)
_FILLER_PATTERN = re.compile(r"\b(around|about|approximately|at|by|o'?clock)\b", re.IGNORECASE)
_MERIDIEM_PATTERN = re.compile(r"(\d)\s*(am|pm)\b", re.IGNORECASE)
_BARE_HOUR_PATTERN = re.compile(r"\d{1,2}", re.ASCII)


@dataclass(frozen=True)
class TimeFields:
    """Hour and minute of day on a 24-hour clock."""

    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Invalid time of day {self.hour}:{self.minute}")

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class ResolvedTime:
    """
    A resolved time together with how it was obtained.

    ``day_offset`` is non-zero only when a zone spoken in the phrase moved
    the time onto a neighbouring day of the reference timezone.
    """

    fields: TimeFields
    day_part: Optional[str]
    normalized: str
    source: str
    day_offset: int = 0


def extract_day_part(text: str) -> Tuple[Optional[str], str]:
    """
    Pull the day-part hint out of a time phrase.

    Returns:
        Tuple of (hint or None, phrase with every hint word removed)
    """
    match = _DAY_PART_PATTERN.search(text)
    hint = match.group(1).lower() if match else None
    remainder = _DAY_PART_PATTERN.sub(" ", text)
    return hint, remainder


def normalize_time_phrase(text: str) -> str:
    """Drop periods ("p.m." -> "pm") and filler words, split "6pm" into "6 pm"."""
    normalized = text.replace(".", "")
    normalized = _FILLER_PATTERN.sub(" ", normalized)
    normalized = _MERIDIEM_PATTERN.sub(r"\1 \2", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


class TimePhraseResolver:
    """
    Resolve a spoken or typed time into hour and minute.

    Attributes:
        timezone: Reference timezone; explicit zones in a phrase are converted into it
        day_part_defaults: Clock time used for each day-part hint when no digits are given
        formats: Ordered ``strptime`` formats tried before the lenient fallback
    """

    def __init__(
        self,
        timezone: Optional[tzinfo] = None,
        day_part_defaults: Optional[Dict[Optional[str], Tuple[int, int]]] = None,
        formats: Sequence[str] = TIME_FORMATS
    ):
        self.timezone = timezone
        self.day_part_defaults = dict(DEFAULT_DAY_PART_TIMES)
        if day_part_defaults:
            self.day_part_defaults.update(day_part_defaults)
        self.formats = tuple(formats)

    def resolve(self, text: str, on: Optional[date] = None) -> ResolvedTime:
        """
        Resolve a time phrase.

        Args:
            text: Time phrase (e.g., "evening 6:00 p.m.", "18:00", "evening")
            on: Booking date, used by the lenient fallback

        Returns:
            ResolvedTime with 24-hour fields and the detected day-part

        Raises:
            InvalidTimeError: If no format matches and the lenient parser fails
        """
        if text is None or not str(text).strip():
            raise InvalidTimeError(text, "empty time")

        phrase = str(text)
        hint, remainder = extract_day_part(phrase)
        normalized = normalize_time_phrase(remainder)

        if not any(ch.isdigit() for ch in normalized):
            hour, minute = self.day_part_defaults.get(hint, self.day_part_defaults[None])
            fields = TimeFields(hour, minute)
            logger.debug(f"No clock time in {phrase!r}; using {hint or 'default'} time {fields}")
            return ResolvedTime(fields, hint, normalized, "day_part_default")

        for fmt in self.formats:
            try:
                parsed = datetime.strptime(normalized, fmt)
            except ValueError:
                continue
            return ResolvedTime(TimeFields(parsed.hour, parsed.minute), hint, normalized, fmt)

        bare = _BARE_HOUR_PATTERN.fullmatch(normalized)
        if bare and hint is not None and 1 <= int(bare.group(0)) <= 12:
            spoken = int(bare.group(0))
            hour = spoken % 12
            # "night 12" is midnight; every other non-morning hour is p.m.
            if hint != "morning" and not (hint == "night" and spoken == 12):
                hour += 12
            logger.debug(f"Read bare hour in {phrase!r} as {hint} -> {hour:02d}:00")
            return ResolvedTime(TimeFields(hour, 0), hint, normalized, "day_part_hour")

        lenient = self._lenient_parse(normalized, on)
        if lenient is None:
            raise InvalidTimeError(phrase)

        fields, day_offset = lenient
        logger.debug(f"Resolved time {phrase!r} leniently -> {fields} (day offset {day_offset})")
        return ResolvedTime(fields, hint, normalized, "lenient", day_offset)

    def _lenient_parse(self, normalized: str, on: Optional[date]) -> Optional[Tuple[TimeFields, int]]:
        """
        Parse with dateutil on the booking date.

        Returns:
            Tuple of (time in the reference timezone, days the conversion
            moved it from the booking date), or None if unparseable
        """
        day = on or date(2000, 1, 1)
        default = datetime.combine(day, time())
        try:
            parsed = date_parser.parse(f"{day.isoformat()} {normalized}", default=default)
        except (ValueError, OverflowError):
            return None

        if parsed.tzinfo is not None and self.timezone is not None:
            parsed = parsed.astimezone(self.timezone)

        return TimeFields(parsed.hour, parsed.minute), (parsed.date() - day).days
