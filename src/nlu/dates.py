"""
Date phrase resolution for spoken booking dates.

A date phrase is tried against an ordered list of parsing strategies
(strict ISO, named-month formats, numeric formats, relative phrases and
finally a lenient parser). The first strategy that understands the phrase
wins. Year inference and past-date rollover are then applied against an
explicit reference date, so resolution never reads the wall clock.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from dateutil import parser as date_parser
from loguru import logger

from error_handling.exceptions import InvalidDateError


@dataclass(frozen=True)
class DateFields:
    """Calendar fields of a resolved date; ``year`` is None until inferred."""

    year: Optional[int]
    month: int
    day: int

    def to_date(self) -> date:
        if self.year is None:
            raise ValueError("Cannot build a date without a year")
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "DateFields":
        return cls(value.year, value.month, value.day)


class DateParseStrategy:
    """One way of reading a date phrase. Returns None when it does not apply."""

    name = "base"

    def parse(self, text: str, reference_date: date) -> Optional[DateFields]:
        raise NotImplementedError


class IsoDateStrategy(DateParseStrategy):
    """Strict ISO-8601 calendar dates and date-times ("2025-08-20")."""

    name = "iso"

    def parse(self, text: str, reference_date: date) -> Optional[DateFields]:
        if not text[:4].isdigit():
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return DateFields.from_date(parsed.date())


def _clean_spoken_date(text: str) -> str:
    """Drop ordinal suffixes, commas and filler words: "the 20th of August," -> "20 august"."""
    cleaned = text.lower()
    cleaned = re.sub(r"(\d+)(st|nd|rd|th)\b", r"\1", cleaned)
    cleaned = cleaned.replace(",", " ")
    cleaned = re.sub(r"\b(the|of|on)\b", " ", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


class StrptimeDateStrategy(DateParseStrategy):
    """
    Try a fixed, ordered list of ``strptime`` formats.

    Formats flagged as yearless are parsed against a leap placeholder year
    so "February 29" is accepted, and report the year as absent.
    """

    _PLACEHOLDER_YEAR = "2000"

    def __init__(self, formats: Sequence[Tuple[str, bool]], name: str = "strptime"):
        self.formats = list(formats)
        self.name = name

    def parse(self, text: str, reference_date: date) -> Optional[DateFields]:
        cleaned = _clean_spoken_date(text)
        for fmt, has_year in self.formats:
            try:
                if has_year:
                    parsed = datetime.strptime(cleaned, fmt)
                    return DateFields(parsed.year, parsed.month, parsed.day)
                parsed = datetime.strptime(f"{cleaned} {self._PLACEHOLDER_YEAR}", f"{fmt} %Y")
                return DateFields(None, parsed.month, parsed.day)
            except ValueError:
                continue
        return None


NAMED_MONTH_FORMATS = [
    ("%B %d %Y", True),
    ("%B %d", False),
    ("%d %B %Y", True),
    ("%d %B", False),
    ("%b %d %Y", True),
    ("%b %d", False),
    ("%d %b %Y", True),
    ("%d %b", False),
]

# Day-first is tried before month-first for ambiguous numeric dates.
NUMERIC_DATE_FORMATS = [
    ("%Y-%m-%d", True),
    ("%d-%m-%Y", True),
    ("%m-%d-%Y", True),
    ("%Y/%m/%d", True),
    ("%d/%m/%Y", True),
    ("%m/%d/%Y", True),
]


WEEKDAYS = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

_WEEKDAY_PHRASE = re.compile(
    r"(?:(this|next|coming|following)\s+)?(" + "|".join(WEEKDAYS) + r")"
)


class RelativeDateStrategy(DateParseStrategy):
    """
    Relative expressions a caller typically says out loud.

    Handles "today", "tomorrow", "day after tomorrow", "next week",
    "friday", "this friday" and "next friday".
    """

    name = "relative"

    def parse(self, text: str, reference_date: date) -> Optional[DateFields]:
        phrase = _clean_spoken_date(text)

        if phrase in ("today", "tonight"):
            return DateFields.from_date(reference_date)

        if phrase == "day after tomorrow":
            return DateFields.from_date(reference_date + timedelta(days=2))

        if phrase in ("tomorrow", "tmrw"):
            return DateFields.from_date(reference_date + timedelta(days=1))

        if phrase == "next week":
            return DateFields.from_date(reference_date + timedelta(days=7))

        match = _WEEKDAY_PHRASE.fullmatch(phrase)
        if match:
            qualifier, day_name = match.groups()
            days_ahead = WEEKDAYS[day_name] - reference_date.weekday()
            # Today or earlier in the week means the coming one
            if days_ahead <= 0:
                days_ahead += 7
            if qualifier in ("next", "following"):
                days_ahead += 7
            return DateFields.from_date(reference_date + timedelta(days=days_ahead))

        return None


class LenientDateStrategy(DateParseStrategy):
    """Last resort: hand the phrase to ``dateutil``'s forgiving parser."""

    name = "lenient"

    # Leap year before 1900 so a missing year is never mistaken for a real one
    _PLACEHOLDER = datetime(1896, 1, 1)

    def parse(self, text: str, reference_date: date) -> Optional[DateFields]:
        try:
            parsed = date_parser.parse(text, default=self._PLACEHOLDER)
        except (ValueError, OverflowError):
            return None
        year = None if parsed.year == self._PLACEHOLDER.year else parsed.year
        return DateFields(year, parsed.month, parsed.day)


def default_date_strategies() -> List[DateParseStrategy]:
    return [
        IsoDateStrategy(),
        StrptimeDateStrategy(NAMED_MONTH_FORMATS, name="named_month"),
        StrptimeDateStrategy(NUMERIC_DATE_FORMATS, name="numeric"),
        RelativeDateStrategy(),
        LenientDateStrategy(),
    ]


class DatePhraseResolver:
    """
    Resolve a spoken or typed date into calendar fields.

    Year inference: an absent year, or one more than
    ``implausible_year_window`` years before the reference year (or before
    1900), is replaced by the reference year. An inferred date that falls
    before the reference day is moved to the following year.
    """

    def __init__(
        self,
        strategies: Optional[Iterable[DateParseStrategy]] = None,
        implausible_year_window: int = 10
    ):
        self.strategies = list(strategies) if strategies is not None else default_date_strategies()
        self.implausible_year_window = implausible_year_window

    def resolve(self, text: str, reference_date: date) -> DateFields:
        """
        Resolve a date phrase against a reference date.

        Args:
            text: Date phrase (e.g., "August 20", "2025-08-20", "20/08/2025")
            reference_date: The booking request's "today" in the reference timezone

        Returns:
            DateFields with the year filled in

        Raises:
            InvalidDateError: If no strategy understands the phrase
        """
        if text is None or not str(text).strip():
            raise InvalidDateError(text, "empty date")

        phrase = str(text).strip()
        for strategy in self.strategies:
            fields = strategy.parse(phrase, reference_date)
            if fields is None:
                continue
            resolved = self._apply_year_rules(fields, reference_date, phrase)
            logger.debug(
                f"Resolved date {phrase!r} via {strategy.name} -> {resolved.to_date().isoformat()}"
            )
            return resolved

        raise InvalidDateError(phrase)

    def _apply_year_rules(self, fields: DateFields, reference_date: date, phrase: str) -> DateFields:
        reference_year = reference_date.year
        year = fields.year
        inferred = (
            year is None
            or year < reference_year - self.implausible_year_window
            or year < 1900
        )
        if not inferred:
            return fields

        try:
            candidate = date(reference_year, fields.month, fields.day)
            if candidate < reference_date:
                candidate = candidate.replace(year=reference_year + 1)
        except ValueError as e:
            raise InvalidDateError(phrase, str(e))

        return DateFields.from_date(candidate)


_default_resolver = DatePhraseResolver()


def resolve_date(text: str, reference_date: date) -> DateFields:
    """Resolve ``text`` with the default strategy list."""
    return _default_resolver.resolve(text, reference_date)
