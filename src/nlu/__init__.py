"""
Natural Language Understanding (NLU) module for the booking service.

This module normalizes loosely-formatted spoken guest counts, dates and
times into structured booking data.
"""
from .numbers import decode_number_words, parse_guest_count
from .dates import DateFields, DatePhraseResolver, resolve_date
from .times import TimeFields, TimePhraseResolver
from .moment import BookingMoment, compose_booking_moment
from .normalizer import BookingIntentNormalizer, NormalizedBooking

__all__ = [
    "decode_number_words",
    "parse_guest_count",
    "DateFields",
    "DatePhraseResolver",
    "resolve_date",
    "TimeFields",
    "TimePhraseResolver",
    "BookingMoment",
    "compose_booking_moment",
    "BookingIntentNormalizer",
    "NormalizedBooking",
]
