"""
Weather package - forecast lookup and the seating suggestion policy.
"""
from .policy import (
    WeatherObservation,
    WeatherThresholds,
    SeatingDecision,
    DEFAULT_SEATING_DECISION,
    DEFAULT_THRESHOLDS,
    decide,
    decide_or_default,
)
from .client import WeatherClient, parse_location

__all__ = [
    "WeatherObservation",
    "WeatherThresholds",
    "SeatingDecision",
    "DEFAULT_SEATING_DECISION",
    "DEFAULT_THRESHOLDS",
    "decide",
    "decide_or_default",
    "WeatherClient",
    "parse_location",
]
