"""
Seating suggestion policy.

Maps a weather observation for the booking day to a good / moderate / bad
category and an outdoor or indoor seating recommendation.
"""
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Any, Dict, Optional


FAVORABLE_CONDITIONS = ("clear", "sun")
UNFAVORABLE_CONDITIONS = ("rain",)

GOOD_RECOMMENDATION = "Perfect weather for outdoor dining!"
BAD_RECOMMENDATION = "It might rain on the selected date. Indoor seating would be better."
MODERATE_RECOMMENDATION = "Weather looks moderate. Indoor seating is safer."
DEFAULT_RECOMMENDATION = "No forecast available. Outdoor seating is offered by default."


@dataclass(frozen=True)
class WeatherObservation:
    """
    Forecast for the booking day as returned by the weather client.

    Only ``condition`` and ``precipitation_probability`` drive the policy;
    the remaining fields are kept for the stored booking record.
    """

    condition: str
    precipitation_probability: float
    forecast_date: Optional[date] = None
    temperature: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WeatherThresholds:
    """Precipitation probability cut-offs for the seating categories."""

    good_below: float = 0.2
    bad_from: float = 0.4

    def __post_init__(self):
        if not (0.0 <= self.good_below <= self.bad_from <= 1.0):
            raise ValueError(
                f"Thresholds must satisfy 0 <= good_below <= bad_from <= 1, "
                f"got {self.good_below} / {self.bad_from}"
            )

    @classmethod
    def from_settings(cls, settings) -> "WeatherThresholds":
        return cls(
            good_below=settings.good_weather_max_precipitation,
            bad_from=settings.bad_weather_min_precipitation,
        )


DEFAULT_THRESHOLDS = WeatherThresholds()


@dataclass(frozen=True)
class SeatingDecision:
    """Outcome of the seating policy."""

    category: str
    recommendation: str
    suggest_outdoor: bool
    is_default: bool = False

    @property
    def seating_preference(self) -> str:
        return "outdoor" if self.suggest_outdoor else "indoor"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Used whenever no observation is available: the restaurant offers the
# terrace unless the forecast says otherwise.
DEFAULT_SEATING_DECISION = SeatingDecision(
    category="good",
    recommendation=DEFAULT_RECOMMENDATION,
    suggest_outdoor=True,
    is_default=True,
)


def decide(
    observation: WeatherObservation,
    thresholds: WeatherThresholds = DEFAULT_THRESHOLDS
) -> SeatingDecision:
    """
    Decide seating from a weather observation.

    First match wins:
    1. clear/sunny condition, or precipitation below ``good_below`` -> good, outdoor
    2. rainy condition, or precipitation at least ``bad_from`` -> bad, indoor
    3. otherwise -> moderate, indoor

    Args:
        observation: Forecast for the booking day
        thresholds: Precipitation cut-offs

    Returns:
        SeatingDecision
    """
    condition = (observation.condition or "").lower()
    pop = observation.precipitation_probability

    if any(word in condition for word in FAVORABLE_CONDITIONS) or pop < thresholds.good_below:
        return SeatingDecision("good", GOOD_RECOMMENDATION, True)

    if any(word in condition for word in UNFAVORABLE_CONDITIONS) or pop >= thresholds.bad_from:
        return SeatingDecision("bad", BAD_RECOMMENDATION, False)

    return SeatingDecision("moderate", MODERATE_RECOMMENDATION, False)


def decide_or_default(
    observation: Optional[WeatherObservation],
    thresholds: WeatherThresholds = DEFAULT_THRESHOLDS
) -> SeatingDecision:
    """Like :func:`decide`, but substitute the default decision when there is no observation."""
    if observation is None:
        return DEFAULT_SEATING_DECISION
    return decide(observation, thresholds)
