"""
Tests for the seating suggestion policy.
"""
import pytest

from weather.policy import (
    BAD_RECOMMENDATION,
    DEFAULT_SEATING_DECISION,
    GOOD_RECOMMENDATION,
    MODERATE_RECOMMENDATION,
    WeatherObservation,
    WeatherThresholds,
    decide,
    decide_or_default,
)


def observation(condition, pop):
    return WeatherObservation(condition=condition, precipitation_probability=pop)


class TestDecide:
    """Test the good / moderate / bad categories."""

    @pytest.mark.parametrize("condition,pop,category,outdoor", [
        ("clear", 0.0, "good", True),
        ("clear", 0.9, "good", True),
        ("sunny intervals", 0.5, "good", True),
        ("clouds", 0.1, "good", True),
        ("clouds", 0.19, "good", True),
        ("clouds", 0.2, "moderate", False),
        ("clouds", 0.39, "moderate", False),
        ("clouds", 0.4, "bad", False),
        ("light rain", 0.1, "good", True),
        ("rain", 0.3, "bad", False),
        ("drizzle", 0.95, "bad", False),
    ])
    def test_categories(self, condition, pop, category, outdoor):
        decision = decide(observation(condition, pop))

        assert decision.category == category
        assert decision.suggest_outdoor is outdoor
        assert decision.is_default is False

    def test_favorable_condition_checked_before_rain_probability(self):
        """Test that a clear sky wins even with a high precipitation probability."""
        assert decide(observation("Clear", 0.8)).recommendation == GOOD_RECOMMENDATION

    def test_recommendation_texts(self):
        assert decide(observation("rain", 0.9)).recommendation == BAD_RECOMMENDATION
        assert decide(observation("clouds", 0.3)).recommendation == MODERATE_RECOMMENDATION

    def test_custom_thresholds(self):
        thresholds = WeatherThresholds(good_below=0.5, bad_from=0.7)
        assert decide(observation("clouds", 0.45), thresholds).category == "good"
        assert decide(observation("clouds", 0.6), thresholds).category == "moderate"
        assert decide(observation("clouds", 0.7), thresholds).category == "bad"

    def test_seating_preference(self):
        assert decide(observation("clear", 0.0)).seating_preference == "outdoor"
        assert decide(observation("rain", 0.9)).seating_preference == "indoor"


class TestDefaultDecision:
    """Test the decision used without a forecast."""

    def test_no_observation_uses_default(self):
        decision = decide_or_default(None)

        assert decision is DEFAULT_SEATING_DECISION
        assert decision.category == "good"
        assert decision.suggest_outdoor is True
        assert decision.is_default is True

    def test_observation_is_decided(self):
        assert decide_or_default(observation("rain", 0.9)).category == "bad"

    def test_to_dict(self):
        assert DEFAULT_SEATING_DECISION.to_dict() == {
            "category": "good",
            "recommendation": DEFAULT_SEATING_DECISION.recommendation,
            "suggest_outdoor": True,
            "is_default": True,
        }


class TestThresholds:
    """Test threshold validation."""

    @pytest.mark.parametrize("good_below,bad_from", [(0.5, 0.4), (-0.1, 0.4), (0.2, 1.5)])
    def test_invalid_thresholds(self, good_below, bad_from):
        with pytest.raises(ValueError):
            WeatherThresholds(good_below=good_below, bad_from=bad_from)

    def test_from_settings(self, settings):
        thresholds = WeatherThresholds.from_settings(settings)
        assert thresholds == WeatherThresholds(0.2, 0.4)
