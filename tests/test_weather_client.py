"""
Tests for the OpenWeatherMap client.

HTTP is served by ``httpx.MockTransport``; no network access is needed.
"""
import asyncio
from datetime import date, datetime

import httpx
import pytest

from error_handling.exceptions import WeatherServiceError
from weather.client import WeatherClient, parse_location

from conftest import KOLKATA


BOOKING_INSTANT = datetime(2025, 8, 20, 18, 0, tzinfo=KOLKATA)


def daily_entry(day: date, main: str, pop: float) -> dict:
    noon = datetime(day.year, day.month, day.day, 12, 0, tzinfo=KOLKATA)
    return {
        "dt": int(noon.timestamp()),
        "temp": {"day": 30.1, "min": 24.0, "max": 31.5},
        "weather": [{"main": main, "description": main.lower()}],
        "pop": pop,
    }


FORECAST = {
    "daily": [
        daily_entry(date(2025, 8, 19), "Clear", 0.0),
        daily_entry(date(2025, 8, 20), "Rain", 0.85),
        daily_entry(date(2025, 8, 21), "Clouds", 0.3),
    ]
}


def make_client(handler, api_key="test-key") -> WeatherClient:
    return WeatherClient(
        api_key=api_key,
        timezone=KOLKATA,
        transport=httpx.MockTransport(handler),
    )


class TestParseLocation:
    """Test "lat,lon" parsing."""

    def test_valid_location(self):
        assert parse_location("12.9716, 77.5946") == (12.9716, 77.5946)

    @pytest.mark.parametrize("location", ["Bengaluru", "12.9", "abc,def", "95,10", "1,2,3"])
    def test_invalid_location(self, location):
        with pytest.raises(WeatherServiceError):
            parse_location(location)


class TestFetch:
    """Test forecast retrieval."""

    def test_picks_booking_day(self):
        """Test that the daily entry for the booking day is used."""
        client = make_client(lambda request: httpx.Response(200, json=FORECAST))

        obs = asyncio.run(client.fetch(BOOKING_INSTANT))

        assert obs.condition == "rain"
        assert obs.precipitation_probability == 0.85
        assert obs.forecast_date == date(2025, 8, 20)
        assert obs.temperature["max"] == 31.5

    def test_picks_closest_day_beyond_forecast(self):
        client = make_client(lambda request: httpx.Response(200, json=FORECAST))

        obs = asyncio.run(client.fetch(datetime(2025, 9, 2, 19, 0, tzinfo=KOLKATA)))

        assert obs.forecast_date == date(2025, 8, 21)
        assert obs.condition == "clouds"

    def test_request_parameters(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=FORECAST)

        client = make_client(handler)
        asyncio.run(client.fetch(BOOKING_INSTANT, location="19.0760,72.8777"))

        assert seen["path"].endswith("/onecall")
        assert seen["params"]["lat"] == "19.076"
        assert seen["params"]["lon"] == "72.8777"
        assert seen["params"]["units"] == "metric"
        assert seen["params"]["appid"] == "test-key"

    def test_default_location_used(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["lat"] = request.url.params["lat"]
            return httpx.Response(200, json=FORECAST)

        asyncio.run(make_client(handler).fetch(BOOKING_INSTANT))

        assert seen["lat"] == "12.9716"


class TestFetchFailures:
    """Test that every failure is reported as "no forecast"."""

    def test_missing_api_key(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=FORECAST)

        client = make_client(handler, api_key=None)

        assert asyncio.run(client.fetch(BOOKING_INSTANT)) is None
        assert calls == []

    def test_city_name_location(self):
        client = make_client(lambda request: httpx.Response(200, json=FORECAST))
        assert asyncio.run(client.fetch(BOOKING_INSTANT, location="Bengaluru")) is None

    def test_server_error(self):
        client = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))
        assert asyncio.run(client.fetch(BOOKING_INSTANT)) is None

    def test_unauthorized(self):
        client = make_client(lambda request: httpx.Response(401, json={"message": "Invalid API key"}))
        assert asyncio.run(client.fetch(BOOKING_INSTANT)) is None

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        assert asyncio.run(make_client(handler).fetch(BOOKING_INSTANT)) is None

    def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
        assert asyncio.run(client.fetch(BOOKING_INSTANT)) is None

    @pytest.mark.parametrize("payload", [{}, {"daily": []}, {"daily": [{"pop": 0.1}]}, ["not", "a", "dict"]])
    def test_unexpected_payload(self, payload):
        client = make_client(lambda request: httpx.Response(200, json=payload))
        assert asyncio.run(client.fetch(BOOKING_INSTANT)) is None


class TestFromSettings:
    """Test construction from settings."""

    def test_from_settings(self, settings):
        client = WeatherClient.from_settings(settings)

        assert client.api_key is None
        assert client.default_location == "12.9716,77.5946"
        assert client.timeout == 5.0
        assert str(client.timezone) == "Asia/Kolkata"
