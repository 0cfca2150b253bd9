"""
OpenWeatherMap client for booking-day forecasts.

``fetch`` never raises: any failure (missing key, bad location, network
error, timeout, unexpected payload) is logged and reported as "no
observation available" by returning None.
"""
import time
from datetime import date, datetime, timezone as dt_timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple

import httpx
from loguru import logger

from error_handling.exceptions import WeatherServiceError
from error_handling.logging_config import log_api_call
from weather.policy import WeatherObservation


def parse_location(location: str) -> Tuple[float, float]:
    """
    Parse a "lat,lon" string.

    Raises:
        WeatherServiceError: If the string is not two comma-separated numbers
    """
    parts = [part.strip() for part in str(location).split(",")]
    if len(parts) != 2:
        raise WeatherServiceError(f"Location must be 'lat,lon', got {location!r}")
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise WeatherServiceError(f"Location must be 'lat,lon', got {location!r}", original_error=e)
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise WeatherServiceError(f"Location out of range: {location!r}")
    return lat, lon


class WeatherClient:
    """Fetches the daily forecast closest to a booking day."""

    def __init__(
        self,
        api_key: Optional[str],
        default_location: str = "12.9716,77.5946",
        timeout: float = 5.0,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timezone: Optional[tzinfo] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the weather client.

        Args:
            api_key: OpenWeatherMap API key; without one every fetch returns None
            default_location: "lat,lon" used when a request has no location
            timeout: Request timeout in seconds
            base_url: OpenWeatherMap API base URL
            timezone: Zone in which booking days are compared
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        """
        self.api_key = api_key
        self.default_location = default_location
        self.timeout = timeout
        self.base_url = base_url
        self.timezone = timezone or dt_timezone.utc
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "WeatherClient":
        return cls(
            api_key=settings.openweathermap_api_key,
            default_location=settings.default_location,
            timeout=settings.weather_timeout_seconds,
            base_url=settings.weather_base_url,
            timezone=settings.timezone,
            transport=transport,
        )

    async def fetch(self, instant: datetime, location: Optional[str] = None) -> Optional[WeatherObservation]:
        """
        Get the forecast for the day of ``instant``.

        Args:
            instant: Booking moment (timezone-aware)
            location: Optional "lat,lon"; the default location is used otherwise

        Returns:
            WeatherObservation, or None when no forecast is available
        """
        try:
            return await self._fetch_forecast(instant, location)
        except WeatherServiceError as e:
            logger.warning(f"Weather fetch failed: {e.message}")
            return None

    async def _fetch_forecast(self, instant: datetime, location: Optional[str]) -> WeatherObservation:
        if not self.api_key:
            raise WeatherServiceError("OPENWEATHERMAP_API_KEY is not configured")

        lat, lon = parse_location(location or self.default_location)
        params = {
            "lat": lat,
            "lon": lon,
            "exclude": "minutely,hourly,alerts",
            "units": "metric",
            "appid": self.api_key,
        }

        start_time = time.monotonic()
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get("/onecall", params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_api_call(
                "openweathermap", "onecall", success=False,
                duration=time.monotonic() - start_time,
                details={"error": type(e).__name__},
            )
            raise WeatherServiceError(f"Weather API error: {e}", original_error=e)

        log_api_call(
            "openweathermap", "onecall", success=True,
            duration=time.monotonic() - start_time,
            details={"lat": lat, "lon": lon},
        )

        target_day = instant.astimezone(self.timezone).date()
        return self._observation_for_day(payload, target_day)

    def _observation_for_day(self, payload: Any, target_day: date) -> WeatherObservation:
        try:
            daily: List[Dict[str, Any]] = payload.get("daily") or []
            if not daily:
                raise WeatherServiceError("Forecast contains no daily entries")

            closest = min(daily, key=lambda entry: abs((self._entry_day(entry) - target_day).days))

            weather = closest.get("weather") or [{}]
            condition = str(weather[0].get("main") or "").lower()
            pop = float(closest.get("pop") or 0)
            temperature = closest.get("temp") or {}
            if not isinstance(temperature, dict):
                temperature = {"day": temperature}

            return WeatherObservation(
                condition=condition,
                precipitation_probability=min(max(pop, 0.0), 1.0),
                forecast_date=self._entry_day(closest),
                temperature=temperature,
                raw=closest,
            )
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError) as e:
            raise WeatherServiceError(f"Unexpected forecast payload: {e}", original_error=e)

    def _entry_day(self, entry: Dict[str, Any]) -> date:
        return datetime.fromtimestamp(entry["dt"], tz=self.timezone).date()
