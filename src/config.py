"""
Configuration module for the voice table booking service.

Loads environment variables and provides configuration settings including
the weather API key, the reference timezone and the tuning constants used
by the booking intent normalizer and the seating policy.
"""
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: SQLAlchemy connection string
        openweathermap_api_key: Optional OpenWeatherMap API key
        reference_timezone: IANA zone used to interpret spoken dates and times
    """

    # Database configuration
    database_url: str = Field(
        default="sqlite:///./bookings.db",
        alias="DATABASE_URL",
        description="SQLAlchemy connection string"
    )

    # Weather provider
    openweathermap_api_key: Optional[str] = Field(
        default=None,
        alias="OPENWEATHERMAP_API_KEY",
        description="OpenWeatherMap API key; weather lookups are skipped without it"
    )

    weather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        alias="WEATHER_BASE_URL",
        description="Base URL of the OpenWeatherMap API"
    )

    default_location: str = Field(
        default="12.9716,77.5946",
        alias="DEFAULT_LOCATION",
        description="Fallback 'lat,lon' used when a request carries no location"
    )

    weather_enabled: bool = Field(
        default=True,
        alias="WEATHER_ENABLED",
        description="Whether to fetch a forecast for each booking"
    )

    weather_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        alias="WEATHER_TIMEOUT_SECONDS",
        description="Timeout for a single forecast request"
    )

    # Seating policy thresholds
    good_weather_max_precipitation: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        alias="GOOD_WEATHER_MAX_PRECIPITATION",
        description="Precipitation probability below which outdoor seating is suggested"
    )

    bad_weather_min_precipitation: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        alias="BAD_WEATHER_MIN_PRECIPITATION",
        description="Precipitation probability from which indoor seating is required"
    )

    # Booking limits
    max_guests: int = Field(
        default=100,
        ge=1,
        alias="MAX_GUESTS",
        description="Largest party size accepted for a single booking"
    )

    # Booking intent normalization
    reference_timezone: str = Field(
        default="Asia/Kolkata",
        alias="REFERENCE_TIMEZONE",
        description="Timezone used to interpret spoken dates and times"
    )

    morning_time: str = Field(default="09:00", alias="MORNING_TIME")
    afternoon_time: str = Field(default="14:00", alias="AFTERNOON_TIME")
    evening_time: str = Field(default="18:00", alias="EVENING_TIME")
    night_time: str = Field(default="18:00", alias="NIGHT_TIME")
    default_booking_time: str = Field(
        default="18:00",
        alias="DEFAULT_BOOKING_TIME",
        description="Time used when neither digits nor a day-part hint are given"
    )

    # Logging
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_to_file: bool = Field(default=True, alias="LOG_TO_FILE")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=4000, alias="PORT")
    static_dir: str = Field(
        default="public",
        alias="STATIC_DIR",
        description="Directory holding the browser front end"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("reference_timezone")
    @classmethod
    def validate_reference_timezone(cls, v: str) -> str:
        """Validate that the reference timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator(
        "morning_time", "afternoon_time", "evening_time", "night_time", "default_booking_time"
    )
    @classmethod
    def validate_clock_time(cls, v: str) -> str:
        """Validate HH:MM clock strings."""
        hours, sep, minutes = v.partition(":")
        if not sep or not hours.isdigit() or not minutes.isdigit():
            raise ValueError(f"Expected HH:MM, got {v!r}")
        if not (0 <= int(hours) <= 23 and 0 <= int(minutes) <= 59):
            raise ValueError(f"Clock time out of range: {v!r}")
        return v

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.reference_timezone)

    @property
    def day_part_defaults(self) -> dict:
        """Default clock times keyed by day-part hint (None = no hint)."""
        return {
            "morning": _to_hour_minute(self.morning_time),
            "afternoon": _to_hour_minute(self.afternoon_time),
            "evening": _to_hour_minute(self.evening_time),
            "night": _to_hour_minute(self.night_time),
            None: _to_hour_minute(self.default_booking_time),
        }


def _to_hour_minute(value: str) -> tuple:
    hours, minutes = value.split(":")
    return int(hours), int(minutes)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
