"""
Pytest configuration and shared fixtures.
"""
import sys
from pathlib import Path
from datetime import datetime
from typing import Generator, List, Optional
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.orm import sessionmaker, Session

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from config import Settings
from error_handling.logging_config import init_logging
from models.database import Base, create_db_engine
from services.booking_service import BookingService
from weather.policy import WeatherObservation


KOLKATA = ZoneInfo("Asia/Kolkata")

# Wednesday morning in Bengaluru
REFERENCE_NOW = datetime(2025, 8, 20, 10, 0, tzinfo=KOLKATA)

PUBLIC_DIR = Path(__file__).parent.parent / "public"


class FakeWeatherClient:
    """Stands in for WeatherClient; returns a preset observation or raises."""

    def __init__(self, observation: Optional[WeatherObservation] = None, error: Optional[Exception] = None):
        self.observation = observation
        self.error = error
        self.calls: List[tuple] = []

    async def fetch(self, instant, location=None):
        self.calls.append((instant, location))
        if self.error is not None:
            raise self.error
        return self.observation


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep test output readable and never write log files."""
    init_logging("test")


@pytest.fixture
def settings() -> Settings:
    """
    Settings isolated from the developer's .env file.
    """
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite:///:memory:",
        OPENWEATHERMAP_API_KEY=None,
        WEATHER_ENABLED=True,
        REFERENCE_TIMEZONE="Asia/Kolkata",
        ENVIRONMENT="test",
        LOG_TO_FILE=False,
        STATIC_DIR=str(PUBLIC_DIR),
    )


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture(scope="function")
def db_engine():
    """
    Create a fresh in-memory database with all tables.
    """
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """
    Create a database session for testing.
    """
    SessionLocal = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sunny_observation() -> WeatherObservation:
    return WeatherObservation(
        condition="clear",
        precipitation_probability=0.05,
        forecast_date=REFERENCE_NOW.date(),
        temperature={"day": 29.5},
        raw={"weather": [{"main": "Clear"}], "pop": 0.05},
    )


@pytest.fixture
def rainy_observation() -> WeatherObservation:
    return WeatherObservation(
        condition="rain",
        precipitation_probability=0.8,
        forecast_date=REFERENCE_NOW.date(),
        temperature={"day": 24.0},
        raw={"weather": [{"main": "Rain"}], "pop": 0.8},
    )


@pytest.fixture
def weather_client(sunny_observation) -> FakeWeatherClient:
    return FakeWeatherClient(observation=sunny_observation)


@pytest.fixture
def booking_service(db_session, settings, weather_client) -> BookingService:
    """
    Create a BookingService with a fixed clock and a fake forecast.
    """
    return BookingService(
        db_session,
        weather_client=weather_client,
        settings=settings,
        clock=lambda: REFERENCE_NOW,
    )


@pytest.fixture
def client(db_session, settings, weather_client):
    """
    FastAPI test client wired to the in-memory database and the fake forecast.
    """
    from fastapi.testclient import TestClient

    from api.app import create_app, get_booking_service

    app = create_app(settings, weather_client=weather_client, init_database=False)

    def override_booking_service():
        return BookingService(
            db_session,
            weather_client=weather_client,
            settings=settings,
            clock=lambda: REFERENCE_NOW,
        )

    app.dependency_overrides[get_booking_service] = override_booking_service

    with TestClient(app) as test_client:
        yield test_client
