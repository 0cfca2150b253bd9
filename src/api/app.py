"""
HTTP API for the voice booking service.

Routes:
- POST   /api/bookings            create a booking (or preview it)
- GET    /api/bookings            list bookings, newest first
- GET    /api/bookings/{id}       fetch one booking
- DELETE /api/bookings/{id}       delete one booking
- GET    /api/health              liveness check
- GET    /                        browser front end
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlalchemy.orm import Session

from config import Settings, get_settings
from error_handling.exceptions import BookingSystemError
from error_handling.handlers import build_error_payload, log_error
from models import database
from models.database import get_db
from models.schemas import (
    BookingEnvelope,
    BookingListEnvelope,
    BookingRequest,
    BookingResponse,
    ErrorResponse,
    HealthResponse,
    PreviewEnvelope,
    SuccessResponse,
)
from services.booking_service import BookingService
from weather.client import WeatherClient

API_VERSION = "1.0"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_weather_client(request: Request) -> Optional[WeatherClient]:
    return request.app.state.weather_client


def get_booking_service(
    session: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    weather_client: Optional[WeatherClient] = Depends(get_weather_client),
) -> BookingService:
    return BookingService(session, weather_client=weather_client, settings=settings)


def create_app(
    settings: Optional[Settings] = None,
    weather_client: Optional[WeatherClient] = None,
    init_database: bool = True
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (read from the environment by default)
        weather_client: Forecast client (built from settings by default)
        init_database: Whether startup should connect and create tables

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database and database.SessionLocal is None:
            database.init_db_with_retry(settings.database_url)
        logger.info(f"Booking API ready (timezone={settings.reference_timezone})")
        yield
        logger.info("Booking API shutting down")

    app = FastAPI(title="Voice Table Booking API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.weather_client = weather_client or WeatherClient.from_settings(settings)

    @app.exception_handler(BookingSystemError)
    async def booking_error_handler(request: Request, exc: BookingSystemError) -> JSONResponse:
        log_error(exc, context={"path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content=build_error_payload(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Malformed request body", "reason": "invalid_request"},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log_error(exc, context={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Server error", "reason": "server_error"},
        )

    # ── Health ───────────────────────────────────────────────────────────

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=API_VERSION)

    # ── Bookings ─────────────────────────────────────────────────────────

    @app.post(
        "/api/bookings",
        response_model=Union[BookingEnvelope, PreviewEnvelope],
        status_code=201,
        responses=_ERROR_RESPONSES,
    )
    async def create_booking(
        body: BookingRequest,
        response: Response,
        preview: bool = Query(False, description="Return weather and seating without saving"),
        service: BookingService = Depends(get_booking_service),
    ) -> Union[BookingEnvelope, PreviewEnvelope]:
        result = await service.create_booking(body, preview=preview)

        if preview or body.preview:
            response.status_code = 200
            return PreviewEnvelope(preview=result)

        return BookingEnvelope(booking=BookingResponse.model_validate(result))

    @app.get("/api/bookings", response_model=BookingListEnvelope, responses=_ERROR_RESPONSES)
    def list_bookings(service: BookingService = Depends(get_booking_service)) -> BookingListEnvelope:
        bookings = service.list_bookings()
        return BookingListEnvelope(bookings=[BookingResponse.model_validate(b) for b in bookings])

    @app.get("/api/bookings/{booking_id}", response_model=BookingEnvelope, responses=_ERROR_RESPONSES)
    def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)) -> BookingEnvelope:
        return BookingEnvelope(booking=BookingResponse.model_validate(service.get_booking(booking_id)))

    @app.delete("/api/bookings/{booking_id}", response_model=SuccessResponse, responses=_ERROR_RESPONSES)
    def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)) -> SuccessResponse:
        service.delete_booking(booking_id)
        return SuccessResponse()

    # ── Front end ────────────────────────────────────────────────────────

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

        @app.get("/", include_in_schema=False)
        def index() -> FileResponse:
            return FileResponse(static_dir / "index.html")

    return app
