"""
Main entry point for the voice table booking API.

This script configures logging, builds the FastAPI application and
serves it with uvicorn.
"""
import sys

import uvicorn
from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from config import get_settings
from error_handling.logging_config import init_logging


def main():
    """
    Main entry point for the booking API server.
    """
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    init_logging(
        settings.environment,
        log_level=settings.log_level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
    )

    logger.info("=" * 80)
    logger.info("Voice Table Booking API")
    logger.info("=" * 80)

    if not settings.openweathermap_api_key:
        logger.warning("OPENWEATHERMAP_API_KEY not set; seating suggestions will use the default")

    from api.app import create_app

    try:
        app = create_app(settings)
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        return 0

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        return 130

    except Exception as e:
        logger.opt(exception=e).error(f"Unexpected error: {e}")
        return 3

    finally:
        logger.info("Application shutting down...")


if __name__ == "__main__":
    sys.exit(main())
