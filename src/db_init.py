"""
Database initialization script for the voice booking service.

This script:
1. Initializes the database connection
2. Creates all tables
"""
import sys
from pathlib import Path

# Add src directory to path for imports
src_path = Path(__file__).parent
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from models.database import init_db, create_tables


def initialize_database(database_url: str | None = None) -> None:
    """
    Initialize the database: create tables.

    Args:
        database_url: Optional database connection string. If not provided,
                     DATABASE_URL from the settings is used.
    """
    try:
        print("Initializing database...")

        engine = init_db(database_url)
        print(f"✓ Connected to database: {engine.url.render_as_string(hide_password=True)}")

        print("\nCreating database tables...")
        create_tables()
        print("✓ Tables created successfully:")
        print("  - bookings")

        print("\n" + "="*50)
        print("Database initialization complete!")
        print("="*50)

    except SQLAlchemyError as e:
        print(f"\n✗ Error during database initialization: {e}", file=sys.stderr)
        sys.exit(1)


def main():
    """
    Main entry point for database initialization script.
    """
    # Load environment variables from .env file
    load_dotenv()

    print("="*50)
    print("Voice Table Booking - Database Setup")
    print("="*50 + "\n")

    initialize_database(get_settings().database_url)


if __name__ == "__main__":
    main()
