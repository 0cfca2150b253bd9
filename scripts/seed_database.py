#!/usr/bin/env python3
"""
Database seeding script for the voice table booking service.

This script:
- Creates the bookings table
- Creates sample bookings from spoken-style phrases
- Can be run multiple times (idempotent)

Weather lookups are disabled while seeding, so every sample booking
carries the default seating suggestion.

Usage:
    python scripts/seed_database.py [--reset]

Options:
    --reset     Clear existing bookings before seeding
"""
import sys
import asyncio
import argparse
from pathlib import Path
from typing import List

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from config import get_settings
from error_handling.exceptions import BookingSystemError
from models.database import (
    init_db,
    create_tables,
    get_db_session,
    Booking,
)
from models.schemas import BookingRequest
from services.booking_service import BookingService


SAMPLE_REQUESTS = [
    {
        "customerName": "Alice Johnson",
        "numberOfGuests": "four",
        "bookingDate": "tomorrow",
        "bookingTime": "12:30",
        "cuisinePreference": "Italian",
        "specialRequests": "Window seat preferred",
    },
    {
        "customerName": "Bob Smith",
        "numberOfGuests": 2,
        "bookingDate": "tomorrow",
        "bookingTime": "evening",
        "cuisinePreference": "North Indian",
    },
    {
        "customerName": "Carol Williams",
        "numberOfGuests": "twenty one",
        "bookingDate": "day after tomorrow",
        "bookingTime": "7 p.m.",
        "specialRequests": "Birthday celebration, need high chair",
    },
    {
        "customerName": "David Brown",
        "numberOfGuests": "3",
        "bookingDate": "next friday",
        "bookingTime": "around 8:15 pm",
        "cuisinePreference": "South Indian",
        "specialRequests": "Vegetarian menu",
    },
]


def create_sample_bookings(session) -> List[Booking]:
    """
    Create sample bookings for testing.

    Args:
        session: Database session

    Returns:
        List of created bookings
    """
    print("\nCreating sample bookings...")

    settings = get_settings().model_copy(update={"weather_enabled": False})
    booking_service = BookingService(session, weather_client=None, settings=settings)

    bookings = []
    for data in SAMPLE_REQUESTS:
        existing = session.query(Booking).filter_by(customer_name=data["customerName"]).first()
        if existing:
            print(f"  ⊙ Booking for {data['customerName']} already exists")
            bookings.append(existing)
            continue

        request = BookingRequest.model_validate(data)
        try:
            booking = asyncio.run(booking_service.create_booking(request))
        except BookingSystemError as e:
            print(f"  ✗ Cannot create booking for {data['customerName']} - {e.message}")
            continue

        bookings.append(booking)
        print(f"  ✓ Created booking for {booking.customer_name} "
              f"({booking.number_of_guests} people on {booking.booking_date:%Y-%m-%d} at {booking.booking_time})")

    print(f"\nTotal sample bookings: {len(bookings)}")
    return bookings


def reset_database(session):
    """
    Clear all bookings from the database.

    Args:
        session: Database session
    """
    print("\n⚠️  Resetting database...")

    booking_count = session.query(Booking).delete()
    session.commit()
    print(f"  ✓ Deleted {booking_count} bookings")


def main():
    """Main seeding function."""
    parser = argparse.ArgumentParser(
        description="Seed the voice booking database with sample bookings"
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing bookings before seeding"
    )

    args = parser.parse_args()
    load_dotenv()

    print("=" * 60)
    print("Voice Table Booking - Database Seeding")
    print("=" * 60)

    try:
        print("\nInitializing database connection...")
        init_db(get_settings().database_url)
        create_tables()
        print("  ✓ Database initialized")

        with get_db_session() as session:
            if args.reset:
                reset_database(session)

            create_sample_bookings(session)

        print("\n" + "=" * 60)
        print("✓ Database seeding completed successfully!")
        print("=" * 60)

        return 0

    except Exception as e:
        print(f"\n✗ Error during seeding: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
