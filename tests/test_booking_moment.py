"""
Tests for booking moment composition and the booking intent normalizer.
"""
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from error_handling.exceptions import InvalidDateError, InvalidTimeError
from nlu.dates import DateFields
from nlu.moment import compose_booking_moment
from nlu.normalizer import BookingIntentNormalizer
from nlu.times import TimeFields

from conftest import KOLKATA, REFERENCE_NOW


class TestComposeBookingMoment:
    """Test composition of date and time fields."""

    def test_local_and_utc_forms(self):
        moment = compose_booking_moment(DateFields(2025, 8, 20), TimeFields(18, 0), KOLKATA)

        assert moment.local_iso == "2025-08-20T18:00:00+05:30"
        assert moment.instant_iso == "2025-08-20T12:30:00.000Z"
        assert moment.instant == datetime(2025, 8, 20, 12, 30, tzinfo=timezone.utc)

    def test_display_forms(self):
        moment = compose_booking_moment(DateFields(2025, 8, 20), TimeFields(18, 0), KOLKATA)

        assert moment.display_time == "6:00 PM"
        assert moment.display_date == "Wednesday, August 20, 2025"

    def test_midday_display_time(self):
        moment = compose_booking_moment(DateFields(2025, 8, 20), TimeFields(12, 5), KOLKATA)
        assert moment.display_time == "12:05 PM"

    def test_early_local_time_is_previous_utc_day(self):
        """Test that the UTC instant may fall on the day before the local date."""
        moment = compose_booking_moment(DateFields(2025, 8, 20), TimeFields(1, 0), KOLKATA)
        assert moment.instant_iso == "2025-08-19T19:30:00.000Z"

    @pytest.mark.parametrize("zone", ["Asia/Kolkata", "Europe/London", "America/New_York", "UTC"])
    def test_instant_converts_back_to_local(self, zone):
        """Test that the UTC instant reproduces the local fields in the same zone."""
        tz = ZoneInfo(zone)
        moment = compose_booking_moment(DateFields(2025, 7, 4), TimeFields(19, 45), tz)

        back = moment.instant.astimezone(tz)
        assert moment.date_fields == DateFields(back.year, back.month, back.day)
        assert moment.time_fields == TimeFields(back.hour, back.minute)


class TestBookingIntentNormalizer:
    """Test end-to-end normalization of a date and time pair."""

    @pytest.fixture
    def normalizer(self):
        return BookingIntentNormalizer(KOLKATA)

    def test_spoken_date_and_time(self, normalizer):
        result = normalizer.normalize("August 20", "evening 6:00 p.m.", reference=REFERENCE_NOW)

        assert result.date == DateFields(2025, 8, 20)
        assert result.time == TimeFields(18, 0)
        assert result.day_part == "evening"
        assert result.moment.local_iso == "2025-08-20T18:00:00+05:30"
        assert result.moment.instant_iso == "2025-08-20T12:30:00.000Z"

    def test_day_part_only(self, normalizer):
        result = normalizer.normalize("tomorrow", "morning", reference=REFERENCE_NOW)
        assert result.moment.local_iso == "2025-08-21T09:00:00+05:30"

    def test_reference_day_taken_in_reference_timezone(self, normalizer):
        """Test that "today" follows the local calendar, not the UTC one."""
        late_utc = datetime(2025, 8, 20, 20, 0, tzinfo=timezone.utc)  # 01:30 on the 21st in Kolkata
        result = normalizer.normalize("today", "7 pm", reference=late_utc)
        assert result.date == DateFields(2025, 8, 21)

    def test_zone_crossing_midnight_moves_booking_day(self, normalizer):
        """Test that a UTC evening time lands on the next local day at the same instant."""
        result = normalizer.normalize("2025-08-20", "10 pm UTC", reference=REFERENCE_NOW)

        assert result.moment.instant_iso == "2025-08-20T22:00:00.000Z"
        assert result.moment.local_iso == "2025-08-21T03:30:00+05:30"
        assert result.date == DateFields(2025, 8, 21)
        assert result.time == TimeFields(3, 30)

    def test_bare_hour_with_day_part(self, normalizer):
        result = normalizer.normalize("August 20", "evening 7", reference=REFERENCE_NOW)
        assert result.moment.local_iso == "2025-08-20T19:00:00+05:30"

    def test_naive_reference_rejected(self, normalizer):
        with pytest.raises(ValueError):
            normalizer.normalize("August 20", "18:00", reference=datetime(2025, 8, 20, 10, 0))

    def test_bad_date_propagates(self, normalizer):
        with pytest.raises(InvalidDateError):
            normalizer.normalize("blorp", "18:00", reference=REFERENCE_NOW)

    def test_bad_time_propagates(self, normalizer):
        with pytest.raises(InvalidTimeError):
            normalizer.normalize("August 20", "25:99", reference=REFERENCE_NOW)

    def test_from_settings_uses_configured_defaults(self, settings):
        custom = settings.model_copy(update={"evening_time": "19:30"})
        normalizer = BookingIntentNormalizer.from_settings(custom)

        result = normalizer.normalize("August 20", "evening", reference=REFERENCE_NOW)
        assert result.moment.local_iso == "2025-08-20T19:30:00+05:30"

    def test_debug_info(self, normalizer):
        result = normalizer.normalize("August 20", "7 pm", reference=REFERENCE_NOW)
        info = result.debug_info("August 20", "7 pm")

        assert info["input"] == {"bookingDate": "August 20", "bookingTime": "7 pm"}
        assert info["parsedUTC"] == "2025-08-20T13:30:00.000Z"
