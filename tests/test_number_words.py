"""
Tests for spoken guest count decoding.
"""
import pytest

from error_handling.exceptions import InvalidGuestCountError
from nlu.numbers import decode_number_words, parse_guest_count


class TestDecodeNumberWords:
    """Test number word decoding."""

    @pytest.mark.parametrize("phrase,expected", [
        ("four", 4),
        ("Twelve", 12),
        ("twenty two", 22),
        ("twenty-two", 22),
        ("ninety nine", 99),
        ("two hundred", 200),
        ("two hundred and five", 205),
        ("one thousand two hundred", 1200),
        ("three thousand and forty", 3040),
    ])
    def test_number_phrases(self, phrase, expected):
        """Test that common spoken numbers decode to their value."""
        assert decode_number_words(phrase) == expected

    def test_non_number_words_are_skipped(self):
        """Test that surrounding words do not stop decoding."""
        assert decode_number_words("a party of six, please") == 6

    def test_digits_inside_phrase(self):
        """Test that literal integers are added to the running value."""
        assert decode_number_words("table for 8") == 8

    def test_nothing_numeric_is_zero(self):
        """Test that a phrase without numbers decodes to 0."""
        assert decode_number_words("a few friends") == 0

    def test_non_ascii_digits_are_skipped(self):
        """Test that superscript and other Unicode digits are not read as numbers."""
        assert decode_number_words("\u00b2") == 0
        assert decode_number_words("\u0663 guests") == 0

    def test_empty_phrase_is_zero(self):
        assert decode_number_words("") == 0


class TestParseGuestCount:
    """Test guest count normalization."""

    def test_integer_passthrough(self):
        assert parse_guest_count(4) == 4

    def test_digit_string(self):
        assert parse_guest_count(" 12 ") == 12

    def test_word_string(self):
        """Test that a spoken count is decoded."""
        assert parse_guest_count("four") == 4

    def test_integral_float(self):
        assert parse_guest_count(6.0) == 6

    def test_largest_default_party(self):
        assert parse_guest_count(100) == 100
        assert parse_guest_count("100") == 100

    def test_configured_limit(self):
        assert parse_guest_count("ten", max_guests=10) == 10
        with pytest.raises(InvalidGuestCountError):
            parse_guest_count(12, max_guests=10)

    @pytest.mark.parametrize("value", [
        0, "zero", "some people", 2.5, -3, True,
        101, "101", "two hundred", 1e6,
        "\u00b2", "\u0663", "9" * 30, "table for " + "9" * 5000,
    ])
    def test_invalid_counts_rejected(self, value):
        """Test that values without a positive integer meaning are rejected."""
        with pytest.raises(InvalidGuestCountError) as exc_info:
            parse_guest_count(value)

        assert exc_info.value.reason == "invalid_guests"
        assert exc_info.value.field == "numberOfGuests"
