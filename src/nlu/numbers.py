"""
Number word decoding for spoken guest counts.

Converts phrases such as "twenty two", "two hundred" or "party of six"
into integers. Decoding is best-effort: words that are not numbers are
skipped rather than rejected.
"""
import re
from typing import Union

from loguru import logger

from error_handling.exceptions import InvalidGuestCountError


UNIT_WORDS = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
}

TENS_WORDS = {
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

DEFAULT_MAX_GUESTS = 100

_TOKEN_SPLIT = re.compile(r"[\s\-]+")
_EDGE_PUNCTUATION = ".,;:!?\"'()"


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def decode_number_words(text: str) -> int:
    """
    Convert a number phrase into an integer.

    Small and tens words add into a running value, "hundred" multiplies
    it by 100, and "thousand" multiplies it by 1000 and folds it into the
    total. Literal integers are added as-is and "and" is ignored.

    Args:
        text: Phrase to decode (e.g., "one thousand two hundred")

    Returns:
        Decoded value, or 0 if nothing in the phrase is a number
    """
    if not text:
        return 0

    total = 0
    current = 0

    for raw_token in _TOKEN_SPLIT.split(text.lower()):
        token = raw_token.strip(_EDGE_PUNCTUATION)
        if not token or token == "and":
            continue

        if _is_ascii_digits(token):
            current += int(token)
        elif token in UNIT_WORDS:
            current += UNIT_WORDS[token]
        elif token in TENS_WORDS:
            current += TENS_WORDS[token]
        elif token == "hundred":
            current *= 100
        elif token == "thousand":
            total += current * 1000
            current = 0

    return total + current


def parse_guest_count(value: Union[int, str, None], max_guests: int = DEFAULT_MAX_GUESTS) -> int:
    """
    Turn a raw numberOfGuests value into a positive guest count.

    Integers and digit strings are used directly; anything else is routed
    through :func:`decode_number_words`.

    Args:
        value: Guest count as received from the request
        max_guests: Largest party accepted

    Returns:
        Positive number of guests, at most ``max_guests``

    Raises:
        InvalidGuestCountError: If the value does not decode to an integer in 1..max_guests
    """
    if isinstance(value, bool) or value is None:
        raise InvalidGuestCountError(value)

    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidGuestCountError(value)
        count = int(value)
    else:
        text = str(value).strip()
        if _is_ascii_digits(text):
            # More digits than max_guests has is always too many
            if len(text) > len(str(max_guests)):
                raise InvalidGuestCountError(value, max_guests=max_guests)
            count = int(text)
        else:
            try:
                count = decode_number_words(text)
            except ValueError:
                # Digit runs beyond int()'s conversion limit
                raise InvalidGuestCountError(value, max_guests=max_guests)
            logger.debug(f"Decoded guest count {text!r} -> {count}")

    if count <= 0 or count > max_guests:
        raise InvalidGuestCountError(value, max_guests=max_guests)

    return count
