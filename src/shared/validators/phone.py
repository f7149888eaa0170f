"""Phone number validation."""

import re
from typing import Any

from .bounds import PHONE_BOUNDS, LengthBounds, as_text

NON_DIGITS = re.compile(r"[^0-9]")


def strip_non_digits(phone: Any) -> str:
    """Remove every character that is not an ASCII digit."""
    return NON_DIGITS.sub("", as_text(phone))


def is_valid_phone_number(phone: Any, bounds: LengthBounds = PHONE_BOUNDS) -> bool:
    """Check the number of digits in a phone number.

    Formatting characters (spaces, dashes, parentheses, plus sign) are ignored.
    Only the digit count matters, not the prefix or the order of digits.

    Examples:
        >>> is_valid_phone_number("(123) 456-7890")
        True
        >>> is_valid_phone_number("abc")
        False

    """
    return bounds.contains(len(strip_non_digits(phone)))
