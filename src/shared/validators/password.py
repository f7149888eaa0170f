"""Password validation functions."""

from typing import Any

from .bounds import PASSWORD_BOUNDS, LengthBounds, as_text


def is_valid_password(password: Any, bounds: LengthBounds = PASSWORD_BOUNDS) -> bool:
    """Check the raw password length against the configured bounds.

    The password is not trimmed and its content is not inspected: length is
    the only criterion.

    Args:
        password: Password as entered by the donor
        bounds: Inclusive character-count bounds

    Returns:
        True if the character count lies within bounds

    Examples:
        >>> is_valid_password("secret")
        True
        >>> is_valid_password("short")
        False

    """
    return bounds.contains(len(as_text(password)))
