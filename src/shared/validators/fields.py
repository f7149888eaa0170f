"""Pydantic field checks built on the validator predicates.

Each check returns the value unchanged (or normalized) when it passes and
raises ``ValueError`` otherwise, so it can be used inside ``field_validator``.
"""

from functools import lru_cache

from src.config.settings import settings

from .bounds import LengthBounds
from .phone import strip_non_digits
from .validator import InputValidator


@lru_cache
def get_input_validator() -> InputValidator:
    """Validator bound to the configured bounds, built on first use."""
    return InputValidator(settings.get_validation_bounds())


def describe_bounds(bounds: LengthBounds, unit: str) -> str:
    """Human-readable range, e.g. ``between 6 and 50 characters``."""
    if bounds.max_length is None:
        return f"at least {bounds.min_length} {unit}"
    return f"between {bounds.min_length} and {bounds.max_length} {unit}"


def validate_email(email: str) -> str:
    """Return the trimmed email or raise ValueError.

    Examples:
        >>> validate_email("  donor@example.com ")
        'donor@example.com'

    """
    if not get_input_validator().is_valid_email(email):
        raise ValueError("Please enter a valid email address")
    return email.strip()


def validate_password(password: str) -> str:
    """Return the password unchanged or raise ValueError."""
    validator = get_input_validator()
    if not validator.is_valid_password(password):
        raise ValueError(f"Password must be {describe_bounds(validator.bounds.password, 'characters')}")
    return password


def validate_phone_number(phone: str) -> str:
    """Return the trimmed phone number or raise ValueError.

    Formatting is kept as entered; only the digit count is checked.
    """
    validator = get_input_validator()
    if not validator.is_valid_phone_number(phone):
        raise ValueError(
            f"Phone number must contain {describe_bounds(validator.bounds.phone, 'digits')}, "
            f"got {len(strip_non_digits(phone))}"
        )
    return phone.strip()


def validate_name(name: str) -> str:
    """Return the trimmed name or raise ValueError."""
    validator = get_input_validator()
    if not validator.is_valid_name(name):
        raise ValueError(f"Name must be {describe_bounds(validator.bounds.name, 'characters')}")
    return name.strip()
