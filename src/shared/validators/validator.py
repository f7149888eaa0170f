"""Field predicates bound to a bounds table."""

from typing import Any

from .bounds import DEFAULT_BOUNDS, ValidationBounds
from .email import is_valid_email
from .name import is_valid_name
from .password import is_valid_password
from .phone import is_valid_phone_number


class InputValidator:
    """Field predicates bound to one immutable bounds table.

    Usage:
        validator = InputValidator(settings.get_validation_bounds())
        validator.is_valid_phone_number("(123) 456-7890")
    """

    __slots__ = ("_bounds",)

    def __init__(self, bounds: ValidationBounds = DEFAULT_BOUNDS):
        self._bounds = bounds

    @property
    def bounds(self) -> ValidationBounds:
        return self._bounds

    def is_valid_email(self, value: Any) -> bool:
        return is_valid_email(value)

    def is_valid_password(self, value: Any) -> bool:
        return is_valid_password(value, self._bounds.password)

    def is_valid_phone_number(self, value: Any) -> bool:
        return is_valid_phone_number(value, self._bounds.phone)

    def is_valid_name(self, value: Any) -> bool:
        return is_valid_name(value, self._bounds.name)
