"""Length bounds consumed by the field validators."""

from dataclasses import dataclass, field
from typing import Any


def as_text(value: Any) -> str:
    """Coerce any input to text so predicates never raise.

    ``None`` becomes the empty string, other non-text values go through ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True, slots=True)
class LengthBounds:
    """Inclusive length range.

    A missing ``max_length`` means no upper limit. If ``min_length`` is greater
    than ``max_length`` nothing is ever in range.
    """

    min_length: int = 0
    max_length: int | None = None

    def contains(self, length: int) -> bool:
        if length < self.min_length:
            return False
        if self.max_length is not None and length > self.max_length:
            return False
        return True

    @property
    def is_consistent(self) -> bool:
        return self.min_length >= 0 and (self.max_length is None or self.min_length <= self.max_length)


PASSWORD_BOUNDS = LengthBounds(min_length=6, max_length=50)
NAME_BOUNDS = LengthBounds(min_length=2, max_length=100)
PHONE_BOUNDS = LengthBounds(min_length=10, max_length=15)


@dataclass(frozen=True, slots=True)
class ValidationBounds:
    """Bounds table for every length-checked field."""

    password: LengthBounds = field(default=PASSWORD_BOUNDS)
    phone: LengthBounds = field(default=PHONE_BOUNDS)
    name: LengthBounds = field(default=NAME_BOUNDS)

    def inconsistent_fields(self) -> list[str]:
        """Names of the fields whose bounds can never be satisfied."""
        return [
            name
            for name, bounds in (("password", self.password), ("phone", self.phone), ("name", self.name))
            if not bounds.is_consistent
        ]


DEFAULT_BOUNDS = ValidationBounds()

