"""Name validation."""

from typing import Any

from .bounds import NAME_BOUNDS, LengthBounds, as_text


def is_valid_name(name: Any, bounds: LengthBounds = NAME_BOUNDS) -> bool:
    """Check the trimmed length of a name. Any characters are allowed."""
    return bounds.contains(len(as_text(name).strip()))
