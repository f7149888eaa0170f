"""Email format validation."""

import re
from typing import Any

from .bounds import as_text

# local@domain.tld shape only; no RFC 5322 structure checks
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: Any) -> bool:
    """Check that an email has the ``local@domain.tld`` shape.

    Leading and trailing whitespace is ignored. Internal whitespace, a second
    ``@`` or a missing dot after the ``@`` make the value invalid.

    Examples:
        >>> is_valid_email("  donor@example.com ")
        True
        >>> is_valid_email("not-an-email")
        False

    """
    return EMAIL_PATTERN.fullmatch(as_text(email).strip()) is not None
