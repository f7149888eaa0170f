"""Donation eligibility rules.

A donor may give blood again once the configured number of days has passed
since their last donation. Donors who never donated are always eligible.
"""

import math
from datetime import UTC, datetime

from src.config.settings import settings
from src.database.base import as_utc

SECONDS_PER_DAY = 60 * 60 * 24


def days_since(moment: datetime, now: datetime | None = None) -> float:
    """Fractional days elapsed since ``moment``."""
    now = now or datetime.now(UTC)
    return (now - as_utc(moment)).total_seconds() / SECONDS_PER_DAY


def is_eligible(last_donation_date: datetime | None, now: datetime | None = None, wait_days: int | None = None) -> bool:
    """Check whether a donor may donate again."""
    if last_donation_date is None:
        return True
    wait_days = settings.donation_eligibility_days if wait_days is None else wait_days
    return days_since(last_donation_date, now) >= wait_days


def days_until_eligible(
    last_donation_date: datetime | None, now: datetime | None = None, wait_days: int | None = None
) -> int:
    """Whole days left before the donor becomes eligible, 0 when already eligible."""
    if last_donation_date is None:
        return 0
    wait_days = settings.donation_eligibility_days if wait_days is None else wait_days
    return max(0, math.ceil(wait_days - days_since(last_donation_date, now)))
