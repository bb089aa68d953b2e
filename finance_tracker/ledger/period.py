"""
Tracking Period

The averaging period runs from AccountState.start_date to now and is
counted in whole days, never fewer than one.
"""

import math
from datetime import datetime, timedelta, timezone


ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def elapsed_days(start: datetime, now: datetime) -> int:
    """
    Whole days between start and now, floored at 1.

    Same-day tracking counts as one full day, and so does a start date
    in the future (clock skew), so the daily average never divides by zero.
    """
    days = math.floor((now - start) / ONE_DAY)
    return max(1, days)
