"""Timezone utilities for US/Eastern ledger time."""

from datetime import date, datetime

import pytz

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return the current calendar date in US/Eastern timezone."""
    return now_eastern().date()


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)
