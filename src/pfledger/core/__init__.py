"""Core utilities and shared functionality."""

from pfledger.core.timezone import (
    now_eastern,
    today_eastern,
    to_eastern,
    EASTERN_TZ,
)
from pfledger.core.exceptions import (
    AppError,
    ValidationError,
    CurrencyMismatchError,
    NotFoundError,
    InvariantViolation,
    AttachmentError,
    CrossEntryLookupError,
)

__all__ = [
    "now_eastern",
    "today_eastern",
    "to_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "CurrencyMismatchError",
    "NotFoundError",
    "InvariantViolation",
    "AttachmentError",
    "CrossEntryLookupError",
]
