"""
Expiry Classification

Buckets an offer's optional expiry date into urgency classes relative to
"now". Both dates are truncated to calendar days before comparing.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


DateLike = Union[date, datetime, str]

# Upper bound (inclusive) of the "expires soon" bucket, in days
SOON_THRESHOLD_DAYS = 7


class ExpiryBucket(str, Enum):
    """Urgency class of an offer's expiry."""
    NONE = "none"
    EXPIRED = "expired"
    EXPIRES_TODAY = "expires_today"
    EXPIRES_TOMORROW = "expires_tomorrow"
    EXPIRES_SOON = "expires_soon"
    NORMAL = "normal"


@dataclass(frozen=True)
class ExpiryStatus:
    """Expiry bucket paired with its display label."""
    bucket: ExpiryBucket
    label: Optional[str]
    days_remaining: Optional[int] = None


def to_calendar_day(value: DateLike) -> date:
    """
    Strip time-of-day from a date-like value.

    Args:
        value: date, datetime or ISO-8601 string ('2025-01-31' or
            '2025-01-31T10:00:00')

    Returns:
        The calendar date
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # Compare in local time, like the naive default for "now"
            value = value.astimezone()
        return value.date()
    return value


def classify_expiry(valid_until: Optional[DateLike], now: Optional[DateLike] = None) -> ExpiryStatus:
    """
    Classify how close an offer is to expiring.

    Args:
        valid_until: Expiry date of the offer (None means no expiry)
        now: Reference moment (defaults to the current local time)

    Returns:
        ExpiryStatus with bucket, label and days remaining
    """
    if valid_until is None:
        return ExpiryStatus(bucket=ExpiryBucket.NONE, label=None)

    expiry_day = to_calendar_day(valid_until)
    today = to_calendar_day(now if now is not None else datetime.now())
    diff_days = (expiry_day - today).days

    if diff_days < 0:
        return ExpiryStatus(ExpiryBucket.EXPIRED, "Expired", diff_days)
    if diff_days == 0:
        return ExpiryStatus(ExpiryBucket.EXPIRES_TODAY, "Expires today", diff_days)
    if diff_days == 1:
        return ExpiryStatus(ExpiryBucket.EXPIRES_TOMORROW, "Expires tomorrow", diff_days)
    if diff_days <= SOON_THRESHOLD_DAYS:
        return ExpiryStatus(ExpiryBucket.EXPIRES_SOON, f"Expires in {diff_days} days", diff_days)

    # Far enough away: show the day and month only
    return ExpiryStatus(ExpiryBucket.NORMAL, expiry_day.strftime("%d/%m"), diff_days)
