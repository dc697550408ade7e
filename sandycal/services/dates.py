"""Calendar-day helpers. The only place rating day keys are derived."""

from __future__ import annotations

import calendar
from datetime import date, datetime

from sandycal.core.errors import ValidationError


def start_of_day(value: date | datetime) -> date | datetime:
    """Floor to midnight, keeping the input's type (and tzinfo for datetimes)."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return value


def day_key(value: date | datetime) -> date:
    """Return the date used as the rating key for ``value``."""
    if isinstance(value, datetime):
        return start_of_day(value).date()
    if isinstance(value, date):
        return value
    raise ValidationError("Date is required")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a 1-indexed month."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("Year is out of range")
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)
