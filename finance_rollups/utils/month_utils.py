"""Helpers for calendar-month arithmetic."""

from collections.abc import Iterator
from datetime import date

from dateutil.relativedelta import relativedelta

REFERENCE_DAY = 15


def month_start(value: date) -> date:
    """Return the first day of the month containing ``value``."""
    return date(value.year, value.month, 1)


def month_key(value: date) -> str:
    """Return the canonical ``YYYY-MM`` key for a date."""
    return f"{value.year:04d}-{value.month:02d}"


def parse_month_key(key: str, day: int = REFERENCE_DAY) -> date:
    """Return the reference date of the month identified by ``key``.

    Args:
        key: Month key in ``YYYY-MM`` form.
        day: Day of month used as the month's reference date.

    Returns:
        date: Reference date inside that month.

    Raises:
        ValueError: If the key is not a valid month key.
    """
    year_text, _, month_text = key.partition("-")
    return date(int(year_text), int(month_text), day)


def shift_months(value: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``value``."""
    return month_start(value) + relativedelta(months=months)


def month_span(view_date: date, value: date) -> int:
    """Return the signed number of months from ``value`` to ``view_date``."""
    return (view_date.year - value.year) * 12 + (
        view_date.month - value.month
    )


def iter_months(start: date, end: date) -> Iterator[date]:
    """Yield month starts from ``start`` to ``end`` inclusive."""
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        yield current
        current = current + relativedelta(months=1)


def iter_months_backward(start: date, end: date) -> Iterator[date]:
    """Yield month starts from ``start`` down to ``end`` inclusive."""
    current = month_start(start)
    last = month_start(end)
    while current >= last:
        yield current
        current = current - relativedelta(months=1)


__all__ = [
    "REFERENCE_DAY",
    "month_start",
    "month_key",
    "parse_month_key",
    "shift_months",
    "month_span",
    "iter_months",
    "iter_months_backward",
]
