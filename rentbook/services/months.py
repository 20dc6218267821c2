"""Month keys and billing-month derivation.

A month key is the canonical ``"YYYY-MM"`` string. Keys sort lexicographically
in chronological order; sorting and filtering of rent history rely on that.
"""

import re
from datetime import date

from rentbook.services.errors import ValidationError

MONTH_KEY_PATTERN = re.compile(r"([0-9]{4})-(0[1-9]|1[0-2])")

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

YearMonth = tuple[int, int]


def format_month_key(value: date | YearMonth) -> str:
    """Format a date or a (year, month) pair as ``"YYYY-MM"``.

    Args:
        value: date/datetime, or (year, month) with 1-based month

    Returns:
        Zero-padded month key, e.g. "2025-03"
    """
    if isinstance(value, date):
        year, month = value.year, value.month
    else:
        year, month = value
        if not 1 <= month <= 12:
            raise ValidationError(f"Month out of range: {month}")
    return f"{year:04d}-{month:02d}"


def parse_month_key(key: str) -> YearMonth:
    """Parse ``"YYYY-MM"`` into (year, month).

    Raises:
        ValidationError: If key is not a 4-digit year, '-', and a month 01-12
    """
    match = MONTH_KEY_PATTERN.fullmatch(key) if isinstance(key, str) else None
    if match is None:
        raise ValidationError(f"Invalid month key {key!r}: expected YYYY-MM")
    return int(match.group(1)), int(match.group(2))


def is_month_key(key: str) -> bool:
    """True if key parses as a month key."""
    try:
        parse_month_key(key)
    except ValidationError:
        return False
    return True


def shift_month(year: int, month: int, delta: int) -> YearMonth:
    """Move (year, month) by delta months, carrying into the year."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def current_month_key(today: date | None = None) -> str:
    """Month key of today (or of the given date)."""
    return format_month_key(today or date.today())


def billing_months(join_date: date, now: date | None = None) -> list[str]:
    """List the months a tenant owes rent for, newest first.

    Both dates are truncated to their month. Every month from the join month
    through the reference month is included. A join month later than the
    reference month yields an empty list.

    Args:
        join_date: Tenant's join date
        now: Reference date (default: today)

    Returns:
        Month keys, most recent first
    """
    now = now or date.today()
    year, month = join_date.year, join_date.month
    end = (now.year, now.month)

    months = []
    while (year, month) <= end:
        months.append(format_month_key((year, month)))
        year, month = shift_month(year, month, 1)

    months.reverse()
    return months


def recent_months(count: int = 6, today: date | None = None) -> list[str]:
    """The last ``count`` months ending with the current one, newest first."""
    today = today or date.today()
    return [format_month_key(shift_month(today.year, today.month, -i)) for i in range(count)]


def format_month_label(key: str) -> str:
    """Human label for a month key: "2025-01" -> "Jan 2025"."""
    year, month = parse_month_key(key)
    return f"{MONTH_NAMES[month - 1]} {year}"


__all__ = [
    "billing_months",
    "current_month_key",
    "format_month_key",
    "format_month_label",
    "is_month_key",
    "parse_month_key",
    "recent_months",
    "shift_month",
]
