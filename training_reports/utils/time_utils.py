"""
Date utilities for fiscal-year windows and expiry classification.

Key concepts:
  - Fiscal year ``Y``: the inclusive range from the fiscal start date in
    ``Y - 1`` to the day before the same date in ``Y``.  With the default
    start of July 1 that is ``[Y-1-07-01, Y-06-30]``.
  - Expiry: a training is expired the day *after* its expiration date, and
    "expires soon" when the expiration date falls on or before the reference
    date plus the warning window (one calendar month by default).

Calendar month arithmetic uses ``dateutil.relativedelta``: when the target
month is shorter than the source day, the result is clamped to the last day
of the target month (Jan 31 + 1 month → Feb 28, or Feb 29 in a leap year).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from training_reports.taxonomy.expiry_status import ExpiryStatus

FISCAL_YEAR_START_MONTH = 7
FISCAL_YEAR_START_DAY = 1

# Accepted input formats, tried in order.
DATE_FORMATS: tuple[str, ...] = ("%m/%d/%Y", "%Y-%m-%d")
DISPLAY_DATE_FORMAT = "%m/%d/%Y"


def parse_date(value: str) -> date:
    """Parse a roster or CLI date string.

    Accepts ``MM/DD/YYYY`` (single-digit month/day allowed) and ISO
    ``YYYY-MM-DD``.

    Args:
        value: Date string.

    Returns:
        Parsed ``date``.

    Raises:
        ValueError: If ``value`` matches none of ``DATE_FORMATS``.
    """
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unable to parse date: '{value}'. Expected MM/DD/YYYY.")


def format_date(value: date) -> str:
    """Return ``value`` as ``MM/DD/YYYY``."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def add_months(value: date, months: int) -> date:
    """Add calendar months to ``value``, clamping to the target month's last day."""
    return value + relativedelta(months=months)


def fiscal_year_range(
    fiscal_year: int,
    start_month: int = FISCAL_YEAR_START_MONTH,
    start_day: int = FISCAL_YEAR_START_DAY,
) -> tuple[date, date]:
    """Return the inclusive ``(start, end)`` dates of a fiscal year.

    Args:
        fiscal_year: The fiscal year, named after the calendar year it ends in.
        start_month: Month the fiscal year starts in (default July).
        start_day: Day of month the fiscal year starts on (default 1).

    Returns:
        ``(date(fiscal_year - 1, start_month, start_day),
        date(fiscal_year, start_month, start_day) - 1 day)``.
    """
    start = date(fiscal_year - 1, start_month, start_day)
    end = date(fiscal_year, start_month, start_day) - timedelta(days=1)
    return start, end


def in_fiscal_year(
    value: date,
    fiscal_year: int,
    start_month: int = FISCAL_YEAR_START_MONTH,
    start_day: int = FISCAL_YEAR_START_DAY,
) -> bool:
    """Return ``True`` if ``value`` falls inside the fiscal year (inclusive)."""
    start, end = fiscal_year_range(fiscal_year, start_month, start_day)
    return start <= value <= end


def classify_expiry(
    expires_on: Optional[date],
    reference_date: date,
    window_months: int = 1,
) -> ExpiryStatus:
    """Classify an expiry date against a reference date.

    Args:
        expires_on: Expiration date, or ``None`` for a training that never
            expires.
        reference_date: The date to evaluate against.
        window_months: Size of the "expires soon" window in calendar months.

    Returns:
        ``EXPIRED`` if ``expires_on < reference_date``;
        ``EXPIRING_SOON`` if ``expires_on <= reference_date + window_months``;
        otherwise ``NOT_EXPIRED``.
    """
    if expires_on is None:
        return ExpiryStatus.NOT_EXPIRED
    if expires_on < reference_date:
        return ExpiryStatus.EXPIRED
    if expires_on <= add_months(reference_date, window_months):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.NOT_EXPIRED


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(tz=timezone.utc)
