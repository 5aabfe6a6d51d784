"""Calendar period helpers for reports."""

import calendar
from datetime import date

from unctico_billing.domain.models import DateRange


def month_range(month: int, year: int) -> DateRange:
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))


def year_range(year: int) -> DateRange:
    return DateRange(date(year, 1, 1), date(year, 12, 31))


def quarter_of(value: date) -> int:
    return (value.month - 1) // 3 + 1


def quarter_range(quarter: int, year: int) -> DateRange:
    """Return the range covering months ``(q-1)*3+1`` through ``q*3``.

    Raises:
        ValueError: When the quarter is outside 1..4.
    """
    if not 1 <= quarter <= 4:
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    start_month = (quarter - 1) * 3 + 1
    end_month = quarter * 3
    return DateRange(
        month_range(start_month, year).start,
        month_range(end_month, year).end,
    )


def current_quarter_range(today: date) -> DateRange:
    return quarter_range(quarter_of(today), today.year)


def last_quarter_range(today: date) -> DateRange:
    """Return the previous quarter, wrapping to Q4 of last year from Q1."""
    quarter = quarter_of(today)
    if quarter == 1:
        return quarter_range(4, today.year - 1)
    return quarter_range(quarter - 1, today.year)


__all__ = [
    "month_range",
    "year_range",
    "quarter_of",
    "quarter_range",
    "current_quarter_range",
    "last_quarter_range",
]
