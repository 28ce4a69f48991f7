"""
Date utilities for lease accounting
Whole-month lease terms and calendar month stepping
"""

from datetime import date, datetime
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from typing import Any, Optional


def lease_term_months(start_date: date, end_date: date) -> int:
    """
    Whole months between two dates.
    Day of month is ignored: 2024-01-15 -> 2024-03-10 is 2 months.
    """
    return (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month)


def add_months(d: date, months: int) -> date:
    """
    Add calendar months to a date - similar to EDATE in Excel
    A day past the end of the target month clamps to its last day (Jan 31 + 1 -> Feb 28/29)
    """
    return d + relativedelta(months=months)


def month_date(start_date: date, month_index: int) -> date:
    """Date of the 0-based month offset within a lease"""
    return add_months(start_date, month_index)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse an ISO date string (or date/datetime) to a date object
    Returns None for empty or unparseable values
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return isoparse(value.strip()).date()
    except ValueError:
        return None


def month_start(year: int, month: Optional[int] = None) -> date:
    """First day of a month, January when month is not given"""
    return date(year, month or 1, 1)
