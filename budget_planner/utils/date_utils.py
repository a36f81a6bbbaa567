"""Calendar-month helpers"""

import calendar
from datetime import date
from typing import Tuple


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day (inclusive) of a calendar month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month before; January rolls back to December"""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def months_between(today: date, deadline: date) -> int:
    """
    Whole months from today until the deadline.

    Counts calendar months, then drops one if the deadline's day-of-month
    has not been reached yet. A deadline on or before today yields 0.
    """
    if deadline <= today:
        return 0

    months = (deadline.year - today.year) * 12 + (deadline.month - today.month)
    if deadline.day < today.day:
        months -= 1

    return max(0, months)
