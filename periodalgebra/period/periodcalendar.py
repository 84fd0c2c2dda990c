"""Calendar Period Factories
-------------------------

Build Periods from calendar descriptors.

Supports:
  - Years: period_from_year(2014)
  - Semesters: period_from_semester(2014, 2)   (S1 = Jan-Jun, S2 = Jul-Dec)
  - Quarters: period_from_quarter(2014, 3)
  - Months: period_from_month(2014, 3)
  - ISO weeks: period_from_week(2014, 3)        (Monday start, isoweek)
  - Durations: period_from_duration("2012-01-01", "1 MONTH"),
    period_from_duration_before_end("2012-01-01", "1 WEEK")

Key Design Principles:
  1. Periods are half-open: the end is the first instant of the next unit
     (March 2014 ends on 2014-04-01T00:00:00Z, not on March 31 23:59:59)
  2. Calendar boundaries are midnight wall-clock time in the default zone
     (PERIODALGEBRA_DEFAULT_TZ, UTC unless configured), the same zone the
     Period constructor reads naive values in
  3. Validation errors are raised before the period constructor runs; the
     constructor still rejects any range that ends before it starts
"""

from __future__ import annotations

import logging
import numbers
from datetime import datetime, timedelta
from typing import Any

from dateutil.relativedelta import relativedelta

try:
    from isoweek import Week
except ImportError as e:
    raise ImportError("isoweek not installed. pip install isoweek") from e

from periodalgebra.period.periodcore import Period, shift_instant
from periodalgebra.period.perioderrors import InvalidArgumentError, OutOfRangeError
from periodalgebra.period.periodnormalize import to_duration, to_instant

logger = logging.getLogger(__name__)


# ---- Helpers: argument validation ----

def _validate_year(year: Any) -> int:
    """
    Read a year as an int.

    Accepts ints and integer strings ("2014"); rejects bools, floats and
    anything else.
    """
    if isinstance(year, bool):
        raise InvalidArgumentError(f"Year must be an integer, got {year!r}")

    if isinstance(year, numbers.Integral):
        value = int(year)
    elif isinstance(year, str) and year.strip().lstrip("+-").isdigit():
        value = int(year.strip())
    else:
        raise InvalidArgumentError(f"Year must be an integer, got {year!r}")

    if not 1 <= value <= 9998:
        raise OutOfRangeError(f"Year must be between 1 and 9998, got {value}")
    return value


def _validate_index(index: Any, upper: int, name: str) -> int:
    """Check a 1-based calendar index such as a month or quarter number."""
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise InvalidArgumentError(f"{name.capitalize()} must be an integer, got {index!r}")
    if not 1 <= index <= upper:
        raise OutOfRangeError(f"{name.capitalize()} must be between 1 and {upper}, got {index}")
    return int(index)


def _midnight(year: int, month: int, day: int = 1) -> datetime:
    """Return naive midnight on the given day; Period reads it in the default zone."""
    return datetime(year, month, day)


def _months_period(year: int, first_month: int, months: int) -> Period:
    start = _midnight(year, first_month)
    return Period(start, start + relativedelta(months=months))


# ---- Year Resolution ----

def period_from_year(year: Any) -> Period:
    """
    Build the period covering a calendar year.

    Args:
        year: 4-digit year (int or integer string)

    Returns:
        Period [Y-01-01, Y+1-01-01)

    Raises:
        InvalidArgumentError: If year is not an integer

    Example:
        >>> str(period_from_year(2014))
        '2014-01-01T00:00:00Z/2015-01-01T00:00:00Z'
    """
    year = _validate_year(year)
    logger.debug("Building year period %d", year)
    return _months_period(year, 1, 12)


# ---- Semester Resolution ----

def period_from_semester(year: Any, semester: int) -> Period:
    """
    Build the period covering half a year.

    S1 = Jan-Jun, S2 = Jul-Dec

    Args:
        year: 4-digit year
        semester: 1 or 2

    Returns:
        Period of six months

    Raises:
        InvalidArgumentError: If year is not an integer
        OutOfRangeError: If semester is not 1 or 2

    Example:
        >>> str(period_from_semester(2014, 2))
        '2014-07-01T00:00:00Z/2015-01-01T00:00:00Z'
    """
    year = _validate_year(year)
    semester = _validate_index(semester, 2, "semester")
    logger.debug("Building semester period %dS%d", year, semester)
    return _months_period(year, (semester - 1) * 6 + 1, 6)


# ---- Quarter Resolution ----

def period_from_quarter(year: Any, quarter: int) -> Period:
    """
    Build the period covering a quarter.

    Q1 = Jan-Mar, Q2 = Apr-Jun, Q3 = Jul-Sep, Q4 = Oct-Dec

    Example:
        >>> str(period_from_quarter(2014, 3))
        '2014-07-01T00:00:00Z/2014-10-01T00:00:00Z'
    """
    year = _validate_year(year)
    quarter = _validate_index(quarter, 4, "quarter")
    logger.debug("Building quarter period %dQ%d", year, quarter)
    return _months_period(year, (quarter - 1) * 3 + 1, 3)


# ---- Month Resolution ----

def period_from_month(year: Any, month: int) -> Period:
    """
    Build the period covering a month.

    Example:
        >>> str(period_from_month(2014, 3))
        '2014-03-01T00:00:00Z/2014-04-01T00:00:00Z'
    """
    year = _validate_year(year)
    month = _validate_index(month, 12, "month")
    logger.debug("Building month period %d-%02d", year, month)
    return _months_period(year, month, 1)


# ---- ISO Week Resolution ----

def period_from_week(year: Any, week: int) -> Period:
    """
    Build the period covering an ISO 8601 week.

    ISO weeks start on Monday and are numbered 1-53. Uses the isoweek
    library; week 53 of a year with 52 weeks rolls over to week 1 of the
    next year.

    Args:
        year: 4-digit ISO year
        week: 1-53 (ISO week number)

    Returns:
        Period from Monday 00:00 to the following Monday 00:00

    Raises:
        InvalidArgumentError: If year is not an integer
        OutOfRangeError: If week is outside 1-53

    Example:
        >>> str(period_from_week(2014, 3))
        '2014-01-13T00:00:00Z/2014-01-20T00:00:00Z'
    """
    year = _validate_year(year)
    week = _validate_index(week, 53, "week")

    monday = Week(year, week).monday()
    start = _midnight(monday.year, monday.month, monday.day)
    logger.debug("Building week period %d-W%02d starting %s", year, week, monday)
    return Period(start, start + timedelta(days=7))


# ---- Duration-anchored Resolution ----

def period_from_duration(start: Any, duration: Any) -> Period:
    """
    Build the period of a given length starting at an instant.

    Args:
        start: Instant-like value
        duration: Duration-like value ("1 MONTH", 3600, timedelta, ...)

    Returns:
        Period [start, start + duration)

    Raises:
        InvalidRangeError: If the duration is negative or the end is past
            year 9999

    Example:
        >>> str(period_from_duration("2014-01-01", 3600))
        '2014-01-01T00:00:00Z/2014-01-01T01:00:00Z'
    """
    start = to_instant(start)
    return Period(start, shift_instant(start, to_duration(duration)))


def period_from_duration_before_end(end: Any, duration: Any) -> Period:
    """
    Build the period of a given length ending at an instant.

    Returns:
        Period [end - duration, end)

    Raises:
        InvalidRangeError: If the duration is negative
    """
    end = to_instant(end)
    return Period(shift_instant(end, -to_duration(duration)), end)


__all__ = [
    "period_from_year",
    "period_from_semester",
    "period_from_quarter",
    "period_from_month",
    "period_from_week",
    "period_from_duration",
    "period_from_duration_before_end",
]
