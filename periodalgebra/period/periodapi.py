"""Period algebra API.

Functional entry points over the Period value type: construction, merging,
instant enumeration, serialization (ISO 8601 intervals, dict/JSON, pandas)
and display formatting.
"""

import json
import logging
from datetime import datetime
from typing import Any, Iterable, Iterator

import pandas as pd

from periodalgebra.period.periodcore import Period, shift_instant
from periodalgebra.period.perioderrors import ConversionError, InvalidArgumentError
from periodalgebra.period.periodnormalize import to_duration, to_instant

logger = logging.getLogger(__name__)

_FRAME_COLUMNS = ["start_ts", "end_ts", "seconds"]


def create_period(start: Any, end: Any) -> Period:
    """
    Create a validated Period.

    Args:
        start: Instant-like value (datetime, date, pandas.Timestamp, ISO string)
        end: Instant-like value, not before start

    Returns:
        Period [start, end)

    Raises:
        InvalidRangeError: If end is before start
        ConversionError: If start or end cannot be read as an instant

    Examples:
        >>> create_period("2014-05-01", "2014-05-08").timestamp_interval()
        604800
    """
    return Period.create(start, end)


def merge_periods(first: Period, *others: Period) -> Period:
    """
    Merge periods into the smallest period containing all of them.

    Examples:
        >>> march = create_period("2014-03-01", "2014-04-01")
        >>> april = create_period("2014-04-01", "2014-05-01")
        >>> str(merge_periods(march, april))
        '2014-03-01T00:00:00Z/2014-05-01T00:00:00Z'
    """
    return first.merge(*others)


def date_range(period: Period, step: Any) -> Iterator[datetime]:
    """
    Lazily enumerate instants across a period at a fixed step.

    Yields ``start, start + step, start + 2*step, ...`` while the instant is
    before ``end`` (the end is never yielded).

    Args:
        period: Period to walk across
        step: Duration-like value ("1 HOUR", 3600, timedelta, ...)

    Returns:
        Iterator of UTC datetimes

    Raises:
        InvalidArgumentError: If step is zero or negative

    Examples:
        >>> day = create_period("2014-01-01", "2014-01-02")
        >>> len(list(date_range(day, 3600)))
        24
    """
    step = to_duration(step)
    if shift_instant(period.start, step) <= period.start:
        raise InvalidArgumentError(f"date_range() needs a positive step, got {step!r}")

    logger.debug("Enumerating %s every %r", period, step)
    return _iter_instants(period, step)


def _iter_instants(period: Period, step) -> Iterator[datetime]:
    index = 0
    instant = period.start
    while instant < period.end:
        yield instant
        index += 1
        try:
            instant = period.start + step * index
        except (ValueError, OverflowError):
            return


# ---- Serialization ----

def period_to_dict(period: Period) -> dict:
    """
    Convert a period to a plain dict.

    Returns:
        {"start_date": "2014-05-01T00:00:00Z",
         "end_date": "2014-05-08T00:00:00Z",
         "timezone": "UTC"}
    """
    return period.to_dict()


def period_from_dict(data: dict) -> Period:
    """
    Rebuild a period from ``period_to_dict`` output.

    Raises:
        ConversionError: If start_date or end_date is missing
    """
    missing = [key for key in ("start_date", "end_date") if key not in data]
    if missing:
        raise ConversionError(f"Period dict is missing keys: {missing}")

    return Period(data["start_date"], data["end_date"])


def period_to_json(period: Period) -> str:
    """Serialize a period to a JSON object string."""
    return json.dumps(period_to_dict(period))


def period_from_json(text: str) -> Period:
    """
    Rebuild a period from ``period_to_json`` output.

    Raises:
        ConversionError: If the text is not a JSON object with both dates
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConversionError(f"Invalid period JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConversionError(f"Period JSON must be an object, got {type(data).__name__}")
    return period_from_dict(data)


def parse_period(text: str) -> Period:
    """
    Parse an ISO 8601 time interval.

    Supported forms:
      - start/end: "2014-05-01T00:00:00Z/2014-05-08T00:00:00Z"
      - start/duration: "2014-05-01T00:00:00Z/P1W"
      - duration/end: "P1W/2014-05-08T00:00:00Z"

    Args:
        text: Interval text, typically ``str(period)``

    Returns:
        Period

    Raises:
        ConversionError: If the text is not a two-part interval
        InvalidRangeError: If the interval ends before it starts

    Examples:
        >>> str(parse_period("2014-05-01/P1W"))
        '2014-05-01T00:00:00Z/2014-05-08T00:00:00Z'
    """
    parts = [part.strip() for part in (text or "").split("/")]
    if len(parts) != 2 or not all(parts):
        raise ConversionError(f"Expected '<start>/<end>' interval, got {text!r}")

    head, tail = parts
    head_is_duration = head[:1] in ("P", "p")
    tail_is_duration = tail[:1] in ("P", "p")

    if head_is_duration and tail_is_duration:
        raise ConversionError(f"Interval needs at least one instant, got {text!r}")
    if head_is_duration:
        end = to_instant(tail)
        return Period(shift_instant(end, -to_duration(head)), end)
    if tail_is_duration:
        start = to_instant(head)
        return Period(start, shift_instant(start, to_duration(tail)))
    return Period(head, tail)


def periods_to_frame(periods: Iterable[Period]) -> pd.DataFrame:
    """
    Tabulate periods as a DataFrame sorted by start.

    Args:
        periods: Iterable of periods (e.g. ``period.split("1 DAY")``)

    Returns:
        DataFrame with columns start_ts, end_ts, seconds

    Examples:
        >>> periods_to_frame(create_period("2014-01-01", "2014-01-03").split("1 DAY"))
                             start_ts                    end_ts  seconds
        0 2014-01-01 00:00:00+00:00 2014-01-02 00:00:00+00:00    86400
        1 2014-01-02 00:00:00+00:00 2014-01-03 00:00:00+00:00    86400
    """
    rows = [
        {
            "start_ts": pd.Timestamp(period.start),
            "end_ts": pd.Timestamp(period.end),
            "seconds": period.timestamp_interval(),
        }
        for period in periods
    ]

    df = pd.DataFrame(rows, columns=_FRAME_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("start_ts", kind="stable").reset_index(drop=True)


# ---- Display ----

def _describe_length(period: Period) -> str:
    seconds = period.timestamp_interval()
    if seconds % 86400 == 0:
        days = seconds // 86400
        return f"{days} day" if days == 1 else f"{days} days"
    return str(period.length())


def _describe_instant(dt: datetime, with_year: bool) -> str:
    text = f"{dt:%b} {dt.day}"
    if (dt.hour, dt.minute, dt.second) != (0, 0, 0):
        text += f" {dt:%H:%M}"
    if with_year:
        text += f", {dt.year}"
    return text


def format_period_display(period: Period) -> str:
    """
    Format a period for human-readable display.

    Args:
        period: Period to describe

    Returns:
        Display string

    Examples:
        >>> format_period_display(create_period("2014-03-01", "2014-04-01"))
        'Mar 1 - Apr 1, 2014 (31 days)'

        >>> format_period_display(create_period("2011-12-01", "2012-02-01"))
        'Dec 1, 2011 - Feb 1, 2012 (62 days)'

        >>> format_period_display(create_period("2013-01-01 10:00", "2013-01-01 13:00"))
        'Jan 1 10:00 - Jan 1 13:00, 2013 (3:00:00)'
    """
    if period is None:
        return ""

    start, end = period.start, period.end
    same_year = start.year == end.year
    return (
        f"{_describe_instant(start, with_year=not same_year)} - "
        f"{_describe_instant(end, with_year=True)} ({_describe_length(period)})"
    )


__all__ = [
    "create_period",
    "merge_periods",
    "date_range",
    "period_to_dict",
    "period_from_dict",
    "period_to_json",
    "period_from_json",
    "parse_period",
    "periods_to_frame",
    "format_period_display",
]
