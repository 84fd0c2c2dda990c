"""Instant and Duration Normalization
-----------------------------------

Boundary conversion for everything the period algebra accepts as input.

The algebra itself only ever handles timezone-aware UTC ``datetime`` values
(instants) and ``relativedelta`` values (durations). Everything else passes
through ``to_instant`` / ``to_duration`` exactly once, at the edge.

Examples:
  >>> to_instant("2014-05-01")
  datetime.datetime(2014, 5, 1, 0, 0, tzinfo=datetime.timezone.utc)

  >>> to_duration("2 Weeks")
  relativedelta(days=+14)

  >>> to_duration("PT1H30M")
  relativedelta(hours=+1, minutes=+30)

  >>> normalize_duration_text("  1  DAY ")
  '1 day'
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

import numpy as np
import pandas as pd

try:
    from dateutil import parser as dateutil_parser
    from dateutil.relativedelta import relativedelta
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from periodalgebra.period.periodconfig import default_timezone
from periodalgebra.period.perioderrors import ConversionError


# ---- Unit aliases for relative duration phrases ----

_UNIT_ALIASES = {
    "y": "years", "yr": "years", "yrs": "years", "year": "years", "years": "years",
    "mon": "months", "mons": "months", "month": "months", "months": "months",
    "w": "weeks", "wk": "weeks", "wks": "weeks", "week": "weeks", "weeks": "weeks",
    "d": "days", "day": "days", "days": "days",
    "h": "hours", "hr": "hours", "hrs": "hours", "hour": "hours", "hours": "hours",
    "min": "minutes", "mins": "minutes", "minute": "minutes", "minutes": "minutes",
    "s": "seconds", "sec": "seconds", "secs": "seconds",
    "second": "seconds", "seconds": "seconds",
}

# "3 hours", "-1 day", "+10min"
_RELATIVE_TOKEN = re.compile(r"([+-]?\d+)\s*([a-z]+)")

# ISO 8601 duration, already lowercased: p1y2m10dt2h30m, pt1.5s, p2w
_ISO_DURATION = re.compile(
    r"^(?P<sign>[+-])?p"
    r"(?:(?P<years>\d+)y)?"
    r"(?:(?P<months>\d+)m)?"
    r"(?:(?P<weeks>\d+)w)?"
    r"(?:(?P<days>\d+)d)?"
    r"(?:t"
    r"(?:(?P<hours>\d+)h)?"
    r"(?:(?P<minutes>\d+)m)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)s)?"
    r")?$"
)

# relativedelta attributes that set an absolute value instead of shifting
_ABSOLUTE_FIELDS = ("year", "month", "day", "weekday", "hour", "minute", "second", "microsecond")


# ---- Instants ----

def to_instant(value: Any) -> datetime:
    """
    Convert an instant-like value to a timezone-aware UTC datetime.

    Accepted inputs:
      - datetime (aware: converted to UTC; naive: read in the default zone)
      - date (midnight in the default zone)
      - pandas.Timestamp, numpy.datetime64
      - str parsed by dateutil ("2014-05-01", "2013-01-01 10:00:00",
        "2014-05-01T00:00:00+03:00")

    The default zone comes from PERIODALGEBRA_DEFAULT_TZ (see periodconfig).

    Args:
        value: Instant-like value

    Returns:
        datetime with tzinfo=timezone.utc

    Raises:
        ConversionError: If the value cannot be read as an instant

    Examples:
        >>> to_instant("2014-05-01T03:00:00+03:00")
        datetime.datetime(2014, 5, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)

    if value is pd.NaT:
        raise ConversionError("Cannot convert NaT to an instant")

    if isinstance(value, pd.Timestamp):
        dt = value.to_pydatetime()
    elif isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    elif isinstance(value, str):
        dt = _parse_instant_text(value)
    else:
        raise ConversionError(
            f"Cannot convert {type(value).__name__} to an instant: {value!r}"
        )

    # Naive values are wall-clock times in the configured zone
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.replace(tzinfo=default_timezone())

    try:
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise ConversionError(f"Instant {value!r} is outside the UTC datetime range: {e}") from e


def _parse_instant_text(text: str) -> datetime:
    """Parse instant text with dateutil, wrapping its errors."""
    if not text or not text.strip():
        raise ConversionError("Cannot convert an empty string to an instant")

    try:
        return dateutil_parser.parse(text.strip())
    except (ValueError, OverflowError) as e:
        raise ConversionError(f"Cannot parse instant from {text!r}: {e}") from e


# ---- Durations ----

def normalize_duration_text(text: str) -> str:
    """
    Normalize duration text for consistent parsing.

    Transformations:
      - Strip whitespace
      - Lowercase
      - Normalize Unicode (NFC)
      - Normalize minus signs (−, –) to hyphen
      - Collapse multiple spaces to single space

    Args:
        text: Raw duration text (e.g., "2 Weeks", "−1  DAY")

    Returns:
        Normalized text for parsing

    Examples:
        >>> normalize_duration_text("2 Weeks")
        '2 weeks'

        >>> normalize_duration_text("−1  DAY")
        '-1 day'
    """
    if not text:
        return ""

    text = text.strip().lower()
    text = unicodedata.normalize("NFC", text)
    text = text.replace("−", "-").replace("–", "-")
    text = re.sub(r"\s+", " ", text)

    return text.strip()


def to_duration(value: Any) -> relativedelta:
    """
    Convert a duration-like value to a relativedelta.

    Accepted inputs:
      - relativedelta (relative fields only)
      - timedelta
      - int/float (seconds)
      - relative phrase: "1 DAY", "2 Weeks", "-3 MONTHS", "1 day 2 hours"
      - ISO 8601 duration: "P1D", "PT1H", "P1Y2M10DT2H30M", "P2W"

    Args:
        value: Duration-like value

    Returns:
        Normalized relativedelta

    Raises:
        ConversionError: If the value cannot be read as a duration

    Examples:
        >>> to_duration(3600)
        relativedelta(hours=+1)

        >>> to_duration("-3 MONTHS")
        relativedelta(months=-3)
    """
    if isinstance(value, relativedelta):
        absolute = [name for name in _ABSOLUTE_FIELDS if getattr(value, name) is not None]
        if absolute:
            raise ConversionError(
                f"relativedelta with absolute fields {absolute} is not a duration"
            )
        return value.normalized()

    if isinstance(value, timedelta):
        return _from_timedelta(value)

    # bool is an int subclass but never a duration
    if isinstance(value, bool):
        raise ConversionError(f"Cannot convert bool to a duration: {value!r}")

    if isinstance(value, (int, float)):
        try:
            delta = timedelta(seconds=value)
        except (ValueError, OverflowError) as e:
            raise ConversionError(f"Cannot convert {value!r} seconds to a duration: {e}") from e
        return _from_timedelta(delta)

    if isinstance(value, str):
        return _parse_duration_text(value)

    raise ConversionError(
        f"Cannot convert {type(value).__name__} to a duration: {value!r}"
    )


def _from_timedelta(delta: timedelta) -> relativedelta:
    # Whole microseconds keep the sign on every field (-1s, not -1d +23:59:59)
    return relativedelta(microseconds=delta // timedelta(microseconds=1)).normalized()


def _parse_duration_text(text: str) -> relativedelta:
    """Parse an ISO 8601 duration or a relative phrase."""
    text_norm = normalize_duration_text(text)
    if not text_norm:
        raise ConversionError("Cannot convert an empty string to a duration")

    iso = _ISO_DURATION.match(text_norm)
    if iso:
        return _from_iso_match(iso, text)

    fields: dict[str, int] = {}
    pos = 0
    for match in _RELATIVE_TOKEN.finditer(text_norm):
        # Tokens may be separated by spaces, commas or "and"
        if text_norm[pos:match.start()].strip(" ,") not in ("", "and"):
            break
        unit = _UNIT_ALIASES.get(match.group(2))
        if unit is None:
            raise ConversionError(f"Unknown duration unit {match.group(2)!r} in {text!r}")
        fields[unit] = fields.get(unit, 0) + int(match.group(1))
        pos = match.end()

    if not fields or text_norm[pos:].strip(" ,"):
        raise ConversionError(f"Cannot parse duration from {text!r}")

    return relativedelta(**fields).normalized()


def _from_iso_match(match: re.Match, text: str) -> relativedelta:
    parts = {name: value for name, value in match.groupdict().items() if name != "sign" and value}
    if not parts:
        raise ConversionError(f"ISO 8601 duration has no components: {text!r}")

    seconds = float(parts.pop("seconds", 0))
    fields = {name: int(value) for name, value in parts.items()}
    fields["seconds"] = int(seconds)
    fields["microseconds"] = round((seconds - int(seconds)) * 1_000_000)

    duration = relativedelta(**fields).normalized()
    if match.group("sign") == "-":
        return -duration
    return duration


def duration_is_negative(duration: relativedelta, anchor: datetime) -> bool:
    """
    Check whether a duration moves an instant backwards.

    A relativedelta can mix signs (``months=+1, days=-40``), so the
    direction is only defined relative to an anchor instant.

    Args:
        duration: Normalized duration
        anchor: Instant the duration is applied to

    Returns:
        True if ``anchor + duration < anchor``
    """
    return anchor + duration < anchor


__all__ = [
    "to_instant",
    "to_duration",
    "normalize_duration_text",
    "duration_is_negative",
]
