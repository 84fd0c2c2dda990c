"""Period Value Type
-----------------

Immutable half-open time interval ``[start, end)`` and its algebra.

Supports:
  - Accessors: start, end, length(), date_interval(), timestamp_interval()
  - Predicates: contains, is_before, is_after, abuts, overlaps,
    duration_greater_than, duration_less_than, same_duration_as, same_value_as
  - Derivations: starting_on, ending_on, with_duration, add, sub, next,
    previous, merge, intersect, gap, diff, split
  - Diffs: timestamp_interval_diff, date_interval_diff

Key Design Principles:
  1. Instants are normalized to UTC on the way in; equality is instant equality
  2. start <= end always holds (zero-length periods are legal)
  3. contains(instant) is half-open, contains(period) is inclusive
  4. Every operation returns a new value, nothing is mutated
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterator, List, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta

from periodalgebra.period.periodconfig import load_config
from periodalgebra.period.perioderrors import (
    ArityError,
    InvalidArgumentError,
    InvalidRangeError,
    LogicConflictError,
)
from periodalgebra.period.periodnormalize import (
    duration_is_negative,
    to_duration,
    to_instant,
)

logger = logging.getLogger(__name__)

_ONE_SECOND = timedelta(seconds=1)


def format_instant(dt: datetime, timespec: Optional[str] = None) -> str:
    """
    Format a UTC instant as ISO 8601 with a ``Z`` suffix.

    Args:
        dt: UTC datetime
        timespec: isoformat() timespec (default: PERIODALGEBRA_TIMESPEC)

    Returns:
        ISO string, e.g. '2014-04-30T21:00:00Z'
    """
    if timespec is None:
        timespec = load_config().serialize_timespec

    text = dt.isoformat(timespec=timespec)
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def shift_instant(instant: datetime, duration: relativedelta) -> datetime:
    """
    Move an instant by a duration.

    Raises:
        InvalidRangeError: If the result falls outside the datetime range
            (years 1-9999)
    """
    try:
        return instant + duration
    except (ValueError, OverflowError) as e:
        raise InvalidRangeError(f"Shifting {format_instant(instant)} by {duration!r} is out of range: {e}") from e


def _require_period(value: Any, operation: str) -> Period:
    if not isinstance(value, Period):
        raise TypeError(
            f"{operation}() expects a Period, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Period:
    """
    Half-open time interval ``[start, end)``.

    Both bounds accept anything ``to_instant`` understands (datetime, date,
    pandas.Timestamp, ISO strings) and are stored as UTC datetimes.

    Attributes:
        start: First instant of the period (included)
        end: Instant the period stops at (excluded)

    Raises:
        InvalidRangeError: If end is before start
        ConversionError: If a bound cannot be read as an instant

    Examples:
        >>> period = Period("2014-05-01", "2014-05-08")
        >>> period.timestamp_interval()
        604800
        >>> period.contains("2014-05-08")
        False
        >>> str(period)
        '2014-05-01T00:00:00Z/2014-05-08T00:00:00Z'
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        start = to_instant(self.start)
        end = to_instant(self.end)

        # Compare absolute instants, never wall-clock values
        if end < start:
            logger.debug("Rejected period with end %s before start %s", end, start)
            raise InvalidRangeError(
                f"Period end {format_instant(end)} is before its start {format_instant(start)}"
            )

        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def create(cls, start: Any, end: Any) -> Period:
        """Validating constructor, same as ``Period(start, end)``."""
        return cls(start, end)

    def __str__(self) -> str:
        return f"{format_instant(self.start)}/{format_instant(self.end)}"

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    # ---- Length ----

    def length(self) -> timedelta:
        """Elapsed time between start and end."""
        return self.end - self.start

    def date_interval(self) -> relativedelta:
        """
        Calendar-style length (years, months, days, hours, ...).

        Examples:
            >>> Period("2014-03-01", "2014-04-01").date_interval()
            relativedelta(months=+1)
        """
        return relativedelta(self.end, self.start)

    def timestamp_interval(self) -> int:
        """Length in whole seconds."""
        return self.length() // _ONE_SECOND

    # ---- Predicates ----

    def contains(self, item: Any) -> bool:
        """
        Check whether an instant or a period lies inside this period.

        An instant is contained when ``start <= instant < end`` (the end is
        excluded). A period is contained when both of its bounds fall within
        ``[start, end]`` (boundaries inclusive on both sides).

        Args:
            item: Period or instant-like value

        Returns:
            True if item is inside this period
        """
        if isinstance(item, Period):
            return item.start >= self.start and item.end <= self.end

        instant = to_instant(item)
        return self.start <= instant < self.end

    def is_before(self, item: Any) -> bool:
        """
        Check whether this period ends before an instant or a period.

        Reaching the (excluded) end instant already counts as before, and an
        abutting period counts as after this one.

        Args:
            item: Period or instant-like value

        Returns:
            True if this period is entirely before item
        """
        if isinstance(item, Period):
            return self.end <= item.start

        instant = to_instant(item)
        return self.end <= instant

    def is_after(self, item: Any) -> bool:
        """
        Check whether this period starts after an instant or a period.

        The start instant belongs to the period, so ``is_after(start)`` is
        False. A period that abuts this one on the left counts as before.

        Args:
            item: Period or instant-like value

        Returns:
            True if this period is entirely after item
        """
        if isinstance(item, Period):
            return self.start >= item.end

        instant = to_instant(item)
        return self.start > instant

    def abuts(self, other: Period) -> bool:
        """True if the periods touch at exactly one boundary."""
        other = _require_period(other, "abuts")
        return self.end == other.start or self.start == other.end

    def overlaps(self, other: Period) -> bool:
        """True if the periods share a non-empty interior."""
        other = _require_period(other, "overlaps")
        return self.start < other.end and other.start < self.end

    def duration_greater_than(self, other: Period) -> bool:
        other = _require_period(other, "duration_greater_than")
        return self.length() > other.length()

    def duration_less_than(self, other: Period) -> bool:
        other = _require_period(other, "duration_less_than")
        return self.length() < other.length()

    def same_duration_as(self, other: Period) -> bool:
        other = _require_period(other, "same_duration_as")
        return self.length() == other.length()

    def same_value_as(self, other: Period) -> bool:
        other = _require_period(other, "same_value_as")
        return self.start == other.start and self.end == other.end

    # ---- Derivations: moving one bound ----

    def starting_on(self, start: Any) -> Period:
        """Return a copy of this period starting on a new instant."""
        return Period(start, self.end)

    def ending_on(self, end: Any) -> Period:
        """Return a copy of this period ending on a new instant."""
        return Period(self.start, end)

    def with_duration(self, duration: Any) -> Period:
        """
        Return a period with the same start and a new length.

        Args:
            duration: Duration-like value ("1 MONTH", timedelta, seconds, ...)

        Returns:
            Period ``[start, start + duration)``

        Raises:
            InvalidRangeError: If the duration is negative
        """
        duration = to_duration(duration)
        end = shift_instant(self.start, duration)
        if duration_is_negative(duration, self.start):
            raise InvalidRangeError(f"with_duration() needs a positive duration, got {duration!r}")
        return Period(self.start, end)

    def add(self, duration: Any) -> Period:
        """
        Extend the end of the period by a duration.

        A negative duration shrinks the period; it must not move the end
        before the start.

        Raises:
            InvalidRangeError: If the new end is before start, or past year 9999
        """
        return Period(self.start, shift_instant(self.end, to_duration(duration)))

    def sub(self, duration: Any) -> Period:
        """
        Shrink the end of the period by a duration.

        Raises:
            InvalidRangeError: If the new end is before start
        """
        return Period(self.start, shift_instant(self.end, -to_duration(duration)))

    # ---- Derivations: neighbours ----

    def next(self, duration: Any = None) -> Period:
        """
        Return the period starting where this one ends.

        Args:
            duration: Length of the new period (default: this period's
                calendar-style length)

        Returns:
            Period ``[end, end + duration)``
        """
        duration = self.date_interval() if duration is None else to_duration(duration)
        return Period(self.end, shift_instant(self.end, duration))

    def previous(self, duration: Any = None) -> Period:
        """
        Return the period ending where this one starts.

        Args:
            duration: Length of the new period (default: this period's
                calendar-style length)

        Returns:
            Period ``[start - duration, start)``
        """
        duration = self.date_interval() if duration is None else to_duration(duration)
        return Period(shift_instant(self.start, -duration), self.start)

    # ---- Derivations: combining periods ----

    def merge(self, *others: Period) -> Period:
        """
        Return the smallest period containing this period and all others.

        Args:
            *others: One or more periods

        Returns:
            Period from the earliest start to the latest end

        Raises:
            ArityError: If no other period is given

        Examples:
            >>> march = Period("2014-03-01", "2014-04-01")
            >>> april = Period("2014-04-01", "2014-05-01")
            >>> str(march.merge(april))
            '2014-03-01T00:00:00Z/2014-05-01T00:00:00Z'
        """
        if not others:
            raise ArityError("merge() requires at least one other period")

        periods = [self] + [_require_period(other, "merge") for other in others]
        return Period(
            min(period.start for period in periods),
            max(period.end for period in periods),
        )

    def intersect(self, other: Period) -> Period:
        """
        Return the part of time shared by both periods.

        Raises:
            LogicConflictError: If the periods do not overlap (abutting
                periods do not overlap)
        """
        if not self.overlaps(other):
            raise LogicConflictError(f"Periods {self} and {other} do not overlap")

        return Period(max(self.start, other.start), min(self.end, other.end))

    def gap(self, other: Period) -> Period:
        """
        Return the period between two non-overlapping periods.

        Abutting periods have a zero-length gap located at the shared
        boundary. Periods sharing a start or an end have no gap.

        Args:
            other: Period on either side of this one

        Returns:
            Period from the earlier period's end to the later period's start

        Raises:
            LogicConflictError: If the periods overlap or share a start or end
        """
        if self.overlaps(other) or self.start == other.start or self.end == other.end:
            raise LogicConflictError(f"Periods {self} and {other} have no gap between them")

        earlier, later = sorted((self, other), key=lambda period: period.start)
        return Period(earlier.end, later.start)

    def diff(self, other: Period) -> List[Period]:
        """
        Return the parts of two overlapping periods that are not shared.

        Args:
            other: Overlapping period

        Returns:
            0, 1 or 2 periods sorted by start; together with the intersection
            they rebuild ``self.merge(other)``

        Raises:
            LogicConflictError: If the periods do not overlap

        Examples:
            >>> year = Period("2013-01-01", "2014-01-01")
            >>> [str(p) for p in year.diff(Period("2013-01-01", "2013-04-01"))]
            ['2013-04-01T00:00:00Z/2014-01-01T00:00:00Z']
        """
        if not self.overlaps(other):
            raise LogicConflictError(f"Periods {self} and {other} do not overlap")

        lower = min(self.start, other.start)
        upper = max(self.end, other.end)
        shared = self.intersect(other)

        parts = []
        if lower < shared.start:
            parts.append(Period(lower, shared.start))
        if shared.end < upper:
            parts.append(Period(shared.end, upper))
        return parts

    # ---- Derivations: discretization ----

    def split(self, step: Any) -> Iterator[Period]:
        """
        Lazily cut the period into consecutive sub-periods of a given length.

        Sub-period ``k`` is ``[start + k*step, start + (k+1)*step)``; the last
        one is truncated at ``end``. Merging every yielded period gives back
        this period. Each call returns a new generator.

        Args:
            step: Duration-like value ("1 HOUR", 3600, timedelta, ...)

        Returns:
            Iterator of periods

        Raises:
            InvalidArgumentError: If step is zero or negative (raised
                immediately, not on first iteration)

        Examples:
            >>> day = Period("2014-01-01", "2014-01-02")
            >>> len(list(day.split("10 HOURS")))
            3
        """
        step = to_duration(step)
        if shift_instant(self.start, step) <= self.start:
            raise InvalidArgumentError(f"split() needs a positive step, got {step!r}")

        logger.debug("Splitting %s into steps of %r", self, step)
        return self._iter_split(step)

    def _iter_split(self, step: relativedelta) -> Iterator[Period]:
        index = 0
        chunk_start = self.start
        while chunk_start < self.end:
            index += 1
            try:
                chunk_end = min(self.start + step * index, self.end)
            except (ValueError, OverflowError):
                # Past the last representable instant, so past the end
                chunk_end = self.end
            if chunk_end <= chunk_start:
                raise InvalidArgumentError(f"split() step {step!r} does not advance past {chunk_start}")
            yield Period(chunk_start, chunk_end)
            chunk_start = chunk_end

    # ---- Diffs ----

    def timestamp_interval_diff(self, other: Period) -> int:
        """
        Difference of the two lengths in seconds.

        Positive when this period is longer.
        """
        other = _require_period(other, "timestamp_interval_diff")
        return self.timestamp_interval() - other.timestamp_interval()

    def date_interval_diff(self, other: Period) -> relativedelta:
        """
        Calendar-style difference between the two lengths.

        Both lengths are laid out from the earlier of the two starts and the
        difference is measured from this period's length to the other's:
        ``a.date_interval_diff(b) == -b.date_interval_diff(a)``.

        Args:
            other: Period to compare with

        Returns:
            relativedelta, positive when the other period is longer

        Examples:
            >>> hour = Period("2012-01-01 00:00", "2012-01-01 01:00")
            >>> two_hours = Period("2012-01-01 00:00", "2012-01-01 02:00")
            >>> hour.date_interval_diff(two_hours)
            relativedelta(hours=+1)
        """
        other = _require_period(other, "date_interval_diff")
        anchor = min(self.start, other.start)
        longer, shorter = sorted((self.length(), other.length()), reverse=True)

        diff = relativedelta(anchor + longer, anchor + shorter)
        if self.length() > other.length():
            return -diff
        return diff

    # ---- Serialization ----

    def to_dict(self) -> dict:
        """
        Plain-dict form of the period.

        Returns:
            {"start_date": iso, "end_date": iso, "timezone": "UTC"}
        """
        return {
            "start_date": format_instant(self.start),
            "end_date": format_instant(self.end),
            "timezone": "UTC",
        }

    def to_interval(self) -> pd.Interval:
        """Equivalent ``pandas.Interval`` closed on the left."""
        return pd.Interval(pd.Timestamp(self.start), pd.Timestamp(self.end), closed="left")


__all__ = [
    "Period",
    "format_instant",
    "shift_instant",
]
