"""Period module for time interval algebra.

This module provides an immutable half-open time interval ``[start, end)``
and the operations that compare and combine such intervals.

Public API:
    Period(start, end)
        Validated interval; predicates, derivations and diffs are methods

    create_period(start, end) -> Period
        Functional constructor

    period_from_year / _semester / _quarter / _month / _week(...) -> Period
        Calendar factories (half-open, midnight boundaries in the default zone)

    period_from_duration(start, duration) -> Period
    period_from_duration_before_end(end, duration) -> Period
        Duration-anchored factories

    date_range(period, step) -> Iterator[datetime]
        Lazily enumerate instants across a period

    parse_period(text) / period_to_json(period) / periods_to_frame(periods)
        Serialization

Examples:
    >>> from periodalgebra.period import Period, period_from_month
    >>>
    >>> march = period_from_month(2014, 3)
    >>> april = period_from_month(2014, 4)
    >>> march.abuts(april), march.overlaps(april)
    (True, False)
    >>>
    >>> # Zero-length gap between abutting periods
    >>> str(march.gap(april))
    '2014-04-01T00:00:00Z/2014-04-01T00:00:00Z'
    >>>
    >>> # Split into days, lazily
    >>> len(list(march.split("1 DAY")))
    31
"""

from periodalgebra.period.periodcore import Period, format_instant
from periodalgebra.period.periodcalendar import (
    period_from_year,
    period_from_semester,
    period_from_quarter,
    period_from_month,
    period_from_week,
    period_from_duration,
    period_from_duration_before_end,
)
from periodalgebra.period.periodapi import (
    create_period,
    merge_periods,
    date_range,
    period_to_dict,
    period_from_dict,
    period_to_json,
    period_from_json,
    parse_period,
    periods_to_frame,
    format_period_display,
)
from periodalgebra.period.periodnormalize import to_instant, to_duration
from periodalgebra.period.perioderrors import (
    PeriodError,
    InvalidRangeError,
    LogicConflictError,
    ArityError,
    ConversionError,
    InvalidArgumentError,
    OutOfRangeError,
)

__all__ = [
    "Period",
    "format_instant",
    "period_from_year",
    "period_from_semester",
    "period_from_quarter",
    "period_from_month",
    "period_from_week",
    "period_from_duration",
    "period_from_duration_before_end",
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
    "to_instant",
    "to_duration",
    "PeriodError",
    "InvalidRangeError",
    "LogicConflictError",
    "ArityError",
    "ConversionError",
    "InvalidArgumentError",
    "OutOfRangeError",
]
