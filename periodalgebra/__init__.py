"""Period Algebra - Immutable Time Intervals

Public API for half-open time intervals and the algebra over them.

Usage:
    from periodalgebra import Period, create_period, period_from_month

    # Build periods
    march = period_from_month(2014, 3)                 # [2014-03-01, 2014-04-01)
    spring = create_period("2014-03-01", "2014-06-01")

    # Compare them
    spring.contains(march)                             # True
    march.abuts(period_from_month(2014, 4))            # True

    # Derive new periods
    march.next()                                       # April 2014
    spring.diff(march)                                 # [Period(2014-04-01, 2014-06-01)]
    list(march.split("1 WEEK"))                        # 5 sub-periods, last one truncated

    # Serialize
    str(march)                                         # '2014-03-01T00:00:00Z/2014-04-01T00:00:00Z'

Naive datetimes and strings without an offset are read in the zone named by
the PERIODALGEBRA_DEFAULT_TZ environment variable (default: UTC).
"""

__version__ = "0.1.0"

# ============================================================================
# Period Value Type
# ============================================================================
# Primary interface: periodalgebra.period.periodcore.Period

from .period.periodcore import (
    Period,                  # Half-open interval [start, end) with its algebra
    format_instant,          # UTC instant -> ISO 8601 with Z suffix
)

# ============================================================================
# Construction & Calendar Factories
# ============================================================================

from .period.periodapi import (
    create_period,           # Validated constructor
    merge_periods,           # Smallest period covering all arguments
)

from .period.periodcalendar import (
    period_from_year,        # [Y-01-01, Y+1-01-01)
    period_from_semester,    # Jan-Jun / Jul-Dec
    period_from_quarter,     # Q1..Q4
    period_from_month,       # 1..12
    period_from_week,        # ISO 8601 week, Monday start
    period_from_duration,    # [start, start + duration)
    period_from_duration_before_end,  # [end - duration, end)
)

# ============================================================================
# Enumeration, Serialization & Display
# ============================================================================

from .period.periodapi import (
    date_range,              # Lazily enumerate instants at a fixed step
    period_to_dict,          # Period -> dict
    period_from_dict,        # dict -> Period
    period_to_json,          # Period -> JSON string
    period_from_json,        # JSON string -> Period
    parse_period,            # ISO 8601 interval text -> Period
    periods_to_frame,        # Periods -> pandas DataFrame
    format_period_display,   # Human-readable description
)

# ============================================================================
# Normalization & Configuration
# ============================================================================

from .period.periodnormalize import (
    to_instant,              # Instant-like value -> UTC datetime
    to_duration,             # Duration-like value -> relativedelta
)

from .period.periodconfig import (
    PeriodConfig,            # Runtime settings
    load_config,             # Read settings from the environment
)

# ============================================================================
# Errors
# ============================================================================

from .period.perioderrors import (
    PeriodError,             # Base class
    InvalidRangeError,       # end before start
    LogicConflictError,      # intersect/gap/diff precondition failed
    ArityError,              # merge() without another period
    ConversionError,         # unreadable instant or duration
    InvalidArgumentError,    # malformed argument
    OutOfRangeError,         # calendar index out of bounds
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "Period",               # Half-open interval with its algebra
    "create_period",        # Validated constructor

    # ========================================================================
    # Construction
    # ========================================================================
    "merge_periods",
    "period_from_year",
    "period_from_semester",
    "period_from_quarter",
    "period_from_month",
    "period_from_week",
    "period_from_duration",
    "period_from_duration_before_end",

    # ========================================================================
    # Enumeration, Serialization & Display
    # ========================================================================
    "date_range",
    "period_to_dict",
    "period_from_dict",
    "period_to_json",
    "period_from_json",
    "parse_period",
    "periods_to_frame",
    "format_period_display",
    "format_instant",

    # ========================================================================
    # Normalization & Configuration
    # ========================================================================
    "to_instant",
    "to_duration",
    "PeriodConfig",
    "load_config",

    # ========================================================================
    # Errors
    # ========================================================================
    "PeriodError",
    "InvalidRangeError",
    "LogicConflictError",
    "ArityError",
    "ConversionError",
    "InvalidArgumentError",
    "OutOfRangeError",
]
