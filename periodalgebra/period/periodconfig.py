"""Period Configuration
--------------------

Runtime settings for the period algebra, read from the environment.

Environment:
  - PERIODALGEBRA_DEFAULT_TZ: IANA zone used for naive datetimes, dates and
    strings without an offset (default: "UTC")
  - PERIODALGEBRA_TIMESPEC: ``datetime.isoformat`` timespec used when
    serializing ("auto" drops zero microseconds; default: "auto")
"""

import os
from dataclasses import dataclass
from datetime import tzinfo

from dateutil import tz

from periodalgebra.period.perioderrors import InvalidArgumentError

DEFAULT_TZ_ENV = "PERIODALGEBRA_DEFAULT_TZ"
TIMESPEC_ENV = "PERIODALGEBRA_TIMESPEC"

_VALID_TIMESPECS = ("auto", "seconds", "milliseconds", "microseconds")


@dataclass(frozen=True)
class PeriodConfig:
    """Settings that control how periods read and write instants."""

    default_tz: str = "UTC"  # Zone for naive inputs
    serialize_timespec: str = "auto"  # isoformat() timespec for output


def load_config() -> PeriodConfig:
    """
    Build a PeriodConfig from the environment.

    The environment is read on every call so that tests and long-running
    processes pick up changes.

    Returns:
        PeriodConfig with environment overrides applied

    Raises:
        InvalidArgumentError: If PERIODALGEBRA_TIMESPEC is not a valid timespec
    """
    default_tz = os.environ.get(DEFAULT_TZ_ENV, "UTC").strip() or "UTC"
    timespec = os.environ.get(TIMESPEC_ENV, "auto").strip().lower() or "auto"

    if timespec not in _VALID_TIMESPECS:
        raise InvalidArgumentError(
            f"{TIMESPEC_ENV} must be one of {_VALID_TIMESPECS}, got {timespec!r}"
        )

    return PeriodConfig(default_tz=default_tz, serialize_timespec=timespec)


def default_timezone() -> tzinfo:
    """
    Resolve the configured default timezone.

    Returns:
        tzinfo for PERIODALGEBRA_DEFAULT_TZ

    Raises:
        InvalidArgumentError: If the zone name is unknown

    Examples:
        >>> default_timezone()
        tzutc()
    """
    name = load_config().default_tz
    if name.upper() == "UTC":
        return tz.UTC

    zone = tz.gettz(name)
    if zone is None:
        raise InvalidArgumentError(f"Unknown timezone in {DEFAULT_TZ_ENV}: {name!r}")
    return zone


__all__ = [
    "DEFAULT_TZ_ENV",
    "TIMESPEC_ENV",
    "PeriodConfig",
    "load_config",
    "default_timezone",
]
