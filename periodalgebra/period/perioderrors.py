"""Period Errors
-------------

Exception types raised by the period algebra.

Every error derives from ``PeriodError`` and from the built-in exception a
caller would naturally expect, so ``except ValueError`` keeps working:

  - InvalidRangeError: a period would end before it starts
  - LogicConflictError: two periods are not in the relationship an
    operation needs (overlap for intersect/diff, disjoint for gap)
  - ArityError: merge called without another period
  - ConversionError: a value cannot be read as an instant or a duration
  - InvalidArgumentError: malformed argument (non-integer year, bad step)
  - OutOfRangeError: calendar index outside its bounds (week 54, month 13)
"""


class PeriodError(Exception):
    """Base class for all period algebra errors."""


class InvalidRangeError(PeriodError, ValueError):
    """Raised when a period would have its end before its start."""


class LogicConflictError(PeriodError, ValueError):
    """Raised when two periods do not satisfy an operation's precondition."""


class ArityError(PeriodError, TypeError):
    """Raised when merge is called without any other period."""


class ConversionError(PeriodError, ValueError):
    """Raised when a value cannot be converted to an instant or a duration."""


class InvalidArgumentError(PeriodError, ValueError):
    """Raised on a malformed argument such as a non-integer year."""


class OutOfRangeError(PeriodError, ValueError):
    """Raised when a calendar index is outside its valid bounds."""


__all__ = [
    "PeriodError",
    "InvalidRangeError",
    "LogicConflictError",
    "ArityError",
    "ConversionError",
    "InvalidArgumentError",
    "OutOfRangeError",
]
