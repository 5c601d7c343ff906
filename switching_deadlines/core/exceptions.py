"""
Exceptions raised by the calendar and deadline engines.
"""


class SwitchingDeadlinesError(Exception):
    """Base class for all switching deadline errors."""


class InvalidDateError(SwitchingDeadlinesError, ValueError):
    """A date input could not be parsed or is not a valid calendar date."""


class RuleNotFoundError(SwitchingDeadlinesError, LookupError):
    """No deadline rule is configured for a switching case."""


class ScanLimitExceededError(SwitchingDeadlinesError, RuntimeError):
    """A working day scan found no working day within the configured bound."""
