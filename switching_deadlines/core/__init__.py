"""
Core business logic for holiday calendars and switching deadlines.
"""

from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.core.exceptions import (
    InvalidDateError,
    RuleNotFoundError,
    ScanLimitExceededError,
    SwitchingDeadlinesError,
)
from switching_deadlines.core.rules import DEFAULT_DEADLINE_RULES, find_applicable_rule

__all__ = [
    "CalendarProvider",
    "DEFAULT_DEADLINE_RULES",
    "DeadlineCalculator",
    "InvalidDateError",
    "RuleNotFoundError",
    "ScanLimitExceededError",
    "SwitchingDeadlinesError",
    "find_applicable_rule",
]
