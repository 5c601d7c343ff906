"""
Switching deadlines for German electricity and gas contracts (GPKE / GeLi Gas).
"""

from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.core.exceptions import (
    InvalidDateError,
    RuleNotFoundError,
    ScanLimitExceededError,
    SwitchingDeadlinesError,
)
from switching_deadlines.data.schemas import (
    Bundesland,
    CalendarVersion,
    Commodity,
    CustomHolidayConfig,
    DayInfo,
    DeadlineResult,
    DeadlineRule,
    Holiday,
    HolidayType,
    SwitchingCase,
    UseCase,
    ValidationResult,
)
from switching_deadlines.helpers import calculate_deadline, get_version, validate_date

__version__ = "0.1.0"

__all__ = [
    "Bundesland",
    "CalendarProvider",
    "CalendarVersion",
    "Commodity",
    "CustomHolidayConfig",
    "DayInfo",
    "DeadlineCalculator",
    "DeadlineResult",
    "DeadlineRule",
    "Holiday",
    "HolidayType",
    "InvalidDateError",
    "RuleNotFoundError",
    "ScanLimitExceededError",
    "SwitchingCase",
    "SwitchingDeadlinesError",
    "UseCase",
    "ValidationResult",
    "calculate_deadline",
    "get_version",
    "validate_date",
]
