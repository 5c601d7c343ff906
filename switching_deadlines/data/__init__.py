"""
Data models and schemas for switching deadlines.
"""

from switching_deadlines.data.schemas import (
    Bundesland,
    CalendarVersion,
    Commodity,
    Config,
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

__all__ = [
    "Bundesland",
    "CalendarVersion",
    "Commodity",
    "Config",
    "CustomHolidayConfig",
    "DayInfo",
    "DeadlineResult",
    "DeadlineRule",
    "Holiday",
    "HolidayType",
    "SwitchingCase",
    "UseCase",
    "ValidationResult",
]
