"""
One-call helpers using the default calendar and rules.
"""

from datetime import date
from typing import Optional

from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.dates import DateInput
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.data.schemas import CalendarVersion, SwitchingCase


def calculate_deadline(switching_case: SwitchingCase, from_date: Optional[DateInput] = None) -> date:
    """
    Calculate the earliest start date with default settings.

    Example:
        >>> calculate_deadline(
        ...     SwitchingCase(commodity="power", use_case="switch", requires_termination=True),
        ...     "2025-10-01",
        ... )
        datetime.date(2025, 10, 7)
    """
    return DeadlineCalculator().calculate_earliest_start_date(switching_case, from_date).earliest_start_date


def validate_date(
    switching_case: SwitchingCase,
    proposed_date: DateInput,
    from_date: Optional[DateInput] = None,
) -> bool:
    """Check a proposed start date with default settings."""
    return DeadlineCalculator().validate_start_date(switching_case, proposed_date, from_date).is_valid


def get_version() -> CalendarVersion:
    """Get the version of the built-in calendar."""
    return CalendarProvider().get_calendar_version()
