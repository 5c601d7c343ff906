"""
Date normalization helpers.

All engines work on plain calendar days. Inputs may be ISO strings,
``date`` or ``datetime`` objects; time-of-day is dropped.
"""

import re
from datetime import date, datetime, timezone
from typing import Union

from switching_deadlines.core.exceptions import InvalidDateError

DateInput = Union[str, date, datetime]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_date(value: DateInput) -> date:
    """
    Normalize a date input to a plain calendar date.

    Args:
        value: ISO 8601 string (YYYY-MM-DD or a full timestamp), date or datetime.
            Timezone-aware datetimes are converted to UTC before truncation.

    Returns:
        The calendar date.

    Raises:
        InvalidDateError: If the value cannot be interpreted as a valid date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            if _ISO_DATE.match(text):
                return date.fromisoformat(text)
            if "T" in text:
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return normalize_date(datetime.fromisoformat(text))
        except ValueError as e:
            raise InvalidDateError(f"Invalid date value: '{value}' ({e})") from e
        raise InvalidDateError(f"Invalid date value: '{value}'")

    raise InvalidDateError(f"Invalid date value: unsupported type {type(value).__name__}")


def to_iso_date_string(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()
