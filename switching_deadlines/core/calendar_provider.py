"""
Calendar provider for working day classification and arithmetic.
"""

import logging
import threading
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from switching_deadlines.core.dates import DateInput, normalize_date, to_iso_date_string
from switching_deadlines.core.exceptions import ScanLimitExceededError
from switching_deadlines.core.holiday_catalog import (
    filter_holidays_for_year,
    get_fixed_holidays,
    get_moving_holidays,
    get_special_holidays,
)
from switching_deadlines.data.schemas import (
    CalendarVersion,
    Config,
    CustomHolidayConfig,
    DayInfo,
    Holiday,
    HolidayType,
)

logger = logging.getLogger(__name__)

DEFAULT_VERSION_PATH = Path(__file__).parent.parent / "data" / "version.json"

# One year covers every realistic holiday configuration.
DEFAULT_MAX_SCAN_DAYS = 366

HolidayMap = Dict[str, Holiday]
CustomHolidayInput = Union[CustomHolidayConfig, dict]


def load_default_version() -> CalendarVersion:
    """Load the version metadata shipped with the package."""
    return CalendarVersion.model_validate_json(DEFAULT_VERSION_PATH.read_text(encoding="utf-8"))


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


class CalendarProvider:
    """
    Classifies calendar days as working or non-working days.

    Holidays of a year are aggregated from the fixed, moving and special
    catalogs plus the custom holidays, in that order; a later source
    replaces an earlier entry for the same date. The aggregated map is
    cached per year until the custom holidays are replaced.

    Regional restrictions of a holiday are informational only: every
    registered holiday is a non-working day for every caller.

    Usage:
        calendar = CalendarProvider()
        calendar.is_working_day("2025-10-03")  # False (Tag der Deutschen Einheit)
        calendar.add_working_days("2025-10-01", 2)  # date(2025, 10, 7)
    """

    def __init__(
        self,
        custom_holidays: Optional[Iterable[CustomHolidayInput]] = None,
        version: Optional[Union[CalendarVersion, dict]] = None,
        use_special_holidays: bool = True,
        max_scan_days: int = DEFAULT_MAX_SCAN_DAYS,
    ):
        """
        Initialize the calendar provider.

        Args:
            custom_holidays: Additional holidays, as CustomHolidayConfig or dicts.
            version: Calendar version metadata. Defaults to the packaged version.
            use_special_holidays: Include the built-in Sonderfeiertage.
            max_scan_days: Maximum number of days scanned when searching the
                next or previous working day.
        """
        if max_scan_days < 1:
            raise ValueError("max_scan_days must be at least 1")

        self.use_special_holidays = use_special_holidays
        self.max_scan_days = max_scan_days
        self._version = self._coerce_version(version)
        self._custom_holidays = self._convert_custom_holidays(custom_holidays or [])
        self._cache: Dict[int, HolidayMap] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Config) -> "CalendarProvider":
        """Create a provider from a loaded configuration."""
        return cls(
            custom_holidays=config.custom_holidays,
            use_special_holidays=config.use_special_holidays,
            max_scan_days=config.max_scan_days,
        )

    @staticmethod
    def _coerce_version(version: Optional[Union[CalendarVersion, dict]]) -> CalendarVersion:
        if version is None:
            return load_default_version()
        if isinstance(version, CalendarVersion):
            return version
        return CalendarVersion.model_validate(version)

    @staticmethod
    def _convert_custom_holidays(custom_holidays: Iterable[CustomHolidayInput]) -> List[Holiday]:
        converted = []
        for item in custom_holidays:
            config = item if isinstance(item, CustomHolidayConfig) else CustomHolidayConfig.model_validate(item)
            converted.append(config.to_holiday())
        return converted

    def _get_holidays_for_year(self, year: int) -> HolidayMap:
        with self._lock:
            holiday_map = self._cache.get(year)
            if holiday_map is None:
                holiday_map = self._compute_holidays(year)
                self._cache[year] = holiday_map
            return holiday_map

    def _compute_holidays(self, year: int) -> HolidayMap:
        """Aggregate all holiday sources for a year into a date lookup."""
        logger.debug(f"Computing holidays for {year}")

        holidays = get_fixed_holidays(year) + get_moving_holidays(year)

        special_holidays = get_special_holidays(year)
        if self.use_special_holidays:
            holidays.extend(special_holidays)
        else:
            # Only market-specific Sonderfeiertage are optional
            holidays.extend(h for h in special_holidays if h.type != HolidayType.SPECIAL_HOLIDAY)

        holidays.extend(filter_holidays_for_year(self._custom_holidays, year))

        holiday_map: HolidayMap = {}
        for holiday in holidays:
            holiday_map[holiday.date] = holiday
        return holiday_map

    def is_holiday(self, day: DateInput) -> Optional[Holiday]:
        """
        Look up the holiday registered for a date.

        Args:
            day: Date to check.

        Returns:
            The Holiday, or None if the date is not a holiday.

        Raises:
            InvalidDateError: If the date cannot be parsed.
        """
        normalized = normalize_date(day)
        return self._get_holidays_for_year(normalized.year).get(to_iso_date_string(normalized))

    def is_working_day(self, day: DateInput) -> bool:
        """
        Check whether a date is a working day.

        Args:
            day: Date to check.

        Returns:
            False for Saturdays, Sundays and holidays, True otherwise.
        """
        normalized = normalize_date(day)
        if _is_weekend(normalized):
            return False
        return self.is_holiday(normalized) is None

    def get_day_info(self, day: DateInput) -> DayInfo:
        """
        Get the classification of a date including holiday details.

        Weekends without a registered holiday get a synthetic WEEKEND entry.

        Args:
            day: Date to analyze.

        Returns:
            DayInfo for the date.
        """
        normalized = normalize_date(day)
        iso = to_iso_date_string(normalized)

        holiday = self.is_holiday(normalized)
        if holiday is None and _is_weekend(normalized):
            holiday = Holiday(
                date=iso,
                name="Sonntag" if normalized.weekday() == 6 else "Samstag",
                type=HolidayType.WEEKEND,
            )

        return DayInfo(date=iso, is_working_day=holiday is None, holiday=holiday)

    def add_working_days(self, start: DateInput, working_days: int) -> date:
        """
        Add working days to a date.

        Walks forward from ``start`` until ``working_days`` working days have
        been passed and returns the calendar day following the last of them.

        Args:
            start: Reference date, not counted itself.
            working_days: Number of working days, zero or more.

        Returns:
            The day after the last counted working day.

        Raises:
            ValueError: If working_days is negative.
        """
        if working_days < 0:
            raise ValueError("working_days must not be negative")

        current = normalize_date(start)
        counted = 0
        while counted < working_days:
            current += timedelta(days=1)
            if self.is_working_day(current):
                counted += 1

        return current + timedelta(days=1)

    def _collect_days(self, start: DateInput, end: DateInput, working: bool) -> List[DayInfo]:
        current = normalize_date(start)
        last = normalize_date(end)
        days = []
        while current <= last:
            day_info = self.get_day_info(current)
            if day_info.is_working_day == working:
                days.append(day_info)
            current += timedelta(days=1)
        return days

    def get_working_days_in_range(self, start: DateInput, end: DateInput) -> List[DayInfo]:
        """
        Get all working days between two dates (inclusive).

        Args:
            start: First day of the range.
            end: Last day of the range.

        Returns:
            DayInfo objects of the working days, in calendar order.
        """
        return self._collect_days(start, end, working=True)

    def get_non_working_days_in_range(self, start: DateInput, end: DateInput) -> List[DayInfo]:
        """
        Get all weekends and holidays between two dates (inclusive).

        Args:
            start: First day of the range.
            end: Last day of the range.

        Returns:
            DayInfo objects of the non-working days, in calendar order.
        """
        return self._collect_days(start, end, working=False)

    def count_working_days(self, start: DateInput, end: DateInput) -> int:
        """Count the working days between two dates (inclusive)."""
        return len(self.get_working_days_in_range(start, end))

    def _scan(self, day: DateInput, step: int) -> date:
        current = normalize_date(day)
        for _ in range(self.max_scan_days):
            current += timedelta(days=step)
            if self.is_working_day(current):
                return current
        direction = "after" if step > 0 else "before"
        raise ScanLimitExceededError(
            f"No working day found within {self.max_scan_days} days {direction} {normalize_date(day)}"
        )

    def get_next_working_day(self, day: DateInput) -> date:
        """
        Get the first working day after a date.

        Raises:
            ScanLimitExceededError: If none is found within max_scan_days.
        """
        return self._scan(day, 1)

    def get_previous_working_day(self, day: DateInput) -> date:
        """
        Get the last working day before a date.

        Raises:
            ScanLimitExceededError: If none is found within max_scan_days.
        """
        return self._scan(day, -1)

    def get_holidays_for_year(self, year: int) -> List[Holiday]:
        """
        Get all registered holidays of a year.

        Args:
            year: Year to list.

        Returns:
            Holidays sorted by date.
        """
        return sorted(self._get_holidays_for_year(year).values(), key=lambda h: h.date)

    def get_calendar_version(self) -> CalendarVersion:
        """Get the version metadata of this calendar."""
        return self._version

    def update_custom_holidays(self, custom_holidays: Iterable[CustomHolidayInput]) -> None:
        """
        Replace the custom holidays and clear the holiday cache.

        Args:
            custom_holidays: New set of custom holidays.
        """
        converted = self._convert_custom_holidays(custom_holidays)
        with self._lock:
            self._custom_holidays = converted
            self._cache.clear()
        logger.debug(f"Custom holidays replaced ({len(converted)} entries), cache cleared")
