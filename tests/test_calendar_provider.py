"""
Tests for the calendar provider.
"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import holidays as holidays_lib
import pytest

from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.exceptions import InvalidDateError, ScanLimitExceededError
from switching_deadlines.data.schemas import Config, CustomHolidayConfig, HolidayType


class TestWorkingDayClassification:
    """Tests for is_working_day, is_holiday and get_day_info."""

    def test_regular_weekday(self, calendar):
        """A Wednesday without holiday is a working day."""
        assert calendar.is_working_day("2025-10-01") is True
        assert calendar.is_holiday("2025-10-01") is None

    def test_weekend(self, calendar):
        """Saturdays and Sundays are never working days."""
        assert calendar.is_working_day(date(2025, 10, 4)) is False
        assert calendar.is_working_day(date(2025, 10, 5)) is False

    def test_no_weekend_is_a_working_day(self, calendar):
        """Every Saturday and Sunday of a year is non-working."""
        day = date(2025, 1, 1)
        while day.year == 2025:
            if day.weekday() >= 5:
                assert calendar.is_working_day(day) is False
            day += timedelta(days=1)

    @pytest.mark.parametrize("day", ["2025-01-01", "2025-10-03", "2025-12-24", "2025-12-31"])
    def test_default_non_working_days(self, calendar, day):
        """Neujahr, Einheit, Heiligabend and Silvester are non-working."""
        assert calendar.is_working_day(day) is False

    def test_national_holiday(self, calendar):
        """Tag der Deutschen Einheit is not a working day."""
        holiday = calendar.is_holiday("2025-10-03")

        assert calendar.is_working_day("2025-10-03") is False
        assert holiday.name == "Tag der Deutschen Einheit"
        assert holiday.type == HolidayType.PUBLIC_HOLIDAY

    def test_regional_holiday_counts_everywhere(self, calendar):
        """Regional holidays are non-working days for every caller."""
        # Buß- und Bettag, Sachsen only
        assert calendar.is_working_day("2025-11-19") is False
        # Weltkindertag 2024, Thüringen only
        assert calendar.is_working_day("2024-09-20") is False

    def test_operational_holidays(self, calendar):
        """24.12. and 31.12. are not working days."""
        assert calendar.is_working_day("2025-12-24") is False
        assert calendar.is_holiday("2025-12-31").type == HolidayType.OPERATIONAL_HOLIDAY

    def test_special_holidays(self, calendar):
        """Built-in Sonderfeiertage are not working days."""
        special = calendar.is_holiday("2025-06-06")
        liberation = calendar.is_holiday("2025-05-08")

        assert special.type == HolidayType.SPECIAL_HOLIDAY
        assert special.name == "Einmaliger Sonderfeiertag"
        assert liberation.type == HolidayType.PUBLIC_HOLIDAY
        assert liberation.name == "Tag der Befreiung"

    def test_day_info_holiday(self, calendar):
        """Day info of a holiday carries the holiday."""
        day_info = calendar.get_day_info("2025-12-25")

        assert day_info.date == "2025-12-25"
        assert day_info.is_working_day is False
        assert day_info.holiday.name == "1. Weihnachtstag"

    def test_day_info_weekend(self, calendar):
        """Plain weekend days get a synthetic weekend entry."""
        saturday = calendar.get_day_info("2025-10-04")
        sunday = calendar.get_day_info("2025-10-05")

        assert saturday.holiday.type == HolidayType.WEEKEND
        assert saturday.holiday.name == "Samstag"
        assert sunday.holiday.name == "Sonntag"

    def test_day_info_holiday_on_weekend(self, calendar):
        """A holiday on a weekend is reported as holiday."""
        # Ostersonntag
        day_info = calendar.get_day_info("2025-04-20")
        assert day_info.holiday.type == HolidayType.PUBLIC_HOLIDAY

    def test_day_info_working_day(self, calendar):
        """Working days have no holiday."""
        day_info = calendar.get_day_info("2025-10-02")

        assert day_info.is_working_day is True
        assert day_info.holiday is None


class TestDateInputs:
    """Tests for accepted and rejected date inputs."""

    @pytest.mark.parametrize("value", ["invalid-date", "2025-13-01", "2025-02-30", "", "01.10.2025"])
    def test_invalid_dates(self, calendar, value):
        """Unparseable dates raise InvalidDateError."""
        with pytest.raises(InvalidDateError, match="^Invalid date"):
            calendar.is_working_day(value)

    def test_invalid_date_is_value_error(self, calendar):
        """InvalidDateError can be handled as ValueError."""
        with pytest.raises(ValueError):
            calendar.get_day_info("not-a-date")

    def test_unsupported_type(self, calendar):
        """Non-date types are rejected."""
        with pytest.raises(InvalidDateError):
            calendar.is_working_day(20251001)

    def test_datetime_input(self, calendar):
        """Naive datetimes are truncated to their date."""
        assert calendar.is_working_day(datetime(2025, 10, 2, 23, 59)) is True

    def test_timezone_aware_timestamp_uses_utc(self, calendar):
        """Timestamps with offset are converted to UTC before truncation."""
        # 23:30 at UTC-2 is already 3 October in UTC
        assert calendar.is_working_day("2025-10-02T23:30:00-02:00") is False
        assert calendar.is_working_day("2025-10-02T23:30:00") is True
        assert calendar.is_working_day("2025-10-03T00:30:00Z") is False

        aware = datetime(2025, 10, 2, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
        assert calendar.get_day_info(aware).date == "2025-10-03"


class TestWorkingDayArithmetic:
    """Tests for adding, counting and searching working days."""

    @pytest.mark.parametrize(
        "start,working_days,expected",
        [
            ("2025-10-01", 0, date(2025, 10, 2)),
            ("2025-10-01", 1, date(2025, 10, 3)),
            ("2025-10-01", 2, date(2025, 10, 7)),
            ("2025-10-01", 10, date(2025, 10, 17)),
            ("2025-10-01", 13, date(2025, 10, 22)),
            ("2025-12-30", 2, date(2026, 1, 6)),
            ("2025-12-23", 3, date(2026, 1, 3)),
            ("2024-02-28", 2, date(2024, 3, 2)),
        ],
    )
    def test_add_working_days(self, calendar, start, working_days, expected):
        """The result is the day after the last counted working day."""
        assert calendar.add_working_days(start, working_days) == expected

    def test_add_negative_working_days(self, calendar):
        """Negative working days are rejected."""
        with pytest.raises(ValueError, match="must not be negative"):
            calendar.add_working_days("2025-10-01", -1)

    def test_count_working_days_over_new_year(self, calendar):
        """Test counting across Christmas and New Year."""
        assert calendar.count_working_days("2025-12-22", "2026-01-05") == 6

    def test_count_working_days_single_day(self, calendar):
        """The range is inclusive on both ends."""
        assert calendar.count_working_days("2025-10-01", "2025-10-01") == 1
        assert calendar.count_working_days("2025-10-03", "2025-10-03") == 0

    def test_empty_range(self, calendar):
        """An end before the start yields no days."""
        assert calendar.get_working_days_in_range("2025-10-10", "2025-10-01") == []
        assert calendar.count_working_days("2025-10-10", "2025-10-01") == 0

    def test_working_and_non_working_days_partition_range(self, calendar):
        """Every day of a range is either working or non-working."""
        working = calendar.get_working_days_in_range("2025-10-01", "2025-10-31")
        non_working = calendar.get_non_working_days_in_range("2025-10-01", "2025-10-31")

        assert len(working) + len(non_working) == 31
        assert {d.date for d in working}.isdisjoint(d.date for d in non_working)
        assert working[0].date == "2025-10-01"
        assert non_working[0].date == "2025-10-03"

    def test_next_working_day(self, calendar):
        """Test next working day after a Friday holiday."""
        assert calendar.get_next_working_day("2025-10-03") == date(2025, 10, 6)
        assert calendar.get_next_working_day("2025-12-23") == date(2025, 12, 29)

    def test_previous_working_day(self, calendar):
        """Test previous working day before a Monday."""
        assert calendar.get_previous_working_day("2025-10-06") == date(2025, 10, 2)
        assert calendar.get_previous_working_day("2026-01-02") == date(2025, 12, 30)

    def test_scan_limit(self):
        """Searches stop after max_scan_days."""
        calendar = CalendarProvider(max_scan_days=2)

        with pytest.raises(ScanLimitExceededError, match="2 days"):
            calendar.get_next_working_day("2025-12-23")

        assert calendar.get_next_working_day("2025-10-01") == date(2025, 10, 2)

    def test_scan_limit_with_custom_closing_week(self):
        """A custom closing week longer than the bound stops the search."""
        calendar = CalendarProvider(
            custom_holidays=[
                {"date": f"2025-10-{day:02d}", "name": "Betriebsferien"} for day in range(6, 11)
            ],
            max_scan_days=5,
        )

        with pytest.raises(ScanLimitExceededError):
            calendar.get_next_working_day("2025-10-03")

    def test_invalid_scan_limit(self):
        """The scan limit must be positive."""
        with pytest.raises(ValueError):
            CalendarProvider(max_scan_days=0)


class TestHolidayConfiguration:
    """Tests for custom holidays, special holiday toggle and caching."""

    def test_custom_holiday(self):
        """Custom holidays are non-working days of type sonderfeiertag."""
        calendar = CalendarProvider(
            custom_holidays=[{"date": "2025-10-02", "name": "Betriebsruhe"}]
        )

        holiday = calendar.is_holiday("2025-10-02")
        assert holiday.name == "Betriebsruhe"
        assert holiday.type == HolidayType.SPECIAL_HOLIDAY
        assert calendar.add_working_days("2025-10-01", 1) == date(2025, 10, 7)

    def test_custom_holiday_overrides_catalog(self):
        """A custom holiday replaces a built-in holiday on the same date."""
        calendar = CalendarProvider(
            custom_holidays=[
                CustomHolidayConfig(
                    date="2025-10-03",
                    name="Einheitsfeier",
                    type=HolidayType.PUBLIC_HOLIDAY,
                )
            ]
        )

        assert calendar.is_holiday("2025-10-03").name == "Einheitsfeier"
        assert len(calendar.get_holidays_for_year(2025)) == len(
            CalendarProvider().get_holidays_for_year(2025)
        )

    def test_custom_holiday_only_in_its_year(self):
        """Custom holidays are not repeated annually."""
        calendar = CalendarProvider(
            custom_holidays=[{"date": "2025-07-01", "name": "Betriebsausflug"}]
        )

        assert calendar.is_working_day("2025-07-01") is False
        assert calendar.is_working_day("2026-07-01") is True

    def test_invalid_custom_holiday(self):
        """Custom holidays need a YYYY-MM-DD date."""
        with pytest.raises(ValueError):
            CalendarProvider(custom_holidays=[{"date": "01.07.2025", "name": "Falsch"}])

    def test_disable_special_holidays(self):
        """Without special holidays only the GPKE Sonderfeiertag becomes a working day."""
        calendar = CalendarProvider(use_special_holidays=False)

        assert calendar.is_working_day("2025-06-06") is True
        # Tag der Befreiung is a public holiday, not a Sonderfeiertag
        assert calendar.is_working_day("2025-05-08") is False

    def test_custom_holidays_kept_without_special_holidays(self):
        """The special holiday toggle does not affect custom holidays."""
        calendar = CalendarProvider(
            custom_holidays=[{"date": "2025-10-02", "name": "Betriebsruhe"}],
            use_special_holidays=False,
        )
        assert calendar.is_working_day("2025-10-02") is False

    def test_from_config(self):
        """A provider can be created from configuration."""
        config = Config(
            use_special_holidays=False,
            max_scan_days=10,
            custom_holidays=[{"date": "2025-10-02", "name": "Betriebsruhe"}],
        )
        calendar = CalendarProvider.from_config(config)

        assert calendar.max_scan_days == 10
        assert calendar.is_working_day("2025-06-06") is True
        assert calendar.is_working_day("2025-10-02") is False

    def test_holidays_for_year_sorted(self, calendar):
        """Holidays of a year are sorted and unique by date."""
        holidays = calendar.get_holidays_for_year(2025)
        dates = [h.date for h in holidays]

        # 13 fixed, 8 moving, 2 special
        assert len(holidays) == 23
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)

    def test_holidays_computed_once_per_year(self, calendar):
        """Holiday aggregation is cached per year."""
        with patch.object(calendar, "_compute_holidays", wraps=calendar._compute_holidays) as spy:
            calendar.is_working_day("2025-10-01")
            calendar.is_working_day("2025-10-02")
            calendar.add_working_days("2025-10-01", 13)
            calendar.get_holidays_for_year(2025)

            assert spy.call_count == 1

            calendar.is_working_day("2026-01-01")
            assert spy.call_count == 2

    def test_update_forces_recomputation(self, calendar):
        """Updating custom holidays recomputes the next queried year."""
        with patch.object(calendar, "_compute_holidays", wraps=calendar._compute_holidays) as spy:
            calendar.is_working_day("2025-10-01")
            calendar.update_custom_holidays([])
            calendar.is_working_day("2025-10-01")

            assert spy.call_count == 2

    def test_update_custom_holidays_clears_cache(self, calendar):
        """Replacing custom holidays invalidates cached years."""
        assert calendar.is_working_day("2025-10-02") is True

        calendar.update_custom_holidays([{"date": "2025-10-02", "name": "Betriebsruhe"}])
        assert calendar.is_working_day("2025-10-02") is False

        calendar.update_custom_holidays([])
        assert calendar.is_working_day("2025-10-02") is True

    def test_calendar_version(self, calendar):
        """The packaged version metadata is loaded by default."""
        version = calendar.get_calendar_version()

        assert version.version == "2025.1.4"
        assert version.year == 2025
        assert version.last_updated.startswith("2025-10-01")

    def test_custom_version(self):
        """Version metadata can be passed in."""
        calendar = CalendarProvider(
            version={"version": "2026.1.0", "year": 2026, "lastUpdated": "2026-01-01T00:00:00Z"}
        )
        assert calendar.get_calendar_version().version == "2026.1.0"


class TestAgainstHolidaysLibrary:
    """Cross-check the catalog against the holidays library."""

    def test_nationwide_holidays_2025(self, calendar):
        """Every nationwide public holiday is a non-working day."""
        for day, name in holidays_lib.Germany(years=2025).items():
            assert calendar.is_holiday(day) is not None, f"{day} ({name}) missing"

    @pytest.mark.parametrize("subdiv", ["BW", "SN", "TH", "BB", "BE", "MV"])
    def test_state_holidays_2025(self, calendar, subdiv):
        """Every state public holiday is a non-working day."""
        for day, name in holidays_lib.Germany(subdiv=subdiv, years=2025).items():
            assert calendar.is_holiday(day) is not None, f"{day} ({name}, {subdiv}) missing"
