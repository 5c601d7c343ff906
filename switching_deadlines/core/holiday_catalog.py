"""
Holiday catalog for the German energy market.

Provides fixed-date holidays, Easter-based moving holidays and the curated
list of special (often one-time) non-working days. All functions are pure
functions of the year.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from dateutil.easter import EASTER_WESTERN, easter

from switching_deadlines.data.schemas import Bundesland, Holiday, HolidayType

GPKE_OPERATIONAL_DESCRIPTION = "Genereller Feiertag nach GPKE/GeLi Gas"

_WEDNESDAY = 2


def _holiday(
    day: date,
    name: str,
    bundeslaender: Iterable[Bundesland] = (),
    holiday_type: HolidayType = HolidayType.PUBLIC_HOLIDAY,
    description: Optional[str] = None,
) -> Holiday:
    return Holiday(
        date=day.isoformat(),
        name=name,
        type=holiday_type,
        bundeslaender=list(bundeslaender),
        description=description,
    )


def get_fixed_holidays(year: int) -> List[Holiday]:
    """
    Get all fixed-date holidays for a year.

    Args:
        year: Year to build the holidays for.

    Returns:
        List of Holiday objects in calendar order.
    """
    return [
        _holiday(date(year, 1, 1), "Neujahr"),
        _holiday(
            date(year, 1, 6),
            "Heilige Drei Könige",
            [Bundesland.BW, Bundesland.BY, Bundesland.ST],
        ),
        _holiday(
            date(year, 3, 8),
            "Internationaler Frauentag",
            [Bundesland.BE, Bundesland.MV],
        ),
        _holiday(date(year, 5, 1), "Tag der Arbeit"),
        # Only in parts of Bayern and in Saarland
        _holiday(
            date(year, 8, 15),
            "Mariä Himmelfahrt",
            [Bundesland.BY, Bundesland.SL],
        ),
        _holiday(date(year, 9, 20), "Weltkindertag", [Bundesland.TH]),
        _holiday(date(year, 10, 3), "Tag der Deutschen Einheit"),
        _holiday(
            date(year, 10, 31),
            "Reformationstag",
            [
                Bundesland.BB,
                Bundesland.HB,
                Bundesland.HH,
                Bundesland.MV,
                Bundesland.NI,
                Bundesland.SN,
                Bundesland.ST,
                Bundesland.SH,
                Bundesland.TH,
            ],
        ),
        _holiday(
            date(year, 11, 1),
            "Allerheiligen",
            [
                Bundesland.BW,
                Bundesland.BY,
                Bundesland.NW,
                Bundesland.RP,
                Bundesland.SL,
            ],
        ),
        _holiday(
            date(year, 12, 24),
            "Heiligabend",
            holiday_type=HolidayType.OPERATIONAL_HOLIDAY,
            description=GPKE_OPERATIONAL_DESCRIPTION,
        ),
        _holiday(date(year, 12, 25), "1. Weihnachtstag"),
        _holiday(date(year, 12, 26), "2. Weihnachtstag"),
        _holiday(
            date(year, 12, 31),
            "Silvester",
            holiday_type=HolidayType.OPERATIONAL_HOLIDAY,
            description=GPKE_OPERATIONAL_DESCRIPTION,
        ),
    ]


def calculate_easter_sunday(year: int) -> date:
    """Easter Sunday of the Gregorian calendar."""
    return easter(year, EASTER_WESTERN)


def calculate_day_of_repentance(year: int) -> date:
    """
    Calculate Buß- und Bettag, the last Wednesday before November 23.

    If November 23 is itself a Wednesday, the holiday is one week earlier.

    Args:
        year: Year to calculate the date for.

    Returns:
        Date of the Day of Repentance and Prayer.
    """
    nov23 = date(year, 11, 23)
    offset = (nov23.weekday() - _WEDNESDAY) % 7 or 7
    return nov23 - timedelta(days=offset)


def get_moving_holidays(year: int) -> List[Holiday]:
    """
    Get all moving holidays (Easter-based plus Buß- und Bettag) for a year.

    Args:
        year: Year to build the holidays for.

    Returns:
        List of Holiday objects.
    """
    easter_sunday = calculate_easter_sunday(year)

    def from_easter(days: int) -> date:
        return easter_sunday + timedelta(days=days)

    return [
        _holiday(from_easter(-2), "Karfreitag"),
        _holiday(easter_sunday, "Ostersonntag"),
        _holiday(from_easter(1), "Ostermontag"),
        _holiday(from_easter(39), "Christi Himmelfahrt"),
        _holiday(from_easter(49), "Pfingstsonntag"),
        _holiday(from_easter(50), "Pfingstmontag"),
        _holiday(
            from_easter(60),
            "Fronleichnam",
            [
                Bundesland.BW,
                Bundesland.BY,
                Bundesland.HE,
                Bundesland.NW,
                Bundesland.RP,
                Bundesland.SL,
            ],
        ),
        _holiday(calculate_day_of_repentance(year), "Buß- und Bettag", [Bundesland.SN]),
    ]


# Update when the Bundesnetzagentur announces special operational days or
# a government declares a one-time public holiday.
_SPECIAL_HOLIDAYS = (
    Holiday(
        date="2020-05-08",
        name="Tag der Befreiung",
        type=HolidayType.PUBLIC_HOLIDAY,
        bundeslaender=[Bundesland.BE],
        description="75. Jahrestag der Befreiung vom Nationalsozialismus (einmalig)",
        is_one_time=True,
    ),
    Holiday(
        date="2025-05-08",
        name="Tag der Befreiung",
        type=HolidayType.PUBLIC_HOLIDAY,
        bundeslaender=[Bundesland.BE],
        description="80. Jahrestag der Befreiung vom Nationalsozialismus (einmalig)",
        is_one_time=True,
    ),
    Holiday(
        date="2025-06-06",
        name="Einmaliger Sonderfeiertag",
        type=HolidayType.SPECIAL_HOLIDAY,
        description="Koordinierter Start des 24h-Lieferantenwechsels (GPKE)",
        is_one_time=True,
    ),
)


def get_all_special_holidays() -> List[Holiday]:
    """Get the complete curated list of Sonderfeiertage."""
    return [holiday.model_copy(deep=True) for holiday in _SPECIAL_HOLIDAYS]


def filter_holidays_for_year(holidays: Iterable[Holiday], year: int) -> List[Holiday]:
    """
    Keep only the holidays whose date lies in the given year.

    Args:
        holidays: Holidays to filter.
        year: Year to keep.

    Returns:
        Filtered list, original order preserved.
    """
    return [h for h in holidays if int(h.date.split("-")[0]) == year]


def get_special_holidays(year: int) -> List[Holiday]:
    """Get the Sonderfeiertage that fall in the given year."""
    return filter_holidays_for_year(get_all_special_holidays(), year)
