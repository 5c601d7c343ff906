"""
Data models for switching deadlines using Pydantic.
"""

from datetime import date as Date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Bundesland(str, Enum):
    """German federal states (Bundeslaender)."""

    BB = "BB"  # Brandenburg
    BE = "BE"  # Berlin
    BW = "BW"  # Baden-Wuerttemberg
    BY = "BY"  # Bayern
    HB = "HB"  # Bremen
    HE = "HE"  # Hessen
    HH = "HH"  # Hamburg
    MV = "MV"  # Mecklenburg-Vorpommern
    NI = "NI"  # Niedersachsen
    NW = "NW"  # Nordrhein-Westfalen
    RP = "RP"  # Rheinland-Pfalz
    SH = "SH"  # Schleswig-Holstein
    SL = "SL"  # Saarland
    SN = "SN"  # Sachsen
    ST = "ST"  # Sachsen-Anhalt
    TH = "TH"  # Thueringen


class HolidayType(str, Enum):
    """Kind of non-working day."""

    WEEKEND = "weekend"
    PUBLIC_HOLIDAY = "public_holiday"
    OPERATIONAL_HOLIDAY = "operational_holiday"  # 24.12. and 31.12. per GPKE/GeLi Gas
    SPECIAL_HOLIDAY = "sonderfeiertag"


class Commodity(str, Enum):
    """Supplied commodity."""

    POWER = "power"
    GAS = "gas"


class UseCase(str, Enum):
    """Market process a contract start belongs to."""

    RELOCATION = "relocation"  # Einzug
    SWITCH = "switch"  # Lieferantenwechsel


def _validate_iso_date(value: str) -> str:
    """Ensure a string is a plain YYYY-MM-DD calendar date."""
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValueError(f"Date must be formatted as YYYY-MM-DD, got '{value}'")
    Date.fromisoformat(value)
    return value


class Holiday(BaseModel):
    """A registered non-working day."""

    date: str = Field(..., description="ISO date string (YYYY-MM-DD)")
    name: str = Field(..., description="Name of the holiday in German")
    type: HolidayType = Field(..., description="Kind of holiday")
    bundeslaender: List[Bundesland] = Field(
        default_factory=list, description="Federal states the holiday applies to, empty for nationwide"
    )
    description: Optional[str] = Field(default=None, description="Optional description")
    is_one_time: Optional[bool] = Field(default=None, description="Holiday does not repeat annually")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _validate_iso_date(v)

    @property
    def is_nationwide(self) -> bool:
        """Whether the holiday has no regional restriction."""
        return not self.bundeslaender


class CustomHolidayConfig(BaseModel):
    """Caller-supplied holiday, e.g. a company-wide closing day."""

    date: str = Field(..., description="ISO date string (YYYY-MM-DD)")
    name: str = Field(..., description="Name of the holiday")
    type: HolidayType = Field(default=HolidayType.SPECIAL_HOLIDAY, description="Kind of holiday")
    bundeslaender: List[Bundesland] = Field(default_factory=list, description="Federal states")
    description: Optional[str] = Field(default=None, description="Optional description")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _validate_iso_date(v)

    def to_holiday(self) -> Holiday:
        """Convert to a regular Holiday entry."""
        return Holiday(
            date=self.date,
            name=self.name,
            type=self.type,
            bundeslaender=list(self.bundeslaender),
            description=self.description,
        )


class DayInfo(BaseModel):
    """Classification of a single calendar day."""

    date: str = Field(..., description="ISO date string (YYYY-MM-DD)")
    is_working_day: bool = Field(..., description="Whether the day is a working day")
    holiday: Optional[Holiday] = Field(
        default=None, description="Holiday or synthetic weekend entry for non-working days"
    )


class CalendarVersion(BaseModel):
    """Version metadata of the holiday calendar."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(..., description="Version identifier, e.g. 2025.1.0")
    year: int = Field(..., description="Calendar year this version applies to")
    last_updated: str = Field(..., alias="lastUpdated", description="ISO 8601 timestamp of last change")


class DeadlineRule(BaseModel):
    """Lead-time rule for one switching case."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique rule identifier")
    commodity: Commodity
    use_case: UseCase
    requires_termination: bool = Field(..., description="Rule applies to cases with termination")
    required_working_days: int = Field(..., ge=0, description="Required lead time in working days")
    allows_retrospective: bool = Field(default=False, description="Start date may lie in the past")
    max_retrospective_days: Optional[int] = Field(
        default=None, ge=0, description="Maximum retrospective period in calendar days"
    )
    description: str = Field(default="", description="Human readable description")


class SwitchingCase(BaseModel):
    """Lookup key for a deadline rule."""

    model_config = ConfigDict(frozen=True)

    commodity: Commodity
    use_case: UseCase
    requires_termination: bool

    def describe(self) -> str:
        """Short human readable form, e.g. 'power switch with termination'."""
        termination = "with" if self.requires_termination else "without"
        return f"{self.commodity.value} {self.use_case.value} {termination} termination"


class DeadlineResult(BaseModel):
    """Result of an earliest start date calculation."""

    earliest_start_date: Date = Field(..., description="Earliest permissible contract start")
    earliest_start_date_string: str = Field(..., description="Earliest start as ISO string")
    working_days_applied: int = Field(..., ge=0, description="Working days of lead time applied")
    calendar_days_total: int = Field(
        ..., description="Calendar days between reference date and earliest start"
    )
    is_retrospective: bool = Field(..., description="Whether the start may lie in the past")
    rule_applied: DeadlineRule = Field(..., description="Rule used for the calculation")


class ValidationResult(BaseModel):
    """Result of validating a proposed start date."""

    is_valid: bool = Field(..., description="Proposed date is on or after the earliest start")
    proposed_date: Date = Field(..., description="The validated date")
    earliest_valid_date: Optional[Date] = Field(
        default=None, description="Earliest valid date, only set if the proposal is invalid"
    )
    rule_applied: DeadlineRule = Field(..., description="Rule used for the validation")


class Config(BaseModel):
    """Configuration for switching deadline calculations."""

    use_special_holidays: bool = Field(default=True, description="Include built-in Sonderfeiertage")
    max_scan_days: int = Field(
        default=366, ge=1, le=3660, description="Upper bound for next/previous working day scans"
    )
    custom_holidays: List[CustomHolidayConfig] = Field(
        default_factory=list, description="Additional organisation-specific holidays"
    )
    output_format: str = Field(default="console", description="Default output format: console, json or csv")
    output_directory: str = Field(default="results", description="Directory for output files")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    log_level: str = Field(default="WARNING", description="Logging level for CLI and servers")

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        if v not in ("console", "json", "csv"):
            raise ValueError("output_format must be one of: console, json, csv")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level
