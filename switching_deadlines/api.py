"""
FastAPI REST API for switching deadlines.
"""

from datetime import date
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from switching_deadlines import __version__
from switching_deadlines.config.manager import ConfigManager
from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.core.exceptions import (
    InvalidDateError,
    RuleNotFoundError,
    ScanLimitExceededError,
)
from switching_deadlines.data.schemas import (
    CalendarVersion,
    Commodity,
    DayInfo,
    DeadlineResult,
    DeadlineRule,
    Holiday,
    SwitchingCase,
    UseCase,
    ValidationResult,
)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
calendar_provider = CalendarProvider.from_config(config)
calculator = DeadlineCalculator(calendar_provider)


# API Models
class DeadlineRequest(BaseModel):
    """Request model for an earliest start date calculation."""

    commodity: Commodity = Field(..., description="power or gas")
    use_case: UseCase = Field(..., description="relocation or switch")
    requires_termination: bool = Field(False, description="Previous contract must be terminated")
    from_date: Optional[date] = Field(None, description="Reference date, defaults to today")

    def switching_case(self) -> SwitchingCase:
        return SwitchingCase(
            commodity=self.commodity,
            use_case=self.use_case,
            requires_termination=self.requires_termination,
        )


class ValidateRequest(DeadlineRequest):
    """Request model for validating a proposed start date."""

    proposed_date: date = Field(..., description="Proposed contract start date")


class WorkingDaysResponse(BaseModel):
    """Response model for a working day count."""

    start_date: date
    end_date: date
    working_days: int
    days: List[DayInfo]


# FastAPI app
app = FastAPI(
    title="Switching Deadlines API",
    description="Earliest contract start dates for German power and gas switching (GPKE / GeLi Gas)",
    version=__version__,
)


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Switching Deadlines API",
        "version": __version__,
        "endpoints": {
            "POST /deadline": "Calculate the earliest start date",
            "POST /validate": "Validate a proposed start date",
            "GET /day/{day}": "Classify a single day",
            "GET /next-working-day/{day}": "First working day after a date",
            "GET /holidays/{year}": "List holidays of a year",
            "GET /working-days": "Count working days in a range",
            "GET /rules": "List deadline rules",
            "GET /version": "Calendar version",
        },
    }


@app.post("/deadline", response_model=DeadlineResult)
async def calculate_deadline(request: DeadlineRequest):
    """
    Calculate the earliest possible contract start date.

    The reference date defaults to today.
    """
    try:
        return calculator.calculate_earliest_start_date(request.switching_case(), request.from_date)
    except RuleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/validate", response_model=ValidationResult)
async def validate_start_date(request: ValidateRequest):
    """Validate a proposed contract start date."""
    try:
        return calculator.validate_start_date(
            request.switching_case(), request.proposed_date, request.from_date
        )
    except RuleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/day/{day}", response_model=DayInfo)
async def get_day_info(day: str):
    """
    Classify a single day.

    Args:
        day: Date in format YYYY-MM-DD
    """
    try:
        return calendar_provider.get_day_info(day)
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/next-working-day/{day}")
async def get_next_working_day(day: str):
    """Get the first working day after a date."""
    try:
        return {"date": day, "next_working_day": calendar_provider.get_next_working_day(day)}
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ScanLimitExceededError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/holidays/{year}", response_model=List[Holiday])
async def get_holidays(year: int):
    """
    Get all holidays of a year.

    Args:
        year: Year (e.g., 2025, 2026)
    """
    if year < 1583 or year > 4099:
        raise HTTPException(
            status_code=400,
            detail="Year must be between 1583 and 4099",
        )
    return calendar_provider.get_holidays_for_year(year)


@app.get("/working-days", response_model=WorkingDaysResponse)
async def get_working_days(
    start: date = Query(..., description="First day of the range"),
    end: date = Query(..., description="Last day of the range"),
):
    """Get the working days between two dates (inclusive)."""
    if end < start:
        raise HTTPException(
            status_code=400,
            detail="end must be after or equal to start",
        )
    days = calendar_provider.get_working_days_in_range(start, end)
    return WorkingDaysResponse(start_date=start, end_date=end, working_days=len(days), days=days)


@app.get("/rules", response_model=List[DeadlineRule])
async def list_rules():
    """List the configured deadline rules."""
    return calculator.get_rules()


@app.get("/version", response_model=CalendarVersion, response_model_by_alias=True)
async def get_version():
    """Get the holiday calendar version."""
    return calendar_provider.get_calendar_version()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
