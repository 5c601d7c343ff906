"""
MCP Server for switching deadlines.

Exposes the deadline calculator and the holiday calendar as MCP tools.

Supports two transport modes:
- stdio: For local desktop client integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from switching_deadlines.config.manager import ConfigManager
from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.core.exceptions import SwitchingDeadlinesError
from switching_deadlines.data.schemas import Commodity, SwitchingCase, UseCase

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
calendar_provider = CalendarProvider.from_config(config)
calculator = DeadlineCalculator(calendar_provider)


def _switching_case(commodity: str, use_case: str, requires_termination: bool) -> SwitchingCase:
    try:
        return SwitchingCase(
            commodity=Commodity(commodity.lower()),
            use_case=UseCase(use_case.lower()),
            requires_termination=requires_termination,
        )
    except ValueError:
        raise ValueError(
            f"Invalid switching case: commodity must be one of "
            f"{', '.join(c.value for c in Commodity)}, use_case one of "
            f"{', '.join(u.value for u in UseCase)}"
        ) from None


def calculate_earliest_start_date(
    commodity: str,
    use_case: str,
    requires_termination: bool = False,
    from_date: Optional[str] = None,
) -> dict:
    """
    Calculate the earliest possible start date of a power or gas contract.

    German market rules (GPKE for power, GeLi Gas for gas) require a lead time
    in working days. Weekends, public holidays, 24.12. and 31.12. are not
    working days. Gas relocations may start up to six weeks in the past.

    Args:
        commodity: "power" or "gas"
        use_case: "relocation" (move-in) or "switch" (supplier switch)
        requires_termination: Whether the previous contract must be terminated
        from_date: Reference date YYYY-MM-DD (default: today)

    Returns:
        Dictionary with earliest_start_date, working_days_applied,
        calendar_days_total, is_retrospective and the applied rule.

    Examples:
        Power switch with termination requested on 1 October 2025:
        >>> calculate_earliest_start_date("power", "switch", True, "2025-10-01")
    """
    try:
        switching_case = _switching_case(commodity, use_case, requires_termination)
        result = calculator.calculate_earliest_start_date(switching_case, from_date)
    except (SwitchingDeadlinesError, ValueError) as e:
        logger.error(f"Deadline calculation failed: {e}")
        return {"error": str(e)}

    return {
        "earliest_start_date": result.earliest_start_date_string,
        "working_days_applied": result.working_days_applied,
        "calendar_days_total": result.calendar_days_total,
        "is_retrospective": result.is_retrospective,
        "rule": result.rule_applied.model_dump(mode="json"),
    }


def validate_start_date(
    commodity: str,
    use_case: str,
    proposed_date: str,
    requires_termination: bool = False,
    from_date: Optional[str] = None,
) -> dict:
    """
    Check whether a proposed contract start date respects the lead time.

    Args:
        commodity: "power" or "gas"
        use_case: "relocation" or "switch"
        proposed_date: Proposed start date YYYY-MM-DD
        requires_termination: Whether the previous contract must be terminated
        from_date: Reference date YYYY-MM-DD (default: today)

    Returns:
        Dictionary with is_valid and, for invalid dates, earliest_valid_date.
    """
    try:
        switching_case = _switching_case(commodity, use_case, requires_termination)
        result = calculator.validate_start_date(switching_case, proposed_date, from_date)
    except (SwitchingDeadlinesError, ValueError) as e:
        logger.error(f"Validation failed: {e}")
        return {"error": str(e)}

    return {
        "is_valid": result.is_valid,
        "proposed_date": result.proposed_date.isoformat(),
        "earliest_valid_date": (
            result.earliest_valid_date.isoformat() if result.earliest_valid_date else None
        ),
        "rule_id": result.rule_applied.id,
    }


def get_day_info(day: str) -> dict:
    """
    Classify a day as working or non-working day.

    Args:
        day: Date YYYY-MM-DD

    Returns:
        Dictionary with date, is_working_day and the holiday (if any).
    """
    try:
        return calendar_provider.get_day_info(day).model_dump(mode="json")
    except SwitchingDeadlinesError as e:
        return {"error": str(e)}


def get_holidays(year: int) -> dict:
    """
    List all non-working holidays of a year.

    Includes regional holidays, which count as non-working days nationwide.

    Args:
        year: Year (e.g., 2026)

    Returns:
        Dictionary with year, holiday_count and holidays.
    """
    if year < 1583 or year > 4099:
        return {"error": "Year must be between 1583 and 4099"}

    holidays = calendar_provider.get_holidays_for_year(year)
    return {
        "year": year,
        "holiday_count": len(holidays),
        "holidays": [h.model_dump(mode="json", exclude_none=True) for h in holidays],
    }


def list_rules() -> dict:
    """List the configured deadline rules."""
    rules = calculator.get_rules()
    return {
        "count": len(rules),
        "rules": [rule.model_dump(mode="json") for rule in rules],
    }


def create_mcp_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("Switching Deadlines", host=host, port=port)

    for tool in (
        calculate_earliest_start_date,
        validate_start_date,
        get_day_info,
        get_holidays,
        list_rules,
    ):
        mcp.tool()(tool)

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Switching Deadlines MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", os.environ.get("FASTMCP_HOST", "0.0.0.0")),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", os.environ.get("FASTMCP_PORT", "8080"))),
        help="Port to listen on (SSE mode only, default: 8080)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    mcp = create_mcp_server(host=args.host, port=args.port)

    logger.info(f"Starting MCP server ({args.transport})")
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
