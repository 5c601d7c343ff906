"""
CLI interface for switching deadlines.
"""

import logging
import sys
from datetime import date, datetime, timezone
from typing import Optional

import click

from switching_deadlines import __version__
from switching_deadlines.config.manager import ConfigManager
from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator
from switching_deadlines.core.exceptions import SwitchingDeadlinesError
from switching_deadlines.data.schemas import Commodity, Config, SwitchingCase, UseCase
from switching_deadlines.output.exporter import ResultExporter
from switching_deadlines.output.formatter import ConsoleFormatter

logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> date:
    """Parse date string in various formats."""
    formats = ["%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date format: {date_str}. Use YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY"
    )


def load_config(config_path: Optional[str], verbose: bool) -> Config:
    """Load configuration and apply its log level unless --verbose is set."""
    cfg = ConfigManager(config_path).load_config()
    if not verbose:
        logging.getLogger().setLevel(cfg.log_level)
    return cfg


def switching_case_options(func):
    """Options shared by commands that take a switching case."""
    func = click.option(
        "--termination/--no-termination",
        default=False,
        help="Previous contract must be terminated (default: no)",
    )(func)
    func = click.option(
        "--use-case", "-u",
        type=click.Choice([u.value for u in UseCase], case_sensitive=False),
        required=True,
        help="Use case: relocation or switch",
    )(func)
    func = click.option(
        "--commodity", "-m",
        type=click.Choice([c.value for c in Commodity], case_sensitive=False),
        required=True,
        help="Commodity: power or gas",
    )(func)
    return func


def output_options(func):
    """Options shared by commands that export results."""
    func = click.option(
        "--config", "-c",
        type=click.Path(exists=True),
        help="Path to config file (optional)",
    )(func)
    func = click.option(
        "--output", "-o",
        type=click.Path(),
        help="Output file path (optional)",
    )(func)
    func = click.option(
        "--format", "-f", "output_format",
        type=click.Choice(["console", "json", "csv"]),
        default=None,
        help="Output format (default: from config, console)",
    )(func)
    return func


def _export(formatter: ConsoleFormatter, cfg: Config, data: dict, output_format: str, output: Optional[str], prefix: str) -> None:
    exporter = ResultExporter(output_directory=cfg.output_directory)
    if output_format == "json":
        path = exporter.export_json(data, output, prefix=prefix)
    else:
        path = exporter.export_csv(data, output, prefix=prefix)
    formatter.print_success(f"Result saved to {path}")


@click.group()
@click.version_option(version=__version__, prog_name="switching-deadlines")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def main(ctx, verbose):
    """Switching Deadlines - earliest contract start dates under GPKE / GeLi Gas."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@switching_case_options
@click.option(
    "--from", "from_date",
    default=None,
    help="Reference date (default: today). YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY",
)
@output_options
@click.pass_context
def deadline(ctx, commodity, use_case, termination, from_date, output_format, output, config):
    """Calculate the earliest possible contract start date."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config, ctx.obj["verbose"])
        output_format = output_format or cfg.output_format

        reference = parse_date(from_date) if from_date else datetime.now(timezone.utc).date()
        switching_case = SwitchingCase(
            commodity=commodity.lower(),
            use_case=use_case.lower(),
            requires_termination=termination,
        )

        calculator = DeadlineCalculator(CalendarProvider.from_config(cfg))
        result = calculator.calculate_earliest_start_date(switching_case, reference)

        if output_format == "console":
            formatter.print_deadline(switching_case, reference, result)
        else:
            data = ResultExporter().deadline_to_dict(switching_case, reference, result)
            _export(formatter, cfg, data, output_format, output, "deadline")

    except (SwitchingDeadlinesError, ValueError) as e:
        logger.debug("Deadline calculation failed", exc_info=True)
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@switching_case_options
@click.option(
    "--date", "-d", "proposed",
    required=True,
    help="Proposed start date. YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY",
)
@click.option(
    "--from", "from_date",
    default=None,
    help="Reference date (default: today)",
)
@output_options
@click.pass_context
def validate(ctx, commodity, use_case, termination, proposed, from_date, output_format, output, config):
    """Validate a proposed contract start date.

    Exits with status 2 if the date is too early.
    """
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config, ctx.obj["verbose"])
        output_format = output_format or cfg.output_format

        reference = parse_date(from_date) if from_date else datetime.now(timezone.utc).date()
        switching_case = SwitchingCase(
            commodity=commodity.lower(),
            use_case=use_case.lower(),
            requires_termination=termination,
        )

        calculator = DeadlineCalculator(CalendarProvider.from_config(cfg))
        result = calculator.validate_start_date(switching_case, parse_date(proposed), reference)

        if output_format == "console":
            formatter.print_validation(switching_case, result)
        else:
            data = ResultExporter().validation_to_dict(switching_case, result)
            _export(formatter, cfg, data, output_format, output, "validation")

    except (SwitchingDeadlinesError, ValueError) as e:
        logger.debug("Validation failed", exc_info=True)
        formatter.print_error(str(e))
        sys.exit(1)

    if not result.is_valid:
        sys.exit(2)


@main.command()
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Year to show holidays for (default: current year)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output CSV file path (optional)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.pass_context
def holidays(ctx, year, output, config):
    """List all non-working holidays of a year."""
    formatter = ConsoleFormatter()

    try:
        if year is None:
            year = date.today().year

        cfg = load_config(config, ctx.obj["verbose"])
        holiday_list = CalendarProvider.from_config(cfg).get_holidays_for_year(year)

        formatter.print_holidays_for_year(year, holiday_list)

        if output:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            path = exporter.export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    except (SwitchingDeadlinesError, ValueError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("day")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.pass_context
def day(ctx, day, config):
    """Show whether DAY is a working day."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config, ctx.obj["verbose"])
        day_info = CalendarProvider.from_config(cfg).get_day_info(parse_date(day))
        formatter.print_day_info(day_info)

    except (SwitchingDeadlinesError, ValueError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--start", "-s", required=True, help="Start date (inclusive)")
@click.option("--end", "-e", required=True, help="End date (inclusive)")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.pass_context
def count(ctx, start, end, config):
    """Count working days between two dates."""
    formatter = ConsoleFormatter()

    try:
        start_date = parse_date(start)
        end_date = parse_date(end)

        if end_date < start_date:
            formatter.print_error("End date must be after start date")
            sys.exit(1)

        cfg = load_config(config, ctx.obj["verbose"])
        days = CalendarProvider.from_config(cfg).get_working_days_in_range(start_date, end_date)
        formatter.print_working_days(start_date, end_date, days)

    except (SwitchingDeadlinesError, ValueError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
def rules():
    """List the built-in deadline rules."""
    formatter = ConsoleFormatter()
    formatter.print_rules(DeadlineCalculator().get_rules())


@main.command()
def version():
    """Show the version of the holiday calendar."""
    formatter = ConsoleFormatter()
    formatter.print_version(CalendarProvider().get_calendar_version())


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 8000)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.pass_context
def serve(ctx, host, port, config):
    """Start the FastAPI server."""
    import uvicorn

    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config, ctx.obj["verbose"])
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)

    api_host = host or cfg.api_host
    api_port = port or cfg.api_port

    formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
    formatter.console.print("Press Ctrl+C to stop")
    formatter.console.print()

    uvicorn.run(
        "switching_deadlines.api:app",
        host=api_host,
        port=api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
