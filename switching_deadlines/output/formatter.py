"""
Console output formatting using Rich.
"""

from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from switching_deadlines.data.bundesland_data import BUNDESLAND_NAMES
from switching_deadlines.data.schemas import (
    CalendarVersion,
    DayInfo,
    DeadlineResult,
    DeadlineRule,
    Holiday,
    SwitchingCase,
    ValidationResult,
)

WEEKDAY_NAMES = ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"]


def _format_date(value: date) -> str:
    return value.strftime("%d.%m.%Y")


def _format_iso(value: str) -> str:
    return _format_date(date.fromisoformat(value))


def _format_regions(holiday: Holiday) -> str:
    if holiday.is_nationwide:
        return "bundesweit"
    return ", ".join(BUNDESLAND_NAMES[b] for b in holiday.bundeslaender)


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the console formatter.

        Args:
            console: Rich console to print to, a new one if not given.
        """
        self.console = console or Console()

    def _rule_table(self, rule: DeadlineRule) -> Table:
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=24)
        table.add_column("Value", style="white")

        table.add_row("Rule:", rule.id)
        table.add_row("Description:", rule.description)
        table.add_row("Required Working Days:", str(rule.required_working_days))
        if rule.allows_retrospective:
            table.add_row("Retrospective Window:", f"{rule.max_retrospective_days or 0} calendar days")
        return table

    def print_deadline(self, switching_case: SwitchingCase, from_date: date, result: DeadlineResult) -> None:
        """
        Print an earliest start date calculation.

        Args:
            switching_case: The calculated case.
            from_date: Reference date of the calculation.
            result: DeadlineResult to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Earliest Start Date[/bold blue]")
        self.console.print()

        summary = Table(show_header=False, box=None)
        summary.add_column("Label", style="cyan", width=24)
        summary.add_column("Value", style="white")

        summary.add_row("Case:", switching_case.describe())
        summary.add_row("Reference Date:", _format_date(from_date))
        summary.add_row("Working Days Applied:", str(result.working_days_applied))
        summary.add_row("Calendar Days:", str(result.calendar_days_total))
        summary.add_row("Retrospective:", "yes" if result.is_retrospective else "no")
        summary.add_row(
            Text("Earliest Start:", style="bold green"),
            Text(
                f"{_format_date(result.earliest_start_date)} "
                f"({WEEKDAY_NAMES[result.earliest_start_date.weekday()]})",
                style="bold green",
            ),
        )

        self.console.print(Panel(summary, title="[bold]Calculation[/bold]"))
        self.console.print(Panel(self._rule_table(result.rule_applied), title="[bold]Rule[/bold]"))
        self.console.print()

    def print_validation(self, switching_case: SwitchingCase, result: ValidationResult) -> None:
        """
        Print the validation of a proposed start date.

        Args:
            switching_case: The validated case.
            result: ValidationResult to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Start Date Validation[/bold blue]")
        self.console.print()

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=24)
        table.add_column("Value", style="white")

        table.add_row("Case:", switching_case.describe())
        table.add_row("Proposed Date:", _format_date(result.proposed_date))
        if result.is_valid:
            table.add_row("Result:", Text("valid", style="bold green"))
        else:
            table.add_row("Result:", Text("too early", style="bold red"))
            table.add_row("Earliest Valid Date:", _format_date(result.earliest_valid_date))

        self.console.print(Panel(table, title="[bold]Validation[/bold]"))
        self.console.print(Panel(self._rule_table(result.rule_applied), title="[bold]Rule[/bold]"))
        self.console.print()

    def print_day_info(self, day_info: DayInfo) -> None:
        """
        Print the classification of a single day.

        Args:
            day_info: DayInfo to display.
        """
        day = date.fromisoformat(day_info.date)
        status = (
            Text("working day", style="bold green")
            if day_info.is_working_day
            else Text("non-working day", style="bold red")
        )

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=12)
        table.add_column("Value", style="white")
        table.add_row("Date:", f"{_format_date(day)} ({WEEKDAY_NAMES[day.weekday()]})")
        table.add_row("Status:", status)
        if day_info.holiday:
            table.add_row("Reason:", f"{day_info.holiday.name} ({day_info.holiday.type.value})")
            if day_info.holiday.description:
                table.add_row("", day_info.holiday.description)

        self.console.print(Panel(table, title="[bold]Day[/bold]"))

    def print_holidays(self, holidays: List[Holiday], title: str = "Holidays") -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of holidays to display.
            title: Table title.
        """
        holiday_table = Table(title=f"[bold]{title}[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)
        holiday_table.add_column("Name", style="white")
        holiday_table.add_column("Type", style="magenta")
        holiday_table.add_column("Regions", style="dim")

        for holiday in holidays:
            day = date.fromisoformat(holiday.date)
            holiday_table.add_row(
                _format_iso(holiday.date),
                WEEKDAY_NAMES[day.weekday()],
                holiday.name,
                holiday.type.value,
                _format_regions(holiday),
            )

        self.console.print(holiday_table)

    def print_holidays_for_year(self, year: int, holidays: List[Holiday]) -> None:
        """
        Print all holidays of a year.

        Args:
            year: Year.
            holidays: List of holidays.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Holidays {year}[/bold blue]")
        self.console.print()

        if holidays:
            self.print_holidays(holidays, title=f"{len(holidays)} non-working days")
        else:
            self.console.print("[dim]No holidays found for this year.[/dim]")

        self.console.print()

    def print_working_days(self, start: date, end: date, days: List[DayInfo]) -> None:
        """
        Print the working day count of a range.

        Args:
            start: First day of the range.
            end: Last day of the range.
            days: Working days in the range.
        """
        calendar_days = max((end - start).days + 1, 0)

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=20)
        table.add_column("Value", style="white", justify="right", width=10)
        table.add_row("Calendar Days:", str(calendar_days))
        table.add_row("Non-Working Days:", f"- {calendar_days - len(days)}")
        table.add_row("", "─" * 10)
        table.add_row(
            Text("Working Days:", style="bold green"),
            Text(str(len(days)), style="bold green"),
        )

        self.console.print(
            Panel(table, title=f"[bold]{_format_date(start)} - {_format_date(end)}[/bold]")
        )

    def print_rules(self, rules: List[DeadlineRule]) -> None:
        """Print a table of deadline rules."""
        table = Table(title="[bold]Deadline Rules[/bold]")
        table.add_column("ID", style="cyan")
        table.add_column("Commodity")
        table.add_column("Use Case")
        table.add_column("Termination")
        table.add_column("Working Days", justify="right")
        table.add_column("Retrospective", justify="right")

        for rule in rules:
            table.add_row(
                rule.id,
                rule.commodity.value,
                rule.use_case.value,
                "yes" if rule.requires_termination else "no",
                str(rule.required_working_days),
                f"{rule.max_retrospective_days or 0} days" if rule.allows_retrospective else "-",
            )

        self.console.print(table)

    def print_version(self, version: CalendarVersion) -> None:
        """Print calendar version metadata."""
        self.console.print(
            f"Calendar version [bold]{version.version}[/bold] "
            f"(year {version.year}, last updated {version.last_updated})"
        )

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_success(self, message: str) -> None:
        """
        Print a success message.

        Args:
            message: Success message to display.
        """
        self.console.print(f"[bold green]Success:[/bold green] {message}")
