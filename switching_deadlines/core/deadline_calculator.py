"""
Earliest start date calculation for supplier switches and relocations.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.dates import DateInput, normalize_date, to_iso_date_string
from switching_deadlines.core.exceptions import RuleNotFoundError
from switching_deadlines.core.rules import DEFAULT_DEADLINE_RULES, find_applicable_rule
from switching_deadlines.data.schemas import (
    DeadlineResult,
    DeadlineRule,
    SwitchingCase,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


class DeadlineCalculator:
    """Calculates and validates contract start dates for switching cases."""

    def __init__(
        self,
        calendar_provider: Optional[CalendarProvider] = None,
        custom_rules: Optional[Iterable[DeadlineRule]] = None,
    ):
        """
        Initialize the deadline calculator.

        Args:
            calendar_provider: Calendar used for working day arithmetic.
                Defaults to a CalendarProvider with default settings.
            custom_rules: Rules replacing the default GPKE/GeLi Gas rules.
                Custom rules are never merged with the defaults.
        """
        self.calendar_provider = calendar_provider or CalendarProvider()
        self._rules = tuple(custom_rules) if custom_rules is not None else DEFAULT_DEADLINE_RULES

    def get_rules(self) -> List[DeadlineRule]:
        """Get a copy of all configured rules."""
        return list(self._rules)

    def get_rule(self, switching_case: SwitchingCase) -> Optional[DeadlineRule]:
        """
        Get the rule for a switching case.

        Args:
            switching_case: Case to look up.

        Returns:
            The matching rule, or None if no rule is configured.
        """
        return find_applicable_rule(
            switching_case.commodity,
            switching_case.use_case,
            switching_case.requires_termination,
            self._rules,
        )

    def calculate_earliest_start_date(
        self, switching_case: SwitchingCase, from_date: Optional[DateInput] = None
    ) -> DeadlineResult:
        """
        Calculate the earliest possible contract start date.

        Rules allowing retrospective starts go back ``max_retrospective_days``
        calendar days; all other rules add their required working days.

        Args:
            switching_case: Commodity, use case and termination flag.
            from_date: Reference date, defaults to today.

        Returns:
            DeadlineResult with the earliest start date and the applied rule.

        Raises:
            RuleNotFoundError: If no rule matches the switching case.
            InvalidDateError: If from_date cannot be parsed.
        """
        rule = self.get_rule(switching_case)
        if rule is None:
            raise RuleNotFoundError(f"No rule found for {switching_case.describe()}")

        start = normalize_date(from_date) if from_date is not None else _today()

        if rule.allows_retrospective:
            earliest = start - timedelta(days=rule.max_retrospective_days or 0)
            working_days_applied = 0
        else:
            earliest = self.calendar_provider.add_working_days(start, rule.required_working_days)
            working_days_applied = rule.required_working_days

        logger.debug(f"Rule {rule.id} applied to {start}: earliest start {earliest}")

        return DeadlineResult(
            earliest_start_date=earliest,
            earliest_start_date_string=to_iso_date_string(earliest),
            working_days_applied=working_days_applied,
            calendar_days_total=(earliest - start).days,
            is_retrospective=rule.allows_retrospective,
            rule_applied=rule,
        )

    def validate_start_date(
        self,
        switching_case: SwitchingCase,
        proposed_date: DateInput,
        from_date: Optional[DateInput] = None,
    ) -> ValidationResult:
        """
        Check whether a proposed start date satisfies the lead time.

        Args:
            switching_case: Commodity, use case and termination flag.
            proposed_date: Start date to validate.
            from_date: Reference date, defaults to today.

        Returns:
            ValidationResult; earliest_valid_date is only set if invalid.
        """
        proposed = normalize_date(proposed_date)
        result = self.calculate_earliest_start_date(switching_case, from_date)
        is_valid = proposed >= result.earliest_start_date

        return ValidationResult(
            is_valid=is_valid,
            proposed_date=proposed,
            earliest_valid_date=None if is_valid else result.earliest_start_date,
            rule_applied=result.rule_applied,
        )
