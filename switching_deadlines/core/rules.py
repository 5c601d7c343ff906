"""
Deadline rules based on GPKE (power) and GeLi Gas (gas).
"""

from typing import Iterable, Optional, Tuple

from switching_deadlines.data.schemas import Commodity, DeadlineRule, UseCase

POWER_RULES: Tuple[DeadlineRule, ...] = (
    DeadlineRule(
        id="power_relocation",
        commodity=Commodity.POWER,
        use_case=UseCase.RELOCATION,
        requires_termination=False,
        required_working_days=1,
        allows_retrospective=False,
        description="Power contract relocation requires 1 working day lead time",
    ),
    DeadlineRule(
        id="power_switch_no_termination",
        commodity=Commodity.POWER,
        use_case=UseCase.SWITCH,
        requires_termination=False,
        required_working_days=1,
        allows_retrospective=False,
        description="Power contract switch without termination requires 1 working day lead time",
    ),
    DeadlineRule(
        id="power_switch_with_termination",
        commodity=Commodity.POWER,
        use_case=UseCase.SWITCH,
        requires_termination=True,
        required_working_days=2,
        allows_retrospective=False,
        description="Power contract switch with termination requires 2 working days lead time",
    ),
)

GAS_RULES: Tuple[DeadlineRule, ...] = (
    # Move-ins and new registrations may start up to six weeks in the past
    DeadlineRule(
        id="gas_relocation",
        commodity=Commodity.GAS,
        use_case=UseCase.RELOCATION,
        requires_termination=False,
        required_working_days=0,
        allows_retrospective=True,
        max_retrospective_days=6 * 7,
        description="Retrospective switching of gas contracts for move-ins and new registrations",
    ),
    DeadlineRule(
        id="gas_switch_no_termination",
        commodity=Commodity.GAS,
        use_case=UseCase.SWITCH,
        requires_termination=False,
        required_working_days=10,
        allows_retrospective=False,
        description="Gas contract switch without termination requires 10 working days lead time",
    ),
    DeadlineRule(
        id="gas_switch_with_termination",
        commodity=Commodity.GAS,
        use_case=UseCase.SWITCH,
        requires_termination=True,
        required_working_days=13,
        allows_retrospective=False,
        description="Gas contract switch with termination requires 13 working days lead time",
    ),
)

DEFAULT_DEADLINE_RULES: Tuple[DeadlineRule, ...] = POWER_RULES + GAS_RULES


def find_applicable_rule(
    commodity: Commodity,
    use_case: UseCase,
    requires_termination: bool,
    rules: Iterable[DeadlineRule] = DEFAULT_DEADLINE_RULES,
) -> Optional[DeadlineRule]:
    """
    Find the first rule matching a switching scenario.

    Args:
        commodity: Supplied commodity.
        use_case: Relocation or supplier switch.
        requires_termination: Whether the previous contract must be terminated.
        rules: Rules to search, defaults to the GPKE/GeLi Gas rules.

    Returns:
        The matching rule, or None if no rule matches.
    """
    for rule in rules:
        if (
            rule.commodity == commodity
            and rule.use_case == use_case
            and rule.requires_termination == requires_termination
        ):
            return rule
    return None
