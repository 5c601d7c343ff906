"""
Shared fixtures for the switching deadlines tests.
"""

import pytest

from switching_deadlines.config.manager import ConfigManager
from switching_deadlines.core.calendar_provider import CalendarProvider
from switching_deadlines.core.deadline_calculator import DeadlineCalculator


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove SWITCHING_* overrides that could leak in from the shell."""
    for env_var in ConfigManager.ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def calendar():
    """Create a CalendarProvider with default settings."""
    return CalendarProvider()


@pytest.fixture
def calculator(calendar):
    """Create a DeadlineCalculator with the default rules."""
    return DeadlineCalculator(calendar)
