"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import sys

import pytest
from loguru import logger

# Rest days on wednesday, friday and sunday; training on the other four
DEFAULT_SESSIONS = [
    {"day": "monday", "type": "easy_run", "title": "Easy 8k"},
    {"day": "tuesday", "type": "interval", "title": "6x800m"},
    {"day": "wednesday", "type": "rest", "title": "Rest"},
    {"day": "thursday", "type": "tempo", "title": "Tempo 5k"},
    {"day": "friday", "type": "rest", "title": "Rest"},
    {"day": "saturday", "type": "long_run", "title": "Long run"},
    {"day": "sunday", "type": "rest", "title": "Rest"},
]


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore a plain stderr sink after each test.

    CLI tests point loguru at the runner's captured streams, which are closed
    once the invocation returns.
    """
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def constraints() -> dict:
    """Running-only user training four days a week, never on sunday."""
    return {
        "trainingType": "running_only",
        "sessionsPerWeek": 4,
        "availableDays": ["monday", "tuesday", "thursday", "saturday", "sunday"],
        "blockedDays": ["sunday"],
        "currentWeeklyKm": 30,
    }


@pytest.fixture
def make_week():
    """Factory for week documents that satisfy the default constraints."""

    def _make_week(week_number: int = 1, running_km: float | None = 30, sessions: list[dict] | None = None) -> dict:
        week = {
            "weekNumber": week_number,
            "phase": "base",
            "sessions": [dict(s) for s in (DEFAULT_SESSIONS if sessions is None else sessions)],
        }
        if running_km is not None:
            week["totalLoad"] = {"running_km": running_km, "strength_sessions": 0}
        return week

    return _make_week


@pytest.fixture
def make_plan(make_week):
    """Factory for plan documents, one week per entry in running_kms."""

    def _make_plan(running_kms: list[float] | None = None) -> dict:
        kms = running_kms if running_kms is not None else [30, 33, 25, 27.5]
        return {
            "planDuration": len(kms),
            "goalInfo": "Half marathon in the spring",
            "weeks": [make_week(week_number=i + 1, running_km=km) for i, km in enumerate(kms)],
        }

    return _make_plan
