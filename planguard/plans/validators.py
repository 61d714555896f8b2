"""Hard-rule validators for AI-generated training plans.

Checks a multi-week plan against the user's constraints and collects every
violation as a human-readable message:
- Training type compliance (running_only forbids hyrox/crossfit/strength)
- Exact number of non-rest sessions per week
- No training on blocked days
- All seven days present in every week
- Training only on allowed days
- Week-over-week running volume increase <= 10% (0.5 point margin)

Violations are returned, never raised. Only unparsable input is an error.
"""

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from loguru import logger

from planguard.plans.constants import (
    CANONICAL_DAYS,
    KNOWN_SESSION_TYPES,
    MAX_WEEKLY_INCREASE_PCT,
    REST_SESSION_TYPE,
    RUNNING_ONLY,
    RUNNING_ONLY_FORBIDDEN_TYPES,
)
from planguard.plans.errors import PlanStructureError
from planguard.plans.parsing import parse_constraints, parse_plan, parse_week
from planguard.plans.types import PlanValidationResult, UserConstraints, Week


def format_km(value: float) -> str:
    """Render a distance without a trailing .0 for whole numbers (50, 42.5)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_percent(value: float) -> str:
    """Render a percentage to one decimal, rounding ties up (11.25 -> 11.3)."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def validate_week(week: Week | Mapping[str, Any], user_constraints: UserConstraints | Mapping[str, Any]) -> list[str]:
    """Validate a single week against user constraints.

    All five rules run every time; violations are ordered by rule.

    Args:
        week: Week from the plan
        user_constraints: User's hard constraints

    Returns:
        Violation messages (empty if the week is compliant)

    Raises:
        PlanStructureError: If a raw week cannot be parsed
        InvalidConstraintsError: If raw constraints cannot be parsed
    """
    week = parse_week(week)
    constraints = parse_constraints(user_constraints)

    violations: list[str] = []
    label = f"Week {week.week_number}"
    allowed_days = constraints.allowed_days
    blocked_days = set(constraints.blocked_days)
    training_sessions = [s for s in week.sessions if s.type != REST_SESSION_TYPE]

    unknown_types = {s.type for s in week.sessions} - KNOWN_SESSION_TYPES
    if unknown_types:
        logger.debug("Week has unrecognised session types", week_number=week.week_number, types=sorted(unknown_types))

    # Rule 1: training type compliance
    if constraints.training_type == RUNNING_ONLY:
        for session in week.sessions:
            if session.type in RUNNING_ONLY_FORBIDDEN_TYPES:
                violations.append(
                    f'{label}: Found {session.type} session "{session.title}" but trainingType is {RUNNING_ONLY}'
                )

    # Rule 2: session count (rest days excluded)
    if len(training_sessions) != constraints.sessions_per_week:
        violations.append(
            f"{label}: Expected {constraints.sessions_per_week} sessions but found {len(training_sessions)}"
        )

    # Rule 3: never train on a blocked day
    for session in training_sessions:
        if session.day in blocked_days:
            violations.append(f'{label}: Session "{session.title}" scheduled on blocked day {session.day}')

    # Rule 4: every day of the week is present (rest counts)
    session_days = {s.day for s in week.sessions}
    missing_days = [day for day in CANONICAL_DAYS if day not in session_days]
    if missing_days:
        violations.append(f"{label}: Missing days: {', '.join(missing_days)}")

    # Rule 5: train only on allowed days
    for session in training_sessions:
        if session.day not in allowed_days:
            violations.append(
                f'{label}: Session "{session.title}" on {session.day} but only {", ".join(allowed_days)} allowed'
            )

    if violations:
        logger.debug(
            "Week failed hard rules",
            week_number=week.week_number,
            violation_count=len(violations),
        )
    return violations


def validate_volume_progression(weeks: Sequence[Week | Mapping[str, Any]], start_km: float = 0.0) -> list[str]:
    """Validate week-over-week running volume (10% rule).

    Compares consecutive weeks only. A drop in volume is treated as a deload
    and never flagged. From a zero-km week, staying at zero is fine and any
    increase is flagged.

    NOTE: start_km is not compared against the first week. The ramp from the
    user's current volume into week 1 is unchecked.

    Args:
        weeks: All weeks in plan order
        start_km: User's weekly volume before the plan

    Returns:
        Violation messages in chronological order
    """
    parsed_weeks = [parse_week(w) for w in weeks]
    violations: list[str] = []

    logger.debug("Checking volume progression", week_count=len(parsed_weeks), start_km=start_km)

    for current_week, next_week in zip(parsed_weeks, parsed_weeks[1:]):
        current_km = current_week.running_km
        next_km = next_week.running_km

        # Deload
        if next_km < current_km:
            continue

        if current_km == 0:
            if next_km > 0:
                violations.append(
                    f"Week {next_week.week_number}: Volume increased from 0km → {format_km(next_km)}km, "
                    "exceeds 10% rule"
                )
            continue

        increase = (next_km - current_km) / current_km * 100
        if increase > MAX_WEEKLY_INCREASE_PCT:
            violations.append(
                f"Week {next_week.week_number}: Volume increased by {format_percent(increase)}% "
                f"({format_km(current_km)}km → {format_km(next_km)}km), exceeds 10% rule"
            )

    return violations


def validate_plan(plan: Any, user_constraints: UserConstraints | Mapping[str, Any]) -> PlanValidationResult:
    """Validate an entire plan against the user's hard rules.

    This is the main validation entry point. Per-week rules run for every
    week in order, then the volume progression check runs once over all
    weeks. A plan that cannot be parsed yields a single structural violation
    and no rules are evaluated.

    Args:
        plan: Plan document (decoded JSON) or parsed Plan
        user_constraints: User's hard constraints

    Returns:
        Result with is_valid and the full ordered list of violations

    Raises:
        InvalidConstraintsError: If the constraints themselves are malformed
    """
    try:
        parsed_plan = parse_plan(plan)
    except PlanStructureError as e:
        logger.warning("Plan rejected: invalid structure", reason=str(e))
        return PlanValidationResult(is_valid=False, violations=[str(e)])

    constraints = parse_constraints(user_constraints)

    violations: list[str] = []
    for week in parsed_plan.weeks:
        violations.extend(validate_week(week, constraints))

    violations.extend(validate_volume_progression(parsed_plan.weeks, constraints.current_weekly_km))

    result = PlanValidationResult(is_valid=not violations, violations=violations)
    if result.is_valid:
        logger.info("Plan validation passed", week_count=len(parsed_plan.weeks))
    else:
        logger.info(
            "Plan validation failed",
            week_count=len(parsed_plan.weeks),
            violation_count=len(violations),
        )
    return result
