"""Boundary parsing for plan documents and user constraints.

All shape checks happen here, once. Rule checkers downstream work on typed
models and never probe for missing keys.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from planguard.plans.constants import INVALID_PLAN_STRUCTURE, INVALID_PLAN_STRUCTURE_PREFIX
from planguard.plans.errors import InvalidConstraintsError, PlanStructureError
from planguard.plans.types import Plan, UserConstraints, Week

# Greedy: first "{" to last "}" in the reply
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _format_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as weeks[0].sessions[2].day."""
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = _format_location(tuple(first["loc"]))
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


def parse_plan(raw: Any) -> Plan:
    """Parse a plan document into a typed Plan.

    Args:
        raw: Plan as a mapping (decoded JSON) or an already parsed Plan

    Returns:
        Parsed plan

    Raises:
        PlanStructureError: If the weeks array is missing or any week/session
            cannot be parsed. The message is the violation to report.
    """
    if isinstance(raw, Plan):
        return raw

    if not isinstance(raw, Mapping) or not isinstance(raw.get("weeks"), (list, tuple)):
        raise PlanStructureError(INVALID_PLAN_STRUCTURE)

    try:
        return Plan.model_validate(raw)
    except ValidationError as e:
        reason = _describe_validation_error(e)
        logger.debug("Plan document failed schema validation", reason=reason, error_count=e.error_count())
        raise PlanStructureError(f"{INVALID_PLAN_STRUCTURE_PREFIX} - {reason}") from e


def parse_week(raw: Any) -> Week:
    """Parse a single week document.

    Raises:
        PlanStructureError: If the week cannot be parsed
    """
    if isinstance(raw, Week):
        return raw
    try:
        return Week.model_validate(raw)
    except ValidationError as e:
        raise PlanStructureError(f"{INVALID_PLAN_STRUCTURE_PREFIX} - {_describe_validation_error(e)}") from e


def parse_constraints(raw: Any) -> UserConstraints:
    """Parse user constraints.

    Args:
        raw: Constraints as a mapping or an existing UserConstraints

    Returns:
        Parsed constraints

    Raises:
        InvalidConstraintsError: If constraints are absent or malformed
    """
    if isinstance(raw, UserConstraints):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidConstraintsError(f"User constraints must be an object, got {type(raw).__name__}")

    try:
        return UserConstraints.model_validate(raw)
    except ValidationError as e:
        raise InvalidConstraintsError(f"Invalid user constraints - {_describe_validation_error(e)}") from e


def extract_plan_json(text: str) -> dict[str, Any]:
    """Extract the plan JSON object from a raw LLM reply.

    Models often wrap the object in prose or markdown fences. Everything from
    the first "{" to the last "}" is decoded.

    Args:
        text: Raw model output

    Returns:
        Decoded JSON object

    Raises:
        PlanStructureError: If no JSON object can be decoded
    """
    match = _JSON_OBJECT_RE.search(text or "")
    if match is None:
        raise PlanStructureError(f"{INVALID_PLAN_STRUCTURE_PREFIX} - no JSON object found in model output")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("Could not decode plan JSON from model output", preview=match.group(0)[:200])
        raise PlanStructureError(f"{INVALID_PLAN_STRUCTURE_PREFIX} - malformed JSON: {e.msg}") from e
