"""Plans module - hard-rule validation of generated training plans.

This module provides:
- Typed plan and constraint models parsed at the boundary
- Per-week rule checks (training type, session count, blocked/allowed days, full week)
- Week-over-week volume progression check (10% rule)
- Plan-level validation returning every violation
"""

from planguard.plans.errors import InvalidConstraintsError, PlanStructureError, PlanValidationError
from planguard.plans.parsing import extract_plan_json, parse_constraints, parse_plan, parse_week
from planguard.plans.types import Plan, PlanValidationResult, Session, TotalLoad, UserConstraints, Week
from planguard.plans.validators import validate_plan, validate_volume_progression, validate_week

__all__ = [
    "InvalidConstraintsError",
    "Plan",
    "PlanStructureError",
    "PlanValidationError",
    "PlanValidationResult",
    "Session",
    "TotalLoad",
    "UserConstraints",
    "Week",
    "extract_plan_json",
    "parse_constraints",
    "parse_plan",
    "parse_week",
    "validate_plan",
    "validate_volume_progression",
    "validate_week",
]
