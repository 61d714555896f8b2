"""Boundary errors for plan validation.

Rule violations are results, not exceptions. These errors only cover input
that cannot be turned into a typed plan or constraint set.
"""


class PlanValidationError(ValueError):
    """Base class for planguard input errors."""


class PlanStructureError(PlanValidationError):
    """Raised when a plan document cannot be parsed into weeks and sessions.

    The message is the single violation reported for the plan.
    """


class InvalidConstraintsError(PlanValidationError):
    """Raised when user constraints are missing or malformed."""
