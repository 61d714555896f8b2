"""Fixed vocabularies and thresholds for plan validation.

Day names are lowercase English and are never localised. Session types
other than REST_SESSION_TYPE count as training.
"""

CANONICAL_DAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

REST_SESSION_TYPE = "rest"

# Session types the plan producer is prompted to emit. Not enforced:
# any other string is still treated as a training session.
KNOWN_SESSION_TYPES: frozenset[str] = frozenset(
    {
        "easy_run",
        "tempo",
        "interval",
        "long_run",
        "hyrox",
        "crossfit",
        "strength",
        "rest",
        "recovery",
    }
)

RUNNING_ONLY = "running_only"
RUNNING_ONLY_FORBIDDEN_TYPES: tuple[str, ...] = ("hyrox", "crossfit", "strength")

# 10% week-over-week rule plus a 0.5 point margin
MAX_WEEKLY_INCREASE_PCT = 10.5

INVALID_PLAN_STRUCTURE = "Plan structure is invalid - missing weeks array"
INVALID_PLAN_STRUCTURE_PREFIX = "Plan structure is invalid"
