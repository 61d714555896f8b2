"""Typed plan and constraint schema.

Plans arrive as JSON produced by an LLM. Keys keep the producer's camelCase
names (weekNumber, totalLoad, ...) as aliases; attributes are snake_case.
All models are frozen so validation never mutates caller data.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planguard.plans.constants import CANONICAL_DAYS

_PLAN_MODEL_CONFIG = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Session(BaseModel):
    """A single day entry in a training week.

    Attributes:
        day: Lowercase weekday name (monday..sunday)
        type: Session type; "rest" marks a non-training day
        title: Display title, only used in violation messages
        description: Optional short description
        duration_minutes: Optional planned duration
        details: Free-form producer details (distance, exercises, ...)
    """

    model_config = _PLAN_MODEL_CONFIG

    day: str
    type: str
    title: str = ""
    # Display-only producer fields, kept as emitted
    description: Any = None
    duration_minutes: Any = None
    details: Any = None

    @field_validator("title", mode="before")
    @classmethod
    def default_missing_title(cls, value: Any) -> Any:
        """Treat a null title as empty."""
        if value is None:
            return ""
        return value


class TotalLoad(BaseModel):
    """Aggregate load for a week."""

    model_config = _PLAN_MODEL_CONFIG

    running_km: float = Field(default=0.0, ge=0)
    strength_sessions: Any = None
    estimated_hours: Any = None

    @field_validator("running_km", mode="before")
    @classmethod
    def default_missing_km(cls, value: Any) -> Any:
        """Treat a null distance as zero."""
        if value is None:
            return 0.0
        return value


class Week(BaseModel):
    """One week of a plan."""

    model_config = _PLAN_MODEL_CONFIG

    week_number: int = Field(alias="weekNumber", ge=1)
    sessions: list[Session] = Field(default_factory=list)
    total_load: TotalLoad = Field(default_factory=TotalLoad, alias="totalLoad")

    week_start_date: Any = Field(default=None, alias="weekStartDate")
    phase: Any = None
    focus: Any = None
    weekly_tips: Any = Field(default=None, alias="weeklyTips")

    @field_validator("sessions", mode="before")
    @classmethod
    def default_missing_sessions(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("total_load", mode="before")
    @classmethod
    def default_missing_load(cls, value: Any) -> Any:
        if value is None:
            return {}
        return value

    @property
    def running_km(self) -> float:
        return self.total_load.running_km


class Plan(BaseModel):
    """A multi-week training plan as returned by the plan producer."""

    model_config = _PLAN_MODEL_CONFIG

    weeks: list[Week]

    # Producer metadata, not checked by any rule
    plan_duration: Any = Field(default=None, alias="planDuration")
    goal_info: Any = Field(default=None, alias="goalInfo")
    overall_strategy: Any = Field(default=None, alias="overallStrategy")
    milestones: Any = None


class UserConstraints(BaseModel):
    """Hard constraints the user supplied when requesting a plan.

    Attributes:
        training_type: "running_only" forbids hyrox, crossfit and strength sessions
        sessions_per_week: Exact number of non-rest sessions expected per week
        available_days: Days on which training may occur
        blocked_days: Days on which training must never occur
        current_weekly_km: Running volume before the plan starts
    """

    model_config = _PLAN_MODEL_CONFIG

    training_type: str | None = Field(default=None, alias="trainingType")
    sessions_per_week: int = Field(alias="sessionsPerWeek", ge=0)
    available_days: list[str] = Field(default_factory=list, alias="availableDays")
    blocked_days: list[str] = Field(default_factory=list, alias="blockedDays")
    current_weekly_km: float = Field(default=0.0, alias="currentWeeklyKm", ge=0)

    @field_validator("available_days", "blocked_days", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        """Lowercase day names and reject anything outside monday..sunday."""
        if value is None:
            return []
        if isinstance(value, (set, frozenset)):
            # No inherent order; use calendar order so messages are stable
            value = sorted(value, key=lambda d: CANONICAL_DAYS.index(d) if d in CANONICAL_DAYS else len(CANONICAL_DAYS))
        if not isinstance(value, (list, tuple)):
            return value
        days = []
        for day in value:
            if not isinstance(day, str):
                raise ValueError(f"Day names must be strings, got {day!r}")
            normalized = day.strip().lower()
            if normalized not in CANONICAL_DAYS:
                raise ValueError(f"Unknown day name: {day!r}")
            if normalized not in days:
                days.append(normalized)
        return days

    @field_validator("current_weekly_km", mode="before")
    @classmethod
    def default_missing_km(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        return value

    @property
    def allowed_days(self) -> list[str]:
        """Available days minus blocked days, in available-days order."""
        blocked = set(self.blocked_days)
        return [day for day in self.available_days if day not in blocked]


class PlanValidationResult(BaseModel):
    """Outcome of validating a plan: every violation found, in order."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_valid: bool = Field(alias="isValid")
    violations: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the {"isValid", "violations"} shape callers serialise."""
        return self.model_dump(by_alias=True)
