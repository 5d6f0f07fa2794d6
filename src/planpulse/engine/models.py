"""
Record models for the scoring engine.

Inputs (Task, PlanItem, Member) mirror the rows the web backend loads from
storage; unknown columns are ignored so rows can be passed through as-is.
Outputs serialize with camelCase aliases, matching the JSON the frontend
already consumes.
"""

import re
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Annotated, Any, List, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================

class TaskStatus(str, Enum):
    """Lifecycle states shared by goals, plans and tasks."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_STATUSES = frozenset({TaskStatus.PENDING, TaskStatus.IN_PROGRESS})
CLOSED_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    """Risk buckets. Scores below the medium threshold are not reported."""
    HIGH = "high"
    MEDIUM = "medium"


class PredictionStatus(str, Enum):
    OVERDUE = "overdue"
    AHEAD_OF_SCHEDULE = "ahead_of_schedule"
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BEHIND_SCHEDULE = "behind_schedule"


class NotificationType(str, Enum):
    OVERDUE = "overdue"
    REMINDER = "reminder"


# =============================================================================
# Field types
# =============================================================================

def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _coerce_timestamp(value: Any) -> Any:
    # Date-only values (DATE columns, "2026-01-31") mean midnight
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and _ISO_DATE.fullmatch(value):
        return datetime.combine(date.fromisoformat(value), time.min)
    return value


Timestamp = Annotated[
    datetime,
    BeforeValidator(_coerce_timestamp),
    AfterValidator(to_naive_utc),
]

Identifier = Union[int, str]


def _as_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, (str, int)):
        return [value]
    return value


# =============================================================================
# Input records
# =============================================================================

class Task(BaseModel):
    """A weekly task row as supplied by the web backend."""

    model_config = ConfigDict(extra="ignore")

    id: Identifier
    title: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    due_date: Optional[Timestamp] = None
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    assigned_to: Optional[Identifier] = None
    user_id: Optional[Identifier] = None
    depends_on: List[Identifier] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator("depends_on", "tags", mode="before")
    @classmethod
    def _listify(cls, v: Any) -> Any:
        """Storage keeps a single dependency id; treat it as a one-item list."""
        return _as_list(v)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class PlanItem(BaseModel):
    """Anything with a start, a deadline and a progress percentage."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[Identifier] = None
    created_at: Optional[Timestamp] = None
    due_date: Optional[Timestamp] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)


class Member(BaseModel):
    """A team member who can be assigned work."""

    model_config = ConfigDict(extra="ignore")

    id: Identifier
    name: str
    skills: List[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _listify(cls, v: Any) -> Any:
        return _as_list(v)


# =============================================================================
# Results
# =============================================================================

class EngineResult(BaseModel):
    """Base for engine outputs: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RiskEntry(EngineResult):
    task: Task
    risk_score: int = Field(ge=0, le=10)
    severity: Severity
    reasons: List[str] = Field(default_factory=list)


class RiskReport(EngineResult):
    risks: List[RiskEntry] = Field(default_factory=list)
    count: int = 0
    high_severity: int = Field(default=0, alias="high_severity")
    medium_severity: int = Field(default=0, alias="medium_severity")
    skipped: int = 0


class PredictionMetrics(EngineResult):
    expected_progress: int
    actual_progress: int
    progress_delta: int
    days_remaining: int


class PredictionResult(EngineResult):
    status: PredictionStatus
    confidence: int = Field(ge=0, le=100)
    recommendation: str
    metrics: PredictionMetrics


class AssigneeCandidate(EngineResult):
    member: Member
    score: int = Field(ge=0)
    active_tasks: int = 0
    overdue_count: int = 0
    upcoming_deadlines: int = 0
    matching_skills: List[str] = Field(default_factory=list)
    reasoning: str


class AssignmentSuggestion(AssigneeCandidate):
    """The top candidate, with the full ranking kept for inspection."""
    candidates: List[AssigneeCandidate] = Field(default_factory=list)


class WorkloadEntry(EngineResult):
    member: Member
    task_count: int = 0
    task_ids: List[Identifier] = Field(default_factory=list)


class BalancingSuggestion(EngineResult):
    needs_balancing: bool
    overloaded: Optional[WorkloadEntry] = None
    underutilized: Optional[WorkloadEntry] = None
    suggestion: Optional[str] = None
    message: Optional[str] = None
    workload: List[WorkloadEntry] = Field(default_factory=list)


class Notification(BaseModel):
    """A notification row ready to be inserted by the caller."""
    user_id: Identifier
    task_id: Identifier
    type: NotificationType
    title: str
    message: str


class ProductivityMetrics(BaseModel):
    """Per-user numbers behind the weekly insights view."""
    user_id: Identifier
    period: str
    completed: int = 0
    in_progress: int = 0
    overdue: int = 0
    avg_completion_days: float = 0.0
    on_time_rate: Optional[int] = None
