from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from planpulse.engine.models import (
    Identifier,
    Member,
    Notification,
    PlanItem,
    Task,
    Timestamp,
)

# --- Risks ---

class RiskRequest(BaseModel):
    # Raw rows: a malformed row is skipped by the scorer, not rejected here
    tasks: List[Dict[str, Any]] = Field(default_factory=list)
    now: Optional[Timestamp] = None

# --- Predictions ---

class PredictionRequest(BaseModel):
    item: PlanItem
    now: Optional[Timestamp] = None

# --- Assignment ---

class AssigneeRequest(BaseModel):
    task: Task
    members: List[Member] = Field(..., description="Candidate members, already scoped by the caller")
    existing_tasks: List[Task] = Field(default_factory=list)
    now: Optional[Timestamp] = None

# --- Workload ---

class WorkloadRequest(BaseModel):
    members: List[Member] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)

# --- Deadlines ---

class DeadlineRequest(BaseModel):
    tasks: List[Task] = Field(default_factory=list)
    now: Optional[Timestamp] = None

class DeadlineResponse(BaseModel):
    notifications: List[Notification]
    count: int

# --- Productivity ---

class ProductivityRequest(BaseModel):
    user_id: Identifier
    tasks: List[Task] = Field(default_factory=list)
    period: str = "week"
    now: Optional[Timestamp] = None
