from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from prometheus_client import Counter

from planpulse.api import schemas
from planpulse.api.dependencies import (
    get_balancer,
    get_clock,
    get_predictor,
    get_productivity_calculator,
    get_recommender,
    get_risk_scorer,
    get_sweeper,
)
from planpulse.engine import (
    AssigneeRecommender,
    CompletionPredictor,
    DeadlineSweeper,
    ProductivityCalculator,
    RiskScorer,
    WorkloadBalancer,
)
from planpulse.engine.models import (
    AssignmentSuggestion,
    BalancingSuggestion,
    PredictionResult,
    ProductivityMetrics,
    RiskReport,
)

router = APIRouter()

ENGINE_CALLS = Counter(
    "planpulse_engine_calls_total",
    "Scoring engine invocations",
    ["operation"],
)


@router.post("/risks", response_model=RiskReport)
def detect_risks(
    request: schemas.RiskRequest,
    scorer: Annotated[RiskScorer, Depends(get_risk_scorer)],
    clock: Annotated[datetime, Depends(get_clock)],
):
    """
    Detect deadline risks across the posted tasks.
    """
    ENGINE_CALLS.labels(operation="risks").inc()
    return scorer.detect_risk_report(request.tasks, request.now or clock)


@router.post("/predictions", response_model=PredictionResult)
def predict_completion(
    request: schemas.PredictionRequest,
    predictor: Annotated[CompletionPredictor, Depends(get_predictor)],
    clock: Annotated[datetime, Depends(get_clock)],
):
    """
    Predict whether a goal, plan or task will finish on time.
    """
    ENGINE_CALLS.labels(operation="predictions").inc()
    return predictor.predict_completion(request.item, request.now or clock)


@router.post("/assignee", response_model=AssignmentSuggestion)
def suggest_assignee(
    request: schemas.AssigneeRequest,
    recommender: Annotated[AssigneeRecommender, Depends(get_recommender)],
    clock: Annotated[datetime, Depends(get_clock)],
):
    """
    Suggest the best member for a task, with the full ranking.
    """
    ENGINE_CALLS.labels(operation="assignee").inc()
    return recommender.suggest_assignee(
        request.task,
        request.members,
        request.existing_tasks,
        request.now or clock,
    )


@router.post("/workload", response_model=BalancingSuggestion)
def suggest_workload_balancing(
    request: schemas.WorkloadRequest,
    balancer: Annotated[WorkloadBalancer, Depends(get_balancer)],
):
    """
    Check whether active work is spread evenly across the team.
    """
    ENGINE_CALLS.labels(operation="workload").inc()
    return balancer.suggest_workload_balancing(request.members, request.tasks)


@router.post("/deadlines", response_model=schemas.DeadlineResponse)
def sweep_deadlines(
    request: schemas.DeadlineRequest,
    sweeper: Annotated[DeadlineSweeper, Depends(get_sweeper)],
    clock: Annotated[datetime, Depends(get_clock)],
):
    """
    Build overdue and due-tomorrow notifications for the posted tasks.
    """
    ENGINE_CALLS.labels(operation="deadlines").inc()
    notifications = sweeper.sweep_deadlines(request.tasks, request.now or clock)
    return schemas.DeadlineResponse(notifications=notifications, count=len(notifications))


@router.post("/productivity", response_model=ProductivityMetrics)
def compute_productivity(
    request: schemas.ProductivityRequest,
    calculator: Annotated[ProductivityCalculator, Depends(get_productivity_calculator)],
    clock: Annotated[datetime, Depends(get_clock)],
):
    """
    Summarize a user's throughput over the requested period.
    """
    ENGINE_CALLS.labels(operation="productivity").inc()
    return calculator.compute_productivity(
        request.user_id,
        request.tasks,
        request.period,
        request.now or clock,
    )
