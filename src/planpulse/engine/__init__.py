"""
PlanPulse Scoring Engine

Rule-based scorers over task, goal and member records supplied by the web
backend. Every operation is a pure function of its inputs and an explicit
`now`:

- RiskScorer: deadline risk scores and severity
- CompletionPredictor: schedule adherence for goals, plans and tasks
- AssigneeRecommender: ranks members for a task
- WorkloadBalancer: flags uneven active task counts
- DeadlineSweeper: overdue and due-tomorrow notifications
- ProductivityCalculator: per-user throughput metrics
"""

from .exceptions import EngineError, InvalidInputError
from .risk_scorer import (
    RiskScorer,
    calculate_risk_score,
    detect_risk_report,
    detect_risks,
)
from .completion_predictor import CompletionPredictor, predict_completion
from .assignee_recommender import AssigneeRecommender, rank_assignees, suggest_assignee
from .workload_balancer import WorkloadBalancer, suggest_workload_balancing
from .deadline_sweeper import DeadlineSweeper, sweep_deadlines
from .productivity import ProductivityCalculator, compute_productivity

__all__ = [
    # Scorers
    "RiskScorer",
    "CompletionPredictor",
    "AssigneeRecommender",
    "WorkloadBalancer",
    "DeadlineSweeper",
    "ProductivityCalculator",
    # Functions
    "calculate_risk_score",
    "detect_risks",
    "detect_risk_report",
    "predict_completion",
    "rank_assignees",
    "suggest_assignee",
    "suggest_workload_balancing",
    "sweep_deadlines",
    "compute_productivity",
    # Exceptions
    "EngineError",
    "InvalidInputError",
]
