from datetime import datetime, timezone

from planpulse.engine import (
    AssigneeRecommender,
    CompletionPredictor,
    DeadlineSweeper,
    ProductivityCalculator,
    RiskScorer,
    WorkloadBalancer,
)
from planpulse.engine.models import to_naive_utc

# Singletons
_risk_scorer: RiskScorer | None = None
_predictor: CompletionPredictor | None = None
_recommender: AssigneeRecommender | None = None
_balancer: WorkloadBalancer | None = None
_sweeper: DeadlineSweeper | None = None
_productivity: ProductivityCalculator | None = None


def get_risk_scorer() -> RiskScorer:
    global _risk_scorer
    if not _risk_scorer:
        _risk_scorer = RiskScorer()
    return _risk_scorer


def get_predictor() -> CompletionPredictor:
    global _predictor
    if not _predictor:
        _predictor = CompletionPredictor()
    return _predictor


def get_recommender() -> AssigneeRecommender:
    global _recommender
    if not _recommender:
        _recommender = AssigneeRecommender()
    return _recommender


def get_balancer() -> WorkloadBalancer:
    global _balancer
    if not _balancer:
        _balancer = WorkloadBalancer()
    return _balancer


def get_sweeper() -> DeadlineSweeper:
    global _sweeper
    if not _sweeper:
        _sweeper = DeadlineSweeper()
    return _sweeper


def get_productivity_calculator() -> ProductivityCalculator:
    global _productivity
    if not _productivity:
        _productivity = ProductivityCalculator()
    return _productivity


def get_clock() -> datetime:
    """Current UTC time, used when a request does not pin `now`."""
    return to_naive_utc(datetime.now(timezone.utc))
