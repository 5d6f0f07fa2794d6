"""
Completion Predictor

Classifies whether a goal, plan or task is keeping pace with its schedule by
comparing actual progress with the share of its time window already used.

```
expected = days_elapsed / total_days × 100      (100 when total_days <= 0)
delta    = actual - expected
```

First matching rule wins:

| Condition            | Status            | Confidence |
|----------------------|-------------------|------------|
| days_remaining < 0   | overdue           | 100        |
| delta >= 10          | ahead_of_schedule | 90         |
| delta >= -10         | on_track          | 80         |
| delta >= -25         | at_risk           | 70         |
| otherwise            | behind_schedule   | 85         |
"""

from datetime import datetime
from typing import Any, Mapping, Union

from planpulse.engine.base import ScorerBase, coerce, days_between, round_half_up
from planpulse.engine.exceptions import InvalidInputError
from planpulse.engine.models import (
    PlanItem,
    PredictionMetrics,
    PredictionResult,
    PredictionStatus,
)

PlanItemLike = Union[PlanItem, Mapping[str, Any]]


class CompletionPredictor(ScorerBase):
    """Predicts on-time completion from elapsed time and reported progress."""

    AHEAD_DELTA = 10
    ON_TRACK_DELTA = -10
    AT_RISK_DELTA = -25

    def predict_completion(self, item: PlanItemLike, now: datetime) -> PredictionResult:
        """
        Predict whether an item will finish on time.

        Args:
            item: PlanItem model or raw goal/plan/task row
            now: Reference time

        Returns:
            PredictionResult with status, confidence and integer metrics

        Raises:
            InvalidInputError: if a date is missing or due_date precedes created_at
        """
        item = coerce(PlanItem, item)

        if item.created_at is None or item.due_date is None:
            raise InvalidInputError(
                "Prediction requires both created_at and due_date",
                details=f"item={item.id}",
            )
        if item.due_date < item.created_at:
            raise InvalidInputError(
                "due_date is earlier than created_at",
                details=f"item={item.id}",
            )

        total_days = days_between(item.created_at, item.due_date)
        days_elapsed = days_between(item.created_at, now)
        days_remaining = days_between(now, item.due_date)

        if total_days <= 0:
            # Zero-length window: the whole window has already been used
            expected = 100.0
        else:
            expected = days_elapsed / total_days * 100

        actual = item.progress if item.progress is not None else 0
        delta = actual - expected

        if days_remaining < 0:
            status, confidence, recommendation = (
                PredictionStatus.OVERDUE, 100, "Immediate action required"
            )
        elif delta >= self.AHEAD_DELTA:
            status, confidence, recommendation = (
                PredictionStatus.AHEAD_OF_SCHEDULE, 90, "On track, maintain momentum"
            )
        elif delta >= self.ON_TRACK_DELTA:
            status, confidence, recommendation = (
                PredictionStatus.ON_TRACK, 80, "Progressing well"
            )
        elif delta >= self.AT_RISK_DELTA:
            status, confidence, recommendation = (
                PredictionStatus.AT_RISK, 70, "May need additional resources"
            )
        else:
            status, confidence, recommendation = (
                PredictionStatus.BEHIND_SCHEDULE, 85, "Requires immediate attention"
            )

        self.logger.debug(
            "completion_predicted",
            item=item.id,
            status=status.value,
            delta=round(delta, 1),
        )

        return PredictionResult(
            status=status,
            confidence=confidence,
            recommendation=recommendation,
            metrics=PredictionMetrics(
                expected_progress=round_half_up(expected),
                actual_progress=actual,
                progress_delta=round_half_up(delta),
                days_remaining=days_remaining,
            ),
        )


_default_predictor = CompletionPredictor()


def predict_completion(item: PlanItemLike, now: datetime) -> PredictionResult:
    """Module-level shortcut for CompletionPredictor.predict_completion."""
    return _default_predictor.predict_completion(item, now)
