"""
Productivity Metrics

Summarizes one user's recent task history: throughput, open work, overdue
work, average completion time and on-time rate.
"""

from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Union

from planpulse.engine.base import SECONDS_PER_DAY, ScorerBase, round_half_up
from planpulse.engine.exceptions import InvalidInputError
from planpulse.engine.models import (
    Identifier,
    ProductivityMetrics,
    Task,
    TaskStatus,
    to_naive_utc,
)

TaskLike = Union[Task, Mapping[str, Any]]

PERIOD_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
    "quarter": 91,
    "year": 365,
}


class ProductivityCalculator(ScorerBase):
    """Computes per-user productivity metrics over a reporting period."""

    def compute_productivity(
        self,
        user_id: Identifier,
        tasks: Iterable[TaskLike],
        period: str,
        now: datetime,
    ) -> ProductivityMetrics:
        """
        Compute metrics for the tasks assigned to a user.

        Args:
            user_id: Assignee to report on
            tasks: Tasks in scope (other assignees are ignored)
            period: One of day, week, month, quarter, year
            now: End of the reporting window

        Raises:
            InvalidInputError: if the period is unknown
        """
        if period not in PERIOD_DAYS:
            raise InvalidInputError(
                f"Unknown period '{period}'",
                details=f"expected one of {', '.join(PERIOD_DAYS)}",
            )

        now = to_naive_utc(now)
        since = now - timedelta(days=PERIOD_DAYS[period])
        mine = [t for t in self.coerce_tasks(tasks) if t.assigned_to == user_id]

        completed = [
            t for t in mine
            if t.status == TaskStatus.COMPLETED
            and t.updated_at is not None
            and t.updated_at >= since
        ]

        durations = [
            (t.updated_at - t.created_at).total_seconds() / SECONDS_PER_DAY
            for t in completed
            if t.created_at is not None
        ]
        avg_days = 0.0
        if durations:
            # One decimal, half-up
            avg_days = round_half_up(sum(durations) / len(durations) * 10) / 10

        with_deadline = [t for t in completed if t.due_date is not None]
        on_time_rate = None
        if with_deadline:
            on_time = sum(
                1 for t in with_deadline
                if t.updated_at.date() <= t.due_date.date()
            )
            on_time_rate = round_half_up(on_time / len(with_deadline) * 100)

        return ProductivityMetrics(
            user_id=user_id,
            period=period,
            completed=len(completed),
            in_progress=sum(1 for t in mine if t.status == TaskStatus.IN_PROGRESS),
            overdue=sum(
                1 for t in mine
                if t.status != TaskStatus.COMPLETED and self.is_overdue(t, now)
            ),
            avg_completion_days=avg_days,
            on_time_rate=on_time_rate,
        )


_default_calculator = ProductivityCalculator()


def compute_productivity(
    user_id: Identifier,
    tasks: Iterable[TaskLike],
    period: str,
    now: datetime,
) -> ProductivityMetrics:
    """Module-level shortcut for ProductivityCalculator.compute_productivity."""
    return _default_calculator.compute_productivity(user_id, tasks, period, now)
