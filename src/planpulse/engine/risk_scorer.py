"""
Risk Scorer

Scores how likely an open task is to miss its deadline.

Scoring Algorithm (additive, then capped at 10):
```
+5  already overdue
+4  due within 1 day and progress < 80
+3  otherwise, due within 3 days and progress < 50
+2  high priority and progress < 30
+1  has dependencies
+2  estimated_hours / 6 > days until due (and still days left)
```

Tasks scoring 7+ are high severity, 4-6 medium; lower scores are dropped.

Usage:
    scorer = RiskScorer()
    score = scorer.calculate_risk_score(task, now)
    risks = scorer.detect_risks(tasks, now)
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from planpulse.engine.base import ScorerBase, clamp, coerce
from planpulse.engine.models import (
    ACTIVE_STATUSES,
    Priority,
    RiskEntry,
    RiskReport,
    Severity,
    Task,
)
from planpulse.platform.config import settings

TaskLike = Union[Task, Mapping[str, Any]]


class RiskScorer(ScorerBase):
    """
    Detects deadline risks across open tasks.

    Features:
    - 0-10 risk score per task
    - Severity bucketing (high / medium)
    - Human-readable reasons for each flagged task
    - Batch detection that skips malformed rows instead of failing
    """

    MAX_SCORE = 10
    HIGH_THRESHOLD = 7
    MEDIUM_THRESHOLD = 4

    OVERDUE_POINTS = 5
    DUE_TOMORROW_POINTS = 4
    DUE_SOON_POINTS = 3
    HIGH_PRIORITY_POINTS = 2
    DEPENDENCY_POINTS = 1
    CAPACITY_POINTS = 2

    def __init__(self, productive_hours_per_day: Optional[float] = None):
        super().__init__()
        self.productive_hours_per_day = (
            productive_hours_per_day
            if productive_hours_per_day is not None
            else settings.PRODUCTIVE_HOURS_PER_DAY
        )

    def calculate_risk_score(self, task: TaskLike, now: datetime) -> int:
        """
        Calculate the risk score for a single task.

        Args:
            task: Task model or raw task row
            now: Reference time

        Returns:
            Integer score in [0, 10]
        """
        task = coerce(Task, task)
        days = self.days_until(task.due_date, now)
        progress = task.progress if task.progress is not None else 0
        score = 0

        # Any lateness counts, even when the day count still rounds up to 0
        if self.is_overdue(task, now):
            score += self.OVERDUE_POINTS

        if days is not None:
            if days <= 1 and progress < 80:
                score += self.DUE_TOMORROW_POINTS
            elif days <= 3 and progress < 50:
                score += self.DUE_SOON_POINTS

        if task.priority == Priority.HIGH and progress < 30:
            score += self.HIGH_PRIORITY_POINTS

        if task.depends_on:
            score += self.DEPENDENCY_POINTS

        if task.estimated_hours and days is not None and days > 0:
            required_days = task.estimated_hours / self.productive_hours_per_day
            if required_days > days:
                score += self.CAPACITY_POINTS

        return int(clamp(score, 0, self.MAX_SCORE))

    def risk_reasons(self, task: TaskLike, now: datetime) -> List[str]:
        """Explain a task's risk in display order."""
        task = coerce(Task, task)
        days = self.days_until(task.due_date, now)
        progress = task.progress if task.progress is not None else 0
        reasons = []

        if days is not None:
            if days < 0:
                reasons.append(f"Overdue by {abs(days)} day(s)")
            elif days <= 1:
                reasons.append(f"Due in {days} day(s)")

            if progress < 50 and days <= 3:
                reasons.append(f"Only {progress}% complete")

        if task.priority == Priority.HIGH:
            reasons.append("High priority")

        if task.depends_on:
            reasons.append("Has dependencies")

        return reasons

    def severity_for(self, score: int) -> Optional[Severity]:
        if score >= self.HIGH_THRESHOLD:
            return Severity.HIGH
        if score >= self.MEDIUM_THRESHOLD:
            return Severity.MEDIUM
        return None

    def detect_risks(self, tasks: Iterable[TaskLike], now: datetime) -> List[RiskEntry]:
        """
        Find open tasks at risk of missing their deadline.

        Args:
            tasks: Task models or raw task rows
            now: Reference time

        Returns:
            RiskEntry list sorted by descending score (input order on ties)
        """
        return self.detect_risk_report(tasks, now).risks

    def detect_risk_report(self, tasks: Iterable[TaskLike], now: datetime) -> RiskReport:
        """Detect risks and tally them by severity."""
        risks: List[RiskEntry] = []
        skipped = 0

        for index, raw in enumerate(tasks):
            try:
                task = coerce(Task, raw)
            except ValidationError as e:
                skipped += 1
                self.logger.warning(
                    "risk_task_skipped",
                    index=index,
                    errors=e.error_count(),
                )
                continue

            if task.status not in ACTIVE_STATUSES:
                continue

            score = self.calculate_risk_score(task, now)
            severity = self.severity_for(score)
            if severity is None:
                continue

            risks.append(RiskEntry(
                task=task,
                risk_score=score,
                severity=severity,
                reasons=self.risk_reasons(task, now),
            ))

        # sort() is stable, so ties keep input order
        risks.sort(key=lambda r: r.risk_score, reverse=True)

        high = sum(1 for r in risks if r.severity == Severity.HIGH)
        self.logger.debug(
            "risks_detected",
            flagged=len(risks),
            high=high,
            skipped=skipped,
        )

        return RiskReport(
            risks=risks,
            count=len(risks),
            high_severity=high,
            medium_severity=len(risks) - high,
            skipped=skipped,
        )


_default_scorer = RiskScorer()


def calculate_risk_score(task: TaskLike, now: datetime) -> int:
    """Module-level shortcut for RiskScorer.calculate_risk_score."""
    return _default_scorer.calculate_risk_score(task, now)


def detect_risks(tasks: Iterable[TaskLike], now: datetime) -> List[RiskEntry]:
    """Module-level shortcut for RiskScorer.detect_risks."""
    return _default_scorer.detect_risks(tasks, now)


def detect_risk_report(tasks: Iterable[TaskLike], now: datetime) -> RiskReport:
    """Module-level shortcut for RiskScorer.detect_risk_report."""
    return _default_scorer.detect_risk_report(tasks, now)
