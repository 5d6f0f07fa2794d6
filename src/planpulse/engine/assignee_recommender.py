"""
Assignee Recommender

Ranks team members for a task by current workload, overdue work, skill overlap
and deadline congestion.

Scoring Algorithm:
```
score = 100
      - 15 × active_tasks
      - 25 × overdue_tasks
      + 20 × matching_skills        (task tags ∩ member skills)
      - 10 × tasks_due_within_3_days
score = max(0, score)
```

There is no upper cap: a free specialist can score above 100.

Usage:
    recommender = AssigneeRecommender()
    ranking = recommender.rank_assignees(task, members, existing_tasks, now)
    best = recommender.suggest_assignee(task, members, existing_tasks, now)
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Sequence, Union

from planpulse.engine.base import ScorerBase, coerce
from planpulse.engine.exceptions import InvalidInputError
from planpulse.engine.models import (
    AssigneeCandidate,
    AssignmentSuggestion,
    Member,
    Task,
)

TaskLike = Union[Task, Mapping[str, Any]]
MemberLike = Union[Member, Mapping[str, Any]]


class AssigneeRecommender(ScorerBase):
    """
    Suggests who should pick up a task.

    Features:
    - Workload and overdue penalties
    - Skill match bonus from task tags
    - Upcoming deadline congestion penalty
    - Full ranking kept alongside the best pick
    """

    BASE_SCORE = 100
    ACTIVE_TASK_PENALTY = 15
    OVERDUE_PENALTY = 25
    SKILL_MATCH_BONUS = 20
    UPCOMING_DEADLINE_PENALTY = 10
    UPCOMING_DEADLINE_DAYS = 3

    # Reasoning tiers
    BEST_FIT = 80
    GOOD_FIT = 50

    def score_member(
        self,
        task: Task,
        member: Member,
        existing_tasks: Sequence[Task],
        now: datetime,
    ) -> AssigneeCandidate:
        """Score a single member against a task."""
        member_tasks = [
            t for t in existing_tasks
            if t.assigned_to == member.id and t.is_active
        ]

        score = self.BASE_SCORE
        score -= len(member_tasks) * self.ACTIVE_TASK_PENALTY

        overdue_count = sum(1 for t in member_tasks if self.is_overdue(t, now))
        score -= overdue_count * self.OVERDUE_PENALTY

        matching: List[str] = []
        if task.tags and member.skills:
            skills = set(member.skills)
            matching = [tag for tag in dict.fromkeys(task.tags) if tag in skills]
            score += len(matching) * self.SKILL_MATCH_BONUS

        upcoming = 0
        for t in member_tasks:
            days = self.days_until(t.due_date, now)
            if days is not None and days <= self.UPCOMING_DEADLINE_DAYS:
                upcoming += 1
        score -= upcoming * self.UPCOMING_DEADLINE_PENALTY

        score = max(0, score)

        return AssigneeCandidate(
            member=member,
            score=score,
            active_tasks=len(member_tasks),
            overdue_count=overdue_count,
            upcoming_deadlines=upcoming,
            matching_skills=matching,
            reasoning=self.generate_reasoning(
                member, len(member_tasks), overdue_count, score
            ),
        )

    def generate_reasoning(
        self,
        member: Member,
        task_count: int,
        overdue_count: int,
        score: int,
    ) -> str:
        """Build the one-line explanation shown next to a suggestion."""
        reasons = []

        if task_count == 0:
            reasons.append("no active tasks")
        elif task_count <= 2:
            plural = "s" if task_count > 1 else ""
            reasons.append(f"only {task_count} active task{plural}")
        else:
            reasons.append(f"{task_count} active tasks")

        if overdue_count > 0:
            reasons.append(f"{overdue_count} overdue")

        if score >= self.BEST_FIT:
            tier = "Best fit"
        elif score >= self.GOOD_FIT:
            tier = "Good fit"
        else:
            tier = "Available but busy"

        return f"{member.name} - {tier}: {', '.join(reasons)}"

    def rank_assignees(
        self,
        task: TaskLike,
        members: Iterable[MemberLike],
        existing_tasks: Iterable[TaskLike],
        now: datetime,
    ) -> List[AssigneeCandidate]:
        """
        Rank every member for a task.

        Args:
            task: The task being assigned
            members: Candidate members
            existing_tasks: Tasks already in the system (any status)
            now: Reference time

        Returns:
            Candidates sorted by descending score, input order on ties
        """
        task = coerce(Task, task)
        roster = [coerce(Member, m) for m in members]
        existing = self.coerce_tasks(existing_tasks)

        candidates = [self.score_member(task, m, existing, now) for m in roster]
        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates

    def suggest_assignee(
        self,
        task: TaskLike,
        members: Iterable[MemberLike],
        existing_tasks: Iterable[TaskLike],
        now: datetime,
    ) -> AssignmentSuggestion:
        """
        Pick the best member for a task.

        Raises:
            InvalidInputError: if there are no members to choose from
        """
        task = coerce(Task, task)
        ranking = self.rank_assignees(task, members, existing_tasks, now)
        if not ranking:
            raise InvalidInputError("At least one team member is required")

        best = ranking[0]
        self.logger.info(
            "assignee_suggested",
            task=task.id,
            member=best.member.id,
            score=best.score,
            candidates=len(ranking),
        )
        return AssignmentSuggestion(**dict(best), candidates=ranking)


_default_recommender = AssigneeRecommender()


def rank_assignees(
    task: TaskLike,
    members: Iterable[MemberLike],
    existing_tasks: Iterable[TaskLike],
    now: datetime,
) -> List[AssigneeCandidate]:
    """Module-level shortcut for AssigneeRecommender.rank_assignees."""
    return _default_recommender.rank_assignees(task, members, existing_tasks, now)


def suggest_assignee(
    task: TaskLike,
    members: Iterable[MemberLike],
    existing_tasks: Iterable[TaskLike],
    now: datetime,
) -> AssignmentSuggestion:
    """Module-level shortcut for AssigneeRecommender.suggest_assignee."""
    return _default_recommender.suggest_assignee(task, members, existing_tasks, now)
