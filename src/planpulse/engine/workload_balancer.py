"""
Workload Balancer

Flags a team whose active task counts have drifted apart and proposes moving
work from the busiest member to the least busy one.
"""

from typing import Any, Iterable, Mapping, Optional, Union

from planpulse.engine.base import ScorerBase, coerce
from planpulse.engine.models import BalancingSuggestion, Member, Task, WorkloadEntry
from planpulse.platform.config import settings

TaskLike = Union[Task, Mapping[str, Any]]
MemberLike = Union[Member, Mapping[str, Any]]

BALANCED_MESSAGE = "Workload is balanced across team"
EMPTY_TEAM_MESSAGE = "Not enough team members to assess workload"


class WorkloadBalancer(ScorerBase):
    """Compares active task counts across a team."""

    def __init__(self, imbalance_threshold: Optional[int] = None):
        super().__init__()
        self.imbalance_threshold = (
            imbalance_threshold
            if imbalance_threshold is not None
            else settings.WORKLOAD_IMBALANCE_THRESHOLD
        )

    def suggest_workload_balancing(
        self,
        members: Iterable[MemberLike],
        tasks: Iterable[TaskLike],
    ) -> BalancingSuggestion:
        """
        Suggest a reassignment when the load gap reaches the threshold.

        Args:
            members: Team members to compare
            tasks: Tasks in the team's scope (any status)

        Returns:
            BalancingSuggestion; an empty team yields needs_balancing=False
        """
        roster = [coerce(Member, m) for m in members]
        all_tasks = self.coerce_tasks(tasks)

        if not roster:
            self.logger.warning("workload_empty_team")
            return BalancingSuggestion(needs_balancing=False, message=EMPTY_TEAM_MESSAGE)

        workload = []
        for member in roster:
            member_tasks = [
                t for t in all_tasks
                if t.assigned_to == member.id and t.is_active
            ]
            workload.append(WorkloadEntry(
                member=member,
                task_count=len(member_tasks),
                task_ids=[t.id for t in member_tasks],
            ))

        workload.sort(key=lambda w: w.task_count, reverse=True)
        busiest, lightest = workload[0], workload[-1]

        if busiest.task_count - lightest.task_count >= self.imbalance_threshold:
            return BalancingSuggestion(
                needs_balancing=True,
                overloaded=busiest,
                underutilized=lightest,
                suggestion=(
                    f"Consider reassigning tasks from {busiest.member.name} "
                    f"({busiest.task_count} tasks) to {lightest.member.name} "
                    f"({lightest.task_count} tasks)"
                ),
                workload=workload,
            )

        return BalancingSuggestion(
            needs_balancing=False,
            message=BALANCED_MESSAGE,
            workload=workload,
        )


_default_balancer = WorkloadBalancer()


def suggest_workload_balancing(
    members: Iterable[MemberLike],
    tasks: Iterable[TaskLike],
) -> BalancingSuggestion:
    """Module-level shortcut for WorkloadBalancer.suggest_workload_balancing."""
    return _default_balancer.suggest_workload_balancing(members, tasks)
