"""
Deadline Sweeper

Builds the notification rows for the daily deadline checks:
- Overdue: open tasks whose due date has passed (morning sweep)
- Reminder: open tasks due tomorrow (evening sweep)

The sweeper only builds the rows. Scheduling the sweeps and inserting the rows
is up to the caller.

Usage:
    sweeper = DeadlineSweeper()
    notifications = sweeper.sweep_deadlines(tasks, now)
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Union

from planpulse.engine.base import ScorerBase
from planpulse.engine.models import (
    CLOSED_STATUSES,
    Notification,
    NotificationType,
    Task,
    to_naive_utc,
)

TaskLike = Union[Task, Mapping[str, Any]]


class DeadlineSweeper(ScorerBase):
    """Turns due dates into overdue and due-tomorrow notifications."""

    OVERDUE_TITLE = "Overdue Task"
    REMINDER_TITLE = "Task Due Tomorrow"

    def sweep_overdue(self, tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
        """Notify owners of open tasks due before today."""
        today = to_naive_utc(now).date()
        return self._sweep(
            tasks,
            lambda due: due < today,
            NotificationType.OVERDUE,
        )

    def sweep_due_tomorrow(self, tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
        """Remind owners of open tasks due tomorrow."""
        tomorrow = to_naive_utc(now).date() + timedelta(days=1)
        return self._sweep(
            tasks,
            lambda due: due == tomorrow,
            NotificationType.REMINDER,
        )

    def sweep_deadlines(self, tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
        """Run both sweeps: overdue notifications first, then reminders."""
        tasks = self.coerce_tasks(tasks)
        return self.sweep_overdue(tasks, now) + self.sweep_due_tomorrow(tasks, now)

    def _sweep(self, tasks, matches, kind: NotificationType) -> List[Notification]:
        notifications = []
        for task in self.coerce_tasks(tasks):
            if task.due_date is None or task.status in CLOSED_STATUSES:
                continue
            due = task.due_date.date()
            if not matches(due):
                continue

            recipient = self._recipient(task)
            if recipient is None:
                self.logger.warning("deadline_task_without_owner", task=task.id)
                continue

            notifications.append(self._build(task, recipient, due, kind))

        self.logger.info(
            "deadline_sweep_complete",
            kind=kind.value,
            created=len(notifications),
        )
        return notifications

    def _recipient(self, task: Task) -> Optional[Union[int, str]]:
        if task.user_id is not None:
            return task.user_id
        return task.assigned_to

    def _build(
        self,
        task: Task,
        recipient: Union[int, str],
        due: date,
        kind: NotificationType,
    ) -> Notification:
        title = task.title or f"#{task.id}"
        if kind == NotificationType.OVERDUE:
            return Notification(
                user_id=recipient,
                task_id=task.id,
                type=kind,
                title=self.OVERDUE_TITLE,
                message=f'Task "{title}" is overdue. Due date was {due.isoformat()}.',
            )
        return Notification(
            user_id=recipient,
            task_id=task.id,
            type=kind,
            title=self.REMINDER_TITLE,
            message=f'Reminder: Task "{title}" is due tomorrow ({due.isoformat()}).',
        )


_default_sweeper = DeadlineSweeper()


def sweep_deadlines(tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
    """Module-level shortcut for DeadlineSweeper.sweep_deadlines."""
    return _default_sweeper.sweep_deadlines(tasks, now)


def sweep_overdue(tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
    return _default_sweeper.sweep_overdue(tasks, now)


def sweep_due_tomorrow(tasks: Iterable[TaskLike], now: datetime) -> List[Notification]:
    return _default_sweeper.sweep_due_tomorrow(tasks, now)
