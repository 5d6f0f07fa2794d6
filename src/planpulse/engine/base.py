"""
Base class for PlanPulse scorers.

Provides the day arithmetic, clamping and record coercion every scorer
shares. Scorers never read the clock: `now` is always passed in.
"""

import math
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from planpulse.engine.models import Task, to_naive_utc
from planpulse.platform.logging import get_logger

SECONDS_PER_DAY = 86400

ModelT = TypeVar("ModelT", bound=BaseModel)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up. Negative when end is earlier."""
    delta = to_naive_utc(end) - to_naive_utc(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side, like a spreadsheet would."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def coerce(model: Type[ModelT], record: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    """Validate a raw mapping into `model`; instances pass through untouched."""
    if isinstance(record, model):
        return record
    return model.model_validate(record)


class ScorerBase:
    """
    Base class for all engine scorers.

    Provides:
    - A structured logger named after the scorer
    - Deadline arithmetic relative to an explicit `now`
    - Record coercion for raw storage rows
    """

    def __init__(self) -> None:
        self.logger = get_logger(self.__class__.__name__)

    def days_until(self, target: Optional[datetime], now: datetime) -> Optional[int]:
        """Days until a target date, or None if there is no date."""
        if target is None:
            return None
        return days_between(now, target)

    def is_overdue(self, task: Task, now: datetime) -> bool:
        return task.due_date is not None and task.due_date < to_naive_utc(now)

    def coerce_tasks(self, tasks: Iterable[Union[Task, Mapping[str, Any]]]) -> List[Task]:
        return [coerce(Task, t) for t in tasks]
