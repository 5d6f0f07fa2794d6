"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import datetime, timedelta
from typing import Any, Callable, Dict

import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))


NOW = datetime(2026, 3, 10, 9, 0, 0)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("DEBUG", "true")
    os.environ.setdefault("METRICS_ENABLED", "true")


@pytest.fixture
def now() -> datetime:
    """Fixed reference time; engine functions never read the clock."""
    return NOW


@pytest.fixture
def make_task(now: datetime) -> Callable[..., Dict[str, Any]]:
    """
    Build a raw task row. `due_in` is days from `now` (negative = past).
    """
    counter = {"next": 1}

    def _make(due_in: float | None = None, **fields: Any) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "id": fields.pop("id", counter["next"]),
            "title": fields.pop("title", f"Task {counter['next']}"),
            "status": "pending",
            "priority": "medium",
        }
        counter["next"] += 1
        if due_in is not None:
            row["due_date"] = now + timedelta(days=due_in)
        row.update(fields)
        return row

    return _make
