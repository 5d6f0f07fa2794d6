"""
Tests for the ProductivityCalculator.
"""

from datetime import timedelta

import pytest

from planpulse.engine import InvalidInputError, compute_productivity


@pytest.fixture
def history(now):
    """Tasks for user 1 plus noise from user 2."""
    def days(n):
        return now - timedelta(days=n)

    return [
        # Completed this week: 2 days of work, on time
        {"id": 1, "assigned_to": 1, "status": "completed",
         "created_at": days(5), "updated_at": days(3), "due_date": days(2)},
        # Completed this week: 4 days of work, late
        {"id": 2, "assigned_to": 1, "status": "completed",
         "created_at": days(6), "updated_at": days(2), "due_date": days(4)},
        # Completed this week, no deadline: 1 day of work
        {"id": 3, "assigned_to": 1, "status": "completed",
         "created_at": days(2), "updated_at": days(1)},
        # Completed last month: outside a weekly window
        {"id": 4, "assigned_to": 1, "status": "completed",
         "created_at": days(40), "updated_at": days(30), "due_date": days(35)},
        {"id": 5, "assigned_to": 1, "status": "in_progress", "due_date": days(1)},
        {"id": 6, "assigned_to": 1, "status": "pending", "due_date": days(-5)},
        {"id": 7, "assigned_to": 1, "status": "cancelled", "due_date": days(3)},
        {"id": 8, "assigned_to": 2, "status": "in_progress", "due_date": days(-9)},
    ]


class TestComputeProductivity:

    def test_weekly_metrics(self, history, now):
        metrics = compute_productivity(1, history, "week", now)

        assert metrics.user_id == 1
        assert metrics.period == "week"
        assert metrics.completed == 3
        assert metrics.in_progress == 1
        # in_progress task and the cancelled task are both past due
        assert metrics.overdue == 2
        assert metrics.avg_completion_days == pytest.approx(2.3)
        assert metrics.on_time_rate == 50

    def test_wider_period_includes_older_work(self, history, now):
        metrics = compute_productivity(1, history, "quarter", now)

        assert metrics.completed == 4
        assert metrics.on_time_rate == 33

    def test_no_completed_work(self, now):
        metrics = compute_productivity(
            1, [{"id": 1, "assigned_to": 1, "status": "pending"}], "day", now
        )

        assert metrics.completed == 0
        assert metrics.avg_completion_days == 0.0
        assert metrics.on_time_rate is None

    def test_average_rounds_half_up(self, now):
        # 2.25 days of work reports as 2.3
        row = {
            "id": 1, "assigned_to": 1, "status": "completed",
            "created_at": now - timedelta(days=3),
            "updated_at": now - timedelta(days=0.75),
        }
        metrics = compute_productivity(1, [row], "week", now)
        assert metrics.avg_completion_days == 2.3

    def test_other_users_ignored(self, history, now):
        metrics = compute_productivity(2, history, "week", now)

        assert metrics.in_progress == 1
        assert metrics.completed == 0
        assert metrics.overdue == 0

    def test_unknown_period(self, now):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_productivity(1, [], "fortnight", now)
        assert "fortnight" in exc_info.value.message
