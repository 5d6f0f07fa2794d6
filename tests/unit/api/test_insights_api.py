"""
Unit tests for the insights API.
"""

import pytest
from fastapi.testclient import TestClient

from planpulse.api.main import app

NOW = "2026-03-10T09:00:00"


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


class TestHealthEndpoints:

    def test_liveness(self, client: TestClient) -> None:
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_metrics_exposed(self, client: TestClient) -> None:
        client.post("/api/v1/insights/workload", json={"members": [], "tasks": []})
        response = client.get("/metrics/")
        assert response.status_code == 200
        assert "planpulse_engine_calls_total" in response.text


class TestRisksEndpoint:

    def test_returns_camel_case_report(self, client: TestClient) -> None:
        payload = {
            "now": NOW,
            "tasks": [
                {"id": 1, "title": "Late", "due_date": "2026-03-08", "priority": "high", "progress": 20},
                {"id": 2, "title": "Fine", "due_date": "2026-04-30", "progress": 10},
                {"id": 3, "progress": "lots"},
            ],
        }

        response = client.post("/api/v1/insights/risks", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["high_severity"] == 1
        assert data["medium_severity"] == 0
        assert data["skipped"] == 1
        risk = data["risks"][0]
        assert risk["riskScore"] == 10
        assert risk["severity"] == "high"
        assert risk["task"]["id"] == 1
        assert risk["reasons"][0] == "Overdue by 2 day(s)"


class TestPredictionsEndpoint:

    def test_prediction(self, client: TestClient) -> None:
        payload = {
            "now": "2026-01-16",
            "item": {"created_at": "2026-01-01", "due_date": "2026-01-31", "progress": 80},
        }

        response = client.post("/api/v1/insights/predictions", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ahead_of_schedule"
        assert data["confidence"] == 90
        assert data["metrics"] == {
            "expectedProgress": 50,
            "actualProgress": 80,
            "progressDelta": 30,
            "daysRemaining": 15,
        }

    def test_inverted_dates_are_bad_request(self, client: TestClient) -> None:
        payload = {"item": {"created_at": "2026-02-01", "due_date": "2026-01-01"}}

        response = client.post("/api/v1/insights/predictions", json=payload)

        assert response.status_code == 400
        assert "earlier than created_at" in response.json()["detail"]

    def test_out_of_range_progress_is_unprocessable(self, client: TestClient) -> None:
        payload = {"item": {"created_at": "2026-01-01", "due_date": "2026-01-31", "progress": 140}}
        response = client.post("/api/v1/insights/predictions", json=payload)
        assert response.status_code == 422


class TestAssigneeEndpoint:

    def test_suggestion_with_ranking(self, client: TestClient) -> None:
        payload = {
            "now": NOW,
            "task": {"id": 99, "tags": ["python"]},
            "members": [
                {"id": 1, "name": "Bob"},
                {"id": 2, "name": "Alice", "skills": ["python"]},
            ],
            "existing_tasks": [{"id": 5, "assigned_to": 1, "due_date": "2026-03-09"}],
        }

        response = client.post("/api/v1/insights/assignee", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["member"]["name"] == "Alice"
        assert data["score"] == 120
        assert data["activeTasks"] == 0
        assert data["overdueCount"] == 0
        assert data["reasoning"] == "Alice - Best fit: no active tasks"
        assert [c["member"]["name"] for c in data["candidates"]] == ["Alice", "Bob"]

    def test_empty_roster_is_bad_request(self, client: TestClient) -> None:
        payload = {"task": {"id": 1}, "members": []}
        response = client.post("/api/v1/insights/assignee", json=payload)
        assert response.status_code == 400


class TestWorkloadEndpoint:

    def test_needs_balancing(self, client: TestClient) -> None:
        tasks = [{"id": i, "assigned_to": 1} for i in range(4)]
        payload = {"members": [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Ben"}], "tasks": tasks}

        response = client.post("/api/v1/insights/workload", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["needsBalancing"] is True
        assert data["overloaded"]["taskCount"] == 4
        assert data["suggestion"] == "Consider reassigning tasks from Ann (4 tasks) to Ben (0 tasks)"


class TestDeadlinesEndpoint:

    def test_notifications(self, client: TestClient) -> None:
        payload = {
            "now": NOW,
            "tasks": [
                {"id": 1, "title": "A", "user_id": 4, "due_date": "2026-03-01"},
                {"id": 2, "title": "B", "user_id": 4, "due_date": "2026-03-11"},
                {"id": 3, "title": "C", "user_id": 4, "due_date": "2026-03-01", "status": "completed"},
            ],
        }

        response = client.post("/api/v1/insights/deadlines", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [n["type"] for n in data["notifications"]] == ["overdue", "reminder"]


class TestProductivityEndpoint:

    def test_metrics(self, client: TestClient) -> None:
        payload = {
            "now": NOW,
            "user_id": 1,
            "period": "week",
            "tasks": [
                {"id": 1, "assigned_to": 1, "status": "completed",
                 "created_at": "2026-03-05T09:00:00", "updated_at": "2026-03-08T09:00:00",
                 "due_date": "2026-03-09"},
                {"id": 2, "assigned_to": 1, "status": "in_progress"},
            ],
        }

        response = client.post("/api/v1/insights/productivity", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["completed"] == 1
        assert data["in_progress"] == 1
        assert data["avg_completion_days"] == 3.0
        assert data["on_time_rate"] == 100

    def test_unknown_period_is_bad_request(self, client: TestClient) -> None:
        payload = {"user_id": 1, "period": "decade", "tasks": []}
        response = client.post("/api/v1/insights/productivity", json=payload)
        assert response.status_code == 400
