"""
Tests for the HTTP routes.

The lifespan is not entered (no `with TestClient(...)`), so no database
or background runner is started; the workflow dependency is overridden
with one built over fakes.
"""

import pytest
from fastapi.testclient import TestClient

from run_goals.api.v1.routes.totals import get_workflow
from run_goals.config import settings
from run_goals.main import app

from fakes import FakeCredentialStore, make_user


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_workflow(make_workflow):
    def _use(*args, **kwargs):
        workflow, parts = make_workflow(*args, **kwargs)
        app.dependency_overrides[get_workflow] = lambda: workflow
        return parts
    return _use


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTotalsRoute:

    def test_totals(self, client, use_workflow):
        users = [make_user(1, goal=50), make_user(2, goal=None), make_user(3, goal=30)]
        use_workflow(users, {1: 60.0, 2: 40.0, 3: 30.0}, stats_fail_for=frozenset())

        response = client.get("/api/v1/totals")

        assert response.status_code == 200
        assert response.json() == {"totalMiles": 130.0, "totalGoal": 80.0, "failedCount": 0}

    def test_totals_with_failed_user(self, client, use_workflow):
        use_workflow([make_user(1, goal=5), make_user(2, goal=5)], {1: 7.0, 2: 9.0}, stats_fail_for=frozenset({2}))

        response = client.get("/api/v1/totals")

        assert response.status_code == 200
        assert response.json() == {"totalMiles": 7.0, "totalGoal": 5.0, "failedCount": 1}

    def test_totals_without_credentials(self, client, use_workflow):
        use_workflow([make_user(1)], {1: 1.0}, credential_store=FakeCredentialStore(blob=None))

        response = client.get("/api/v1/totals")

        assert response.status_code == 503
        assert response.json()["error"] == "SecretUnavailable"


class TestInternalGoalCheckRoute:

    def test_requires_api_key(self, client, use_workflow, monkeypatch):
        monkeypatch.setattr(settings, "internal_api_key", "secret-key")
        use_workflow([make_user(1)], {1: 1.0})

        response = client.post("/api/v1/internal/goal-check", headers={"X-API-Key": "wrong"})

        assert response.status_code == 401

    def test_not_configured(self, client, use_workflow, monkeypatch):
        monkeypatch.setattr(settings, "internal_api_key", None)
        use_workflow([make_user(1)], {1: 1.0})

        response = client.post("/api/v1/internal/goal-check", headers={"X-API-Key": "anything"})

        assert response.status_code == 503

    def test_runs_goal_check(self, client, use_workflow, monkeypatch):
        monkeypatch.setattr(settings, "internal_api_key", "secret-key")
        parts = use_workflow([make_user(1, goal=10), make_user(2, goal=100)], {1: 12.0, 2: 50.0})

        response = client.post("/api/v1/internal/goal-check", headers={"X-API-Key": "secret-key"})

        assert response.status_code == 200
        assert response.json() == {"succeeded": 2, "failed": 0, "notified": 1, "skipped": 0}
        assert [r for r, _, _ in parts["notifier"].sent] == [1001]

    def test_fatal_goal_check_is_503(self, client, use_workflow, monkeypatch):
        monkeypatch.setattr(settings, "internal_api_key", "secret-key")
        use_workflow([make_user(1)], {1: 1.0}, credential_store=FakeCredentialStore(blob=None))

        response = client.post("/api/v1/internal/goal-check", headers={"X-API-Key": "secret-key"})

        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "SecretUnavailable"
