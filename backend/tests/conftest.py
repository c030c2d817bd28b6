"""
Shared test fixtures.
"""

from typing import Optional

import pytest

from run_goals.features.goals import AggregationWorkflow
from run_goals.features.secrets import SecretProvider
from run_goals.features.users import UserRecord, UserRepository

from fakes import (
    NOW,
    FakeCredentialStore,
    FakeNotifier,
    FakeRefresher,
    FakeStatsClient,
    InMemoryUserStore,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def make_workflow(calls):
    """
    Build a workflow over fakes.

    Returns (workflow, parts) where parts exposes every fake.
    """
    def _make(
        users: list[UserRecord],
        ytd: dict[int, Optional[float]],
        stats_fail_for: frozenset = frozenset(),
        refresh_fail_for: frozenset = frozenset(),
        fail_put: bool = False,
        credential_store: Optional[FakeCredentialStore] = None,
        deliver: bool = True,
        **kwargs,
    ):
        store = InMemoryUserStore(users, calls, fail_put=fail_put)
        parts = {
            "credential_store": credential_store or FakeCredentialStore(),
            "store": store,
            "refresher": FakeRefresher(calls, refresh_fail_for),
            "stats": FakeStatsClient(calls, ytd, stats_fail_for),
            "notifier": FakeNotifier(calls, deliver=deliver),
        }
        kwargs.setdefault("clock", lambda: NOW)
        workflow = AggregationWorkflow(
            secret_provider=SecretProvider(parts["credential_store"]),
            refresher=parts["refresher"],
            stats_client=parts["stats"],
            repository=UserRepository(store),
            notifier=parts["notifier"],
            **kwargs,
        )
        return workflow, parts

    return _make
