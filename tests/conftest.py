"""
Pytest configuration and fixtures for WINGS client tests.

Provides a scripted transport, a recording sleep, and environment cleanup.
"""

import os
from typing import Any, Dict, List, Optional

import pytest

from wings_client.domain.interfaces import Transport
from wings_client.infrastructure.cache.memory import InMemoryResponseCache
from wings_client.infrastructure.http.client import WingsApi


class ScriptedTransport(Transport):
    """Transport double that replays queued responses per endpoint and records calls."""

    def __init__(self, responses: Optional[Dict[str, List[Any]]] = None) -> None:
        self.responses: Dict[str, List[Any]] = {k: list(v) for k, v in (responses or {}).items()}
        self.calls: List[tuple] = []

    def queue(self, endpoint: str, *responses: Any) -> None:
        self.responses.setdefault(endpoint, []).extend(responses)

    def call(self, method: str, endpoint: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append((method, endpoint, dict(arguments or {})))
        queue = self.responses.get(endpoint) or []
        if not queue:
            raise AssertionError(f"Unexpected call to {endpoint} with {arguments}")
        nxt = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    def calls_to(self, endpoint: str) -> List[tuple]:
        return [c for c in self.calls if c[1] == endpoint]


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def transport():
    """Empty scripted transport; tests queue responses per endpoint."""
    return ScriptedTransport()


@pytest.fixture
def cache():
    return InMemoryResponseCache()


@pytest.fixture
def api(transport, cache):
    """WingsApi wired to the scripted transport and a fresh cache."""
    return WingsApi(transport, cache=cache)


@pytest.fixture
def sleeper():
    return RecordingSleep()


@pytest.fixture
def sample_filter_tree():
    """Filter tree as returned by samples/filter."""
    return [
        {
            "id": "1",
            "name": "Quality",
            "children": [
                {"id": "11", "name": "PASS only", "children": []},
                {"id": "12", "name": "Depth >= 10"},
            ],
        },
        {
            "id": "2",
            "name": "Impact",
            "children": [
                {"id": "21", "name": "High impact", "children": []},
                {
                    "id": "22",
                    "name": "Consequence",
                    "children": [{"id": "221", "name": "Missense", "children": []}],
                },
            ],
        },
    ]


@pytest.fixture
def sample_individuals():
    return [
        {"id": 1, "local_id": "S1", "sex": "F", "cohort": "rare-disease"},
        {"id": 2, "local_id": "S2", "sex": "M"},
    ]


@pytest.fixture
def clean_environment():
    """Clean WINGS_* environment variables for testing."""
    env_vars_to_clean = [
        'WINGS_API_URL',
        'WINGS_API_TOKEN',
        'WINGS_POLL_ATTEMPTS',
        'WINGS_POLL_INTERVAL',
        'WINGS_MAX_PAGES',
        'WINGS_HTTP_TIMEOUT',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    # Restore original environment
    for var, value in original_env.items():
        os.environ[var] = value
