"""Pytest fixtures shared by the test suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================

_FETCH_ENV_VARS = (
    "FETCH_TIMEOUT_MS",
    "FETCH_RETRY_INTERVAL_SECONDS",
    "FETCH_REFRESH_INTERVAL_SECONDS",
    "FETCH_PROXY_URL",
    "FETCH_LOG_LEVEL",
)


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch):
    """Block all network access in tests.

    Tests that need HTTP should use the fakes in tests.fakes or an
    httpx.MockTransport.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove FETCH_* variables for the test and restore them afterwards.

    Setting before deleting makes monkeypatch record the variable, so values
    loaded from a .env file during the test are removed on teardown.
    """
    for name in _FETCH_ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch
