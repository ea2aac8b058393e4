"""Concrete wrapper implementations and shared helpers."""

from .auth import AUTH_FAILURE_STATUSES, AuthRefresher, fetch_with_auth
from .cache import DEFAULT_REFRESH_INTERVAL_SECONDS, RefreshCache, fixed_refresh
from .http import (
    DEFAULT_TRANSPORT,
    HttpxTransport,
    build_proxy_agent,
    fetch_by_proxy,
    fetch_with_timeout,
)
from .resilience import DEFAULT_RETRY_INTERVAL_SECONDS, SingleFlight, fetch_with_retry

__all__ = [
    "AUTH_FAILURE_STATUSES",
    "AuthRefresher",
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "DEFAULT_RETRY_INTERVAL_SECONDS",
    "DEFAULT_TRANSPORT",
    "HttpxTransport",
    "RefreshCache",
    "SingleFlight",
    "build_proxy_agent",
    "fetch_by_proxy",
    "fetch_with_auth",
    "fetch_with_retry",
    "fetch_with_timeout",
    "fixed_refresh",
]
