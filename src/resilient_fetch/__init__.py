"""Composable async wrappers for timeout, retry, auth refresh, proxying and cached refresh."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    FetchError,
    FetchTimeoutError,
    MissingProxyUrlError,
    PreconditionError,
)
from .infrastructure import (
    AuthRefresher,
    HttpxTransport,
    RefreshCache,
    SingleFlight,
    build_proxy_agent,
    fetch_by_proxy,
    fetch_with_auth,
    fetch_with_retry,
    fetch_with_timeout,
    fixed_refresh,
)
from .types import AuthState, RequestOptions

_PACKAGE_NAME = "resilient-fetch"


def _resolve_version() -> str:
    try:
        return version(_PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _resolve_version()

__all__ = [
    "AuthRefresher",
    "AuthState",
    "FetchError",
    "FetchTimeoutError",
    "HttpxTransport",
    "MissingProxyUrlError",
    "PreconditionError",
    "RefreshCache",
    "RequestOptions",
    "SingleFlight",
    "__version__",
    "build_proxy_agent",
    "fetch_by_proxy",
    "fetch_with_auth",
    "fetch_with_retry",
    "fetch_with_timeout",
    "fixed_refresh",
]
