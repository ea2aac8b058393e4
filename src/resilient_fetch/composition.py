"""Composition root for wiring configured fetch wrappers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TypeVar

from .config import FetchConfig
from .config_file import load_fetch_config_file
from .infrastructure import (
    AuthRefresher,
    RefreshCache,
    fetch_by_proxy,
    fetch_with_retry,
    fetch_with_timeout,
    fixed_refresh,
)
from .protocols import Response, Transport
from .types import RequestOptions

T = TypeVar("T")


@dataclass(frozen=True)
class FetchToolkit:
    """The five wrappers bound to one transport and one set of configured defaults.

    Options passed explicitly win; `None` options pick up the configured timeout,
    and proxied requests without a proxy URL pick up the configured one.
    """

    config: FetchConfig
    transport: Transport | None = None

    def default_options(self) -> RequestOptions:
        return RequestOptions(timeout_ms=self.config.timeout_ms)

    async def fetch(self, url: str, options: RequestOptions | None = None) -> Response:
        return await fetch_with_timeout(
            url, options or self.default_options(), transport=self.transport
        )

    async def fetch_by_proxy(self, url: str, options: RequestOptions | None = None) -> Response:
        options = options or self.default_options()
        if not options.proxy_url and self.config.proxy_url:
            options = replace(options, proxy_url=self.config.proxy_url)
        return await fetch_by_proxy(url, options, transport=self.transport)

    async def fetch_with_retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await fetch_with_retry(operation, self.config.retry_interval_seconds)

    def fetch_with_auth(self, token_operation: Callable[[], Awaitable[str]]) -> AuthRefresher:
        return AuthRefresher(
            token_operation,
            transport=self.transport,
            retry_interval=self.config.retry_interval_seconds,
            default_options=self.default_options(),
        )

    def fixed_refresh(
        self,
        operation: Callable[[], Awaitable[T]],
        interval: float | None = None,
    ) -> RefreshCache[T]:
        return fixed_refresh(
            operation,
            self.config.refresh_interval_seconds if interval is None else interval,
            retry_interval=self.config.retry_interval_seconds,
        )


def build_fetch_toolkit(
    *,
    config: FetchConfig | None = None,
    config_path: str | Path | None = None,
    transport: Transport | None = None,
) -> FetchToolkit:
    """Build a toolkit from explicit config, or from the environment plus an optional TOML file.

    Args:
        config: Explicit configuration. Loaded with `FetchConfig.from_env()` when omitted.
        config_path: Optional TOML file whose values override `config`.
        transport: Transport shared by every wrapper; httpx per-call clients when omitted.
    """
    resolved = config or FetchConfig.from_env()
    if config_path is not None:
        resolved = resolved.with_file_overrides(load_fetch_config_file(path=Path(config_path)))
    return FetchToolkit(config=resolved, transport=transport)
