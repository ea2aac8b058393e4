"""Request options and state types shared by the fetch wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Self

import httpx

DEFAULT_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class RequestOptions:
    """Options for a single request.

    Named fields cover what the wrappers act on; `extra` carries
    transport-specific fields (method, params, json, content, ...) that are
    passed through to the transport unmodified.

    Instances are immutable. Wrappers derive new options with `with_header`,
    `with_agent` or `dataclasses.replace` so the caller's object is never
    changed.
    """

    timeout_ms: int | None = DEFAULT_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=httpx.Headers)
    proxy_url: str | None = None
    agent: httpx.AsyncBaseTransport | None = None
    extra: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Own copies, so later edits to the caller's mappings do not leak in.
        object.__setattr__(self, "headers", httpx.Headers(self.headers))
        object.__setattr__(self, "extra", dict(self.extra))

    @property
    def effective_timeout_ms(self) -> int:
        """Deadline in milliseconds; zero or unset falls back to the default."""
        return self.timeout_ms or DEFAULT_TIMEOUT_MS

    def with_header(self, key: str, value: str) -> Self:
        """Return a copy with one header set, replacing any case-variant of `key`."""
        headers = httpx.Headers(self.headers)
        headers[key] = value
        return replace(self, headers=headers)

    def with_agent(self, agent: httpx.AsyncBaseTransport) -> Self:
        """Return a copy routed through `agent`."""
        return replace(self, agent=agent)


class AuthState(StrEnum):
    """Credential lifecycle of an AuthRefresher."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"
