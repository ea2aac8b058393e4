"""HTTP transport fakes for tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing_extensions import override

import httpx

from resilient_fetch.protocols import Transport
from resilient_fetch.types import RequestOptions


@dataclass
class ScriptedTransport(Transport):
    """Fake transport that answers with scripted status codes and records calls."""

    statuses: list[int] = field(default_factory=list)
    default_status: int = 200
    delay_seconds: float = 0.0
    error: Exception | None = None
    calls: list[tuple[str, RequestOptions]] = field(default_factory=list)

    @override
    async def perform(self, url: str, options: RequestOptions) -> httpx.Response:
        self.calls.append((url, options))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        status = self.statuses.pop(0) if self.statuses else self.default_status
        return httpx.Response(status)

    @property
    def authorization_headers(self) -> list[str | None]:
        return [options.headers.get("Authorization") for _, options in self.calls]


@dataclass
class AuthCheckingTransport(Transport):
    """Fake transport that returns 200 only for an accepted Authorization value."""

    accepted: str
    rejection_status: int = 401
    calls: list[str | None] = field(default_factory=list)

    @override
    async def perform(self, url: str, options: RequestOptions) -> httpx.Response:
        credential = options.headers.get("Authorization")
        self.calls.append(credential)
        await asyncio.sleep(0)
        if credential == self.accepted:
            return httpx.Response(200)
        return httpx.Response(self.rejection_status)
