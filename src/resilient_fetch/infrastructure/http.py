"""HTTP transport, deadline enforcement and proxy dispatch.

Usage example:
    from resilient_fetch.infrastructure.http import fetch_by_proxy, fetch_with_timeout
    from resilient_fetch.types import RequestOptions

    response = await fetch_with_timeout("https://example.com", RequestOptions(timeout_ms=2000))
    response = await fetch_by_proxy(
        "https://example.com",
        RequestOptions(proxy_url="http://127.0.0.1:3128"),
    )
"""

from __future__ import annotations

import asyncio
from typing_extensions import override

import httpx

from ..exceptions import FetchTimeoutError, MissingProxyUrlError
from ..observability import get_logger
from ..protocols import ProxyAgentFactory, Response, Transport
from ..types import RequestOptions

logger = get_logger("resilient_fetch.infrastructure.http")


class _BorrowedAgent(httpx.AsyncBaseTransport):
    """Sends through an agent without taking ownership of it.

    Closing the per-request client must leave the caller's agent usable.
    """

    def __init__(self, agent: httpx.AsyncBaseTransport) -> None:
        self._agent = agent

    @override
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._agent.handle_async_request(request)

    @override
    async def aclose(self) -> None:
        pass


class HttpxTransport(Transport):
    """httpx-backed transport.

    With no client injected, each request opens and closes its own
    `httpx.AsyncClient`. httpx timeouts are disabled on clients created here;
    the deadline is owned by `fetch_with_timeout`. An agent attached through
    `RequestOptions.agent` is borrowed: it stays open after the request and
    may be reused. Closing it is up to whoever built it.
    """

    def __init__(self, *, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    @override
    async def perform(self, url: str, options: RequestOptions) -> httpx.Response:
        extra = dict(options.extra)
        method = str(extra.pop("method", "GET")).upper()
        if options.agent is not None:
            borrowed = _BorrowedAgent(options.agent)
            async with httpx.AsyncClient(transport=borrowed, timeout=None) as client:
                return await client.request(method, url, headers=options.headers, **extra)
        if self._client is not None:
            return await self._client.request(method, url, headers=options.headers, **extra)
        async with httpx.AsyncClient(timeout=None) as client:
            return await client.request(method, url, headers=options.headers, **extra)


DEFAULT_TRANSPORT = HttpxTransport()


def build_proxy_agent(proxy_url: str) -> httpx.AsyncHTTPTransport:
    """Build an agent that routes requests through `proxy_url`."""
    return httpx.AsyncHTTPTransport(proxy=proxy_url)


async def fetch_with_timeout(
    url: str,
    options: RequestOptions | None = None,
    *,
    transport: Transport | None = None,
) -> Response:
    """Perform one request, cancelling it if it has not settled within the deadline.

    The deadline is `options.timeout_ms` (default 5000 ms). The timer is
    disarmed as soon as the attempt settles.

    Raises:
        FetchTimeoutError: If the deadline fires before the transport settles.
        Exception: Any other transport failure, unchanged.
    """
    options = options or RequestOptions()
    transport = transport or DEFAULT_TRANSPORT
    timeout_ms = options.effective_timeout_ms
    deadline = asyncio.timeout(timeout_ms / 1000)
    try:
        async with deadline:
            return await transport.perform(url, options)
    except TimeoutError as exc:
        # Only our own deadline becomes FetchTimeoutError.
        if deadline.expired():
            raise FetchTimeoutError(timeout_ms) from exc
        raise


async def fetch_by_proxy(
    url: str,
    options: RequestOptions | None,
    *,
    transport: Transport | None = None,
    agent_factory: ProxyAgentFactory = build_proxy_agent,
) -> Response:
    """Perform one request through a proxy agent built from `options.proxy_url`.

    The agent is built for this request and closed once it settles.

    Raises:
        MissingProxyUrlError: If no proxy URL is configured.
        FetchTimeoutError: If the deadline fires before the transport settles.
    """
    if options is None or not options.proxy_url:
        raise MissingProxyUrlError()
    agent = agent_factory(options.proxy_url)
    logger.debug("Routing %s through proxy host %s", url, httpx.URL(options.proxy_url).host)
    async with agent:
        return await fetch_with_timeout(url, options.with_agent(agent), transport=transport)
