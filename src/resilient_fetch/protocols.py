"""Protocol definitions for dependency injection.

These protocols define the collaborators the wrappers depend on, enabling
isolated unit testing with fake transports, clocks and sleepers.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx

    from .types import RequestOptions

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


@runtime_checkable
class Response(Protocol):
    """Minimal response shape the wrappers inspect."""

    @property
    def status_code(self) -> int:
        """HTTP status code of the response."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Abstract asynchronous request-performing capability."""

    async def perform(self, url: str, options: RequestOptions) -> Response:
        """Perform one request and return its response.

        Args:
            url: Target URL.
            options: Request options; `options.agent`, when set, routes the
                request through a proxy agent.

        Raises:
            Exception: Any transport failure, surfaced unchanged by the wrappers.
        """
        ...


class ProxyAgentFactory(Protocol):
    """Builds a proxy-routing agent usable as `RequestOptions.agent`."""

    def __call__(self, proxy_url: str) -> httpx.AsyncBaseTransport:
        """Return an agent that routes requests through `proxy_url`."""
        ...
