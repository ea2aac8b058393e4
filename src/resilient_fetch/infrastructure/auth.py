"""Bearer-credential injection with single-flight refresh on 401/403.

Usage example:
    from resilient_fetch.infrastructure.auth import fetch_with_auth

    async def fetch_token() -> str:
        ...

    fetch = fetch_with_auth(fetch_token)
    response = await fetch("https://api.example.com/items")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..observability import get_logger
from ..protocols import Response, Sleep, Transport
from ..types import AuthState, RequestOptions
from .http import fetch_with_timeout
from .resilience import DEFAULT_RETRY_INTERVAL_SECONDS, SingleFlight, fetch_with_retry

AUTH_FAILURE_STATUSES = frozenset({401, 403})

_default_logger = get_logger("resilient_fetch.infrastructure.auth")


class AuthRefresher:
    """Request function that attaches a shared credential and refreshes it on demand.

    Every call sends the current credential (initially empty) as the
    `Authorization` header. A 401 or 403 response triggers one credential
    refresh, shared by all callers that hit the failure concurrently, and a
    single retry of the request. A second 401/403 is returned to the caller.

    The refresh goes through `fetch_with_retry`, so while the token operation
    keeps failing callers wait rather than fail.
    """

    def __init__(
        self,
        token_operation: Callable[[], Awaitable[str]],
        *,
        transport: Transport | None = None,
        retry_interval: float = DEFAULT_RETRY_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
        default_options: RequestOptions | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._token_operation = token_operation
        self._transport = transport
        self._retry_interval = retry_interval
        self._sleep = sleep
        self._default_options = default_options or RequestOptions()
        self._logger = logger or _default_logger
        self._credential = ""
        self._generation = 0
        self._state = AuthState.UNAUTHENTICATED
        self._flight: SingleFlight[str] = SingleFlight()

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def credential(self) -> str:
        return self._credential

    async def __call__(self, url: str, options: RequestOptions | None = None) -> Response:
        options = options or self._default_options
        sent_generation = self._generation
        response = await self._send(url, options)
        if response.status_code not in AUTH_FAILURE_STATUSES:
            return response
        # Skip the refresh if another caller already replaced the credential we sent.
        if self._generation == sent_generation:
            await self._flight.run(self._refresh)
        return await self._send(url, options)

    async def _send(self, url: str, options: RequestOptions) -> Response:
        authorised = options.with_header("Authorization", self._credential)
        return await fetch_with_timeout(url, authorised, transport=self._transport)

    async def _refresh(self) -> str:
        self._state = AuthState.REFRESHING
        self._logger.info("Refreshing credential")
        credential = await fetch_with_retry(
            self._token_operation, self._retry_interval, sleep=self._sleep, logger=self._logger
        )
        self._credential = credential
        self._generation += 1
        self._state = AuthState.AUTHENTICATED
        self._logger.info("Credential refreshed (generation %d)", self._generation)
        return credential


def fetch_with_auth(
    token_operation: Callable[[], Awaitable[str]],
    *,
    transport: Transport | None = None,
    retry_interval: float = DEFAULT_RETRY_INTERVAL_SECONDS,
    sleep: Sleep = asyncio.sleep,
    default_options: RequestOptions | None = None,
    logger: logging.Logger | None = None,
) -> AuthRefresher:
    """Wrap the request function with credential injection and refresh.

    `token_operation` returns the full `Authorization` header value
    (e.g. ``"Bearer abc"``); it is sent verbatim. Calls made without options
    use `default_options`.
    """
    return AuthRefresher(
        token_operation,
        transport=transport,
        retry_interval=retry_interval,
        sleep=sleep,
        default_options=default_options,
        logger=logger,
    )
