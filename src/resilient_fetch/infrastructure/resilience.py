"""Resilience utilities: retry-until-success and single-flight execution.

Usage example:
    from resilient_fetch.infrastructure.resilience import SingleFlight, fetch_with_retry

    token = await fetch_with_retry(fetch_token, 5)

    flight: SingleFlight[str] = SingleFlight()
    token = await flight.run(lambda: fetch_with_retry(fetch_token))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from ..observability import get_logger
from ..protocols import Sleep

T = TypeVar("T")

DEFAULT_RETRY_INTERVAL_SECONDS = 5.0

_default_logger = get_logger("resilient_fetch.infrastructure.resilience")


async def fetch_with_retry(
    operation: Callable[[], Awaitable[T]],
    interval: float = DEFAULT_RETRY_INTERVAL_SECONDS,
    *,
    sleep: Sleep = asyncio.sleep,
    logger: logging.Logger | None = None,
) -> T:
    """Call `operation` until it succeeds, waiting `interval` seconds between attempts.

    There is no retry cap: a persistently failing operation blocks the caller
    indefinitely. Intended for idempotent fetches such as start-up token
    retrieval, not for requests with side effects. Cancelling the awaiting
    task is the only way out.

    Args:
        operation: Zero-argument coroutine function.
        interval: Delay in seconds before each retry.
        sleep: Awaitable delay function (injectable for tests).
        logger: Sink for one WARNING per failed attempt; the module logger when omitted.

    Returns:
        The value of the first successful call.
    """
    log = logger or _default_logger
    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as exc:
            log.warning(
                "Attempt %d failed: %r; trying again after %ss", attempt, exc, interval
            )
        await sleep(interval)
        attempt += 1


class SingleFlight(Generic[T]):
    """At most one in-flight run of an operation; concurrent callers share its outcome.

    The first caller starts the operation as a task and stores it; callers
    arriving while it is pending await the same task. The slot is cleared when
    the task settles, so the next call starts a fresh run.

    Waiters are shielded: cancelling one caller does not cancel the shared run.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[T] | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        task = self._task
        if task is None:
            task = asyncio.create_task(self._settle(operation))
            task.add_done_callback(_retrieve_outcome)
            self._task = task
        return await asyncio.shield(task)

    async def _settle(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        finally:
            self._task = None


def _retrieve_outcome(task: asyncio.Task[object]) -> None:
    # Waiters cancelled before the task settles never read its exception.
    if not task.cancelled():
        task.exception()

