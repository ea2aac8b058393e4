"""Time-windowed cached refresh of an async data source.

Usage example:
    from resilient_fetch.infrastructure.cache import fixed_refresh

    get_rates = fixed_refresh(fetch_rates, 60)
    rates = await get_rates()
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from ..observability import get_logger
from ..protocols import Clock, Sleep
from .resilience import DEFAULT_RETRY_INTERVAL_SECONDS, SingleFlight, fetch_with_retry

T = TypeVar("T")

DEFAULT_REFRESH_INTERVAL_SECONDS = 300.0

_default_logger = get_logger("resilient_fetch.infrastructure.cache")

_UNSET = object()


class RefreshCache(Generic[T]):
    """Zero-argument accessor that memoises an operation for `interval` seconds.

    Expiry is checked on access only. A stale or empty cache triggers one
    refresh shared by all concurrent callers; the value and its timestamp are
    stored together before any waiter resumes. Refreshes go through
    `fetch_with_retry`, so callers wait while the operation keeps failing.
    """

    def __init__(
        self,
        operation: Callable[[], Awaitable[T]],
        interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        *,
        retry_interval: float = DEFAULT_RETRY_INTERVAL_SECONDS,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self._operation = operation
        self._interval = interval
        self._retry_interval = retry_interval
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or _default_logger
        self._value: object = _UNSET
        self._last_update: float | None = None
        self._flight: SingleFlight[T] = SingleFlight()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_stale(self) -> bool:
        if self._value is _UNSET or self._last_update is None:
            return True
        return self._clock() - self._last_update >= self._interval

    async def __call__(self) -> T:
        if self.is_stale:
            return await self._flight.run(self._refresh)
        return self._value  # type: ignore[return-value]

    async def _refresh(self) -> T:
        value = await fetch_with_retry(
            self._operation, self._retry_interval, sleep=self._sleep, logger=self._logger
        )
        self._value = value
        self._last_update = self._clock()
        self._logger.debug("Cached value refreshed")
        return value


def fixed_refresh(
    operation: Callable[[], Awaitable[T]],
    interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
    *,
    retry_interval: float = DEFAULT_RETRY_INTERVAL_SECONDS,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
    logger: logging.Logger | None = None,
) -> RefreshCache[T]:
    """Return an accessor that serves `operation`'s result, refreshed every `interval` seconds."""
    return RefreshCache(
        operation,
        interval,
        retry_interval=retry_interval,
        clock=clock,
        sleep=sleep,
        logger=logger,
    )
