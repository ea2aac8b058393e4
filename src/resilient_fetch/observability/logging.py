"""Failure logging for the fetch wrappers.

The wrappers report retried failures and credential refreshes to a
`logging.Logger`. Each wrapper accepts a `logger` argument so applications can
route that output into their own logging tree; without one, the wrapper uses
a module logger from `get_logger`.

Usage example:
    import logging

    from resilient_fetch import fetch_with_retry

    token = await fetch_with_retry(fetch_token, logger=logging.getLogger("myapp.auth"))
"""

from __future__ import annotations

import logging
import os
import time

LOG_LEVEL_ENV = "FETCH_LOG_LEVEL"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class LogLevelEnvVarError(ValueError):
    """Raised when FETCH_LOG_LEVEL names an unknown level."""

    def __init__(self, value: str) -> None:
        super().__init__(f"{LOG_LEVEL_ENV} must be a logging level name, got {value!r}.")


def resolve_log_level(level: int | str | None = None) -> int:
    """Return a numeric level from an explicit value, FETCH_LOG_LEVEL, or INFO.

    Raises:
        LogLevelEnvVarError: If the level name is not a standard logging level.
    """
    if isinstance(level, int):
        return level
    text = (level if level is not None else os.getenv(LOG_LEVEL_ENV, "")).strip().upper()
    if not text:
        return logging.INFO
    resolved = logging.getLevelNamesMapping().get(text)
    if resolved is None:
        raise LogLevelEnvVarError(text)
    return resolved


def get_logger(name: str, *, level: int | str | None = None) -> logging.Logger:
    """Return the wrappers' default sink for `name`.

    The first call attaches a stderr handler with UTC timestamps and stops
    propagation, so wrapper output is not duplicated by a root handler. An
    explicit `level` is applied on every call; otherwise the level comes from
    FETCH_LOG_LEVEL when the logger is first configured.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(resolve_log_level(level))
        logger.propagate = False
    elif level is not None:
        logger.setLevel(resolve_log_level(level))
    return logger
