"""Observability helpers."""

from .logging import LOG_LEVEL_ENV, LogLevelEnvVarError, get_logger, resolve_log_level

__all__ = ["LOG_LEVEL_ENV", "LogLevelEnvVarError", "get_logger", "resolve_log_level"]
