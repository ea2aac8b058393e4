"""Centralised, injectable configuration for the fetch wrappers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import FetchConfigFile
from .infrastructure.cache import DEFAULT_REFRESH_INTERVAL_SECONDS
from .infrastructure.resilience import DEFAULT_RETRY_INTERVAL_SECONDS
from .types import DEFAULT_TIMEOUT_MS


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class PositiveNumberEnvVarError(ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


@dataclass(frozen=True)
class FetchConfig:
    """Immutable defaults for the fetch wrappers.

    Load from environment with `FetchConfig.from_env()` or construct directly for testing.
    """

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retry_interval_seconds: float = DEFAULT_RETRY_INTERVAL_SECONDS
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    proxy_url: str = ""

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            FetchConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            timeout_ms=_parse_positive_int(
                os.getenv("FETCH_TIMEOUT_MS", ""),
                env_name="FETCH_TIMEOUT_MS",
                default=DEFAULT_TIMEOUT_MS,
            ),
            retry_interval_seconds=_parse_positive_number(
                os.getenv("FETCH_RETRY_INTERVAL_SECONDS", ""),
                env_name="FETCH_RETRY_INTERVAL_SECONDS",
                default=DEFAULT_RETRY_INTERVAL_SECONDS,
            ),
            refresh_interval_seconds=_parse_positive_number(
                os.getenv("FETCH_REFRESH_INTERVAL_SECONDS", ""),
                env_name="FETCH_REFRESH_INTERVAL_SECONDS",
                default=DEFAULT_REFRESH_INTERVAL_SECONDS,
            ),
            proxy_url=os.getenv("FETCH_PROXY_URL", "").strip(),
        )

    def with_overrides(
        self,
        *,
        timeout_ms: int | None = None,
        retry_interval_seconds: float | None = None,
        refresh_interval_seconds: float | None = None,
        proxy_url: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides."""
        return replace(
            self,
            timeout_ms=self.timeout_ms if timeout_ms is None else timeout_ms,
            retry_interval_seconds=self.retry_interval_seconds
            if retry_interval_seconds is None
            else retry_interval_seconds,
            refresh_interval_seconds=self.refresh_interval_seconds
            if refresh_interval_seconds is None
            else refresh_interval_seconds,
            proxy_url=self.proxy_url if proxy_url is None else proxy_url.strip(),
        )

    def with_file_overrides(self, file_config: FetchConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return self.with_overrides(
            timeout_ms=file_config.timeout_ms,
            retry_interval_seconds=file_config.retry_interval_seconds,
            refresh_interval_seconds=file_config.refresh_interval_seconds,
            proxy_url=file_config.proxy_url,
        )


def _parse_positive_int(value: str, *, env_name: str, default: int) -> int:
    """Parse a positive integer from an environment variable, or return the default."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_positive_number(value: str, *, env_name: str, default: float) -> float:
    """Parse a positive number from an environment variable, or return the default."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = float(text)
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed <= 0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed
