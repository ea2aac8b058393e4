"""Tests for FetchConfig behaviour."""

from __future__ import annotations

from pathlib import Path

import pytest

from resilient_fetch.config import (
    FetchConfig,
    PositiveIntegerEnvVarError,
    PositiveNumberEnvVarError,
)
from resilient_fetch.config_file import FetchConfigFile


def test_defaults_match_wrapper_defaults() -> None:
    config = FetchConfig()

    assert config.timeout_ms == 5000
    assert config.retry_interval_seconds == 5.0
    assert config.refresh_interval_seconds == 300.0
    assert config.proxy_url == ""


def test_from_env_reads_fetch_variables(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("FETCH_TIMEOUT_MS", "2500")
    clean_env.setenv("FETCH_RETRY_INTERVAL_SECONDS", "1.5")
    clean_env.setenv("FETCH_REFRESH_INTERVAL_SECONDS", "60")
    clean_env.setenv("FETCH_PROXY_URL", "  http://127.0.0.1:3128  ")

    config = FetchConfig.from_env(str(tmp_path / "missing.env"))

    assert config.timeout_ms == 2500
    assert config.retry_interval_seconds == 1.5
    assert config.refresh_interval_seconds == 60.0
    assert config.proxy_url == "http://127.0.0.1:3128"


def test_from_env_uses_defaults_when_unset(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config = FetchConfig.from_env(str(tmp_path / "missing.env"))

    assert config == FetchConfig()


def test_from_env_loads_dotenv_file(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("FETCH_TIMEOUT_MS=1234\nFETCH_PROXY_URL=http://proxy:8080\n")

    config = FetchConfig.from_env(str(dotenv_path))

    assert config.timeout_ms == 1234
    assert config.proxy_url == "http://proxy:8080"


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_from_env_rejects_non_positive_numbers(
    clean_env: pytest.MonkeyPatch, tmp_path: Path, value: str
) -> None:
    clean_env.setenv("FETCH_RETRY_INTERVAL_SECONDS", value)

    with pytest.raises(PositiveNumberEnvVarError, match="FETCH_RETRY_INTERVAL_SECONDS"):
        FetchConfig.from_env(str(tmp_path / "missing.env"))


@pytest.mark.parametrize("value", ["0.5", "2.7", "1e3", "abc", "0"])
def test_from_env_rejects_non_integer_timeout(
    clean_env: pytest.MonkeyPatch, tmp_path: Path, value: str
) -> None:
    clean_env.setenv("FETCH_TIMEOUT_MS", value)

    with pytest.raises(PositiveIntegerEnvVarError, match="FETCH_TIMEOUT_MS"):
        FetchConfig.from_env(str(tmp_path / "missing.env"))


def test_with_overrides_preserves_fields() -> None:
    base = FetchConfig(
        timeout_ms=1000,
        retry_interval_seconds=2.0,
        refresh_interval_seconds=30.0,
        proxy_url="http://proxy:1",
    )

    updated = base.with_overrides(timeout_ms=4000)

    assert updated.timeout_ms == 4000
    assert updated.retry_interval_seconds == 2.0
    assert updated.refresh_interval_seconds == 30.0
    assert updated.proxy_url == "http://proxy:1"


def test_with_file_overrides_applies_only_set_values() -> None:
    base = FetchConfig(timeout_ms=1000, proxy_url="http://proxy:1")
    file_config = FetchConfigFile(refresh_interval_seconds=45.0, proxy_url="http://proxy:2")

    updated = base.with_file_overrides(file_config)

    assert updated.timeout_ms == 1000
    assert updated.refresh_interval_seconds == 45.0
    assert updated.proxy_url == "http://proxy:2"
