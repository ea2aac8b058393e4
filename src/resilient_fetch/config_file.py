"""Typed parsing and validation for fetch config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class FetchConfigFile:
    """Validated fetch config values loaded from a TOML file."""

    timeout_ms: int | None = None
    retry_interval_seconds: float | None = None
    refresh_interval_seconds: float | None = None
    proxy_url: str | None = None


class _FetchSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_ms: int | None = None
    retry_interval_seconds: float | None = None
    refresh_interval_seconds: float | None = None
    proxy_url: str | None = None

    @field_validator("timeout_ms", "retry_interval_seconds", "refresh_interval_seconds")
    @classmethod
    def _validate_positive(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value

    @field_validator("proxy_url")
    @classmethod
    def _validate_proxy_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text or "://" not in text:
            raise ValueError
        return text


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    fetch: _FetchSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_fetch_config_file(*, path: Path) -> FetchConfigFile:
    """Load and validate a fetch TOML config file."""
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.fetch
    return FetchConfigFile(
        timeout_ms=section.timeout_ms,
        retry_interval_seconds=section.retry_interval_seconds,
        refresh_interval_seconds=section.refresh_interval_seconds,
        proxy_url=section.proxy_url,
    )
