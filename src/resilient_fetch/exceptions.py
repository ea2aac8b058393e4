"""Custom exceptions for resilient_fetch.

These exceptions separate deadline expiry and caller mistakes from transport
failures, which are propagated unchanged.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base exception for all resilient_fetch errors."""

    pass


class FetchTimeoutError(FetchError, TimeoutError):
    """Raised when a request does not settle before its deadline.

    Distinct from any timeout or connection error reported by the transport.
    """

    kind = "timeout"

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"timeout: request did not complete within {timeout_ms} ms")


class PreconditionError(FetchError, ValueError):
    """Raised when a caller omits a required option."""

    pass


class MissingProxyUrlError(PreconditionError):
    """Raised when a proxied request has no proxy URL."""

    def __init__(self) -> None:
        super().__init__("fetch_by_proxy requires options.proxy_url to be set.")


class ConfigFileNotFoundError(FetchError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(FetchError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} could not be parsed: {detail}")


class ConfigFileValidationError(FetchError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is invalid: {detail}")
