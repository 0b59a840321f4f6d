"""Timeout configuration for provider HTTP calls.

Centralizes the timeout values used when building pooled HTTP clients so no
adapter hard-codes its own numbers.

Supported environment variables (all optional, positive floats):
    PT_TIMEOUT_HTTP_SECONDS     overall per-request timeout (default 30)
    PT_TIMEOUT_CONNECT_SECONDS  connection establishment timeout (default 10)

Values are parsed on first use and cached; the cache is refreshed when the
environment values change, which lets tests adjust them with monkeypatch.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Upper bound for a single non-streaming request
            (read, write and pool acquisition).
        connect_timeout_seconds: Upper bound for establishing a connection.
    """

    http_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0

    def as_httpx(self) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` carrying these values."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [os.getenv("PT_TIMEOUT_HTTP_SECONDS", ""), os.getenv("PT_TIMEOUT_CONNECT_SECONDS", "")]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0),
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", 10.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
