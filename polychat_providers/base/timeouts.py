"""Unified timeout configuration for provider adapters.

Centralizes the timeout values used by HTTP calls and streaming reads so no
adapter hard-codes its own numbers.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when one of them changes. Supported environment
    variables (all optional, positive floats):
        PT_TIMEOUT_HTTP_SECONDS
        PT_TIMEOUT_STREAM_SECONDS
        PT_TIMEOUT_CONNECT_SECONDS

build_httpx_timeout(...)
    Converts the config (optionally bounded by a cancellation deadline) into
    an ``httpx.Timeout``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

_ENV_NAMES = (
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_CONNECT_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Whole-request timeout for non-streamed calls.
        stream_timeout_seconds: Idle read timeout between stream frames.
        connect_timeout_seconds: TCP/TLS connect timeout for every call.
    """

    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 120.0
    connect_timeout_seconds: float = 10.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; return ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def build_httpx_timeout(
    *,
    stream: bool = False,
    remaining: Optional[float] = None,
    override: Optional[float] = None,
) -> httpx.Timeout:
    """Return an ``httpx.Timeout`` for a request.

    Parameters:
        stream: Use the streaming idle timeout for reads instead of the
            whole-request timeout.
        remaining: Seconds left on a cancellation deadline; every phase is
            capped to it.
        override: Adapter-level read timeout replacing the configured one.
    """
    cfg = get_timeout_config()
    read = cfg.stream_timeout_seconds if stream else cfg.http_timeout_seconds
    if override is not None:
        read = override
    connect = cfg.connect_timeout_seconds
    if remaining is not None:
        bound = max(remaining, 0.001)
        read = min(read, bound)
        connect = min(connect, bound)
    return httpx.Timeout(read, connect=connect)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "build_httpx_timeout",
]
