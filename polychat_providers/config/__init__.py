"""Unified configuration layer for providers.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Environment variables ``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``
    3. In-code overrides passed to :func:`get_provider_config`

There is no on-disk configuration; callers that persist settings resolve
them first and pass the results as overrides.

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_api_key(provider: str) -> str | None
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import ENV_MAP, get_env_var_name, resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> env vars -> overrides. ``None``
    override values are ignored so callers can pass optional arguments through.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_api_key(provider: str) -> Optional[str]:
    return resolve_provider_key(provider)[0]


__all__ = [
    "DEFAULTS",
    "ENV_MAP",
    "get_provider_config",
    "get_api_key",
    "get_env_var_name",
]
