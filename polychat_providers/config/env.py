"""polychat_providers.config.env
==============================

Environment variable mapping for provider credentials.

Functions return ``None`` when a provider is unknown or no value is set;
callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns:
        ``(value, env_var_used)``; ``(None, None)`` when nothing non-blank is set.
    """
    name = get_env_var_name(provider)
    if name:
        val = os.environ.get(name)
        if val and val.strip():
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "get_env_var_name",
    "resolve_provider_key",
]
