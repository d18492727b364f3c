"""Anthropic static model catalog.

Anthropic's catalog is fixed in code; ``get_models`` never performs I/O.
"""

from __future__ import annotations

from typing import List

from ..base.models import Model

PROVIDER = "anthropic"

ANTHROPIC_MODELS: tuple[Model, ...] = (
    Model("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet (v2)", PROVIDER, 8192, 200000),
    Model("claude-3-5-sonnet-20240620", "Claude 3.5 Sonnet (v1)", PROVIDER, 8192, 200000),
    Model("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", PROVIDER, 8192, 200000),
    Model("claude-3-opus-20240229", "Claude 3 Opus", PROVIDER, 4096, 200000),
    Model("claude-3-haiku-20240307", "Claude 3 Haiku", PROVIDER, 4096, 200000),
)


def get_models() -> List[Model]:
    """Return a fresh list of the static Anthropic models."""
    return list(ANTHROPIC_MODELS)


__all__ = ["ANTHROPIC_MODELS", "get_models"]
