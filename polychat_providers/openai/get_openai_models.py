"""OpenAI static model catalog.

OpenAI's ``/models`` listing carries no token limits, so the adapter reports
this fixed table instead and only uses ``/models`` as a credential probe.
"""

from __future__ import annotations

from typing import List

from ..base.models import Model

PROVIDER = "openai"

OPENAI_MODELS: tuple[Model, ...] = (
    Model("gpt-4o", "GPT-4o", PROVIDER, 16384, 128000),
    Model("gpt-4o-mini", "GPT-4o Mini", PROVIDER, 16384, 128000),
    Model("gpt-4-turbo", "GPT-4 Turbo", PROVIDER, 4096, 128000),
    Model("gpt-4", "GPT-4", PROVIDER, 8192, 8192),
    Model("gpt-3.5-turbo", "GPT-3.5 Turbo", PROVIDER, 4096, 16384),
    Model("o1-preview", "o1 Preview", PROVIDER, 32768, 128000),
    Model("o1-mini", "o1 Mini", PROVIDER, 65536, 128000),
)


def get_models() -> List[Model]:
    """Return a fresh list of the static OpenAI models."""
    return list(OPENAI_MODELS)


__all__ = ["OPENAI_MODELS", "get_models"]
