"""OpenRouter model listing: normalization and fallback catalog.

Purpose:
    Convert the ``GET /models`` payload into ``Model`` descriptors and hold
    the hardcoded catalog returned when the listing cannot be fetched.

Normalization:
    - ``max_tokens`` comes from ``top_provider.max_completion_tokens``
    - ``context_window`` comes from ``context_length``
    - either one missing or zero falls back to 4096
    - a missing ``name`` falls back to the model ``id``
    - entries without an ``id`` are skipped
"""

from __future__ import annotations

from typing import Any, List, Mapping

from ..base.constants import DEFAULT_MAX_TOKENS
from ..base.models import Model

PROVIDER = "openrouter"

FALLBACK_MODELS: tuple[Model, ...] = (
    Model("anthropic/claude-3.5-sonnet", "Claude 3.5 Sonnet (OpenRouter)", PROVIDER, 8192, 200000),
    Model("openai/gpt-4o", "GPT-4o (OpenRouter)", PROVIDER, 16384, 128000),
    Model("openai/gpt-4o-mini", "GPT-4o Mini (OpenRouter)", PROVIDER, 16384, 128000),
    Model("meta-llama/llama-3.1-405b-instruct", "Llama 3.1 405B (OpenRouter)", PROVIDER, 4096, 131072),
    Model("google/gemini-pro-1.5", "Gemini Pro 1.5 (OpenRouter)", PROVIDER, 8192, 2000000),
    Model("mistralai/mixtral-8x7b-instruct", "Mixtral 8x7B (OpenRouter)", PROVIDER, 4096, 32768),
)


def _positive_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)) and value > 0:
        return int(value)
    return 0


def normalize_models(data: Mapping[str, Any]) -> List[Model]:
    """Translate a ``/models`` response body into ``Model`` descriptors."""
    entries = data.get("data")
    if not isinstance(entries, list):
        return []
    models: List[Model] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        model_id = entry.get("id")
        if not isinstance(model_id, str) or not model_id:
            continue
        top = entry.get("top_provider")
        max_tokens = _positive_int(top.get("max_completion_tokens")) if isinstance(top, Mapping) else 0
        context_window = _positive_int(entry.get("context_length"))
        name = entry.get("name")
        models.append(
            Model(
                id=model_id,
                name=name if isinstance(name, str) and name else model_id,
                provider=PROVIDER,
                max_tokens=max_tokens or DEFAULT_MAX_TOKENS,
                context_window=context_window or DEFAULT_MAX_TOKENS,
            )
        )
    return models


def fallback_models() -> List[Model]:
    """Return a fresh list of the hardcoded fallback catalog."""
    return list(FALLBACK_MODELS)


__all__ = ["FALLBACK_MODELS", "normalize_models", "fallback_models"]
