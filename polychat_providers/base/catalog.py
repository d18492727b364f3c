"""Cross-provider model catalog.

Purpose
-------
Aggregate model listings from registered adapters behind one lookup surface,
with a static table of well-known models as the floor. Each provider listing
is cached in its own :class:`ModelCache`.

Fallback semantics
------------------
- A provider without a registered adapter, or whose ``get_models`` raises
  ``ProviderError``, is answered from :data:`PREDEFINED_MODELS`.
- Fallback answers are not cached.
- Adapters exposing their own ``model_cache`` (OpenRouter) are asked every
  time; their cache decides freshness.
- ``CancelledError`` always propagates.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .cache import ModelCache
from .cancellation import CancellationToken, CancelledError
from .constants import MODEL_CACHE_TTL_SECONDS
from .errors import ProviderError
from .interfaces import BackendAdapter
from .logging import LogContext, get_logger, log_event
from .models import Model
from .registry import ProviderRegistry

DEFAULT_MODEL_ID = "claude-sonnet-4-20250514"
FALLBACK_DEFAULT_MODEL_ID = "claude-3-5-sonnet-20241022"

_ANTHROPIC = "anthropic"
_OPENAI = "openai"
_OPENROUTER = "openrouter"


def _table(*models: Model) -> Dict[str, Model]:
    return {m.id: m for m in models}


PREDEFINED_MODELS: Dict[str, Model] = _table(
    # Anthropic
    Model("claude-opus-4-20250514", "Claude Opus 4", _ANTHROPIC, 32000, 200000),
    Model("claude-sonnet-4-20250514", "Claude Sonnet 4", _ANTHROPIC, 8192, 200000),
    Model("claude-3-7-sonnet-20250219", "Claude 3.7 Sonnet", _ANTHROPIC, 8192, 200000),
    Model("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet (v2)", _ANTHROPIC, 8192, 200000),
    Model("claude-3-5-sonnet-20240620", "Claude 3.5 Sonnet (v1)", _ANTHROPIC, 8192, 200000),
    Model("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", _ANTHROPIC, 8192, 200000),
    Model("claude-3-opus-20240229", "Claude 3 Opus", _ANTHROPIC, 4096, 200000),
    Model("claude-3-haiku-20240307", "Claude 3 Haiku", _ANTHROPIC, 4096, 200000),
    # OpenAI
    Model("gpt-4.1", "GPT-4.1", _OPENAI, 16384, 1000000),
    Model("gpt-4.1-mini", "GPT-4.1 Mini", _OPENAI, 16384, 1000000),
    Model("gpt-4.1-nano", "GPT-4.1 Nano", _OPENAI, 16384, 1000000),
    Model("o3", "OpenAI o3", _OPENAI, 16384, 200000),
    Model("o3-pro", "OpenAI o3 Pro", _OPENAI, 16384, 200000),
    Model("o4-mini", "OpenAI o4 Mini", _OPENAI, 16384, 200000),
    Model("o1-preview", "o1 Preview", _OPENAI, 32768, 128000),
    Model("o1-mini", "o1 Mini", _OPENAI, 65536, 128000),
    Model("gpt-4o", "GPT-4o", _OPENAI, 16384, 128000),
    Model("gpt-4o-mini", "GPT-4o Mini", _OPENAI, 16384, 128000),
    Model("gpt-4-turbo", "GPT-4 Turbo", _OPENAI, 4096, 128000),
    Model("gpt-4", "GPT-4", _OPENAI, 8192, 8192),
    Model("gpt-3.5-turbo", "GPT-3.5 Turbo", _OPENAI, 4096, 16384),
    # OpenRouter
    Model("anthropic/claude-3.5-sonnet", "Claude 3.5 Sonnet (OpenRouter)", _OPENROUTER, 8192, 200000),
    Model("openai/gpt-4o", "GPT-4o (OpenRouter)", _OPENROUTER, 16384, 128000),
    Model("meta-llama/llama-3.1-405b-instruct", "Llama 3.1 405B (OpenRouter)", _OPENROUTER, 4096, 131072),
    Model("google/gemini-pro-1.5", "Gemini Pro 1.5 (OpenRouter)", _OPENROUTER, 8192, 2000000),
)


def static_models(provider: str) -> List[Model]:
    """Return the predefined models owned by ``provider`` (table order)."""
    return [m for m in PREDEFINED_MODELS.values() if m.provider == provider]


class ModelCatalog:
    """Model lookup across every supported provider.

    Parameters:
        ttl_seconds: Lifetime of each provider's cached listing.
        clock: Monotonic time source shared by the per-provider caches.
    """

    def __init__(
        self,
        ttl_seconds: float = MODEL_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._adapters: Dict[str, BackendAdapter] = {}
        self._caches: Dict[str, ModelCache] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("catalog")

    def register_provider(self, provider: str, adapter: BackendAdapter) -> None:
        """Attach ``adapter`` as the live source for ``provider``; resets its cache."""
        with self._lock:
            self._adapters[provider] = adapter
            self._caches[provider] = ModelCache(self._ttl, self._clock)

    def providers(self) -> Tuple[str, ...]:
        return ProviderRegistry.supported()

    def models_for(self, provider: str, token: Optional[CancellationToken] = None) -> List[Model]:
        """Return the models of one provider.

        Served from the provider's cache while fresh, otherwise fetched from
        its registered adapter. Falls back to the static table when no
        adapter is registered or the fetch fails.
        """
        with self._lock:
            adapter = self._adapters.get(provider)
            cache = self._caches.get(provider)
        if adapter is None or cache is None:
            return static_models(provider)
        # Adapters with their own ModelCache (OpenRouter) cache live listings
        # and return an uncached fallback on failure; caching that answer
        # here would pin the fallback for a full TTL.
        owns_cache = getattr(adapter, "model_cache", None) is not None
        if not owns_cache:
            cached = cache.get()
            if cached is not None:
                return cached
        try:
            models = adapter.get_models(token)
        except CancelledError:
            raise
        except ProviderError as exc:
            log_event(
                self._logger,
                "models.fallback",
                LogContext(provider=provider, operation="models"),
                level=logging.WARNING,
                error_code=exc.code.value,
                error=str(exc),
            )
            return static_models(provider)
        if not owns_cache:
            cache.put(models)
        return list(models)

    def all_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        """Concatenate ``models_for`` over every supported provider."""
        out: List[Model] = []
        for provider in self.providers():
            out.extend(self.models_for(provider, token))
        return out

    def find_model(self, model_id: str, token: Optional[CancellationToken] = None) -> Model:
        """Look up a model by id: static table first, then live listings.

        Raises:
            LookupError: No provider lists ``model_id``.
        """
        if model_id in PREDEFINED_MODELS:
            return PREDEFINED_MODELS[model_id]
        for model in self.all_models(token):
            if model.id == model_id:
                return model
        raise LookupError(f"model not found: {model_id}")

    def default_model(self) -> Model:
        return PREDEFINED_MODELS.get(DEFAULT_MODEL_ID) or PREDEFINED_MODELS[FALLBACK_DEFAULT_MODEL_ID]

    def clear_cache(self, provider: Optional[str] = None) -> None:
        """Drop cached listings for ``provider``, or for every provider.

        Adapter-owned caches are cleared too so the next call refetches.
        """
        with self._lock:
            names = [provider] if provider is not None else list(self._caches)
            targets = [(self._caches.get(n), self._adapters.get(n)) for n in names]
        for cache, adapter in targets:
            if cache is not None:
                cache.clear()
            owned = getattr(adapter, "model_cache", None)
            if owned is not None:
                owned.clear()


__all__ = [
    "PREDEFINED_MODELS",
    "DEFAULT_MODEL_ID",
    "ModelCatalog",
    "static_models",
]
