"""OpenRouter provider adapter (OpenAI-style over HTTP).

Summary:
- ``POST /chat/completions`` with the shared OpenAI-style schema
- Dynamic model catalog from ``GET /models``, cached for five minutes
- Fallback catalog when the listing fails (availability over freshness)
- Credential probe: the ``/models`` fetch itself

Headers:
- Bearer auth plus the ``X-Title`` attribution header, overridable via
  ``headers``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..base.cache import ModelCache
from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ProviderError
from ..base.logging import LogContext, log_event
from ..base.models import Model
from ..base.openai_style import OpenAIStyleProvider
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_TITLE
from .get_openrouter_models import fallback_models, normalize_models


class OpenRouterProvider(OpenAIStyleProvider):
    """OpenRouter adapter.

    Parameters:
        api_key: OpenRouter API key (required, non-blank).
        base_url: Optional API root; defaults to ``https://openrouter.ai/api/v1``.
        headers: Extra headers merged over the defaults (e.g. ``X-Title``).
        http_client: Optional ``httpx.Client``; a pooled one otherwise.
        timeout_seconds: Optional read timeout override.
        model_cache: Optional ``ModelCache``; tests inject one with a fake clock.
    """

    provider_key = "openrouter"
    display_name = "OpenRouter"
    default_base_url = OPENROUTER_DEFAULT_BASE_URL

    def __init__(self, api_key: Optional[str], *, model_cache: Optional[ModelCache] = None, **kwargs) -> None:
        super().__init__(api_key, **kwargs)
        self._model_cache = model_cache if model_cache is not None else ModelCache()

    @property
    def model_cache(self) -> ModelCache:
        return self._model_cache

    def default_headers(self, api_key: str) -> Dict[str, str]:
        headers = super().default_headers(api_key)
        headers["X-Title"] = OPENROUTER_DEFAULT_TITLE
        return headers

    def _fetch_models(self, token: Optional[CancellationToken]) -> List[Model]:
        data = self._request_json("GET", self.models_path, token=token)
        return normalize_models(data)

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        """Return the live catalog, served from cache while fresh.

        A failed fetch returns the fallback catalog instead of raising; the
        fallback is not cached so the next call tries the network again.
        Cancellation is still raised.
        """
        ctx = LogContext(provider=self.provider_key, operation="models")
        cached = self._model_cache.get()
        if cached is not None:
            log_event(self._logger, "models.cache_hit", ctx, count=len(cached), level=logging.DEBUG)
            return cached
        try:
            models = self._fetch_models(token)
        except CancelledError:
            raise
        except ProviderError as exc:
            log_event(
                self._logger,
                "models.fallback",
                ctx,
                level=logging.WARNING,
                error_code=exc.code.value,
                status_code=exc.status_code,
                error=str(exc),
            )
            return fallback_models()
        if not models:
            log_event(self._logger, "models.fallback", ctx, level=logging.WARNING, error="empty listing")
            return fallback_models()
        self._model_cache.put(models)
        log_event(self._logger, "models.fetch", ctx, count=len(models))
        return list(models)

    def _probe(self, token: Optional[CancellationToken]) -> None:
        self._fetch_models(token)


__all__ = ["OpenRouterProvider"]
