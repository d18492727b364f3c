"""OpenAI provider adapter (Chat Completions over HTTP).

Summary:
- ``POST /chat/completions`` for plain and streamed chat (shared
  OpenAI-style schema)
- Static model catalog
- Credential probe: ``GET /models``, which is authenticated and free
"""

from __future__ import annotations

from typing import List, Optional

from ..base.cancellation import CancellationToken
from ..base.models import Model
from ..base.openai_style import OpenAIStyleProvider
from ..config.defaults import OPENAI_DEFAULT_BASE_URL
from .get_openai_models import get_models as _static_models


class OpenAIProvider(OpenAIStyleProvider):
    """OpenAI Chat Completions adapter.

    Parameters:
        api_key: OpenAI API key (required, non-blank).
        base_url: Optional API root; defaults to ``https://api.openai.com/v1``.
        headers: Extra headers merged over the defaults.
        http_client: Optional ``httpx.Client``; a pooled one otherwise.
        timeout_seconds: Optional read timeout override.
    """

    provider_key = "openai"
    display_name = "OpenAI"
    default_base_url = OPENAI_DEFAULT_BASE_URL

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        return _static_models()

    def _probe(self, token: Optional[CancellationToken]) -> None:
        self._request_json("GET", self.models_path, token=token)


__all__ = ["OpenAIProvider"]
