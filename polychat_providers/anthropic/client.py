"""Anthropic provider adapter (Messages API over HTTP).

Summary:
- ``POST /messages`` for both plain and streamed chat
- Static model catalog
- Credential probe: a ten-token chat against the cheapest model

Headers:
- ``x-api-key`` carries the credential; ``anthropic-version`` pins the API
  revision.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..base.cancellation import CancellationToken
from ..base.constants import JSON_CONTENT_TYPE
from ..base.http_provider import BaseHTTPProvider
from ..base.logging import LogContext, log_event
from ..base.models import ChatRequest, ChatResponse, Message, Model
from ..base.streaming import DecodedFrame
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_PROBE_MAX_TOKENS,
    ANTHROPIC_PROBE_MODEL,
)
from .get_anthropic_models import get_models as _static_models
from .helpers import build_messages_payload, decode_stream_event, parse_messages_response


class AnthropicProvider(BaseHTTPProvider):
    """Anthropic Messages API adapter.

    Parameters:
        api_key: Anthropic API key (required, non-blank).
        base_url: Optional API root; defaults to ``https://api.anthropic.com/v1``.
        headers: Extra headers merged over the defaults.
        http_client: Optional ``httpx.Client``; a pooled one otherwise.
        timeout_seconds: Optional read timeout override.
    """

    provider_key = "anthropic"
    display_name = "Anthropic"
    default_base_url = ANTHROPIC_DEFAULT_BASE_URL
    chat_path = "/messages"

    def default_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": JSON_CONTENT_TYPE,
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def build_request(self, request: ChatRequest, stream: bool = False) -> Dict[str, Any]:
        """Translate ``request`` into a ``/messages`` body.

        System messages after the first are dropped; a warning event records
        how many.
        """
        payload, dropped = build_messages_payload(request, stream=stream)
        if dropped:
            log_event(
                self._logger,
                "request.system_dropped",
                LogContext(provider=self.provider_key, model=request.model.id),
                level=logging.WARNING,
                dropped=dropped,
            )
        return payload

    def parse_response(self, data) -> ChatResponse:
        return parse_messages_response(data)

    def decode_stream_frame(self, frame: bytes) -> DecodedFrame:
        return decode_stream_event(frame)

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        return _static_models()

    def _probe(self, token: Optional[CancellationToken]) -> None:
        probe = ChatRequest(
            model=Model(ANTHROPIC_PROBE_MODEL, "Claude 3.5 Haiku", self.provider_key, 8192, 200000),
            messages=[Message(role="user", content="Hello")],
            max_tokens=ANTHROPIC_PROBE_MAX_TOKENS,
        )
        self.chat(probe, token)


__all__ = ["AnthropicProvider"]
