"""OpenAI-compatible Chat Completions schema shared by OpenAI and OpenRouter.

Both vendors accept the same request body, return the same response shape
and stream the same ``chat.completion.chunk`` frames, so the translation
lives here once. Concrete adapters only add their headers and catalogs.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from .constants import DEFAULT_TEMPERATURE, JSON_CONTENT_TYPE
from .errors import ErrorCode, ProviderError, code_for_status, extract_error_message, is_retryable_status
from .http_provider import BaseHTTPProvider, resolve_max_tokens
from .models import ChatRequest, ChatResponse, Usage
from .streaming import DecodedFrame


def build_chat_payload(request: ChatRequest, stream: bool = False) -> Dict[str, Any]:
    """Assemble the JSON body for ``/chat/completions``.

    Messages are passed through in caller order, system messages included.
    Temperature defaults to 0.7 only when the caller left it unset, so an
    explicit ``0.0`` is honored.
    """
    payload: Dict[str, Any] = {
        "model": request.model.id,
        "messages": [m.to_wire() for m in request.messages],
        "max_tokens": resolve_max_tokens(request),
        "temperature": DEFAULT_TEMPERATURE if request.temperature is None else request.temperature,
    }
    if stream:
        payload["stream"] = True
    return payload


def parse_chat_completion(data: Mapping[str, Any]) -> ChatResponse:
    """Map a Chat Completions response to ``ChatResponse``.

    Missing choices yield empty content; missing usage yields zero counts.
    """
    content = ""
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        message = choices[0].get("message")
        if isinstance(message, Mapping) and isinstance(message.get("content"), str):
            content = message["content"]
    usage = data.get("usage")
    if not isinstance(usage, Mapping):
        usage = {}
    return ChatResponse(
        content=content,
        usage=Usage(
            input_tokens=int(usage.get("prompt_tokens") or 0),
            output_tokens=int(usage.get("completion_tokens") or 0),
        ),
    )


def decode_chat_chunk(frame: bytes, provider: str) -> DecodedFrame:
    """Decode one streamed ``chat.completion.chunk`` frame.

    - malformed JSON or unexpected shapes: empty, non-terminal frame
    - ``choices[0].delta.content``: the fragment
    - non-empty ``finish_reason``: terminal
    - ``{"error": {...}}``: raises ``ProviderError``
    """
    try:
        data = json.loads(frame)
    except ValueError:
        return DecodedFrame()
    if not isinstance(data, dict):
        return DecodedFrame()
    if data.get("error") is not None:
        raise _stream_error(data, provider)
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
        return DecodedFrame()
    choice = choices[0]
    text = ""
    delta = choice.get("delta")
    if isinstance(delta, Mapping) and isinstance(delta.get("content"), str):
        text = delta["content"]
    return DecodedFrame(text=text, terminal=bool(choice.get("finish_reason")))


def _stream_error(data: Mapping[str, Any], provider: str) -> ProviderError:
    err = data.get("error")
    status = err.get("code") if isinstance(err, Mapping) else None
    if not isinstance(status, int) or not 100 <= status < 600:
        status = None
    return ProviderError(
        code=code_for_status(status) if status is not None else ErrorCode.UNKNOWN,
        message=extract_error_message(data) or "stream error",
        provider=provider,
        status_code=status,
        retryable=is_retryable_status(status) if status is not None else False,
    )


class OpenAIStyleProvider(BaseHTTPProvider):
    """Base adapter for vendors speaking the Chat Completions schema."""

    chat_path = "/chat/completions"
    models_path = "/models"

    def default_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": f"Bearer {api_key}",
        }

    def build_request(self, request: ChatRequest, stream: bool = False) -> Dict[str, Any]:
        return build_chat_payload(request, stream=stream)

    def parse_response(self, data: Mapping[str, Any]) -> ChatResponse:
        return parse_chat_completion(data)

    def decode_stream_frame(self, frame: bytes) -> DecodedFrame:
        return decode_chat_chunk(frame, self.provider_key)


__all__ = [
    "OpenAIStyleProvider",
    "build_chat_payload",
    "decode_chat_chunk",
    "parse_chat_completion",
]
