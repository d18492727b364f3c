"""Anthropic Messages API translation helpers.

Purpose:
    Keep the wire-schema mapping (request body, response parsing and stream
    frame decoding) separate from the adapter class so each piece can be
    tested directly.

Notes:
    - Anthropic takes the system prompt out-of-band in ``system``. Only the
      first system message is honored; later ones are reported back to the
      caller as a drop count so the adapter can log them.
    - Temperature is never sent.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Tuple

from ..base.errors import ErrorCode, ProviderError, extract_error_message
from ..base.http_provider import resolve_max_tokens, split_system_messages
from ..base.models import ChatRequest, ChatResponse, Usage
from ..base.streaming import DecodedFrame
from ..config.defaults import ANTHROPIC_WEB_SEARCH_MAX_USES, ANTHROPIC_WEB_SEARCH_TOOL_TYPE

PROVIDER = "anthropic"

WEB_SEARCH_TOOL: Dict[str, Any] = {
    "type": ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
    "name": "web_search",
    "max_uses": ANTHROPIC_WEB_SEARCH_MAX_USES,
}

# In-band error types mapped onto the shared taxonomy.
_STREAM_ERROR_CODES: Dict[str, Tuple[ErrorCode, bool]] = {
    "overloaded_error": (ErrorCode.UNAVAILABLE, True),
    "rate_limit_error": (ErrorCode.RATE_LIMIT, True),
    "api_error": (ErrorCode.SERVER_ERROR, True),
    "authentication_error": (ErrorCode.AUTH, False),
    "permission_error": (ErrorCode.AUTH, False),
    "invalid_request_error": (ErrorCode.VALIDATION, False),
    "not_found_error": (ErrorCode.NOT_FOUND, False),
}


def build_messages_payload(request: ChatRequest, stream: bool = False) -> Tuple[Dict[str, Any], int]:
    """Assemble the ``/messages`` body.

    Returns:
        ``(payload, dropped_system_count)``.
    """
    system, messages, dropped = split_system_messages(request.messages)
    payload: Dict[str, Any] = {
        "model": request.model.id,
        "max_tokens": resolve_max_tokens(request),
        "messages": [m.to_wire() for m in messages],
    }
    if system:
        payload["system"] = system
    if stream:
        payload["stream"] = True
    if request.enable_web_search:
        payload["tools"] = [dict(WEB_SEARCH_TOOL)]
    return payload, dropped


def parse_messages_response(data: Mapping[str, Any]) -> ChatResponse:
    """Map a Messages API response to ``ChatResponse``.

    Text blocks are concatenated in order; other block types (tool use,
    web search results) carry no text and are skipped.
    """
    parts = []
    blocks = data.get("content")
    if isinstance(blocks, list):
        for block in blocks:
            if isinstance(block, Mapping) and block.get("type") == "text":
                text = block.get("text")
                if isinstance(text, str):
                    parts.append(text)
    usage = data.get("usage")
    if not isinstance(usage, Mapping):
        usage = {}
    return ChatResponse(
        content="".join(parts),
        usage=Usage(
            input_tokens=int(usage.get("input_tokens") or 0),
            output_tokens=int(usage.get("output_tokens") or 0),
        ),
    )


def decode_stream_event(frame: bytes) -> DecodedFrame:
    """Decode one Messages streaming event.

    ``content_block_delta`` with a ``text_delta`` yields text,
    ``message_stop`` is terminal and ``error`` raises ``ProviderError``.
    Everything else (pings, block start/stop, message deltas) is skipped.
    """
    try:
        event = json.loads(frame)
    except ValueError:
        return DecodedFrame()
    if not isinstance(event, dict):
        return DecodedFrame()
    kind = event.get("type")
    if kind == "content_block_delta":
        delta = event.get("delta")
        if isinstance(delta, Mapping) and delta.get("type") == "text_delta":
            text = delta.get("text")
            return DecodedFrame(text=text if isinstance(text, str) else "")
        return DecodedFrame()
    if kind == "message_stop":
        return DecodedFrame(terminal=True)
    if kind == "error":
        err = event.get("error")
        err_type = err.get("type") if isinstance(err, Mapping) else None
        code, retryable = _STREAM_ERROR_CODES.get(err_type or "", (ErrorCode.UNKNOWN, False))
        raise ProviderError(
            code=code,
            message=extract_error_message(event) or "Unknown Anthropic API error",
            provider=PROVIDER,
            retryable=retryable,
        )
    return DecodedFrame()


__all__ = [
    "WEB_SEARCH_TOOL",
    "build_messages_payload",
    "parse_messages_response",
    "decode_stream_event",
]
