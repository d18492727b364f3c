"""Anthropic adapter tests against a mocked Messages API.

Covers:
- construction and header defaults
- request translation (system relocation, web search tool, no temperature)
- non-streamed round trip and error normalization
- streamed deltas, in-band error events and the credential probe
"""
from __future__ import annotations

import json
import logging

import httpx
import pytest

from polychat_providers.anthropic import AnthropicProvider
from polychat_providers.anthropic.helpers import WEB_SEARCH_TOOL, decode_stream_event
from polychat_providers.base.errors import (
    DecodeError,
    ErrorCode,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
)
from polychat_providers.base.models import ChatResponse, Message, Model, Usage
from polychat_providers.tests.utils import make_request, sse_response

SONNET = Model("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", "anthropic", 8192, 200000)

_OK_BODY = {
    "id": "msg_1",
    "type": "message",
    "content": [{"type": "text", "text": "Hello there!"}],
    "usage": {"input_tokens": 10, "output_tokens": 5},
}


def _ok(_request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=_OK_BODY)


@pytest.mark.parametrize("key", ["", "   ", None])
def test_blank_key_is_rejected_before_io(key):
    with pytest.raises(MissingCredentialError) as ei:
        AnthropicProvider(key)
    assert "Anthropic API key is required" in str(ei.value)


def test_default_headers_and_base_url(mock_client):
    client, _ = mock_client(_ok)
    adapter = AnthropicProvider("sk-ant", http_client=client)
    headers = adapter.headers
    assert adapter.provider_name == "anthropic"
    assert adapter.base_url == "https://api.anthropic.com/v1"
    assert headers["x-api-key"] == "sk-ant"
    assert headers["anthropic-version"] == "2023-06-01"
    assert headers["Content-Type"] == "application/json"


def test_build_request_relocates_first_system_message(mock_client, log_events):
    client, _ = mock_client(_ok)
    adapter = AnthropicProvider("k", http_client=client)
    request = make_request(
        SONNET,
        Message("system", "be brief"),
        Message("user", "Hi"),
        Message("system", "ignored"),
        Message("assistant", "Hello"),
        temperature=0.2,
    )
    payload = adapter.build_request(request)

    assert payload["system"] == "be brief"
    assert payload["messages"] == [
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello"},
    ]
    assert payload["max_tokens"] == 8192
    assert "temperature" not in payload
    assert "stream" not in payload
    dropped = log_events.named("request.system_dropped")
    assert dropped and dropped[0]["dropped"] == 1
    assert dropped[0]["_level"] == logging.WARNING


def test_build_request_streaming_and_web_search(mock_client):
    client, _ = mock_client(_ok)
    adapter = AnthropicProvider("k", http_client=client)
    payload = adapter.build_request(make_request(SONNET, max_tokens=256, enable_web_search=True), stream=True)
    assert payload["stream"] is True
    assert payload["max_tokens"] == 256
    assert payload["tools"] == [WEB_SEARCH_TOOL]
    assert WEB_SEARCH_TOOL == {"type": "web_search_20250305", "name": "web_search", "max_uses": 5}
    assert "system" not in payload


def test_chat_round_trip(mock_client, log_events):
    client, recorder = mock_client(_ok)
    adapter = AnthropicProvider("k", http_client=client)

    result = adapter.chat(make_request(SONNET))

    assert result == ChatResponse(content="Hello there!", usage=Usage(10, 5))
    assert result.metrics is None
    sent = recorder.last
    assert sent.method == "POST"
    assert str(sent.url) == "https://api.anthropic.com/v1/messages"
    assert sent.headers["x-api-key"] == "k"
    assert recorder.last_json()["model"] == "claude-3-5-sonnet-20241022"
    end = log_events.named("chat.end")
    assert end and end[0]["tokens"] == {"input_tokens": 10, "output_tokens": 5}


def test_chat_joins_text_blocks_and_skips_others(mock_client):
    body = {
        "content": [
            {"type": "text", "text": "Hello "},
            {"type": "server_tool_use", "id": "t1", "name": "web_search"},
            {"type": "text", "text": "world"},
        ]
    }
    client, _ = mock_client(lambda r: httpx.Response(200, json=body))
    result = AnthropicProvider("k", http_client=client).chat(make_request(SONNET))
    assert result.content == "Hello world"
    assert result.usage == Usage()


def test_chat_error_is_normalized(mock_client, log_events):
    body = {"type": "error", "error": {"type": "invalid_request_error", "message": "bad request"}}
    client, _ = mock_client(lambda r: httpx.Response(400, json=body))
    adapter = AnthropicProvider("k", http_client=client)

    with pytest.raises(ProviderError) as ei:
        adapter.chat(make_request(SONNET))

    err = ei.value
    assert err.status_code == 400
    assert err.message == "bad request"
    assert err.code is ErrorCode.VALIDATION
    assert err.retryable is False
    assert err.provider == "anthropic"
    assert err.model == "claude-3-5-sonnet-20241022"
    assert log_events.named("chat.error")[0]["error_code"] == "validation"


def test_chat_server_error_without_body_uses_fallback_message(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(503))
    with pytest.raises(ProviderError) as ei:
        AnthropicProvider("k", http_client=client).chat(make_request(SONNET))
    assert ei.value.message == "Unknown Anthropic API error"
    assert ei.value.retryable is True


def test_chat_invalid_json_raises_decode_error(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(200, content=b"<html>"))
    with pytest.raises(DecodeError) as ei:
        AnthropicProvider("k", http_client=client).chat(make_request(SONNET))
    assert ei.value.code is ErrorCode.DECODE
    assert ei.value.retryable is False


def test_stream_delivers_text_deltas_in_order(mock_client):
    events = [
        {"type": "message_start", "message": {"id": "m"}},
        {"type": "content_block_start", "index": 0},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "Hel"}},
        {"type": "ping"},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "lo"}},
        {"type": "content_block_delta", "delta": {"type": "input_json_delta", "partial_json": "{"}},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "!"}},
        {"type": "message_stop"},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "late"}},
    ]
    client, recorder = mock_client(lambda r: sse_response(events))
    stream = AnthropicProvider("k", http_client=client).chat_stream(make_request(SONNET))

    assert [c.content for c in stream.chunks] == ["Hel", "lo", "!"]
    assert stream.error(timeout=5) is None
    assert recorder.last_json()["stream"] is True


def test_stream_error_event_terminates_after_fragments(mock_client, log_events):
    events = [
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "partial"}},
        {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
    ]
    client, _ = mock_client(lambda r: sse_response(events))
    stream = AnthropicProvider("k", http_client=client).chat_stream(make_request(SONNET))

    assert [c.content for c in stream] == ["partial"]
    err = stream.error(timeout=5)
    assert isinstance(err, ProviderError)
    assert err.code is ErrorCode.UNAVAILABLE
    assert err.retryable is True
    assert err.message == "Overloaded"
    assert log_events.named("stream.error")[0]["emitted"] is True


def test_stream_status_error_surfaces_once(mock_client):
    body = {"error": {"type": "authentication_error", "message": "invalid x-api-key"}}
    client, _ = mock_client(lambda r: httpx.Response(401, json=body))
    stream = AnthropicProvider("k", http_client=client).chat_stream(make_request(SONNET))

    assert list(stream.chunks) == []
    err = stream.error(timeout=5)
    assert isinstance(err, ProviderError)
    assert err.status_code == 401
    assert err.message == "invalid x-api-key"
    assert len(stream.errors) == 1


def test_decode_stream_event_skips_malformed_frames():
    assert decode_stream_event(b"{not json").text == ""
    assert decode_stream_event(b"[1, 2]").terminal is False
    assert decode_stream_event(json.dumps({"type": "message_stop"}).encode()).terminal is True


def test_get_models_is_static(mock_client):
    client, recorder = mock_client(_ok)
    models = AnthropicProvider("k", http_client=client).get_models()
    assert [m.id for m in models][:2] == ["claude-3-5-sonnet-20241022", "claude-3-5-sonnet-20240620"]
    assert all(m.provider == "anthropic" for m in models)
    assert recorder.requests == []


def test_validate_credentials_probe_uses_haiku_with_ten_tokens(mock_client):
    client, recorder = mock_client(_ok)
    AnthropicProvider("k", http_client=client).validate_credentials()
    body = recorder.last_json()
    assert body["model"] == "claude-3-5-haiku-20241022"
    assert body["max_tokens"] == 10


@pytest.mark.parametrize("status", [401, 403])
def test_validate_credentials_rejected_key(mock_client, status):
    client, _ = mock_client(lambda r: httpx.Response(status, json={"error": {"message": "nope"}}))
    with pytest.raises(InvalidCredentialError) as ei:
        AnthropicProvider("bad", http_client=client).validate_credentials()
    assert ei.value.code is ErrorCode.AUTH
    assert ei.value.message == "invalid API key"
    assert isinstance(ei.value.__cause__, ProviderError)


def test_validate_credentials_other_failure_is_wrapped(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(500, json={"error": {"message": "boom"}}))
    with pytest.raises(ProviderError) as ei:
        AnthropicProvider("k", http_client=client).validate_credentials()
    assert not isinstance(ei.value, InvalidCredentialError)
    assert ei.value.message == "credential validation failed: boom"
    assert ei.value.__cause__ is not None
