"""Transport helper and client pool tests."""
from __future__ import annotations

import httpx
import pytest

from polychat_providers.base.cancellation import CancellationToken, CancelledError
from polychat_providers.base.errors import ErrorCode, ProviderError
from polychat_providers.base.http import close_all_clients, get_httpx_client, open_stream, send_request
from polychat_providers.base.timeouts import build_httpx_timeout, get_timeout_config


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client(None, purpose="openai")
    c2 = get_httpx_client(None, purpose="anthropic")
    assert c1 is not c2


def test_closed_clients_are_recreated():
    c1 = get_httpx_client(None, purpose="openai")
    close_all_clients()
    c2 = get_httpx_client(None, purpose="openai")
    assert c1.is_closed and c2 is not c1


def test_send_request_returns_read_response(mock_client):
    client, recorder = mock_client(lambda r: httpx.Response(201, json={"ok": True}))
    resp = send_request(client, "POST", "https://h/x", headers={"A": "b"}, body=b"{}", provider="p")
    assert resp.status_code == 201
    assert resp.json() == {"ok": True}
    assert recorder.last.headers["a"] == "b"
    assert recorder.last.content == b"{}"


def test_send_request_precancelled_token_sends_nothing(mock_client):
    client, recorder = mock_client(lambda r: httpx.Response(200))
    token = CancellationToken()
    token.cancel("stop")
    with pytest.raises(CancelledError):
        send_request(client, "GET", "https://h/x", token=token, provider="p")
    assert recorder.requests == []


def test_send_request_timeout_maps_to_timeout_code(mock_client):
    def _slow(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    client, _ = mock_client(_slow)
    with pytest.raises(ProviderError) as ei:
        send_request(client, "GET", "https://h/x", provider="p")
    assert ei.value.code is ErrorCode.TIMEOUT
    assert ei.value.retryable is True
    assert isinstance(ei.value.raw, httpx.ReadTimeout)


def test_transport_failure_after_cancel_reports_cancellation(mock_client):
    token = CancellationToken()

    def _fail(request):
        token.cancel("user")
        raise httpx.ReadError("closed", request=request)

    client, _ = mock_client(_fail)
    with pytest.raises(CancelledError):
        send_request(client, "GET", "https://h/x", token=token, provider="p")


def test_open_stream_yields_lines(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(200, content=b"data: a\n\ndata: b\n\n"))
    with open_stream(client, "POST", "https://h/s", body=b"{}", provider="p") as resp:
        lines = [line for line in resp.iter_lines() if line]
    assert lines == ["data: a", "data: b"]
    assert resp.is_closed


def test_open_stream_connect_failure(mock_client):
    def _fail(request):
        raise httpx.ConnectError("refused", request=request)

    client, _ = mock_client(_fail)
    with pytest.raises(ProviderError) as ei:
        with open_stream(client, "POST", "https://h/s", provider="p"):
            pass
    assert ei.value.code is ErrorCode.NETWORK


def test_timeout_config_env_overrides(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "12")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "bogus")
    monkeypatch.setenv("PT_TIMEOUT_CONNECT_SECONDS", "-3")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 12.0
    assert cfg.stream_timeout_seconds == 120.0
    assert cfg.connect_timeout_seconds == 10.0


def test_build_httpx_timeout_is_bounded_by_deadline():
    assert build_httpx_timeout().read == 60.0
    assert build_httpx_timeout(stream=True).read == 120.0
    assert build_httpx_timeout(override=5).read == 5
    bounded = build_httpx_timeout(remaining=2.0)
    assert bounded.read == 2.0 and bounded.connect == 2.0
