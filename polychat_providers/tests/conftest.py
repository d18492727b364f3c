"""Shared fixtures for the provider test suite.

Every HTTP exchange goes through ``httpx.MockTransport``; nothing touches the
network. Provider credential variables are cleared for each test so the
developer's environment cannot leak into env-fallback assertions.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List

import httpx
import pytest

from polychat_providers.base import timeouts
from polychat_providers.base.http import close_all_clients
from polychat_providers.base.logging import LOG_LEVEL_ENV, get_logger
from polychat_providers.tests.utils import EventCapture, Recorder

_CREDENTIAL_VARS = (
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_CONNECT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear provider env vars, the timeout cache and the client pool."""
    for name in _CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(timeouts, "_CACHED", None)
    yield
    close_all_clients()


@pytest.fixture()
def mock_client() -> Iterator[Callable[..., "tuple[httpx.Client, Recorder]"]]:
    """Factory returning ``(client, recorder)`` around a handler function."""
    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        recorder = Recorder()

        def _handle(request: httpx.Request) -> httpx.Response:
            recorder.requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_handle))
        clients.append(client)
        return client, recorder

    yield _make
    for c in clients:
        c.close()


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[EventCapture]:
    """Capture structured events emitted under the ``polychat`` logger (DEBUG and up)."""
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    base = get_logger()
    handler = EventCapture()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
        base.setLevel(logging.INFO)
