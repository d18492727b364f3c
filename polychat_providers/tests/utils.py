"""Helpers shared by the provider tests (mock responses and log capture)."""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Iterable, List

import httpx

from polychat_providers.base.models import ChatRequest, Message, Model


class Recorder:
    """Collects the requests a mock transport received."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


def sse_body(events: Iterable[Any], done: bool = False) -> bytes:
    """Encode payloads as ``data:`` events (dicts are JSON-encoded)."""
    parts = []
    for event in events:
        data = event if isinstance(event, str) else json.dumps(event)
        parts.append(f"data: {data}\n\n")
    if done:
        parts.append("data: [DONE]\n\n")
    return "".join(parts).encode("utf-8")


def sse_response(events: Iterable[Any], done: bool = False, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status,
        headers={"Content-Type": "text/event-stream"},
        content=sse_body(events, done=done),
    )


def make_request(model: Model, *messages: Message, **kwargs: Any) -> ChatRequest:
    return ChatRequest(model=model, messages=list(messages) or [Message("user", "Hi")], **kwargs)


class EventCapture(logging.Handler):
    """Handler collecting decoded JSON payloads from the ``polychat`` logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict):
                payload["_level"] = record.levelno
                out.append(payload)
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events() if e.get("event") == event]


class BlockingSSEStream(httpx.SyncByteStream):
    """Response body that sends ``events`` and then blocks until closed.

    Stands in for a vendor connection that stalls mid-stream; ``closed`` is
    set once the transport layer closes the response.
    """

    def __init__(self, events: Iterable[Any]) -> None:
        self._body = sse_body(events)
        self.closed = threading.Event()

    def __iter__(self):
        yield self._body
        self.closed.wait(10)

    def close(self) -> None:
        self.closed.set()
