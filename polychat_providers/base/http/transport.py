"""Cancellation-aware request helpers on top of ``httpx``.

Both helpers share the same contract:

- the token is checked before anything is sent;
- a token deadline caps the request timeout;
- cancelling the token closes the in-flight response, unblocking the
  thread that is reading it;
- transport failures surface as ``ProviderError`` (``network`` or
  ``timeout``, retryable) chained to the ``httpx`` exception, unless the
  token was cancelled, in which case ``CancelledError`` is raised.

Status codes are not interpreted here; callers decide what non-2xx means.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ProviderError, classify_exception
from ..timeouts import build_httpx_timeout


def _build(
    client: httpx.Client,
    method: str,
    url: str,
    headers: Optional[Mapping[str, str]],
    body: Optional[bytes],
    token: Optional[CancellationToken],
    stream: bool,
    timeout: Optional[float],
) -> httpx.Request:
    remaining = token.remaining() if token is not None else None
    return client.build_request(
        method,
        url,
        headers=dict(headers or {}),
        content=body,
        timeout=build_httpx_timeout(stream=stream, remaining=remaining, override=timeout),
    )


def _wrap_failure(exc: Exception, provider: str, token: Optional[CancellationToken]) -> Exception:
    if token is not None and token.cancelled:
        return CancelledError.from_token(token)
    return ProviderError(
        code=classify_exception(exc),
        message=f"request failed: {exc}",
        provider=provider,
        retryable=True,
        raw=exc,
    )


def send_request(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[bytes] = None,
    token: Optional[CancellationToken] = None,
    provider: str = "",
    timeout: Optional[float] = None,
) -> httpx.Response:
    """Send one request and return the response with its body fully read.

    Raises:
        CancelledError: The token was cancelled before or during the call.
        ProviderError: Connect/read/timeout failure.
    """
    if token is not None:
        token.raise_if_cancelled()
    request = _build(client, method, url, headers, body, token, stream=False, timeout=timeout)
    response: Optional[httpx.Response] = None
    try:
        response = client.send(request, stream=True)
        if token is not None:
            token.add_callback(response.close)
        response.read()
    except (httpx.TransportError, httpx.StreamError) as exc:
        raise _wrap_failure(exc, provider, token) from exc
    finally:
        if response is not None:
            if token is not None:
                token.remove_callback(response.close)
            response.close()
    if token is not None:
        token.raise_if_cancelled()
    return response


@contextmanager
def open_stream(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[bytes] = None,
    token: Optional[CancellationToken] = None,
    provider: str = "",
    timeout: Optional[float] = None,
) -> Iterator[httpx.Response]:
    """Open a streaming request; the response is closed when the block exits.

    Usage::

        with open_stream(client, "POST", url, body=payload, token=token) as resp:
            for line in resp.iter_lines():
                ...

    Errors raised while iterating the body inside the block are mapped the
    same way as connection failures.
    """
    if token is not None:
        token.raise_if_cancelled()
    request = _build(client, method, url, headers, body, token, stream=True, timeout=timeout)
    try:
        response = client.send(request, stream=True)
    except (httpx.TransportError, httpx.StreamError) as exc:
        raise _wrap_failure(exc, provider, token) from exc
    if token is not None:
        token.add_callback(response.close)
    try:
        yield response
    except (httpx.TransportError, httpx.StreamError) as exc:
        raise _wrap_failure(exc, provider, token) from exc
    finally:
        if token is not None:
            token.remove_callback(response.close)
        response.close()


__all__ = ["send_request", "open_stream"]
