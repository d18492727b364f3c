"""
Error normalizer for non-success HTTP responses.

Turns a vendor error response into a :class:`ProviderError`. All three
vendors nest the human message under ``{"error": {"message": ...}}``; a few
gateways return a top-level ``message`` or a bare ``error`` string instead,
and proxies occasionally answer with plain text.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import httpx

from .classification import code_for_status, is_retryable_status
from .provider_error import ProviderError

_MAX_TEXT_MESSAGE = 500


def extract_error_message(data: Mapping[str, Any]) -> Optional[str]:
    """Return the most specific error message in a decoded error envelope."""
    err = data.get("error")
    if isinstance(err, Mapping):
        msg = err.get("message")
        if isinstance(msg, str) and msg:
            return msg
    msg = data.get("message")
    if isinstance(msg, str) and msg:
        return msg
    if isinstance(err, str) and err:
        return err
    return None


def normalize_error_response(
    response: httpx.Response,
    provider: str,
    *,
    display_name: Optional[str] = None,
    model: Optional[str] = None,
) -> ProviderError:
    """Build a :class:`ProviderError` from a non-2xx ``httpx.Response``.

    Parameters:
        response: The failed response. Streaming responses are read here.
        provider: Canonical provider key stored on the error.
        display_name: Human name used in the generic fallback message.
        model: Optional model name for diagnostics.

    Returns:
        A ``ProviderError`` carrying the status code, provider identity, the
        extracted message and a retryable hint (429 and 5xx).
    """
    status = response.status_code
    fallback = f"Unknown {display_name or provider} API error"
    try:
        body = response.read()
    except httpx.HTTPError as exc:
        message = f"Failed to read error response: {exc}"
    else:
        message = _message_from_body(body) or fallback
    return ProviderError(
        code=code_for_status(status),
        message=message,
        provider=provider,
        status_code=status,
        model=model,
        retryable=is_retryable_status(status),
    )


def _message_from_body(body: bytes) -> Optional[str]:
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        text = body.decode("utf-8", errors="replace").strip()
        return text[:_MAX_TEXT_MESSAGE] or None
    if isinstance(data, Mapping):
        return extract_error_message(data)
    return None


__all__ = ["extract_error_message", "normalize_error_response"]
