"""Shared HTTP adapter base class.

``BaseHTTPProvider`` implements the request lifecycle common to every vendor
so concrete adapters only describe their wire schema:

- ``chat``: encode → one POST → non-2xx normalized to ``ProviderError`` →
  body decoded (failures become ``DecodeError``) → ``parse_response``.
- ``chat_stream``: returns a ``ChatStream`` immediately; a daemon thread
  POSTs with streaming enabled, checks the status, reads event frames with
  ``decode_stream_frame`` and forwards fragments in order.
- ``validate_credentials``: runs the vendor ``_probe`` and recodes 401/403 as
  ``InvalidCredentialError``.

Subclasses provide ``provider_key``/``display_name``/``default_base_url``,
``default_headers``, ``build_request``, ``parse_response``,
``decode_stream_frame``, ``get_models`` and ``_probe``.

Adapters never retry; see ``polychat_providers.service.ChatClient``.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from .cancellation import CancellationToken, CancelledError
from .constants import DEFAULT_MAX_TOKENS
from .dto.adapter_params import AdapterParams
from .errors import (
    DecodeError,
    ErrorCode,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
    normalize_error_response,
)
from .http import get_httpx_client, open_stream, send_request
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatRequest, ChatResponse, Message, Model
from .streaming import ChatStream, DecodedFrame, read_event_stream, start_stream_task


def resolve_max_tokens(request: ChatRequest) -> int:
    """Return the output token limit: request override → model max → fallback."""
    return request.max_tokens or request.model.max_tokens or DEFAULT_MAX_TOKENS


def split_system_messages(messages: List[Message]) -> Tuple[Optional[str], List[Message], int]:
    """Separate system messages from the conversation.

    Returns ``(first_system_content, other_messages, dropped_count)`` where
    ``dropped_count`` counts system messages after the first, which are not
    carried anywhere.
    """
    system: Optional[str] = None
    rest: List[Message] = []
    dropped = 0
    for m in messages:
        if m.role == "system":
            if system is None:
                system = m.content
            else:
                dropped += 1
            continue
        rest.append(m)
    return system, rest, dropped


class BaseHTTPProvider:
    """Base class for JSON-over-HTTP vendor adapters.

    Parameters:
        api_key: Vendor credential; empty or blank raises
            ``MissingCredentialError`` before any I/O.
        base_url: Optional API root override (no trailing slash needed).
        headers: Extra headers merged over the vendor defaults.
        http_client: Optional ``httpx.Client``; pooled client otherwise.
        timeout_seconds: Optional read timeout override for this adapter.
    """

    provider_key: str = ""
    display_name: str = ""
    default_base_url: str = ""
    chat_path: str = ""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise MissingCredentialError(self.provider_key, self.display_name)
        self._api_key = api_key
        self._base_url = (base_url or self.default_base_url).rstrip("/")
        self._headers: Dict[str, str] = {**self.default_headers(api_key), **dict(headers or {})}
        self._http = http_client if http_client is not None else get_httpx_client(None, self.provider_key)
        self._timeout = timeout_seconds
        self._logger = get_logger(self.provider_key)

    @classmethod
    def from_params(cls, params: AdapterParams, *, http_client: Optional[httpx.Client] = None):
        """Construct an adapter from validated ``AdapterParams``."""
        return cls(
            params.api_key,
            base_url=params.base_url,
            headers=params.headers,
            http_client=http_client,
            timeout_seconds=params.timeout_seconds,
        )

    @property
    def provider_name(self) -> str:
        return self.provider_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        """Copy of the headers attached to every request."""
        return dict(self._headers)

    # ---- vendor hooks -------------------------------------------------
    def default_headers(self, api_key: str) -> Dict[str, str]:
        raise NotImplementedError

    def build_request(self, request: ChatRequest, stream: bool = False) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_response(self, data: Mapping[str, Any]) -> ChatResponse:
        raise NotImplementedError

    def decode_stream_frame(self, frame: bytes) -> DecodedFrame:
        raise NotImplementedError

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        raise NotImplementedError

    def _probe(self, token: Optional[CancellationToken]) -> None:
        raise NotImplementedError

    # ---- shared helpers -----------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _encode(self, payload: Mapping[str, Any], model: Optional[str]) -> bytes:
        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                code=ErrorCode.DECODE,
                message=f"failed to marshal request: {exc}",
                provider=self.provider_key,
                model=model,
                raw=exc,
            ) from exc

    def _decode_json(self, response: httpx.Response, model: Optional[str]) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(
                code=ErrorCode.DECODE,
                message=f"failed to decode response: {exc}",
                provider=self.provider_key,
                status_code=response.status_code,
                model=model,
                raw=exc,
            ) from exc
        if not isinstance(data, dict):
            raise DecodeError(
                code=ErrorCode.DECODE,
                message=f"failed to decode response: expected object, got {type(data).__name__}",
                provider=self.provider_key,
                status_code=response.status_code,
                model=model,
            )
        return data

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        payload: Optional[Mapping[str, Any]] = None,
        token: Optional[CancellationToken] = None,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send one request and return the decoded 2xx JSON object."""
        body = self._encode(payload, model) if payload is not None else None
        response = send_request(
            self._http,
            method,
            self._url(path),
            headers=self._headers,
            body=body,
            token=token,
            provider=self.provider_key,
            timeout=self._timeout,
        )
        if not response.is_success:
            raise normalize_error_response(
                response, self.provider_key, display_name=self.display_name, model=model
            )
        return self._decode_json(response, model)

    # ---- contract -----------------------------------------------------
    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Execute a non-streamed completion.

        Raises:
            ProviderError: Non-2xx status (normalized) or transport failure.
            DecodeError: The request or response body could not be (de)serialized.
            CancelledError: ``token`` was cancelled.
        """
        model = request.model.id
        ctx = LogContext(provider=self.provider_key, model=model, operation="chat")
        normalized_log_event(
            self._logger, "chat.start", ctx, phase="start", message_count=len(request.messages)
        )
        t0 = time.perf_counter()
        try:
            data = self._request_json(
                "POST", self.chat_path, payload=self.build_request(request, stream=False), token=token, model=model
            )
            result = self.parse_response(data)
        except (ProviderError, CancelledError) as exc:
            self._log_failure("chat.error", ctx, exc, t0)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=result.usage,
            latency_ms=int((time.perf_counter() - t0) * 1000),
            response_length=len(result.content),
        )
        return result

    def chat_stream(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatStream:
        """Start a streamed completion on a background thread.

        The returned handle's ``errors`` channel carries at most one of:
        ``ProviderError`` (status, transport or vendor error event),
        ``DecodeError`` (request encoding) or ``CancelledError``.
        """
        model = request.model.id
        ctx = LogContext(provider=self.provider_key, model=model, operation="stream")
        normalized_log_event(
            self._logger, "stream.start", ctx, phase="start", message_count=len(request.messages)
        )
        t0 = time.perf_counter()

        def _produce(emit, stream_token: CancellationToken) -> None:
            body = self._encode(self.build_request(request, stream=True), model)
            with open_stream(
                self._http,
                "POST",
                self._url(self.chat_path),
                headers=self._headers,
                body=body,
                token=stream_token,
                provider=self.provider_key,
                timeout=self._timeout,
            ) as response:
                if not response.is_success:
                    raise normalize_error_response(
                        response, self.provider_key, display_name=self.display_name, model=model
                    )
                for text in read_event_stream(response.iter_lines(), self.decode_stream_frame, stream_token):
                    emit(text)

        def _on_finish(error: Optional[BaseException], emitted: int) -> None:
            duration_ms = int((time.perf_counter() - t0) * 1000)
            if error is None:
                normalized_log_event(
                    self._logger,
                    "stream.finalize",
                    ctx,
                    phase="finalize",
                    emitted=emitted > 0,
                    emitted_count=emitted,
                    total_duration_ms=duration_ms,
                )
            elif isinstance(error, CancelledError):
                normalized_log_event(
                    self._logger,
                    "stream.cancelled",
                    ctx,
                    phase="finalize",
                    error_code=(ErrorCode.TIMEOUT if error.deadline_exceeded else ErrorCode.CANCELLED).value,
                    emitted=emitted > 0,
                    emitted_count=emitted,
                    reason=str(error),
                )
            else:
                self._log_failure("stream.error", ctx, error, t0, emitted=emitted > 0, emitted_count=emitted)

        return start_stream_task(
            _produce, token, name=f"polychat-{self.provider_key}-stream", on_finish=_on_finish
        )

    def validate_credentials(self, token: Optional[CancellationToken] = None) -> None:
        """Probe the vendor with the current credential.

        Raises:
            InvalidCredentialError: The vendor answered 401 or 403.
            ProviderError: Any other failure, as "credential validation failed: ...".
            CancelledError: ``token`` was cancelled.
        """
        try:
            self._probe(token)
        except ProviderError as exc:
            if exc.status_code in (401, 403):
                raise InvalidCredentialError(
                    code=ErrorCode.AUTH,
                    message="invalid API key",
                    provider=self.provider_key,
                    status_code=exc.status_code,
                    raw=exc,
                ) from exc
            raise ProviderError(
                code=exc.code,
                message=f"credential validation failed: {exc.message}",
                provider=self.provider_key,
                status_code=exc.status_code,
                retryable=exc.retryable,
                raw=exc,
            ) from exc

    def _log_failure(
        self,
        event: str,
        ctx: LogContext,
        exc: BaseException,
        t0: float,
        **fields: Any,
    ) -> None:
        if isinstance(exc, ProviderError):
            code = exc.code.value
        elif isinstance(exc, CancelledError):
            code = ErrorCode.CANCELLED.value
        else:
            code = ErrorCode.INTERNAL.value
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            error_code=code,
            status_code=getattr(exc, "status_code", None),
            error=str(exc),
            latency_ms=int((time.perf_counter() - t0) * 1000),
            **fields,
        )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(base_url={self._base_url!r})"


__all__ = ["BaseHTTPProvider", "resolve_max_tokens", "split_system_messages"]
