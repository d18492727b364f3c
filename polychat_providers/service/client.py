"""Caller-side chat client.

``ChatClient`` wraps one adapter and adds what adapters deliberately leave
out: retries with backoff for transient failures, and ``ResponseMetrics`` on
completed responses.

Retry semantics
---------------
- ``chat``: retried per :class:`RetryConfig`.
- ``chat_stream``: retried only while no fragment has been forwarded to the
  caller, so a fragment is never delivered twice. Once text has flowed, the
  terminal error is reported as is.
- Cancellation is never retried, and backoff sleeps end early when the
  caller's token is cancelled.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable, List, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import ProviderError
from ..base.interfaces import BackendAdapter
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest, ChatResponse, Model, ResponseMetrics
from ..base.resilience.retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    calculate_backoff,
    retry,
    should_retry,
    sleep_with_token,
)
from ..base.streaming import ChatStream, start_stream_task

Sleeper = Callable[[float], None]


class ChatClient:
    """Retrying façade over a single :class:`BackendAdapter`.

    Parameters:
        adapter: The vendor adapter to call.
        retry_config: Backoff policy; ``RetryConfig(max_retries=0)`` disables
            retries.
        sleep: Optional sleep function for backoff waits (tests pass a
            recorder). Defaults to a sleep that wakes on cancellation.
    """

    def __init__(
        self,
        adapter: BackendAdapter,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        *,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        self._adapter = adapter
        self._config = retry_config
        self._sleep = sleep
        self._logger = get_logger("client")

    @property
    def adapter(self) -> BackendAdapter:
        return self._adapter

    @property
    def provider_name(self) -> str:
        return self._adapter.provider_name

    def _sleeper(self, token: Optional[CancellationToken]) -> Sleeper:
        if self._sleep is not None:
            return self._sleep
        return lambda delay: sleep_with_token(delay, token)

    def _log_retry(self, model: str, attempt: int, delay: float, error: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            "retry.scheduled",
            LogContext(provider=self.provider_name, model=model, operation="retry"),
            phase="retry",
            attempt=attempt + 1,
            error_code=error.code.value,
            status_code=error.status_code,
            delay_s=round(delay, 3),
        )

    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Run ``adapter.chat`` with retries and attach ``ResponseMetrics``.

        Raises the last ``ProviderError`` once retries are exhausted, or
        ``CancelledError`` when ``token`` is cancelled.
        """
        model = request.model.id

        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error) -> None:
            if error is not None and delay is not None:
                self._log_retry(model, attempt, delay, error)

        config = replace(self._config, attempt_logger=self._config.attempt_logger or _attempt_logger)
        call = retry(config, sleep=self._sleeper(token))(self._adapter.chat)

        t0 = time.perf_counter()
        response = call(request, token)
        response.metrics = ResponseMetrics(
            latency_ms=int((time.perf_counter() - t0) * 1000),
            tokens_input=response.usage.input_tokens,
            tokens_output=response.usage.output_tokens,
            response_length=len(response.content),
        )
        return response

    def chat_stream(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatStream:
        """Start a streamed completion that retries until the first fragment."""
        model = request.model.id

        def _produce(emit, stream_token: CancellationToken) -> None:
            sleep = self._sleeper(stream_token)
            attempt = 0
            while True:
                forwarded = 0
                with self._adapter.chat_stream(request, stream_token) as inner:
                    for chunk in inner:
                        emit(chunk.content)
                        forwarded += 1
                    error = inner.error()
                if error is None:
                    return
                if forwarded == 0 and should_retry(error, attempt, self._config):
                    delay = calculate_backoff(attempt, self._config)
                    self._log_retry(model, attempt, delay, error)
                    sleep(delay)
                    stream_token.raise_if_cancelled()
                    attempt += 1
                    continue
                raise error

        return start_stream_task(_produce, token, name=f"polychat-{self.provider_name}-client-stream")

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        return self._adapter.get_models(token)

    def validate_credentials(self, token: Optional[CancellationToken] = None) -> None:
        self._adapter.validate_credentials(token)


__all__ = ["ChatClient"]
