"""Caller-side retry policy with exponential backoff and jitter.

Adapters never retry on their own; wrappers such as ``ChatClient`` apply
this policy around adapter calls. Only :class:`ProviderError` failures are
considered, and cancellation is never retried.
"""
from __future__ import annotations

import functools
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

from ..cancellation import CancellationToken, CancelledError
from ..errors import RETRYABLE_STATUS_CODES, ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy parameters.

    Attributes:
        max_retries: Retries after the first attempt (so ``max_retries + 1``
            calls at most).
        base_delay: Delay before the first retry, in seconds.
        max_delay: Upper bound for any single delay.
        exponent_base: Multiplier applied per attempt.
        jitter_max: Random extra delay in ``[0, jitter_max)`` seconds.
        retryable_statuses: HTTP statuses that always qualify for a retry.
        retryable_codes: Error codes that qualify when no status matched.
        attempt_logger: Optional hook called after every attempt.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponent_base: float = 2.0
    jitter_max: float = 1.0
    retryable_statuses: tuple[int, ...] = tuple(sorted(RETRYABLE_STATUS_CODES))
    retryable_codes: tuple[ErrorCode, ...] = (
        ErrorCode.TRANSIENT,
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.NETWORK,
        ErrorCode.UNAVAILABLE,
    )
    attempt_logger: AttemptLogger | None = None

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_CONFIG = RetryConfig()


def calculate_backoff(
    attempt: int,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    rand: Callable[[], float] = random.random,
) -> float:
    """Return the delay (seconds) before retry number ``attempt + 1``.

    ``base_delay * exponent_base ** attempt`` plus jitter, clamped to
    ``max_delay``.
    """
    delay = config.base_delay * (config.exponent_base**attempt)
    if config.jitter_max > 0:
        delay += config.jitter_max * rand()  # nosec B311 - jitter, not crypto
    return min(delay, config.max_delay)


def should_retry(exc: BaseException, attempt: int, config: RetryConfig = DEFAULT_RETRY_CONFIG) -> bool:
    """Decide whether a failed attempt (0-based) may be retried."""
    if attempt >= config.max_retries:
        return False
    if isinstance(exc, CancelledError) or not isinstance(exc, ProviderError):
        return False
    if exc.status_code is not None and exc.status_code in config.retryable_statuses:
        return True
    return exc.retryable or exc.code in config.retryable_codes


def sleep_with_token(delay: float, token: Optional[CancellationToken] = None) -> None:
    """Sleep for ``delay`` seconds, waking early and raising if ``token`` is cancelled."""
    if token is None:
        time.sleep(delay)
        return
    woke = threading.Event()
    token.add_callback(woke.set)
    try:
        woke.wait(delay)
    finally:
        token.remove_callback(woke.set)
    token.raise_if_cancelled()


def retry(
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    sleep: Callable[[float], None] = time.sleep,
):
    """Return a decorator applying the retry policy.

    - Retries only failures accepted by :func:`should_retry`
    - Waits :func:`calculate_backoff` seconds between attempts
    - Preserves the wrapped function's signature
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            attempt = 0
            while True:
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    retrying = should_retry(e, attempt, config)
                    delay = calculate_backoff(attempt, config) if retrying else None
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if delay is None:
                        raise
                    sleep(delay)
                    attempt += 1
                    continue
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "calculate_backoff",
    "should_retry",
    "sleep_with_token",
    "retry",
]
