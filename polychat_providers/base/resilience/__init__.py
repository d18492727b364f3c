"""Resilience helpers (caller-side retry policy)."""

from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    calculate_backoff,
    retry,
    should_retry,
    sleep_with_token,
)

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "RetryConfig",
    "calculate_backoff",
    "retry",
    "should_retry",
    "sleep_with_token",
]
