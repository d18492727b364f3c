"""Failure categories shared by every adapter.

A ``ProviderError`` always carries one of these codes; HTTP statuses map onto
them in ``classification.code_for_status``. The string values appear in the
``error_code`` field of structured log events.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    AUTH = "auth"  # 401, 403, rejected credential
    RATE_LIMIT = "rate_limit"  # 429
    TIMEOUT = "timeout"  # 408, 504, client-side read/connect timeouts, deadlines
    CANCELLED = "cancelled"
    TRANSIENT = "transient"  # 502
    UNSUPPORTED = "unsupported"  # feature the vendor or model does not offer
    VALIDATION = "validation"  # 400, 422, malformed requests
    NOT_FOUND = "not_found"  # 404, unknown model
    CONFLICT = "conflict"  # 409
    SERVER_ERROR = "server_error"  # 500 and unmapped 5xx
    UNAVAILABLE = "unavailable"  # 503, overloaded
    DECODE = "decode"  # response body that is not the expected JSON
    NETWORK = "network"  # connection refused, reset, DNS
    INTERNAL = "internal"  # bugs on this side of the wire
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
