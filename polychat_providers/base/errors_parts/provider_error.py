"""
Structured provider error exception types.

``ProviderError`` wraps vendor failures (non-2xx responses, transport faults,
in-band stream error events) with a normalized `ErrorCode`, the HTTP status
when one exists, and a ``retryable`` hint for caller-side retry policy.
Specialized subclasses distinguish credential and decode failures so callers
can branch on type rather than on message text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        status_code: HTTP status code when the failure came from a response.
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    status_code: Optional[int] = None
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        """Return a compact string combining provider, status, and message."""
        status = self.status_code if self.status_code is not None else "-"
        return f"{self.provider} API Error ({status}): {self.message}"


class InvalidCredentialError(ProviderError):
    """Raised by credential probes when the vendor answers 401 or 403."""


class DecodeError(ProviderError):
    """Local JSON encode/decode failure.

    Indicates a schema mismatch between this adapter and the vendor rather
    than a transient fault, so it is never marked retryable.
    """


class MissingCredentialError(ValueError):
    """Raised at adapter construction when the credential string is empty."""

    def __init__(self, provider: str, display_name: Optional[str] = None) -> None:
        self.provider = provider
        super().__init__(f"{display_name or provider} API key is required")


__all__ = [
    "ProviderError",
    "InvalidCredentialError",
    "DecodeError",
    "MissingCredentialError",
]
