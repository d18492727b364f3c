"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `polychat_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    DecodeError,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
)
from .classification import classify_exception, is_retryable_status
from .normalization import normalize_error_response

__all__ = [
    "ErrorCode",
    "ProviderError",
    "InvalidCredentialError",
    "DecodeError",
    "MissingCredentialError",
    "classify_exception",
    "is_retryable_status",
    "normalize_error_response",
]
