"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``polychat_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    DecodeError,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
)
from .errors_parts.classification import (
    RETRYABLE_STATUS_CODES,
    classify_exception,
    code_for_status,
    is_retryable_status,
)
from .errors_parts.normalization import extract_error_message, normalize_error_response
from .cancellation import CancelledError

__all__ = [
    "ErrorCode",
    "ProviderError",
    "InvalidCredentialError",
    "DecodeError",
    "MissingCredentialError",
    "CancelledError",
    "RETRYABLE_STATUS_CODES",
    "classify_exception",
    "code_for_status",
    "is_retryable_status",
    "extract_error_message",
    "normalize_error_response",
]
