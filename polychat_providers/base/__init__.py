"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, errors, cancellation, streaming
primitives and the provider registry for use by the vendor adapters and by
callers.

Layout:
- Interfaces: the ``BackendAdapter`` contract
- Models (DTOs): request/response value objects
- Registry: lazy creation of adapters by canonical provider id
- Catalog: cross-provider model lookup with a static fallback table
"""

from .cancellation import CancellationToken, CancelledError
from .catalog import PREDEFINED_MODELS, ModelCatalog
from .dto import AdapterParams
from .errors import (
    DecodeError,
    ErrorCode,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
)
from .http_provider import BaseHTTPProvider
from .interfaces import BackendAdapter
from .models import (
    ChatRequest,
    ChatResponse,
    Message,
    Model,
    ResponseMetrics,
    Role,
    StreamChunk,
    Usage,
)
from .registry import ProviderDescriptor, ProviderRegistry, UnknownProviderError
from .streaming import ChatStream, StreamChannel
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Role",
    "Message",
    "Model",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "ResponseMetrics",
    "StreamChunk",
    # Interfaces
    "BackendAdapter",
    "BaseHTTPProvider",
    "AdapterParams",
    # Errors
    "ErrorCode",
    "ProviderError",
    "InvalidCredentialError",
    "DecodeError",
    "MissingCredentialError",
    # Registry & catalog
    "ProviderDescriptor",
    "ProviderRegistry",
    "UnknownProviderError",
    "ModelCatalog",
    "PREDEFINED_MODELS",
    # Timeouts & cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "ChatStream",
    "StreamChannel",
]
