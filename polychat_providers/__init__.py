"""polychat_providers package

Uniform chat-completion access to Anthropic, OpenAI and OpenRouter.

Purpose:
    Provide a minimal, stable API for external consumption. Callers create an
    adapter by provider id and use it directly (for example,
    ``create("openai").chat(request)``), or wrap it in :class:`ChatClient`
    for retries and response metrics.

Public API (re-exported):
    - Version: ``__version__``
    - Registry: :func:`create`, :func:`validate_credentials`,
      :class:`ProviderRegistry`
    - Errors: :class:`ProviderError`, :class:`ErrorCode` and subclasses
    - Models: :class:`Message`, :class:`Model`, :class:`ChatRequest`,
      :class:`ChatResponse`, :class:`StreamChunk`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Services: :class:`ChatClient`, :class:`ModelCatalog`
"""

from typing import Optional

from .base.cancellation import CancellationToken, CancelledError
from .base.catalog import ModelCatalog
from .base.dto import AdapterParams
from .base.errors import (
    DecodeError,
    ErrorCode,
    InvalidCredentialError,
    MissingCredentialError,
    ProviderError,
)
from .base.interfaces import BackendAdapter
from .base.models import (
    ChatRequest,
    ChatResponse,
    Message,
    Model,
    ResponseMetrics,
    StreamChunk,
    Usage,
)
from .base.registry import ProviderRegistry, UnknownProviderError
from .base.streaming import ChatStream
from .service import ChatClient

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Registry
    "create",
    "validate_credentials",
    "ProviderRegistry",
    "UnknownProviderError",
    "AdapterParams",
    "BackendAdapter",
    # Errors
    "ProviderError",
    "ErrorCode",
    "InvalidCredentialError",
    "DecodeError",
    "MissingCredentialError",
    "CancelledError",
    # Models
    "Message",
    "Model",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "ResponseMetrics",
    "StreamChunk",
    "ChatStream",
    # Cancellation
    "CancellationToken",
    # Services
    "ChatClient",
    "ModelCatalog",
]


def create(provider_name: str, api_key: Optional[str] = None, *, params: Optional[AdapterParams] = None, **kwargs):
    """Instantiate an adapter for ``provider_name``.

    Parameters
    ----------
    provider_name:
        Canonical provider id (``"anthropic"``, ``"openai"`` or ``"openrouter"``).
    api_key:
        Credential; falls back to ``params.api_key`` and then the
        ``<PROVIDER>_API_KEY`` environment variable.
    params:
        Optional :class:`AdapterParams` with base URL, headers and timeout.
    **kwargs:
        Forwarded to :meth:`ProviderRegistry.create` (e.g. ``http_client``).

    Raises
    ------
    UnknownProviderError
        The provider id is not supported.
    MissingCredentialError
        No API key could be resolved.
    """
    return ProviderRegistry.create(provider_name, api_key, params=params, **kwargs)


def validate_credentials(provider_name: str, api_key: Optional[str], **kwargs) -> None:
    """Probe ``provider_name`` with ``api_key`` (30 second deadline)."""
    ProviderRegistry.validate_credentials(provider_name, api_key, **kwargs)
