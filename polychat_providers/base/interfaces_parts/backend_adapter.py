"""BackendAdapter Protocol (single-class module).

Defines the capability contract every vendor adapter satisfies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest, ChatResponse, Model

if TYPE_CHECKING:  # pragma: no cover
    from ..streaming import ChatStream


@runtime_checkable
class BackendAdapter(Protocol):
    """Normalized interface over one LLM vendor.

    Implementations translate ``ChatRequest`` into the vendor schema, parse
    the vendor reply back into ``ChatResponse``/``StreamChunk`` values and
    never leak vendor payloads upstream. Failures are raised, never encoded
    into a response.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Execute one non-streamed completion."""
        ...

    def chat_stream(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> "ChatStream":
        """Start a streamed completion and return its handle without blocking."""
        ...

    def get_models(self, token: Optional[CancellationToken] = None) -> List[Model]:
        """Return the provider's model catalog."""
        ...

    def validate_credentials(self, token: Optional[CancellationToken] = None) -> None:
        """Perform the cheapest authenticated call; raise on failure."""
        ...
