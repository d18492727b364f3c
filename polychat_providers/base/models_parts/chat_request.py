"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters translate this normalized request shape into vendor request bodies.
``temperature`` of ``None`` means "unset" so an explicit ``0.0`` survives
translation; ``max_tokens`` of ``None`` or ``0`` defers to the model limit.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message
from .model import Model


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target `Model` descriptor.
        messages: Ordered list of chat `Message` instances. Order is preserved.
        temperature: Sampling temperature; ``None`` lets the adapter choose.
        max_tokens: Completion token override; ``None``/``0`` means unset.
        enable_web_search: Ask the vendor to attach its web search tool where
            supported.
        stream: Caller intent flag; adapters set the wire flag themselves.

    Methods:
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    model: Model
    messages: List[Message] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    enable_web_search: bool = False
    stream: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model.to_dict(),
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "enable_web_search": self.enable_web_search,
            "stream": self.stream,
        }


__all__ = [
    "ChatRequest",
]
