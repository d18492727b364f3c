"""
ChatResponse DTO representing normalized provider responses.

Two responses with the same text and usage compare equal regardless of which
vendor produced them; ``metrics`` is only populated by caller-side wrappers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .response_metrics import ResponseMetrics
from .usage import Usage


@dataclass
class ChatResponse:
    """Provider-agnostic response from an LLM chat invocation.

    Attributes:
        content: Full completion text.
        usage: Token `Usage`; zero-valued when not reported.
        metrics: Optional `ResponseMetrics` attached by the caller.

    Methods:
        to_dict: Return a JSON-serializable dictionary representation.
    """

    content: str
    usage: Usage = field(default_factory=Usage)
    metrics: Optional[ResponseMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the response."""
        return {
            "content": self.content,
            "usage": self.usage.to_dict(),
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }


__all__ = [
    "ChatResponse",
]
