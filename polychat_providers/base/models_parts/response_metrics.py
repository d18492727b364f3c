"""
ResponseMetrics DTO.

Caller-side timing and size measurements for a completed chat call. Adapters
never fill this in; `ChatClient` attaches it after the call returns.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class ResponseMetrics:
    """Observed metrics for one chat invocation.

    Attributes:
        latency_ms: Wall-clock duration of the call in milliseconds.
        tokens_input: Input tokens reported by the vendor.
        tokens_output: Output tokens reported by the vendor.
        response_length: Length of the response text in characters.
    """

    latency_ms: int = 0
    tokens_input: int = 0
    tokens_output: int = 0
    response_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the metrics."""
        return asdict(self)


__all__ = [
    "ResponseMetrics",
]
