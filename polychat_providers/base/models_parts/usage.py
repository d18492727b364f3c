"""Token usage counters reported by a vendor."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class Usage:
    """Input/output token counts; zero when the vendor does not report them."""

    input_tokens: int = 0
    output_tokens: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "Usage",
]
