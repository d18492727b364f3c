"""Context fields stamped on every structured log event.

``LogContext`` names who is talking (provider), about what (model) and in
which operation (``chat``, ``stream``, ``models``, ``retry``). ``to_dict``
flattens ``extra`` into the top level and drops ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "operation": self.operation,
        }
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
