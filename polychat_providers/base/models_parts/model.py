"""
Model descriptor DTO.

Represents one model offered by a provider, either from a static catalog or a
normalized remote listing.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Model:
    """Immutable model descriptor.

    Attributes:
        id: Vendor model identifier sent on the wire.
        name: Human-friendly display name.
        provider: Provider key owning this model.
        max_tokens: Maximum completion tokens the model accepts.
        context_window: Maximum context window size in tokens.
    """

    id: str
    name: str
    provider: str
    max_tokens: int
    context_window: int

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the model."""
        return asdict(self)


__all__ = [
    "Model",
]
