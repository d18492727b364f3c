"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Messages are plain text; the timestamp records when the message was
created and is never sent to a vendor.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal


# Message roles understood by every supported vendor.
Role = Literal["system", "user", "assistant"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Message:
    """A single chat message.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content.
        timestamp: UTC creation time; defaults to now.

    Methods:
        to_dict: Return a JSON-serializable dictionary of the message.
        to_wire: Return the ``{"role", "content"}`` pair vendors accept.
    """

    role: Role
    content: str
    timestamp: datetime = field(default_factory=_utcnow)

    def to_wire(self) -> Dict[str, str]:
        """Return the vendor wire shape (role and content only)."""
        return {"role": self.role, "content": self.content}

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the message."""
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


__all__ = [
    "Message",
    "Role",
]
