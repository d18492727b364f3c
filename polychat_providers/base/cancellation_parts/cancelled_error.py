"""Error raised when a cancellation token stops an operation."""

from __future__ import annotations

from typing import Any, Optional

DEADLINE_EXCEEDED = "deadline exceeded"
_DEFAULT_REASON = "operation cancelled"


class CancelledError(RuntimeError):
    """Cooperative cancellation (caller request or deadline), never a vendor failure.

    Retry helpers and stream tasks check for this type first so a cancelled
    operation is neither retried nor logged as an error.
    """

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(reason or _DEFAULT_REASON)

    @property
    def reason(self) -> str:
        return str(self.args[0])

    @property
    def deadline_exceeded(self) -> bool:
        return self.reason == DEADLINE_EXCEEDED

    @classmethod
    def from_token(cls, token: Any) -> "CancelledError":
        """Build the error from a cancelled token's reason."""
        return cls(getattr(token, "reason", None))


__all__ = ["CancelledError", "DEADLINE_EXCEEDED"]
