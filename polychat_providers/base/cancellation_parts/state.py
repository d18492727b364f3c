"""Mutable state behind a ``CancellationToken``.

Holds the cancelled flag, the reason and the monotonic deadline, and answers
the two deadline questions the token asks on every poll.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class TokenState:
    cancelled: bool = False
    reason: Optional[str] = None
    deadline: Optional[float] = None

    def expired(self, now: float) -> bool:
        """True once a deadline is set and ``now`` has reached it."""
        return self.deadline is not None and now >= self.deadline

    def remaining(self, now: float) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - now)


__all__ = ["TokenState"]
