"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used across adapters to stop blocking
requests and streaming reads early. A token is cancelled explicitly, by its
parent, or when its optional deadline passes. Registered callbacks let
in-flight I/O (an open HTTP response, a stream task) react immediately instead
of waiting for the next poll.
"""

from __future__ import annotations

import logging
import threading
import time
from threading import Lock
from typing import Callable, List, Optional

from .state import TokenState
from .cancelled_error import DEADLINE_EXCEEDED, CancelledError

Callback = Callable[[], None]

_log = logging.getLogger("polychat.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional deadline and cascading.

    Thread-safe. Child tokens inherit cancellation when the parent is
    cancelled. Callbacks run exactly once, on the thread that performs the
    cancellation (the deadline timer thread for expiries).

    Parameters:
        parent: Optional parent token; its cancellation cascades here.
        timeout: Optional deadline in seconds from now.
    """

    def __init__(
        self,
        *,
        parent: "CancellationToken | None" = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._state = TokenState()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callback] = []
        self._timer: Optional[threading.Timer] = None
        if timeout is not None:
            self._arm_deadline(float(timeout))
        if parent is not None:
            parent.link_child(self)

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Return a new token that cancels itself after ``seconds``."""
        return cls(timeout=seconds)

    def _arm_deadline(self, seconds: float) -> None:
        self._state.deadline = time.monotonic() + max(0.0, seconds)
        timer = threading.Timer(max(0.0, seconds), self.cancel, args=(DEADLINE_EXCEEDED,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested or the deadline passed."""
        if self._state.cancelled:
            return True
        if self._state.expired(time.monotonic()):
            self.cancel(DEADLINE_EXCEEDED)
            return True
        return False

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def deadline(self) -> Optional[float]:
        """Monotonic deadline (``time.monotonic()`` scale) or ``None``."""
        return self._state.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``0.0`` once passed, ``None`` if unbounded."""
        return self._state.remaining(time.monotonic())

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            timer = self._timer
            self._timer = None
        if timer is not None and timer is not threading.current_thread():
            timer.cancel()
        for cb in callbacks:
            self._run_callback(cb)
        for child in children:
            child.cancel(reason)

    def add_callback(self, callback: Callback) -> None:
        """Register ``callback`` to run once on cancellation.

        Runs immediately on the calling thread when the token is already
        cancelled.
        """
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)
                return
        self._run_callback(callback)

    def remove_callback(self, callback: Callback) -> None:
        """Unregister a callback; a no-op when it is not registered."""
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    @staticmethod
    def _run_callback(callback: Callback) -> None:
        try:
            callback()
        except Exception:  # pragma: no cover - callbacks close I/O best-effort
            _log.warning("cancellation callback failed", exc_info=True)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self.cancelled:
            raise CancelledError(self._state.reason)

    def child(self, timeout: Optional[float] = None) -> "CancellationToken":
        """Create and link a child token, optionally with its own deadline."""
        return CancellationToken(parent=self, timeout=timeout)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken", "DEADLINE_EXCEEDED"]
