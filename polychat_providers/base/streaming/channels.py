"""Bounded, closable delivery channel.

A small thread-safe queue with an explicit closed state, used to hand stream
fragments and the terminal error from the producer thread to the consumer.
``put`` blocks while the channel is full and fails once it is closed;
consumers drain whatever is queued and then observe the close.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by ``put`` on a closed channel and by ``get`` on a drained closed channel."""


class StreamChannel(Generic[T]):
    """Bounded FIFO channel with close semantics.

    Parameters:
        capacity: Maximum number of queued items (at least 1).
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T, timeout: Optional[float] = None) -> None:
        """Append ``item``, blocking while the channel is full.

        Raises:
            ChannelClosed: The channel is (or becomes) closed.
            TimeoutError: ``timeout`` elapsed while the channel stayed full.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._closed or len(self._items) < self._capacity, timeout
            )
            if self._closed:
                raise ChannelClosed("channel is closed")
            if not ready:
                raise TimeoutError("channel is full")
            self._items.append(item)
            self._cond.notify_all()

    def try_put(self, item: T) -> bool:
        """Append ``item`` without blocking; return False when full or closed."""
        with self._cond:
            if self._closed or len(self._items) >= self._capacity:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def get(self, timeout: Optional[float] = None) -> T:
        """Remove and return the oldest item, blocking while empty.

        Raises:
            ChannelClosed: The channel is closed and fully drained.
            TimeoutError: ``timeout`` elapsed with nothing to return.
        """
        with self._cond:
            ready = self._cond.wait_for(lambda: self._closed or bool(self._items), timeout)
            if self._items:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            if self._closed:
                raise ChannelClosed("channel is closed")
            if not ready:
                raise TimeoutError("no item available")
            raise ChannelClosed("channel is closed")  # pragma: no cover - unreachable

    def close(self) -> None:
        """Close the channel; idempotent. Queued items remain readable."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """Block until the channel is closed; return False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._closed, timeout)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return


__all__ = ["ChannelClosed", "StreamChannel"]
