"""Time-bounded cache for a provider's model listing.

The cache holds one list. Reads take the shared side of a readers/writer
lock and return a copy, so callers can never mutate the cached entries in
place. Fetching is the caller's job and happens outside the lock; two
concurrent misses may both fetch, and the last write wins.
"""
from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from ..constants import MODEL_CACHE_TTL_SECONDS
from ..models import Model
from .rwlock import ReadWriteLock


class ModelCache:
    """Cache of ``Model`` descriptors with a fixed time-to-live.

    Parameters:
        ttl_seconds: Lifetime of a written list.
        clock: Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = MODEL_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = ReadWriteLock()
        self._models: List[Model] = []
        self._expiry: Optional[float] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def expiry(self) -> Optional[float]:
        """Clock value after which the cached list is stale (``None`` if never written)."""
        with self._lock.read():
            return self._expiry

    def get(self) -> Optional[List[Model]]:
        """Return a copy of the cached list, or ``None`` when empty or expired."""
        with self._lock.read():
            if not self._models or self._expiry is None:
                return None
            if self._clock() >= self._expiry:
                return None
            return list(self._models)

    def put(self, models: Sequence[Model]) -> None:
        """Replace the cached list and restart its lifetime."""
        with self._lock.write():
            self._models = list(models)
            self._expiry = self._clock() + self._ttl

    def clear(self) -> None:
        with self._lock.write():
            self._models = []
            self._expiry = None


__all__ = ["ModelCache"]
