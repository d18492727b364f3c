"""Model listing cache and its readers/writer lock."""

from .rwlock import ReadWriteLock
from .model_cache import ModelCache

__all__ = ["ReadWriteLock", "ModelCache"]
