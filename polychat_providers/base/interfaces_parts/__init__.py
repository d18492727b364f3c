"""Interface protocol parts."""

from .backend_adapter import BackendAdapter

__all__ = ["BackendAdapter"]
