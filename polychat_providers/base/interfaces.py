"""Provider interface contracts public surface.

Re-exports the protocol definitions under ``interfaces_parts``.
"""

from .interfaces_parts.backend_adapter import BackendAdapter

__all__ = ["BackendAdapter"]
