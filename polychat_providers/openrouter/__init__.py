"""
OpenRouter provider package.

Exports:
- OpenRouterProvider: Adapter implementing BackendAdapter for OpenRouter
"""

from .client import OpenRouterProvider

__all__ = ["OpenRouterProvider"]
