"""
OpenAI provider package.

Exports:
- OpenAIProvider: Adapter implementing BackendAdapter for OpenAI
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
