"""
Anthropic provider package.

Exports:
- AnthropicProvider: Adapter implementing BackendAdapter for Anthropic
"""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
