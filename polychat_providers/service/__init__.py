"""Caller-side services built on top of the provider adapters."""

from .client import ChatClient

__all__ = ["ChatClient"]
