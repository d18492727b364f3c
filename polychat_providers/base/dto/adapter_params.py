"""Typed parameter object for provider adapter initialization.

Purpose
-------
Capture the construction parameters shared by every adapter so the registry
and callers pass one validated object instead of long argument lists.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. ``pydantic.ValidationError`` is
  raised for inputs of the wrong type or a non-positive timeout.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider key (e.g., ``"openai"``). Optional because the
        registry already knows which adapter it is building.
    api_key:
        Credential attached to every request. When omitted the registry
        falls back to the ``<PROVIDER>_API_KEY`` environment variable.
    base_url:
        Optional override for the API base URL (proxies, gateways, tests).
    headers:
        Extra static HTTP headers merged over the adapter defaults. OpenRouter
        uses this to override its ``X-Title`` attribution header.
    timeout_seconds:
        Optional per-adapter HTTP timeout; overrides the process-wide value.
    extra:
        Free-form provider-specific configuration bag.
    """

    provider: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout_seconds: Optional[float] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be positive")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value


__all__ = ["AdapterParams"]
