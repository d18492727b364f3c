"""Provider registry.

Purpose
-------
Resolve a canonical provider id (``"anthropic"``, ``"openai"``,
``"openrouter"``) to its adapter class and static descriptor. Adapter
modules are imported lazily with ``importlib`` so importing the registry
does not pull in every vendor module.

Timeout and fallback semantics
------------------------------
- ``create`` performs no I/O and no retries.
- ``validate_credentials`` bounds the probe with a 30 second deadline token
  (a child of the caller's token when one is given).
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Dict, Optional, Tuple, Type

import httpx

from ..config import get_provider_config
from ..config.defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
)
from .cancellation import CancellationToken
from .constants import CREDENTIAL_PROBE_TIMEOUT_SECONDS
from .dto.adapter_params import AdapterParams
from .errors import MissingCredentialError
from .interfaces import BackendAdapter


class UnknownProviderError(Exception):
    """Raised when a provider id is not registered or its adapter cannot load.

    Failure modes include:
    - The provider id is not in the registry mapping.
    - The adapter module cannot be imported or the class is missing.
    """


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of a supported provider."""

    provider: str
    name: str
    base_url: str
    requires_auth: bool = True
    models: Tuple[str, ...] = ()


class ProviderRegistry:
    """Create adapters and look up provider descriptors by canonical id."""

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "anthropic": {"module": "polychat_providers.anthropic.client", "class": "AnthropicProvider"},
        "openai": {"module": "polychat_providers.openai.client", "class": "OpenAIProvider"},
        "openrouter": {"module": "polychat_providers.openrouter.client", "class": "OpenRouterProvider"},
    }

    _DESCRIPTORS: Dict[str, ProviderDescriptor] = {
        "anthropic": ProviderDescriptor(
            provider="anthropic",
            name="Anthropic",
            base_url=ANTHROPIC_DEFAULT_BASE_URL,
            models=(
                "claude-sonnet-4-20250514",
                "claude-3-5-sonnet-20241022",
                "claude-3-5-haiku-20241022",
                "claude-3-opus-20240229",
            ),
        ),
        "openai": ProviderDescriptor(
            provider="openai",
            name="OpenAI",
            base_url=OPENAI_DEFAULT_BASE_URL,
            models=("gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo", "o1-preview", "o1-mini"),
        ),
        "openrouter": ProviderDescriptor(
            provider="openrouter",
            name="OpenRouter",
            base_url=OPENROUTER_DEFAULT_BASE_URL,
            models=(
                "anthropic/claude-3.5-sonnet",
                "openai/gpt-4o",
                "google/gemini-pro-1.5",
                "meta-llama/llama-3.1-405b-instruct",
            ),
        ),
    }

    @staticmethod
    def _canonical(provider: str) -> str:
        return (provider or "").lower().strip()

    @classmethod
    def adapter_class(cls, provider: str) -> Type:
        """Import and return the adapter class for ``provider``.

        Raises:
            UnknownProviderError: Unknown id, failed import or missing class.
        """
        name = cls._canonical(provider)
        entry = cls._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(f"Unsupported provider: {provider}")

        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

    @classmethod
    def create(
        cls,
        provider: str,
        api_key: Optional[str] = None,
        *,
        params: Optional[AdapterParams] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> BackendAdapter:
        """Create an adapter for ``provider``.

        Resolution order for each setting: explicit argument, then
        ``params``, then the environment (``<PROVIDER>_API_KEY`` /
        ``<PROVIDER>_BASE_URL``), then built-in defaults.

        Raises:
            UnknownProviderError: ``provider`` is not supported.
            MissingCredentialError: No non-blank API key could be resolved.
        """
        klass = cls.adapter_class(provider)
        name = cls._canonical(provider)
        params = params if params is not None else AdapterParams(provider=name)
        cfg = get_provider_config(
            name,
            {"api_key": api_key or params.api_key, "base_url": params.base_url},
        )
        merged = params.model_copy(update={"api_key": cfg.get("api_key"), "base_url": cfg.get("base_url")})
        return klass.from_params(merged, http_client=http_client)

    @classmethod
    def validate_credentials(
        cls,
        provider: str,
        api_key: Optional[str],
        *,
        params: Optional[AdapterParams] = None,
        http_client: Optional[httpx.Client] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Build an adapter and probe the vendor within a 30 second deadline.

        Raises:
            UnknownProviderError: ``provider`` is not supported.
            MissingCredentialError: ``api_key`` is empty (no environment fallback).
            InvalidCredentialError: The vendor rejected the key.
            ProviderError: Any other probe failure.
            CancelledError: The deadline passed or ``token`` was cancelled.
        """
        cls.adapter_class(provider)
        if not api_key or not api_key.strip():
            raise MissingCredentialError(cls._canonical(provider), cls.descriptor(provider).name)
        adapter = cls.create(provider, api_key, params=params, http_client=http_client)
        probe_token = (
            token.child(timeout=CREDENTIAL_PROBE_TIMEOUT_SECONDS)
            if token is not None
            else CancellationToken.with_timeout(CREDENTIAL_PROBE_TIMEOUT_SECONDS)
        )
        try:
            adapter.validate_credentials(probe_token)
        finally:
            probe_token.cancel("credential probe finished")

    @classmethod
    def descriptor(cls, provider: str) -> ProviderDescriptor:
        name = cls._canonical(provider)
        try:
            return cls._DESCRIPTORS[name]
        except KeyError:
            raise UnknownProviderError(f"Unsupported provider: {provider}") from None

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the canonical provider ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def all_providers(cls) -> Tuple[ProviderDescriptor, ...]:
        return tuple(cls._DESCRIPTORS[p] for p in cls.supported())


__all__ = [
    "ProviderDescriptor",
    "ProviderRegistry",
    "UnknownProviderError",
]
