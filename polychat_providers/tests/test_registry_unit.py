"""Unit tests for ProviderRegistry creation, descriptors and credential probes."""
from __future__ import annotations

import httpx
import pytest

import polychat_providers
from polychat_providers.anthropic import AnthropicProvider
from polychat_providers.base.cancellation import CancellationToken
from polychat_providers.base.dto import AdapterParams
from polychat_providers.base.errors import InvalidCredentialError, MissingCredentialError
from polychat_providers.base.registry import ProviderRegistry, UnknownProviderError
from polychat_providers.openai import OpenAIProvider
from polychat_providers.openrouter import OpenRouterProvider


def test_supported_providers_are_deterministic():
    assert ProviderRegistry.supported() == ("anthropic", "openai", "openrouter")
    assert [d.name for d in ProviderRegistry.all_providers()] == ["Anthropic", "OpenAI", "OpenRouter"]


def test_descriptor_lookup():
    desc = ProviderRegistry.descriptor("OpenRouter")
    assert desc.provider == "openrouter"
    assert desc.requires_auth is True
    assert desc.base_url == "https://openrouter.ai/api/v1"
    assert "openai/gpt-4o" in desc.models


@pytest.mark.parametrize("cls_name,cls", [("anthropic", AnthropicProvider), ("openai", OpenAIProvider), ("openrouter", OpenRouterProvider)])
def test_create_returns_adapter(cls_name, cls):
    adapter = ProviderRegistry.create(cls_name, "key")
    assert isinstance(adapter, cls)
    assert adapter.provider_name == cls_name


def test_unknown_provider():
    with pytest.raises(UnknownProviderError, match="Unsupported provider: gemini"):
        ProviderRegistry.create("gemini", "key")
    with pytest.raises(UnknownProviderError):
        ProviderRegistry.descriptor("gemini")


def test_create_falls_back_to_env_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://gateway.local/v1")
    adapter = ProviderRegistry.create("openai")
    assert adapter.headers["Authorization"] == "Bearer from-env"
    assert adapter.base_url == "https://gateway.local/v1"


def test_create_without_any_key_raises_missing_credential():
    with pytest.raises(MissingCredentialError, match="OpenRouter API key is required"):
        ProviderRegistry.create("openrouter")


def test_create_with_params():
    params = AdapterParams(api_key="p-key", base_url="https://proxy/v1/", headers={"X-Title": "Mine"}, timeout_seconds=5)
    adapter = ProviderRegistry.create("openrouter", params=params)
    assert adapter.base_url == "https://proxy/v1"
    assert adapter.headers["X-Title"] == "Mine"
    assert adapter.headers["Authorization"] == "Bearer p-key"


def test_explicit_key_wins_over_params_and_env(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env")
    adapter = ProviderRegistry.create("anthropic", "explicit", params=AdapterParams(api_key="params"))
    assert adapter.headers["x-api-key"] == "explicit"


def test_package_level_create(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env")
    assert isinstance(polychat_providers.create("anthropic"), AnthropicProvider)


def test_validate_credentials_success(mock_client):
    client, recorder = mock_client(lambda r: httpx.Response(200, json={"data": []}))
    ProviderRegistry.validate_credentials("openai", "sk", http_client=client)
    assert recorder.last.url.path == "/v1/models"
    assert recorder.last.extensions["timeout"]["read"] <= 30.0


def test_validate_credentials_empty_key_ignores_env(monkeypatch, mock_client):
    monkeypatch.setenv("OPENAI_API_KEY", "env")
    client, recorder = mock_client(lambda r: httpx.Response(200, json={}))
    with pytest.raises(MissingCredentialError):
        ProviderRegistry.validate_credentials("openai", "  ", http_client=client)
    assert recorder.requests == []


def test_validate_credentials_rejected(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(401, json={"error": {"message": "no"}}))
    with pytest.raises(InvalidCredentialError):
        polychat_providers.validate_credentials("openrouter", "bad", http_client=client)


def test_validate_credentials_with_parent_token(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(200, json={"data": []}))
    parent = CancellationToken()
    ProviderRegistry.validate_credentials("openai", "sk", http_client=client, token=parent)
    assert not parent.cancelled


def test_unknown_provider_validation():
    with pytest.raises(UnknownProviderError):
        ProviderRegistry.validate_credentials("nope", "key")
