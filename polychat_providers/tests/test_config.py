"""Config merge order, env key resolution and AdapterParams validation."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from polychat_providers.base.dto import AdapterParams
from polychat_providers.base.http_provider import resolve_max_tokens, split_system_messages
from polychat_providers.base.models import Message, Model
from polychat_providers.config import get_api_key, get_env_var_name, get_provider_config
from polychat_providers.tests.utils import make_request


def test_defaults_only():
    cfg = get_provider_config("openai")
    assert cfg == {"model": "gpt-4o", "base_url": "https://api.openai.com/v1"}


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "  env-key  ")
    monkeypatch.setenv("ANTHROPIC_BASE_URL", "   ")
    cfg = get_provider_config("Anthropic")
    assert cfg["api_key"] == "env-key"
    assert cfg["base_url"] == "https://api.anthropic.com/v1"


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
    cfg = get_provider_config("openrouter", {"api_key": "explicit", "base_url": None})
    assert cfg["api_key"] == "explicit"
    assert cfg["base_url"] == "https://openrouter.ai/api/v1"


def test_unknown_provider_has_no_defaults():
    assert get_provider_config("gemini") == {}


def test_env_var_names_and_lookup(monkeypatch):
    assert get_env_var_name("OpenAI") == "OPENAI_API_KEY"
    assert get_env_var_name("nope") is None
    assert get_env_var_name("") is None
    assert get_api_key("openai") is None
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert get_api_key("openai") == "sk-test"


def test_adapter_params_validation():
    params = AdapterParams(base_url="https://proxy.local/v1/", timeout_seconds=2.5)
    assert params.base_url == "https://proxy.local/v1"
    assert params.headers == {}
    with pytest.raises(ValidationError):
        AdapterParams(timeout_seconds=0)


def test_resolve_max_tokens_chain():
    model = Model("m", "M", "openai", 2048, 8000)
    assert resolve_max_tokens(make_request(model, max_tokens=100)) == 100
    assert resolve_max_tokens(make_request(model, max_tokens=0)) == 2048
    assert resolve_max_tokens(make_request(Model("m", "M", "openai", 0, 0))) == 4096


def test_split_system_messages_keeps_first():
    system, rest, dropped = split_system_messages(
        [Message("system", "a"), Message("user", "hi"), Message("system", "b"), Message("assistant", "yo")]
    )
    assert system == "a"
    assert [m.role for m in rest] == ["user", "assistant"]
    assert dropped == 1
