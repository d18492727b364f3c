"""ModelCatalog aggregation, caching and fallback behavior."""
from __future__ import annotations

from typing import List, Optional

import httpx
import pytest

from polychat_providers.base.cache import ModelCache, ReadWriteLock
from polychat_providers.base.cancellation import CancelledError
from polychat_providers.base.catalog import PREDEFINED_MODELS, ModelCatalog, static_models
from polychat_providers.base.errors import ErrorCode, ProviderError
from polychat_providers.base.models import Model
from polychat_providers.openrouter import OpenRouterProvider
from polychat_providers.openrouter.get_openrouter_models import FALLBACK_MODELS

LIVE = [Model("vendor/live-1", "Live 1", "openrouter", 1000, 2000)]


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _FakeAdapter:
    provider_name = "openrouter"

    def __init__(self, models: Optional[List[Model]] = None, error: Optional[Exception] = None) -> None:
        self.models = models or []
        self.error = error
        self.calls = 0

    def get_models(self, token=None) -> List[Model]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.models)


def test_predefined_table_contents():
    assert PREDEFINED_MODELS["claude-opus-4-20250514"].max_tokens == 32000
    assert PREDEFINED_MODELS["gpt-4.1"].context_window == 1000000
    assert PREDEFINED_MODELS["google/gemini-pro-1.5"].provider == "openrouter"
    assert {m.provider for m in PREDEFINED_MODELS.values()} == {"anthropic", "openai", "openrouter"}


def test_unregistered_provider_uses_static_table():
    catalog = ModelCatalog()
    models = catalog.models_for("openai")
    assert models == static_models("openai")
    assert all(m.provider == "openai" for m in models)


def test_registered_adapter_is_cached_per_ttl():
    clock = _Clock()
    adapter = _FakeAdapter(LIVE)
    catalog = ModelCatalog(ttl_seconds=300, clock=clock)
    catalog.register_provider("openrouter", adapter)

    assert catalog.models_for("openrouter") == LIVE
    assert catalog.models_for("openrouter") == LIVE
    assert adapter.calls == 1
    clock.now = 300.0
    catalog.models_for("openrouter")
    assert adapter.calls == 2


def test_adapter_failure_falls_back_to_static_table(log_events):
    adapter = _FakeAdapter(error=ProviderError(code=ErrorCode.NETWORK, message="down", provider="openrouter"))
    catalog = ModelCatalog()
    catalog.register_provider("openrouter", adapter)

    assert catalog.models_for("openrouter") == static_models("openrouter")
    catalog.models_for("openrouter")
    assert adapter.calls == 2
    assert log_events.named("models.fallback")


def test_cancellation_propagates():
    catalog = ModelCatalog()
    catalog.register_provider("openrouter", _FakeAdapter(error=CancelledError("stop")))
    with pytest.raises(CancelledError):
        catalog.models_for("openrouter")


def test_all_models_and_find_model():
    catalog = ModelCatalog()
    catalog.register_provider("openrouter", _FakeAdapter(LIVE))
    ids = [m.id for m in catalog.all_models()]
    assert "claude-sonnet-4-20250514" in ids
    assert "gpt-4o" in ids
    assert "vendor/live-1" in ids

    assert catalog.find_model("gpt-4o") is PREDEFINED_MODELS["gpt-4o"]
    assert catalog.find_model("vendor/live-1") == LIVE[0]
    with pytest.raises(LookupError, match="model not found: nothing"):
        catalog.find_model("nothing")


def test_default_model_and_providers():
    catalog = ModelCatalog()
    assert catalog.default_model().id == "claude-sonnet-4-20250514"
    assert catalog.providers() == ("anthropic", "openai", "openrouter")


def test_clear_cache_forces_refetch():
    adapter = _FakeAdapter(LIVE)
    catalog = ModelCatalog()
    catalog.register_provider("openrouter", adapter)
    catalog.models_for("openrouter")
    catalog.clear_cache("openrouter")
    catalog.models_for("openrouter")
    catalog.clear_cache()
    catalog.models_for("openrouter")
    assert adapter.calls == 3
    catalog.clear_cache("anthropic")


def test_model_cache_expiry_and_clear():
    clock = _Clock()
    cache = ModelCache(ttl_seconds=10, clock=clock)
    assert cache.get() is None and cache.expiry is None
    cache.put([])
    assert cache.get() is None
    cache.put(LIVE)
    assert cache.expiry == 10.0
    clock.now = 9.99
    assert cache.get() == LIVE
    clock.now = 10.0
    assert cache.get() is None
    cache.clear()
    assert cache.expiry is None


def test_rwlock_allows_shared_readers():
    lock = ReadWriteLock()
    with lock.read():
        with lock.read():
            pass
    with lock.write():
        pass


def test_adapter_fallback_is_not_pinned_by_catalog(mock_client):
    clock = _Clock()
    responses = [
        httpx.Response(503, json={"error": {"message": "maintenance"}}),
        httpx.Response(200, json={"data": [{"id": "vendor/live-1", "name": "Live 1"}]}),
    ]

    def _handler(request):
        item = responses.pop(0) if len(responses) > 1 else responses[0]
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    http, recorder = mock_client(_handler)
    adapter = OpenRouterProvider("or-key", http_client=http, model_cache=ModelCache(ttl_seconds=300, clock=clock))
    catalog = ModelCatalog(ttl_seconds=300, clock=clock)
    catalog.register_provider("openrouter", adapter)

    assert catalog.models_for("openrouter") == list(FALLBACK_MODELS)
    clock.now = 10.0
    assert [m.id for m in catalog.models_for("openrouter")] == ["vendor/live-1"]
    assert len(recorder.requests) == 2

    clock.now = 20.0
    catalog.models_for("openrouter")
    assert len(recorder.requests) == 2

    catalog.clear_cache("openrouter")
    catalog.models_for("openrouter")
    assert len(recorder.requests) == 3
