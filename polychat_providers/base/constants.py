"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic header names and numeric defaults. There
are no credentials embedded.
"""
from __future__ import annotations

# Completion token fallback when neither the request nor the model sets one.
DEFAULT_MAX_TOKENS = 4096

# Sampling temperature sent by OpenAI-compatible adapters when unset.
DEFAULT_TEMPERATURE = 0.7

# Model listing cache lifetime (seconds).
MODEL_CACHE_TTL_SECONDS = 300.0

# Deadline applied by the registry to credential probes (seconds).
CREDENTIAL_PROBE_TIMEOUT_SECONDS = 30.0

# Stream delivery channel capacities.
STREAM_CHUNK_CAPACITY = 10
STREAM_ERROR_CAPACITY = 1

# Server-sent events end-of-stream payload used by OpenAI-compatible vendors.
SSE_DONE = b"[DONE]"

JSON_CONTENT_TYPE = "application/json"

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "MODEL_CACHE_TTL_SECONDS",
    "CREDENTIAL_PROBE_TIMEOUT_SECONDS",
    "STREAM_CHUNK_CAPACITY",
    "STREAM_ERROR_CAPACITY",
    "SSE_DONE",
    "JSON_CONTENT_TYPE",
]
