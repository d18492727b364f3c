"""polychat_providers.config.defaults
===================================

Central place for small, stable default values used by the adapters. These
defaults can be overridden via environment variables or explicit parameters.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Anthropic ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
# Cheapest model used by the credential probe.
ANTHROPIC_PROBE_MODEL = "claude-3-5-haiku-20241022"
ANTHROPIC_PROBE_MAX_TOKENS = 10
# Built-in web search tool descriptor revision and invocation cap.
ANTHROPIC_WEB_SEARCH_TOOL_TYPE = "web_search_20250305"
ANTHROPIC_WEB_SEARCH_MAX_USES = 5

# ---- OpenAI ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o"

# ---- OpenRouter ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
# Attribution header value shown on the OpenRouter dashboard.
OPENROUTER_DEFAULT_TITLE = "PolyChat"

__all__ = [
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_PROBE_MODEL",
    "ANTHROPIC_PROBE_MAX_TOKENS",
    "ANTHROPIC_WEB_SEARCH_TOOL_TYPE",
    "ANTHROPIC_WEB_SEARCH_MAX_USES",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_TITLE",
]
