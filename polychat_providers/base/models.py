"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``polychat_providers.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.message import Message, Role
from .models_parts.model import Model
from .models_parts.chat_request import ChatRequest
from .models_parts.usage import Usage
from .models_parts.response_metrics import ResponseMetrics
from .models_parts.chat_response import ChatResponse
from .models_parts.stream_chunk import StreamChunk

__all__ = [
    "Message",
    "Role",
    "Model",
    "ChatRequest",
    "Usage",
    "ResponseMetrics",
    "ChatResponse",
    "StreamChunk",
]
