"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`polychat_providers.base.models_parts` if needed, while
`polychat_providers.base.models` remains the primary stable import path.
"""

from .message import Message, Role
from .model import Model
from .chat_request import ChatRequest
from .usage import Usage
from .response_metrics import ResponseMetrics
from .chat_response import ChatResponse
from .stream_chunk import StreamChunk

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
