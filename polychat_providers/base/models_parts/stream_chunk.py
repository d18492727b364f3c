"""One non-empty text fragment delivered by a streaming chat call."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StreamChunk:
    """A streamed text fragment.

    There is no end-of-stream marker: completion is signalled by the chunk
    channel closing.
    """

    content: str


__all__ = [
    "StreamChunk",
]
