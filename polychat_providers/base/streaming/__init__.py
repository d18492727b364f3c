"""Streaming package: event-stream reader, delivery channels and stream task."""

from .sse import DecodedFrame, FrameDecoder, iter_sse_frames, read_event_stream
from .channels import ChannelClosed, StreamChannel
from .stream_task import ChatStream, Emit, Producer, start_stream_task

__all__ = [
    "DecodedFrame",
    "FrameDecoder",
    "iter_sse_frames",
    "read_event_stream",
    "ChannelClosed",
    "StreamChannel",
    "ChatStream",
    "Emit",
    "Producer",
    "start_stream_task",
]
