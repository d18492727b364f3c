"""Server-sent events reader shared by every streaming adapter.

``iter_sse_frames`` implements the framing rules of the event-stream format
(data lines accumulate until a blank line). ``read_event_stream`` layers the
vendor-specific decode step on top and yields text fragments.
"""
from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Union

from ..cancellation import CancellationToken
from ..constants import SSE_DONE

Line = Union[str, bytes]


class DecodedFrame(NamedTuple):
    """Result of decoding one event payload.

    ``text`` is the fragment to deliver (may be empty). ``terminal`` marks the
    vendor's end-of-message event.
    """

    text: str = ""
    terminal: bool = False


FrameDecoder = Callable[[bytes], DecodedFrame]


def _as_bytes(line: Line) -> bytes:
    if isinstance(line, str):
        line = line.encode("utf-8")
    return line.rstrip(b"\r\n")


def iter_sse_frames(lines: Iterable[Line]) -> Iterator[bytes]:
    """Yield the data payload of each event in ``lines``.

    Multiple ``data:`` lines in one event are joined with ``\\n``. Comment
    lines (leading ``:``) and the ``event``/``id``/``retry`` fields are
    ignored. Events without data produce nothing. A trailing event that is
    not followed by a blank line is still emitted at end of input.
    """
    data: List[bytes] = []
    for raw in lines:
        line = _as_bytes(raw)
        if not line:
            if data:
                yield b"\n".join(data)
                data = []
            continue
        if line.startswith(b":"):
            continue
        field, sep, value = line.partition(b":")
        if sep and value.startswith(b" "):
            value = value[1:]
        if field == b"data":
            data.append(value)
    if data:
        yield b"\n".join(data)


def read_event_stream(
    lines: Iterable[Line],
    decode: FrameDecoder,
    token: Optional[CancellationToken] = None,
) -> Iterator[str]:
    """Yield non-empty text fragments decoded from an event stream.

    The stream ends cleanly on a literal ``[DONE]`` payload, on a frame the
    decoder marks terminal, or at end of input.

    Raises:
        CancelledError: ``token`` was cancelled before a frame was handled.
        ProviderError: Raised by ``decode`` for in-band vendor error events.
    """
    for frame in iter_sse_frames(lines):
        if token is not None:
            token.raise_if_cancelled()
        if frame.strip() == SSE_DONE:
            return
        decoded = decode(frame)
        if decoded.text:
            yield decoded.text
        if decoded.terminal:
            return


__all__ = ["DecodedFrame", "FrameDecoder", "iter_sse_frames", "read_event_stream"]
