"""Stream handle and background producer task.

``start_stream_task`` runs a producer function on its own daemon thread and
returns a :class:`ChatStream` right away. The producer receives an ``emit``
callable and the stream token. Every non-empty fragment it emits lands on
the bounded chunk channel, so a slow consumer applies back-pressure to the
network read.

Exactly one terminal transition happens per stream, whichever comes first:
the producer returns, the producer raises, or the token is cancelled. The
transition records the error (if any) on the error channel and then closes
both channels. Fragments already queued stay readable.
"""
from __future__ import annotations

import threading
from typing import Callable, Iterator, Optional

from ..cancellation import CancellationToken, CancelledError
from ..constants import STREAM_CHUNK_CAPACITY, STREAM_ERROR_CAPACITY
from ..models import ChatResponse, StreamChunk
from .channels import ChannelClosed, StreamChannel

Emit = Callable[[str], None]
Producer = Callable[[Emit, CancellationToken], None]
FinishHook = Callable[[Optional[BaseException], int], None]


class ChatStream:
    """Handle returned by ``chat_stream``.

    Attributes:
        chunks: Channel of :class:`StreamChunk`; closes when the stream ends.
        errors: Channel holding at most one terminal error; closes with
            ``chunks``. Empty and closed means the stream succeeded.
        token: The stream's own cancellation token (a child of the caller's).
    """

    def __init__(
        self,
        token: Optional[CancellationToken] = None,
        *,
        chunk_capacity: int = STREAM_CHUNK_CAPACITY,
        error_capacity: int = STREAM_ERROR_CAPACITY,
        on_finish: Optional[FinishHook] = None,
    ) -> None:
        self.token = token.child() if token is not None else CancellationToken()
        self.chunks: StreamChannel[StreamChunk] = StreamChannel(chunk_capacity)
        self.errors: StreamChannel[BaseException] = StreamChannel(error_capacity)
        self._on_finish = on_finish
        self._lock = threading.Lock()
        self._finished = False
        self._error: Optional[BaseException] = None
        self._emitted = 0

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._finished

    @property
    def emitted(self) -> int:
        """Number of fragments accepted so far."""
        return self._emitted

    def emit(self, text: str) -> None:
        """Producer side: enqueue one fragment (empty text is ignored).

        Raises:
            CancelledError: The stream token was cancelled.
            ChannelClosed: The stream already reached its terminal state.
        """
        if not text:
            return
        self.token.raise_if_cancelled()
        self.chunks.put(StreamChunk(text))
        self._emitted += 1

    def finish(self, error: Optional[BaseException] = None) -> bool:
        """Perform the terminal transition; only the first call has any effect.

        Returns True when this call performed the transition.
        """
        with self._lock:
            if self._finished:
                return False
            self._finished = True
            self._error = error
        if error is not None:
            self.errors.try_put(error)
        try:
            if self._on_finish is not None:
                self._on_finish(error, self._emitted)
        finally:
            self.errors.close()
            self.chunks.close()
        return True

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Cancel the stream; the error channel reports ``CancelledError``."""
        self.token.cancel(reason)

    def error(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        """Wait for the stream to end and return its terminal error, if any.

        Raises:
            TimeoutError: The stream did not end within ``timeout``.
        """
        if not self.errors.wait_closed(timeout):
            raise TimeoutError("stream still running")
        return self._error

    def __iter__(self) -> Iterator[StreamChunk]:
        return iter(self.chunks)

    def iter_text(self) -> Iterator[str]:
        """Yield fragment text, then raise the terminal error if there was one."""
        for chunk in self.chunks:
            yield chunk.content
        err = self.error()
        if err is not None:
            raise err

    def collect(self) -> ChatResponse:
        """Drain the stream into a :class:`ChatResponse` (usage is not reported)."""
        return ChatResponse(content="".join(self.iter_text()))

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self.finished:
            self.cancel("stream closed by caller")


def start_stream_task(
    produce: Producer,
    token: Optional[CancellationToken] = None,
    *,
    name: str = "polychat-stream",
    on_finish: Optional[FinishHook] = None,
) -> ChatStream:
    """Start ``produce(emit, token)`` on a daemon thread and return its handle.

    Parameters:
        produce: Callable that performs the request and calls ``emit`` for
            every fragment. It receives the stream token so blocking I/O can
            be bound to it. Returning normally ends the stream successfully;
            raising ends it with that error.
        token: Caller's cancellation token; cancelling it (or the handle)
            ends the stream with ``CancelledError``.
        name: Thread name, useful in debugging.
        on_finish: Called once with ``(error, emitted_count)`` during the
            terminal transition, before the channels close.
    """
    stream = ChatStream(token, on_finish=on_finish)

    def _on_cancel() -> None:
        stream.finish(CancelledError.from_token(stream.token))

    stream.token.add_callback(_on_cancel)
    if stream.finished:
        return stream

    def _run() -> None:
        error: Optional[BaseException] = None
        try:
            produce(stream.emit, stream.token)
        except ChannelClosed:
            pass
        except Exception as exc:  # surfaced on the error channel
            error = exc
        finally:
            stream.token.remove_callback(_on_cancel)
        if error is None and stream.token.cancelled:
            error = CancelledError.from_token(stream.token)
        stream.finish(error)

    threading.Thread(target=_run, name=name, daemon=True).start()
    return stream


__all__ = ["ChatStream", "start_stream_task", "Emit", "Producer"]
