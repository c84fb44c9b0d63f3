"""
Frame sinks: append-only byte streams that receive encoded frames.

The run loop only ever calls `write`. A sink reports failure by raising
SinkClosedError; the loop treats that as the end of the run.
"""

from __future__ import annotations
import logging
from typing import BinaryIO, Protocol

from gravstream.core.errors import SinkClosedError

logger = logging.getLogger(__name__)


class FrameSink(Protocol):
    """Protocol for encoded-frame consumers."""

    def write(self, data: bytes) -> None:
        """
        Append `data` to the stream.

        Raises:
            SinkClosedError: if the stream no longer accepts bytes
        """
        ...

    def close(self) -> None:
        ...


class PipeSink:
    """
    Sink over a binary file object, typically an encoder's stdin pipe.

    Each write is flushed so the encoder sees whole frames as soon as they
    are produced.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.bytes_written = 0
        self.closed = False

    def write(self, data: bytes) -> None:
        if self.closed:
            raise SinkClosedError("sink already closed")
        try:
            self.stream.write(data)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            # BrokenPipeError, or ValueError from writing to a closed file
            self.closed = True
            raise SinkClosedError(str(exc) or type(exc).__name__) from exc
        self.bytes_written += len(data)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.stream.close()
        except OSError as exc:
            logger.debug("pipe already broken on close: %s", exc)


class BufferSink:
    """
    In-memory sink that keeps every frame.

    With `limit` set, the write that would take the total past `limit`
    bytes fails, which stands in for a consumer going away mid-run.
    """

    def __init__(self, limit: int | None = None):
        self.limit = limit
        self.frames: list[bytes] = []
        self.closed = False

    @property
    def bytes_written(self) -> int:
        return sum(len(f) for f in self.frames)

    def getvalue(self) -> bytes:
        return b"".join(self.frames)

    def write(self, data: bytes) -> None:
        if self.closed:
            raise SinkClosedError("sink already closed")
        if self.limit is not None and self.bytes_written + len(data) > self.limit:
            self.closed = True
            raise SinkClosedError(f"sink limit of {self.limit} bytes reached")
        self.frames.append(bytes(data))

    def close(self) -> None:
        self.closed = True
