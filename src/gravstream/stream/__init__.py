"""
Streaming: frame sinks, the external encoder, and the cancellable tick loop.
"""

from gravstream.stream.sinks import FrameSink, PipeSink, BufferSink
from gravstream.stream.encoder import EncoderProcess
from gravstream.stream.loop import RunResult, StopReason, run

__all__ = [
    "FrameSink",
    "PipeSink",
    "BufferSink",
    "EncoderProcess",
    "RunResult",
    "StopReason",
    "run",
]
