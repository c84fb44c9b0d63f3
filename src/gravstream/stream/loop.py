"""
The tick loop: render, encode, write, advance, until told to stop.

A run ends when:
- the cancel event is set (checked once per tick)
- the sink raises SinkClosedError (first failure is terminal)
- the scene raises NumericalInstabilityError
- max_ticks frames have been written (bounded runs only)

The loop blocks on each sink write; a slow consumer throttles the run.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import threading
import time

from gravstream.core.errors import NumericalInstabilityError, SinkClosedError
from gravstream.render.encoding import ImageFormat, encode_frame
from gravstream.scenes.base import Scene
from gravstream.stream.sinks import FrameSink

logger = logging.getLogger(__name__)


class StopReason(str, Enum):
    CANCELLED = "cancelled"
    SINK_FAILED = "sink_failed"
    UNSTABLE = "unstable"
    COMPLETED = "completed"


@dataclass
class RunResult:
    """Outcome of one run."""

    ticks: int  # Frames successfully written
    reason: StopReason
    bytes_written: int = 0
    elapsed: float = 0.0  # Wall-clock seconds
    error: Exception | None = None

    @property
    def frames_per_second(self) -> float:
        return self.ticks / self.elapsed if self.elapsed > 0 else 0.0


def run(
    scene: Scene,
    sink: FrameSink,
    image_format: ImageFormat = "png",
    quality: int = 75,
    cancel: threading.Event | None = None,
    max_ticks: int | None = None,
    log_every: int = 1000,
    on_tick=None,
) -> RunResult:
    """
    Drive `scene` into `sink` one frame per tick.

    Args:
        scene: Frame source (owned by this run)
        sink: Destination for encoded frames (owned by this run)
        image_format: "png" or "jpeg"
        quality: JPEG quality
        cancel: Set from another thread to stop the run
        max_ticks: Stop after this many frames; None runs until stopped
        log_every: Ticks between diagnostics log lines (0 disables)
        on_tick: Optional callback(tick, scene) after each advance

    Returns:
        RunResult with the tick count and why the run stopped
    """
    if cancel is None:
        cancel = threading.Event()
    ticks = 0
    written = 0
    reason = StopReason.COMPLETED
    error: Exception | None = None
    started = time.monotonic()
    logger.info("run started: scene=%s format=%s", type(scene).__name__, image_format)

    while True:
        if cancel.is_set():
            reason = StopReason.CANCELLED
            break
        if max_ticks is not None and ticks >= max_ticks:
            reason = StopReason.COMPLETED
            break

        data = encode_frame(scene.render(), image_format, quality)
        try:
            sink.write(data)
        except SinkClosedError as exc:
            logger.warning("sink failed after %d frames: %s", ticks, exc)
            reason, error = StopReason.SINK_FAILED, exc
            break
        ticks += 1
        written += len(data)

        try:
            scene.advance()
        except NumericalInstabilityError as exc:
            logger.warning("unstable state after %d frames: %s", ticks, exc)
            reason, error = StopReason.UNSTABLE, exc
            break

        if on_tick is not None:
            on_tick(ticks, scene)
        if log_every and ticks % log_every == 0:
            logger.debug("diagnostics %s", scene.diagnostics())

    elapsed = time.monotonic() - started
    logger.info("run stopped: reason=%s ticks=%d bytes=%d elapsed=%.2fs",
                reason.value, ticks, written, elapsed)
    return RunResult(ticks=ticks, reason=reason, bytes_written=written,
                     elapsed=elapsed, error=error)
