"""Unit tests for sinks and the tick loop."""

import io
import threading

import pytest

from gravstream.core import NumericalInstabilityError, SinkClosedError
from gravstream.core.integrators import SymplecticEuler
from gravstream.core.forces import inverse_square
from gravstream.core.particle import Particle
from gravstream.core.system import ParticleSystem
from gravstream.render import DiskRenderer
from gravstream.scenes import NBodyScene
from gravstream.stream import BufferSink, PipeSink, StopReason, run

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FailingSink:
    """Accepts `ok` writes, then fails every write."""

    def __init__(self, ok: int):
        self.ok = ok
        self.writes = 0

    def write(self, data: bytes) -> None:
        if self.writes >= self.ok:
            raise SinkClosedError("consumer went away")
        self.writes += 1

    def close(self) -> None:
        pass


class BrokenStream(io.RawIOBase):
    def writable(self):
        return True

    def write(self, data):
        raise BrokenPipeError(32, "Broken pipe")


class TestPipeSink:
    """Tests for PipeSink."""

    def test_writes_and_counts(self):
        stream = io.BytesIO()
        sink = PipeSink(stream)
        sink.write(b"abc")
        sink.write(b"de")

        assert stream.getvalue() == b"abcde"
        assert sink.bytes_written == 5

    def test_broken_pipe(self):
        sink = PipeSink(BrokenStream())
        with pytest.raises(SinkClosedError):
            sink.write(b"frame")
        assert sink.closed

    def test_closed_stream(self):
        stream = io.BytesIO()
        stream.close()
        with pytest.raises(SinkClosedError):
            PipeSink(stream).write(b"frame")

    def test_write_after_close(self):
        sink = PipeSink(io.BytesIO())
        sink.close()
        with pytest.raises(SinkClosedError):
            sink.write(b"frame")


class TestBufferSink:
    """Tests for BufferSink."""

    def test_keeps_frames(self):
        sink = BufferSink()
        sink.write(b"one")
        sink.write(b"two")
        assert sink.frames == [b"one", b"two"]
        assert sink.getvalue() == b"onetwo"

    def test_limit(self):
        sink = BufferSink(limit=5)
        sink.write(b"abc")
        with pytest.raises(SinkClosedError):
            sink.write(b"def")
        assert sink.closed
        assert sink.bytes_written == 3


class TestRun:
    """Tests for the tick loop."""

    def test_bounded_run(self, small_scene):
        sink = BufferSink()
        result = run(small_scene, sink, max_ticks=5)

        assert result.reason == StopReason.COMPLETED
        assert result.ticks == 5
        assert len(sink.frames) == 5
        assert all(f.startswith(PNG_SIGNATURE) for f in sink.frames)
        assert result.bytes_written == sink.bytes_written
        assert small_scene.tick == 5

    def test_frames_are_concatenated_without_framing(self, small_scene):
        sink = BufferSink()
        run(small_scene, sink, max_ticks=3)
        assert sink.getvalue().count(PNG_SIGNATURE) == 3

    def test_jpeg_frames(self, small_scene):
        sink = BufferSink()
        run(small_scene, sink, image_format="jpeg", max_ticks=2)
        assert all(f.startswith(b"\xff\xd8") for f in sink.frames)

    def test_cancelled_before_start(self, small_scene):
        cancel = threading.Event()
        cancel.set()
        sink = BufferSink()
        result = run(small_scene, sink, cancel=cancel)

        assert result.reason == StopReason.CANCELLED
        assert result.ticks == 0
        assert sink.frames == []

    def test_cancelled_mid_run(self, small_scene):
        cancel = threading.Event()

        def stop_at_three(tick, scene):
            if tick == 3:
                cancel.set()

        result = run(small_scene, BufferSink(), cancel=cancel, on_tick=stop_at_three)
        assert result.reason == StopReason.CANCELLED
        assert result.ticks == 3

    def test_sink_failure_is_terminal(self, small_scene):
        sink = FailingSink(ok=4)
        result = run(small_scene, sink)

        assert result.reason == StopReason.SINK_FAILED
        assert result.ticks == 4
        assert isinstance(result.error, SinkClosedError)
        # The undelivered frame did not advance the physics
        assert small_scene.tick == 4
        assert small_scene.system.tick == 4

    def test_sink_fails_immediately(self, small_scene):
        result = run(small_scene, FailingSink(ok=0))
        assert result.reason == StopReason.SINK_FAILED
        assert result.ticks == 0
        assert small_scene.tick == 0

    def test_instability_stops_run(self):
        system = ParticleSystem(
            particles=(Particle(mass=1.0, vx=float("inf")),),
            force_model=inverse_square(),
            integrator=SymplecticEuler(),
            epoch=1.0,
        )
        scene = NBodyScene(system, DiskRenderer(size=32, radius=2))
        result = run(scene, BufferSink())

        assert result.reason == StopReason.UNSTABLE
        assert result.ticks == 1
        assert isinstance(result.error, NumericalInstabilityError)

    def test_logs_diagnostics(self, small_scene, caplog):
        with caplog.at_level("DEBUG", logger="gravstream.stream.loop"):
            run(small_scene, BufferSink(), max_ticks=4, log_every=2)
        messages = [r.getMessage() for r in caplog.records]
        assert sum("diagnostics" in m for m in messages) == 2
        assert any("reason=completed" in m for m in messages)

    def test_runs_are_isolated(self, small_physics, small_render):
        import numpy as np
        from gravstream.scenes import create_nbody_scene

        a = create_nbody_scene(small_physics, small_render, np.random.default_rng(1))
        b = create_nbody_scene(small_physics, small_render, np.random.default_rng(1))
        sink_a, sink_b = BufferSink(), BufferSink()

        threads = [
            threading.Thread(target=run, args=(a, sink_a), kwargs={"max_ticks": 10}),
            threading.Thread(target=run, args=(b, sink_b), kwargs={"max_ticks": 10}),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sink_a.frames == sink_b.frames
        assert a.particles == b.particles
