"""
EncoderProcess: the external video encoder as a child process.

The encoder reads an image sequence on stdin and writes a video container
on stdout. Failing to start it is an EncoderStartError for that run only.
"""

from __future__ import annotations
import logging
import subprocess
from typing import BinaryIO, Iterator, Sequence

from gravstream.core.errors import EncoderStartError
from gravstream.stream.sinks import PipeSink

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class EncoderProcess:
    """
    Wraps a child encoder started with a fixed argument list.

    Args:
        arguments: Full argv (executable first)
        stdout: Where the encoder writes; None captures it as a pipe
        terminate_timeout: Seconds to wait after terminate() before kill()

    Usage:
        with EncoderProcess(config.encoder.arguments()) as encoder:
            run(scene, encoder.sink)
    """

    def __init__(
        self,
        arguments: Sequence[str],
        stdout: BinaryIO | None = None,
        terminate_timeout: float = 5.0,
    ):
        self.arguments = list(arguments)
        self._stdout = stdout
        self.terminate_timeout = terminate_timeout
        self.process: subprocess.Popen | None = None
        self._sink: PipeSink | None = None

    def start(self) -> EncoderProcess:
        try:
            self.process = subprocess.Popen(
                self.arguments,
                stdin=subprocess.PIPE,
                stdout=self._stdout if self._stdout is not None else subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise EncoderStartError(f"cannot start {self.arguments[0]!r}: {exc}") from exc
        if self.process.stdin is None:
            self.close()
            raise EncoderStartError(f"{self.arguments[0]!r} exposes no stdin pipe")
        self._sink = PipeSink(self.process.stdin)
        logger.info("encoder started: pid=%s argv=%s", self.process.pid, " ".join(self.arguments))
        return self

    @property
    def sink(self) -> PipeSink:
        if self._sink is None:
            raise RuntimeError("encoder not started")
        return self._sink

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def iter_output(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the encoder's stdout until it closes."""
        if self.process is None or self.process.stdout is None:
            raise RuntimeError("encoder output is not captured")
        while True:
            chunk = self.process.stdout.read1(chunk_size)
            if not chunk:
                return
            yield chunk

    def close(self, graceful: bool = True):
        """
        Close stdin and reap the process.

        With `graceful`, the encoder gets `terminate_timeout` seconds to
        flush and exit on end of input before it is terminated.
        """
        if self._sink is not None:
            self._sink.close()
        if self.process is None:
            return
        if graceful and self.process.poll() is None:
            try:
                self.process.wait(timeout=self.terminate_timeout)
            except subprocess.TimeoutExpired:
                logger.debug("encoder pid=%s still running after end of input", self.process.pid)
        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=self.terminate_timeout)
            except subprocess.TimeoutExpired:
                logger.warning("encoder pid=%s ignored terminate, killing", self.process.pid)
                self.process.kill()
                self.process.wait()
        if self.process.stdout is not None and self._stdout is None:
            self.process.stdout.close()
        logger.info("encoder exited: pid=%s code=%s", self.process.pid, self.process.returncode)

    def __enter__(self) -> EncoderProcess:
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
