"""
HTTP surface: one streaming route per preset.

GET /{preset} starts an encoder, drives a fresh scene into the encoder's
stdin on a worker thread, and streams the encoder's stdout back as the
response body. Each request is an isolated run with its own scene, random
source, encoder and cancel event.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable, Mapping, Sequence

import anyio
from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from starlette.concurrency import iterate_in_threadpool, run_in_threadpool

from gravstream import __version__
from gravstream.config import PRESETS, SimulationConfig
from gravstream.core.errors import EncoderStartError
from gravstream.scenes import Scene, create_scene
from gravstream.stream.encoder import EncoderProcess
from gravstream.stream.loop import run

logger = logging.getLogger(__name__)

EncoderFactory = Callable[[Sequence[str]], EncoderProcess]


def drive(scene: Scene, config: SimulationConfig, encoder: EncoderProcess, cancel: threading.Event):
    """
    Run `scene` into the encoder, then close the encoder's input.

    Closing stdin however the run ends lets the encoder flush and exit,
    which in turn ends the response stream.
    """
    try:
        run(
            scene,
            encoder.sink,
            image_format=config.render.image_format,
            quality=config.render.jpeg_quality,
            cancel=cancel,
            log_every=config.log_every,
        )
    finally:
        encoder.sink.close()


def start_run(
    scene: Scene,
    config: SimulationConfig,
    encoder: EncoderProcess,
    cancel: threading.Event,
) -> threading.Thread:
    """Drive `scene` into a started `encoder` on a daemon thread."""
    worker = threading.Thread(
        target=drive,
        name=f"run-{config.name}",
        args=(scene, config, encoder, cancel),
        daemon=True,
    )
    worker.start()
    return worker


def stop_run(encoder: EncoderProcess, worker: threading.Thread, cancel: threading.Event, timeout: float):
    """Cancel the run, stop the encoder and reap the worker (blocking)."""
    cancel.set()
    encoder.close(graceful=False)
    worker.join(timeout=timeout)
    if worker.is_alive():
        logger.warning("run thread %s still alive after %.1fs", worker.name, timeout)


def create_app(
    presets: Mapping[str, SimulationConfig] = PRESETS,
    encoder_factory: EncoderFactory = EncoderProcess,
    join_timeout: float = 5.0,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        presets: Routable configs by name
        encoder_factory: Builds an (unstarted) encoder from an argv
        join_timeout: Seconds to wait for a run thread after its client leaves
    """
    app = FastAPI(title="gravstream", version=__version__)

    @app.get("/")
    def list_presets() -> dict:
        return {
            name: {
                "scene": config.scene,
                "frame_rate": config.encoder.frame_rate,
                "media_type": config.encoder.media_type,
            }
            for name, config in presets.items()
        }

    @app.get("/{name}")
    def stream(name: str):
        config = presets.get(name)
        if config is None:
            raise HTTPException(status_code=404, detail=f"unknown simulation {name!r}")

        # Built before the encoder so a bad config never leaves a child behind
        scene = create_scene(config)

        encoder = encoder_factory(config.encoder.arguments())
        try:
            encoder.start()
        except EncoderStartError as exc:
            logger.error("run %s not started: %s", name, exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc

        cancel = threading.Event()
        try:
            worker = start_run(scene, config, encoder, cancel)
        except BaseException:
            encoder.close(graceful=False)
            raise

        async def body():
            try:
                async for chunk in iterate_in_threadpool(encoder.iter_output()):
                    yield chunk
            finally:
                # Off the event loop, and not interrupted by a disconnect
                with anyio.CancelScope(shield=True):
                    await run_in_threadpool(stop_run, encoder, worker, cancel, join_timeout)

        return StreamingResponse(body(), media_type=config.encoder.media_type)

    return app
