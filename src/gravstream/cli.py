"""
Command line entry point.

    gravstream serve [--host H] [--port P]
    gravstream stream PRESET [--seed S] [--ticks N]   # video container on stdout
    gravstream frames PRESET [--seed S] [--ticks N]   # raw image sequence on stdout
    gravstream plot PRESET --ticks N [--output PATH]  # offline trajectory plot

Logs go to stderr; stdout only ever carries media bytes.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

from gravstream import __version__
from gravstream.config import PRESETS, get_preset
from gravstream.core.errors import EncoderStartError, NumericalInstabilityError
from gravstream.scenes import NBodyScene, create_scene
from gravstream.stream.encoder import EncoderProcess
from gravstream.stream.loop import StopReason, run
from gravstream.stream.sinks import PipeSink

logger = logging.getLogger("gravstream")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gravstream",
        description="2D N-body gravity rendered as a streaming video.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (stderr)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Serve every preset over HTTP")
    serve.add_argument("--host", default="localhost")
    serve.add_argument("--port", type=int, default=8000)

    for name, help_text in (
        ("stream", "Encode a preset to video on stdout"),
        ("frames", "Write encoded frames to stdout without an encoder"),
        ("plot", "Record a bounded run and plot trajectories"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("preset", choices=sorted(PRESETS))
        cmd.add_argument("--seed", type=int, default=None, help="Seed for the run's random source")
        cmd.add_argument("--ticks", type=int, default=None, help="Stop after this many frames")

    plot = sub.choices["plot"]
    plot.add_argument("--every", type=int, default=10, help="Record one tick out of N")
    plot.add_argument("--output", type=Path, default=Path("output/trajectories.png"))

    return parser


def cmd_serve(args) -> int:
    import uvicorn
    from gravstream.server import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def cmd_stream(args) -> int:
    config = get_preset(args.preset).with_seed(args.seed)
    scene = create_scene(config)
    try:
        encoder = EncoderProcess(config.encoder.arguments(), stdout=sys.stdout.buffer).start()
    except EncoderStartError as exc:
        logger.error("%s", exc)
        return 2
    try:
        result = run(
            scene,
            encoder.sink,
            image_format=config.render.image_format,
            quality=config.render.jpeg_quality,
            max_ticks=args.ticks,
            log_every=config.log_every,
        )
    finally:
        encoder.close()
    return 0 if result.reason == StopReason.COMPLETED else 1


def cmd_frames(args) -> int:
    config = get_preset(args.preset).with_seed(args.seed)
    result = run(
        create_scene(config),
        PipeSink(sys.stdout.buffer),
        image_format=config.render.image_format,
        quality=config.render.jpeg_quality,
        max_ticks=args.ticks,
        log_every=config.log_every,
    )
    return 0 if result.reason == StopReason.COMPLETED else 1


def cmd_plot(args) -> int:
    import matplotlib

    matplotlib.use("Agg")
    from gravstream.analysis.recorder import TrajectoryRecorder
    from gravstream.viz.trajectories import plot_run_summary, save_figure

    config = get_preset(args.preset).with_seed(args.seed)
    scene = create_scene(config)
    if not isinstance(scene, NBodyScene):
        logger.error("preset %r has no particles to plot", args.preset)
        return 2
    if args.ticks is None:
        logger.error("plot needs a bounded run, pass --ticks")
        return 2

    recorder = TrajectoryRecorder(
        gravitational_constant=config.physics.gravitational_constant,
        every=args.every,
    )
    recorder.record(0, scene.particles)
    for tick in range(1, args.ticks + 1):
        try:
            scene.advance()
        except NumericalInstabilityError as exc:
            logger.warning("stopped early: %s", exc)
            break
        recorder.record(tick, scene.particles)

    fig = plot_run_summary(
        recorder,
        title=f"{config.name}: {args.ticks} ticks",
        extent=config.render.size / 2,
    )
    save_figure(fig, args.output)
    logger.info("saved %s", args.output)
    return 0


COMMANDS = {
    "serve": cmd_serve,
    "stream": cmd_stream,
    "frames": cmd_frames,
    "plot": cmd_plot,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
