"""
Build-time configuration: physical constants, canvas, encoder, presets.

Nothing here is settable per request. A run picks a preset by name and,
optionally, a seed for its random source.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Literal


@dataclass(frozen=True)
class PhysicsConfig:
    """Constants of the N-body simulation."""

    count: int = 3  # Number of particles
    mass: float = 1e7  # Same mass for all particles
    gravitational_constant: float = 1e7
    epoch: float = 1e-5  # Simulation timestep
    softening: float = 1e6  # Only used by the softened law
    force_law: Literal["softened", "inverse_square"] = "softened"
    integrator: Literal["leapfrog", "euler"] = "leapfrog"
    spread_divisor: float = 6.0  # Initial positions ~ N(0, size / spread_divisor)
    check_finite: bool = True  # Stop the run on NaN/inf state


@dataclass(frozen=True)
class RenderConfig:
    """Canvas and image settings."""

    size: int = 800  # World extent mapped onto the canvas
    draw_radius: int = 8
    padded: bool = True  # (size + 1)² canvas instead of size²
    mode: Literal["solid", "fade"] = "solid"
    fade_generations: int = 8
    overlay: bool = False  # Debug text; only drawn when count == 2
    image_format: Literal["png", "jpeg"] = "png"
    jpeg_quality: int = 75


@dataclass(frozen=True)
class EncoderConfig:
    """External video encoder invocation."""

    executable: str = "ffmpeg"
    frame_rate: int = 24
    output_format: str = "ogg"
    qscale: int = 10
    media_type: str = "video/ogg"

    def arguments(self) -> list[str]:
        """Full argv: image sequence on stdin, video container on stdout."""
        return [
            self.executable,
            "-f", "image2pipe",
            "-pix_fmt", "yuv420p",
            "-r", str(self.frame_rate),
            "-i", "-",
            "-f", self.output_format,
            "-qscale:v", str(self.qscale),
            "-f", self.output_format, "-",
        ]


@dataclass(frozen=True)
class LissajousConfig:
    """Constants of the Lissajous figure scene."""

    size: int = 400  # Canvas is (2·size + 1)²
    resolution: float = 0.001  # Angular step along the curve
    cycles: float = 5.0
    max_frequency: float = 3.0  # Frequency ratio ~ U[0, max_frequency)
    phase_step: float = 0.01  # Phase advance per frame


@dataclass(frozen=True)
class SimulationConfig:
    """Everything a run needs, bundled under a preset name."""

    name: str
    scene: Literal["nbody", "lissajous"] = "nbody"
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)
    lissajous: LissajousConfig = field(default_factory=LissajousConfig)
    seed: int | None = None  # None draws fresh entropy per run
    log_every: int = 1000  # Ticks between diagnostics log lines

    def with_seed(self, seed: int | None) -> SimulationConfig:
        return replace(self, seed=seed)


PRESETS: dict[str, SimulationConfig] = {
    "3body": SimulationConfig(name="3body"),
    "2body": SimulationConfig(
        name="2body",
        physics=PhysicsConfig(count=2, force_law="inverse_square", integrator="euler"),
        render=RenderConfig(overlay=True),
    ),
    "trails": SimulationConfig(
        name="trails",
        render=RenderConfig(mode="fade", padded=False, image_format="jpeg"),
    ),
    "lissajous": SimulationConfig(
        name="lissajous",
        scene="lissajous",
        encoder=EncoderConfig(frame_rate=8),
    ),
}


def get_preset(name: str) -> SimulationConfig:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"unknown preset {name!r}, expected one of {sorted(PRESETS)}") from None
