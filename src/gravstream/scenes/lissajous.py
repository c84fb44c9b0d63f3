"""
LissajousScene: a slowly rotating Lissajous figure.

Each frame plots x = sin(t), y = sin(t·freq + phase) for t over several
cycles, green on black. The frequency ratio is drawn once per run; the
phase advances a little every frame.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from gravstream.render.frame import Frame
from gravstream.render.palette import GREEN_ON_BLACK
from gravstream.scenes.base import Scene

if TYPE_CHECKING:
    from gravstream.config import LissajousConfig


class LissajousScene(Scene):
    """Lissajous curve on a (2·size + 1)² canvas."""

    def __init__(
        self,
        frequency: float,
        size: int = 400,
        resolution: float = 0.001,
        cycles: float = 5.0,
        phase_step: float = 0.01,
    ):
        super().__init__()
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")
        self.frequency = frequency
        self.size = size
        self.phase = 0.0
        self.phase_step = phase_step
        self._t = np.arange(0.0, cycles * 2 * np.pi, resolution)

    @property
    def extent(self) -> int:
        return 2 * self.size + 1

    def render(self) -> Frame:
        frame = Frame.blank(self.extent, self.extent, GREEN_ON_BLACK)
        x = np.sin(self._t)
        y = np.sin(self._t * self.frequency + self.phase)
        # Truncate toward zero when snapping to pixels
        px = self.size + np.trunc(x * self.size + 0.5).astype(np.int64)
        py = self.size + np.trunc(y * self.size * 0.5).astype(np.int64)
        frame.pixels[py, px] = GREEN_ON_BLACK.foreground
        return frame

    def advance(self) -> None:
        self.phase += self.phase_step
        self.tick += 1

    def diagnostics(self) -> dict:
        return {"tick": self.tick, "frequency": self.frequency, "phase": self.phase}


def create_lissajous_scene(config: "LissajousConfig", rng: np.random.Generator) -> LissajousScene:
    """Build a scene with a frequency ratio drawn from the run's RNG."""
    return LissajousScene(
        frequency=float(rng.random() * config.max_frequency),
        size=config.size,
        resolution=config.resolution,
        cycles=config.cycles,
        phase_step=config.phase_step,
    )
