"""
Renderers turn a particle snapshot into a palette frame.

- DiskRenderer: one filled disk per particle on a fresh canvas
- FadeRenderer: keeps a short history of past snapshots ("generations")
  and draws them as fading trails, oldest first

A renderer owns its canvas settings and (for fading) its history. It never
mutates particles.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Protocol, Sequence

from gravstream.core.particle import Particle
from gravstream.render.frame import Frame, canvas_extent, draw_disk, world_to_pixel
from gravstream.render.overlay import draw_debug_overlay
from gravstream.render.palette import GRAY_FADE, GREEN_ON_BLACK, Palette, gray_fade_palette


class Renderer(Protocol):
    """Protocol for particle renderers."""

    def render(self, particles: Sequence[Particle]) -> Frame:
        ...


@dataclass
class DiskRenderer:
    """
    Draw every particle as a filled disk of `radius` pixels.

    Particle i uses palette index 1 + i mod (len(palette) - 1), so a
    two-color palette draws every particle in the foreground color.
    """

    size: int = 800
    radius: int = 8
    palette: Palette = GREEN_ON_BLACK
    padded: bool = True  # (size + 1)² canvas instead of size²
    overlay: bool = False  # Debug text, only drawn for exactly 2 particles

    def __post_init__(self):
        if self.radius < 1:
            raise ValueError(f"radius must be >= 1, got {self.radius}")

    @property
    def extent(self) -> int:
        return canvas_extent(self.size, self.padded)

    def blank(self) -> Frame:
        return Frame.blank(self.extent, self.extent, self.palette)

    def draw_particle(self, frame: Frame, p: Particle, index: int):
        limit = self.extent + self.radius
        if not (abs(p.x) <= limit and abs(p.y) <= limit):
            # Off canvas (or not finite): nothing to draw
            return
        cx, cy = world_to_pixel(p.x, p.y, self.size)
        draw_disk(frame.pixels, cx, cy, self.radius, index)

    def render(self, particles: Sequence[Particle]) -> Frame:
        frame = self.blank()
        colors = len(self.palette) - 1
        for i, p in enumerate(particles):
            self.draw_particle(frame, p, 1 + i % colors)
        self._finish(frame, particles)
        return frame

    def _finish(self, frame: Frame, particles: Sequence[Particle]):
        if self.overlay and len(particles) == 2:
            draw_debug_overlay(frame, particles)


@dataclass
class Generation:
    """A past snapshot with the number of frames it has left to live."""

    particles: tuple[Particle, ...]
    countdown: int


@dataclass
class FadeRenderer(DiskRenderer):
    """
    Disk renderer with fading motion trails.

    Each render call:
    1. Ages every generation by one frame
    2. Drops the single oldest generation if it is exhausted
    3. Appends the current snapshot at full countdown
    4. Draws live generations oldest-first, colored by countdown

    One snapshot is appended and at most one dropped per call, so calling
    render exactly once per frame keeps the history at `generations`.
    """

    palette: Palette = GRAY_FADE
    generations: int = 8  # Frames a snapshot stays visible

    history: Deque[Generation] = field(default_factory=deque, init=False)

    def __post_init__(self):
        super().__post_init__()
        if self.generations < 1:
            raise ValueError(f"generations must be >= 1, got {self.generations}")

    def age(self):
        """Count every generation down by one and prune the oldest exhausted one."""
        for gen in self.history:
            gen.countdown -= 1
        if self.history and self.history[0].countdown <= 0:
            self.history.popleft()

    def render(self, particles: Sequence[Particle]) -> Frame:
        self.age()
        self.history.append(Generation(tuple(particles), self.generations))

        frame = self.blank()
        top = len(self.palette) - 1
        for gen in self.history:
            if gen.countdown <= 0:
                continue
            index = min(gen.countdown, top)
            for p in gen.particles:
                self.draw_particle(frame, p, index)
        self._finish(frame, particles)
        return frame


def create_renderer(
    mode: str,
    size: int = 800,
    radius: int = 8,
    padded: bool = True,
    overlay: bool = False,
    generations: int = 8,
) -> DiskRenderer:
    """
    Factory for a renderer by mode ("solid" or "fade").

    Fade mode gets a gray palette with one shade per generation.
    """
    if mode == "solid":
        return DiskRenderer(size=size, radius=radius, padded=padded, overlay=overlay)
    if mode == "fade":
        return FadeRenderer(
            size=size,
            radius=radius,
            padded=padded,
            overlay=overlay,
            palette=gray_fade_palette(generations),
            generations=generations,
        )
    raise ValueError(f"unknown render mode {mode!r}, expected 'solid' or 'fade'")
