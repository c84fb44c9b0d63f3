"""
Debug text overlay for two-particle runs.

Three lines of ASCII text (accelerations, velocities, positions with the
separation) are drawn straight into the frame's index buffer. The overlay
reads the particle snapshot and never touches simulation state.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Sequence
import math

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from gravstream.core.particle import Particle
from gravstream.render.frame import Frame

# Baselines of the three lines, in pixels from the top
LABEL_BASELINES = (50, 75, 100)
LABEL_X = 0


@lru_cache(maxsize=1)
def _font() -> ImageFont.ImageFont:
    return ImageFont.load_default()


def debug_labels(particles: Sequence[Particle]) -> list[str]:
    """
    Format the overlay lines for exactly two particles.

    Raises:
        ValueError: if there are not exactly two particles
    """
    if len(particles) != 2:
        raise ValueError(f"debug overlay needs exactly 2 particles, got {len(particles)}")
    a, b = particles
    separation = math.sqrt(a.distance_squared(b))
    return [
        f"accelerations {a.ax:f}::{a.ay:f}   {b.ax:f}::{b.ay:f}",
        f"velocities {a.vx:f}::{a.vy:f}   {b.vx:f}::{b.vy:f}",
        f"positions {a.x:f}::{a.y:f}   {b.x:f}::{b.y:f}   separation {separation:f}",
    ]


def draw_labels(frame: Frame, labels: Sequence[str], index: int | None = None):
    """Draw one label per baseline into `frame` using palette `index`."""
    if index is None:
        index = frame.palette.foreground
    height, width = frame.shape
    img = Image.frombytes("L", (width, height), frame.pixels.tobytes())
    draw = ImageDraw.Draw(img)
    # No antialiasing: every text pixel must be a valid palette index
    draw.fontmode = "1"
    font = _font()
    for label, baseline in zip(labels, LABEL_BASELINES):
        top = baseline - font.getbbox(label)[3]
        draw.text((LABEL_X, top), label, fill=index, font=font)
    frame.pixels[...] = np.asarray(img, dtype=np.uint8)


def draw_debug_overlay(frame: Frame, particles: Sequence[Particle]):
    """Draw the acceleration/velocity/position lines for a two-particle run."""
    draw_labels(frame, debug_labels(particles))
