"""
Palettes for indexed-color frames.

Index 0 is always the background. Palettes are small (2 to 9 entries) and
fixed at build time.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
import matplotlib


@dataclass(frozen=True)
class Palette:
    """An ordered color lookup table of RGB triples."""

    name: str
    colors: tuple[tuple[int, int, int], ...]

    def __post_init__(self):
        if not 2 <= len(self.colors) <= 256:
            raise ValueError(f"palette needs 2..256 colors, got {len(self.colors)}")

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def background(self) -> int:
        return 0

    @property
    def foreground(self) -> int:
        """Highest index (text overlay, newest fade level)."""
        return len(self.colors) - 1

    def flat(self) -> list[int]:
        """Flattened [r, g, b, r, g, b, ...] as Pillow's putpalette expects."""
        return [channel for rgb in self.colors for channel in rgb]


GREEN_ON_BLACK = Palette(
    name="green_on_black",
    colors=((0x00, 0x00, 0x00), (0x00, 0xFF, 0x00)),
)


def gray_fade_palette(levels: int = 8, cmap: str = "gray") -> Palette:
    """
    Black background followed by `levels` increasingly bright shades.

    Index k (1..levels) is the shade for a generation with countdown k, so
    the newest generation is the brightest.
    """
    if levels < 1:
        raise ValueError(f"levels must be >= 1, got {levels}")
    shades = matplotlib.colormaps[cmap](np.linspace(0.0, 1.0, levels + 1))
    colors = tuple(
        tuple(int(round(c * 255)) for c in rgba[:3])
        for rgba in shades
    )
    return Palette(name=f"{cmap}_fade_{levels}", colors=colors)


GRAY_FADE = gray_fade_palette(8)
