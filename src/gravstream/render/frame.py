"""
Frame: an owned palette-index raster.

The frame buffer is separate from the particle snapshot it is drawn from.
Pixels are stored as a uint8 array indexed [y, x]; writes outside the
canvas are silently clipped.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from gravstream.render.palette import Palette


@dataclass
class Frame:
    """A palette-indexed image."""

    pixels: np.ndarray  # [height, width] uint8 palette indices
    palette: Palette

    @classmethod
    def blank(cls, width: int, height: int, palette: Palette) -> Frame:
        pixels = np.full((height, width), palette.background, dtype=np.uint8)
        return cls(pixels=pixels, palette=palette)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width)."""
        return self.pixels.shape

    def count(self, index: int) -> int:
        """Number of pixels set to palette `index`."""
        return int(np.count_nonzero(self.pixels == index))

    def set_pixel(self, x: int, y: int, index: int):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = index


def canvas_extent(size: int, padded: bool = True) -> int:
    """Side length of the canvas: size + 1 when padded, else size."""
    return size + 1 if padded else size


def world_to_pixel(x: float, y: float, size: int) -> tuple[int, int]:
    """Map a world position to pixel coordinates, origin at the canvas center."""
    return size // 2 + int(x), size // 2 + int(y)


def disk_mask(radius: int) -> np.ndarray:
    """
    Boolean stencil of a filled disk, shape (2r, 2r).

    Offset (dx, dy) in [-r, r) is inside when dx² + dy² < r². The stencil's
    [r, r] entry is the disk center.
    """
    offsets = np.arange(-radius, radius)
    return offsets[None, :] ** 2 + offsets[:, None] ** 2 < radius * radius


def draw_disk(pixels: np.ndarray, cx: int, cy: int, radius: int, index: int):
    """
    Fill a disk of `radius` centered on pixel (cx, cy) with palette `index`.

    Args:
        pixels: [height, width] index buffer, modified in place
        cx, cy: Center pixel
        radius: Disk radius in pixels (>= 1)
        index: Palette index to write
    """
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")
    height, width = pixels.shape
    offsets = np.arange(-radius, radius)
    ys, xs = np.meshgrid(cy + offsets, cx + offsets, indexing="ij")
    inside = (
        disk_mask(radius)
        & (xs >= 0) & (xs < width)
        & (ys >= 0) & (ys < height)
    )
    pixels[ys[inside], xs[inside]] = index
