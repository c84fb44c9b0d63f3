"""
Rendering: particle snapshots -> palette frames -> encoded images.

- Palette: small fixed color tables (green-on-black, gray fade levels)
- Frame: owned uint8 index buffer, separate from simulation state
- DiskRenderer / FadeRenderer: disk rasterization, generational trails
- encode_frame: PNG (indexed) or JPEG (lossy) bytes for the sink
"""

from gravstream.render.palette import Palette, GREEN_ON_BLACK, GRAY_FADE, gray_fade_palette
from gravstream.render.frame import Frame, canvas_extent, world_to_pixel, disk_mask, draw_disk
from gravstream.render.overlay import debug_labels, draw_labels, draw_debug_overlay
from gravstream.render.renderers import (
    Renderer,
    DiskRenderer,
    FadeRenderer,
    Generation,
    create_renderer,
)
from gravstream.render.encoding import ImageFormat, encode_frame, to_image

__all__ = [
    "Palette",
    "GREEN_ON_BLACK",
    "GRAY_FADE",
    "gray_fade_palette",
    "Frame",
    "canvas_extent",
    "world_to_pixel",
    "disk_mask",
    "draw_disk",
    "debug_labels",
    "draw_labels",
    "draw_debug_overlay",
    "Renderer",
    "DiskRenderer",
    "FadeRenderer",
    "Generation",
    "create_renderer",
    "ImageFormat",
    "encode_frame",
    "to_image",
]
