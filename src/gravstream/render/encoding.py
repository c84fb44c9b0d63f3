"""
Image encoding: palette frame -> PNG or JPEG bytes.

Encoded frames are concatenated on the sink with no extra framing; the
image container itself marks where one frame ends and the next begins.
"""

from __future__ import annotations
import io
from typing import Literal

from PIL import Image

from gravstream.render.frame import Frame

ImageFormat = Literal["png", "jpeg"]


def to_image(frame: Frame) -> Image.Image:
    """Build a Pillow "P" image sharing the frame's palette."""
    img = Image.frombytes("P", (frame.width, frame.height), frame.pixels.tobytes())
    img.putpalette(frame.palette.flat())
    return img


def encode_frame(frame: Frame, image_format: ImageFormat = "png", quality: int = 75) -> bytes:
    """
    Encode a frame into a standalone image.

    Args:
        frame: Palette frame to encode
        image_format: "png" keeps the indexed palette; "jpeg" is lossy RGB
        quality: JPEG quality (ignored for PNG)

    Returns:
        The encoded image bytes
    """
    img = to_image(frame)
    buffer = io.BytesIO()
    if image_format == "png":
        img.save(buffer, format="PNG")
    elif image_format == "jpeg":
        img.convert("RGB").save(buffer, format="JPEG", quality=quality)
    else:
        raise ValueError(f"unknown image format {image_format!r}, expected 'png' or 'jpeg'")
    return buffer.getvalue()
