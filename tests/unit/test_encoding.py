"""Unit tests for image encoding."""

import io

import numpy as np
import pytest
from PIL import Image

from gravstream.core.particle import Particle
from gravstream.render import DiskRenderer, encode_frame, to_image

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def frame():
    return DiskRenderer(size=64, radius=4).render([Particle(mass=1.0, x=10.0)])


class TestEncodeFrame:
    """Tests for encode_frame."""

    def test_png_keeps_palette_indices(self, frame):
        data = encode_frame(frame, "png")
        assert data.startswith(PNG_SIGNATURE)

        img = Image.open(io.BytesIO(data))
        assert img.mode == "P"
        assert img.size == (65, 65)
        np.testing.assert_array_equal(np.asarray(img), frame.pixels)

    def test_jpeg(self, frame):
        data = encode_frame(frame, "jpeg", quality=90)
        assert data.startswith(b"\xff\xd8")

        img = Image.open(io.BytesIO(data))
        assert img.format == "JPEG"
        assert img.size == (65, 65)

    def test_unknown_format(self, frame):
        with pytest.raises(ValueError):
            encode_frame(frame, "gif")

    def test_to_image_palette(self, frame):
        img = to_image(frame)
        assert img.getpixel((42, 32)) == 1
        assert img.convert("RGB").getpixel((42, 32)) == (0, 255, 0)
        assert img.convert("RGB").getpixel((0, 0)) == (0, 0, 0)
