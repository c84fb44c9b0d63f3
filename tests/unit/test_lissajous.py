"""Unit tests for LissajousScene."""

import numpy as np
import pytest

from gravstream.config import LissajousConfig
from gravstream.scenes import LissajousScene, create_lissajous_scene


class TestLissajousScene:
    """Tests for the Lissajous figure."""

    def test_canvas(self):
        frame = LissajousScene(frequency=1.0, size=50).render()
        assert frame.shape == (101, 101)
        assert len(frame.palette) == 2

    def test_zero_frequency_is_horizontal_line(self):
        # y = sin(phase) = 0 for every t
        frame = LissajousScene(frequency=0.0, size=50).render()
        ys, xs = np.nonzero(frame.pixels)
        assert set(ys.tolist()) == {50}
        assert xs.min() <= 2
        assert xs.max() == 100

    def test_vertical_extent_is_half(self):
        frame = LissajousScene(frequency=1.0, size=100).render()
        ys, _ = np.nonzero(frame.pixels)
        assert ys.min() >= 50
        assert ys.max() <= 150

    def test_phase_advances(self):
        scene = LissajousScene(frequency=1.0, size=50, phase_step=0.01)
        first = scene.render()
        scene.advance()
        scene.advance()

        assert scene.phase == pytest.approx(0.02)
        assert scene.tick == 2
        assert not np.array_equal(first.pixels, scene.render().pixels)

    def test_render_does_not_advance(self):
        scene = LissajousScene(frequency=2.0, size=50)
        a = scene.render()
        b = scene.render()
        np.testing.assert_array_equal(a.pixels, b.pixels)

    def test_frequency_from_rng(self):
        cfg = LissajousConfig(size=20)
        a = create_lissajous_scene(cfg, np.random.default_rng(3))
        b = create_lissajous_scene(cfg, np.random.default_rng(3))

        assert a.frequency == b.frequency
        assert 0.0 <= a.frequency < 3.0

    def test_bad_resolution(self):
        with pytest.raises(ValueError):
            LissajousScene(frequency=1.0, resolution=0.0)
