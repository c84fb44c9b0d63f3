"""Unit tests for palettes, disk rasterization and renderers."""

import numpy as np
import pytest

from gravstream.core.particle import Particle
from gravstream.render import (
    GRAY_FADE,
    GREEN_ON_BLACK,
    DiskRenderer,
    FadeRenderer,
    Frame,
    Palette,
    canvas_extent,
    create_renderer,
    debug_labels,
    disk_mask,
    draw_disk,
    gray_fade_palette,
    world_to_pixel,
)


class TestPalette:
    """Tests for Palette."""

    def test_green_on_black(self):
        assert len(GREEN_ON_BLACK) == 2
        assert GREEN_ON_BLACK.colors[0] == (0, 0, 0)
        assert GREEN_ON_BLACK.colors[1] == (0, 255, 0)
        assert GREEN_ON_BLACK.foreground == 1

    def test_gray_fade_levels(self):
        assert len(GRAY_FADE) == 9
        assert GRAY_FADE.colors[0] == (0, 0, 0)
        assert GRAY_FADE.colors[-1] == (255, 255, 255)
        brightness = [sum(c) for c in GRAY_FADE.colors]
        assert brightness == sorted(brightness)

    def test_gray_fade_custom_levels(self):
        assert len(gray_fade_palette(3)) == 4

    def test_flat(self):
        assert GREEN_ON_BLACK.flat() == [0, 0, 0, 0, 255, 0]

    def test_too_small(self):
        with pytest.raises(ValueError):
            Palette(name="one", colors=((0, 0, 0),))


class TestGeometry:
    """Tests for coordinate mapping and disks."""

    def test_origin_maps_to_center(self):
        assert world_to_pixel(0.0, 0.0, 800) == (400, 400)

    def test_truncates_toward_zero(self):
        assert world_to_pixel(2.7, -2.7, 100) == (52, 48)

    def test_canvas_extent(self):
        assert canvas_extent(800) == 801
        assert canvas_extent(800, padded=False) == 800

    def test_disk_mask_membership(self):
        mask = disk_mask(8)
        assert mask.shape == (16, 16)
        # Center at [r, r]
        assert mask[8, 8]
        assert mask[8, 8 + 7]
        assert mask[8, 8 - 7]
        assert not mask[8, 0]  # dx = -8: 64 < 64 is false

    def test_draw_disk_clips(self):
        pixels = np.zeros((20, 20), dtype=np.uint8)
        draw_disk(pixels, 0, 0, 4, 1)
        assert pixels[0, 0] == 1
        assert 0 < np.count_nonzero(pixels) < disk_mask(4).sum()

    def test_draw_disk_fully_outside(self):
        pixels = np.zeros((20, 20), dtype=np.uint8)
        draw_disk(pixels, 500, -500, 4, 1)
        assert np.count_nonzero(pixels) == 0

    def test_draw_disk_bad_radius(self):
        with pytest.raises(ValueError):
            draw_disk(np.zeros((5, 5), dtype=np.uint8), 2, 2, 0, 1)


class TestDiskRenderer:
    """Tests for the solid renderer."""

    def test_particle_at_origin(self):
        renderer = DiskRenderer(size=800, radius=8)
        frame = renderer.render([Particle(mass=1.0)])

        assert frame.shape == (801, 801)
        assert frame.pixels[400, 400] == 1
        assert frame.count(1) == disk_mask(8).sum()

        ys, xs = np.nonzero(frame.pixels)
        assert np.all((xs - 400) ** 2 + (ys - 400) ** 2 < 64)
        # Horizontal extent through the center: dx in [-7, 7]
        row = np.nonzero(frame.pixels[400])[0]
        assert row.min() == 393
        assert row.max() == 407

    def test_unpadded_canvas(self):
        frame = DiskRenderer(size=100, radius=3, padded=False).render([Particle(mass=1.0)])
        assert frame.shape == (100, 100)

    def test_positions_offset_from_center(self):
        frame = DiskRenderer(size=100, radius=2).render([Particle(mass=1.0, x=20.0, y=-10.0)])
        assert frame.pixels[40, 70] == 1
        assert frame.pixels[50, 50] == 0

    def test_one_color_per_particle(self):
        palette = Palette(name="three", colors=((0, 0, 0), (255, 0, 0), (0, 0, 255)))
        renderer = DiskRenderer(size=100, radius=2, palette=palette)
        frame = renderer.render([Particle(mass=1.0, x=-20.0), Particle(mass=1.0, x=20.0)])
        assert frame.pixels[50, 30] == 1
        assert frame.pixels[50, 70] == 2

    def test_fresh_canvas_each_frame(self):
        renderer = DiskRenderer(size=100, radius=2)
        renderer.render([Particle(mass=1.0, x=-20.0)])
        frame = renderer.render([Particle(mass=1.0, x=20.0)])
        assert frame.pixels[50, 30] == 0
        assert frame.pixels[50, 70] == 1

    def test_bad_radius(self):
        with pytest.raises(ValueError):
            DiskRenderer(radius=0)


class TestFadeRenderer:
    """Tests for generational trails."""

    def test_generation_lifetime(self):
        k = 3
        renderer = FadeRenderer(size=100, radius=2, generations=k, palette=gray_fade_palette(k))
        first = [Particle(mass=1.0, x=-30.0)]
        later = [Particle(mass=1.0, x=30.0)]
        ax, ay = world_to_pixel(-30.0, 0.0, 100)

        frames = [renderer.render(first)]
        frames += [renderer.render(later) for _ in range(k + 1)]

        seen = [int(f.pixels[ay, ax]) for f in frames]
        assert seen == [3, 2, 1, 0, 0]

    def test_history_is_bounded(self):
        renderer = FadeRenderer(size=100, radius=2, generations=8)
        for i in range(50):
            renderer.render([Particle(mass=1.0, x=float(i)), Particle(mass=1.0, y=float(i))])
            assert len(renderer.history) <= 8
        assert len(renderer.history) == 8

    def test_newest_drawn_on_top(self):
        renderer = FadeRenderer(size=100, radius=2, generations=8)
        for _ in range(5):
            frame = renderer.render([Particle(mass=1.0)])
        assert frame.pixels[50, 50] == 8

    def test_age_prunes_only_oldest(self):
        renderer = FadeRenderer(size=100, radius=2, generations=2)
        renderer.render([Particle(mass=1.0)])
        renderer.render([Particle(mass=1.0)])
        assert [g.countdown for g in renderer.history] == [1, 2]

        renderer.age()
        assert [g.countdown for g in renderer.history] == [1]

    def test_bad_generations(self):
        with pytest.raises(ValueError):
            FadeRenderer(generations=0)


class TestOverlay:
    """Tests for the two-particle debug overlay."""

    def test_labels(self):
        a = Particle(mass=1.0, x=-3.0, vx=1.5, ax=0.25)
        b = Particle(mass=1.0, x=1.0, y=3.0)
        labels = debug_labels([a, b])

        assert labels[0] == "accelerations 0.250000::0.000000   0.000000::0.000000"
        assert labels[1].startswith("velocities 1.500000::0.000000")
        assert labels[2].endswith("separation 5.000000")

    def test_labels_need_two_particles(self):
        with pytest.raises(ValueError):
            debug_labels([Particle(mass=1.0)] * 3)

    def test_overlay_draws_text_rows(self):
        far = [Particle(mass=1.0, x=1e5), Particle(mass=1.0, x=-1e5)]
        with_text = DiskRenderer(size=400, radius=2, overlay=True).render(far)
        without = DiskRenderer(size=400, radius=2, overlay=False).render(far)

        assert without.count(1) == 0
        ys, _ = np.nonzero(with_text.pixels)
        assert ys.size > 0
        assert ys.max() <= 100

    def test_overlay_ignored_for_three_particles(self):
        far = [Particle(mass=1.0, x=1e5)] * 3
        frame = DiskRenderer(size=400, radius=2, overlay=True).render(far)
        assert frame.count(1) == 0

    def test_overlay_leaves_particles_untouched(self):
        particles = (Particle(mass=1.0, x=5.0, vx=2.0), Particle(mass=1.0, x=-5.0))
        DiskRenderer(size=400, radius=2, overlay=True).render(particles)
        assert particles[0] == Particle(mass=1.0, x=5.0, vx=2.0)


class TestFactory:
    """Tests for create_renderer."""

    def test_modes(self):
        assert type(create_renderer("solid")) is DiskRenderer
        fade = create_renderer("fade", generations=4)
        assert isinstance(fade, FadeRenderer)
        assert len(fade.palette) == 5

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            create_renderer("wireframe")

    def test_blank_frame(self):
        frame = Frame.blank(10, 5, GREEN_ON_BLACK)
        assert frame.shape == (5, 10)
        assert frame.count(0) == 50
