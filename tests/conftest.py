"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def softened():
    """Softened law with the default build-time constants."""
    from gravstream.core import softened_inverse_cube
    return softened_inverse_cube(gravitational_constant=1e7, softening=1e6)


@pytest.fixture
def newtonian():
    """Unit-constant unsoftened inverse-square law."""
    from gravstream.core import inverse_square
    return inverse_square(gravitational_constant=1.0)


@pytest.fixture
def small_physics():
    """Three particles with default constants."""
    from gravstream.config import PhysicsConfig
    return PhysicsConfig(count=3)


@pytest.fixture
def small_render():
    """A small canvas so frames are cheap to render and encode."""
    from gravstream.config import RenderConfig
    return RenderConfig(size=64, draw_radius=2)


@pytest.fixture
def small_scene(small_physics, small_render, rng):
    """N-body scene on a 65x65 canvas."""
    from gravstream.scenes import create_nbody_scene
    return create_nbody_scene(small_physics, small_render, rng)
