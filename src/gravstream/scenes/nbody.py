"""
NBodyScene: a ParticleSystem drawn by a renderer.

The renderer only ever sees the immutable particle tuple, so rendering and
integration are independent of each other.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from gravstream.analysis.diagnostics import summarize
from gravstream.core.forces import inverse_square, softened_inverse_cube
from gravstream.core.integrators import create_integrator
from gravstream.core.system import ParticleSystem
from gravstream.render.frame import Frame
from gravstream.render.renderers import DiskRenderer, create_renderer
from gravstream.scenes.base import Scene

if TYPE_CHECKING:
    from gravstream.config import PhysicsConfig, RenderConfig


class NBodyScene(Scene):
    """Render-then-step view of a particle system."""

    def __init__(self, system: ParticleSystem, renderer: DiskRenderer):
        super().__init__()
        self.system = system
        self.renderer = renderer

    @property
    def particles(self):
        return self.system.particles

    def render(self) -> Frame:
        return self.renderer.render(self.system.particles)

    def advance(self) -> None:
        self.system.step()
        self.tick += 1

    def diagnostics(self) -> dict:
        stats = summarize(self.system.particles, self.system.force_model)
        stats["tick"] = self.tick
        return stats


def create_force_model(physics: "PhysicsConfig"):
    """Force law selected by PhysicsConfig.force_law."""
    if physics.force_law == "softened":
        return softened_inverse_cube(physics.gravitational_constant, physics.softening)
    if physics.force_law == "inverse_square":
        return inverse_square(physics.gravitational_constant)
    raise ValueError(f"unknown force law {physics.force_law!r}")


def create_nbody_scene(
    physics: "PhysicsConfig",
    render: "RenderConfig",
    rng: np.random.Generator,
) -> NBodyScene:
    """
    Build a scene with randomly placed particles at rest.

    Args:
        physics: Physical constants and scheme selection
        render: Canvas settings (also sets the initial position spread)
        rng: The run's own random source

    Returns:
        NBodyScene ready for its first render
    """
    system = ParticleSystem.random(
        count=physics.count,
        rng=rng,
        mass=physics.mass,
        spread=render.size / physics.spread_divisor,
        force_model=create_force_model(physics),
        integrator=create_integrator(physics.integrator),
        epoch=physics.epoch,
        check_finite=physics.check_finite,
    )
    renderer = create_renderer(
        render.mode,
        size=render.size,
        radius=render.draw_radius,
        padded=render.padded,
        overlay=render.overlay,
        generations=render.fade_generations,
    )
    return NBodyScene(system, renderer)
