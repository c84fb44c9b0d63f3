"""
Particle: a point mass in the plane.

Particles are immutable snapshots. A tick never edits a particle in place:
the integrator builds a fresh Particle from the previous one, so a reader
holding the old snapshot never sees a half-updated state.

Acceleration is only meaningful for the leapfrog scheme, where it carries
the previous tick's acceleration into the next half-kick.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np


@dataclass(frozen=True)
class Force:
    """Transient force vector, recomputed every tick."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Force) -> Force:
        return Force(self.x + other.x, self.y + other.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


ZERO_FORCE = Force()


@dataclass(frozen=True)
class Particle:
    """A point mass with position, velocity and (leapfrog) acceleration."""

    mass: float
    x: float = 0.0  # Position, world units (unbounded)
    y: float = 0.0
    vx: float = 0.0  # Velocity
    vy: float = 0.0
    ax: float = 0.0  # Previous acceleration (leapfrog half-kick)
    ay: float = 0.0

    def __post_init__(self):
        if not self.mass > 0:
            raise ValueError(f"mass must be positive, got {self.mass!r}")

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> tuple[float, float]:
        return self.vx, self.vy

    @property
    def acceleration(self) -> tuple[float, float]:
        return self.ax, self.ay

    def distance_squared(self, other: Particle) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def non_finite_component(self) -> tuple[str, float] | None:
        """Return the first NaN/inf component as (name, value), or None."""
        for name in ("x", "y", "vx", "vy", "ax", "ay"):
            value = getattr(self, name)
            if not math.isfinite(value):
                return name, value
        return None


def random_particle(
    rng: np.random.Generator,
    mass: float,
    spread: float,
) -> Particle:
    """
    Create a particle at rest with a normally distributed position.

    Args:
        rng: The run's random source (never a global one)
        mass: Particle mass
        spread: Standard deviation of each position component

    Returns:
        Particle at (N(0, spread), N(0, spread)) with zero velocity
    """
    x, y = rng.normal(0.0, spread, size=2)
    return Particle(mass=mass, x=float(x), y=float(y))
