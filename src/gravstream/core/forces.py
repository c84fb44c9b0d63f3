"""
Force laws: pairwise gravitational attraction between two particles.

A force law is a small strategy object parameterized by its physical
constants. Two laws are provided:
- softened_inverse_cube: c = G·m_a·m_b / (r³ + ε), bounded near close approach
- inverse_square: c = G·m_a·m_b / r³, plain Newtonian (no softening)

In both cases the force on `a` is c·(b - a), so the magnitude of the
unsoftened law falls off as 1/r².

Coincident particles (including a particle with itself) exert no force on
each other. This is the only division guard the law needs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Sequence

from gravstream.core.particle import Force, Particle, ZERO_FORCE


class ForceModel(Protocol):
    """Protocol for pairwise force laws."""

    def force(self, a: Particle, b: Particle) -> Force:
        """
        Force acted on `a` by `b`.

        Must return the zero force when a and b are at the same position.
        """
        ...


@dataclass(frozen=True)
class PowerLawGravity:
    """
    Attraction with coefficient G·m_a·m_b / (r^exponent + softening).

    The coefficient multiplies the displacement vector (b - a), so
    exponent=3 gives an inverse-square magnitude.
    """

    gravitational_constant: float = 1.0
    exponent: float = 3.0
    softening: float = 0.0  # Added to the denominator; 0 disables it

    def __post_init__(self):
        if self.softening < 0:
            raise ValueError(f"softening must be >= 0, got {self.softening!r}")

    def force(self, a: Particle, b: Particle) -> Force:
        d = a.distance_squared(b)
        if d == 0:
            # same particle, or two coincident ones
            return ZERO_FORCE

        r_pow = d ** (self.exponent / 2.0)
        c = self.gravitational_constant * a.mass * b.mass / (r_pow + self.softening)
        return Force(c * (b.x - a.x), c * (b.y - a.y))


def softened_inverse_cube(
    gravitational_constant: float = 1.0,
    softening: float = 1e6,
) -> PowerLawGravity:
    """Softened law: G·m_a·m_b·(b - a) / (r³ + softening)."""
    return PowerLawGravity(
        gravitational_constant=gravitational_constant,
        exponent=3.0,
        softening=softening,
    )


def inverse_square(gravitational_constant: float = 1.0) -> PowerLawGravity:
    """Unsoftened Newtonian law: |F| = G·m_a·m_b / r²."""
    return PowerLawGravity(
        gravitational_constant=gravitational_constant,
        exponent=3.0,
        softening=0.0,
    )


def net_force(p: Particle, particles: Sequence[Particle], model: ForceModel) -> Force:
    """
    Total force on `p` from every particle in the snapshot.

    `p` itself may be part of `particles`; it contributes zero.
    """
    total = ZERO_FORCE
    for other in particles:
        total = total + model.force(p, other)
    return total


def net_forces(particles: Sequence[Particle], model: ForceModel) -> list[Force]:
    """Net force on each particle, all computed against the same snapshot."""
    return [net_force(p, particles, model) for p in particles]
