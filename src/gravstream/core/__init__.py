"""
Core engine primitives.

This layer knows NOTHING about pixels, images or encoders.
It only knows:
- Particles (immutable snapshots of mass, position, velocity, acceleration)
- Force laws (pairwise, pluggable)
- Integrators (leapfrog, symplectic Euler)
- The particle system that replaces its snapshot once per tick
"""

from gravstream.core.errors import (
    GravstreamError,
    NumericalInstabilityError,
    SinkClosedError,
    EncoderStartError,
)
from gravstream.core.particle import Particle, Force, ZERO_FORCE, random_particle
from gravstream.core.forces import (
    ForceModel,
    PowerLawGravity,
    softened_inverse_cube,
    inverse_square,
    net_force,
    net_forces,
)
from gravstream.core.integrators import Integrator, Leapfrog, SymplecticEuler, create_integrator
from gravstream.core.system import ParticleSystem

__all__ = [
    "GravstreamError",
    "NumericalInstabilityError",
    "SinkClosedError",
    "EncoderStartError",
    "Particle",
    "Force",
    "ZERO_FORCE",
    "random_particle",
    "ForceModel",
    "PowerLawGravity",
    "softened_inverse_cube",
    "inverse_square",
    "net_force",
    "net_forces",
    "Integrator",
    "Leapfrog",
    "SymplecticEuler",
    "create_integrator",
    "ParticleSystem",
]
