"""
ParticleSystem: the ordered particle snapshot and its time evolution.

The system owns its particle tuple and replaces it wholesale on every step.
Forces for a step are ALL computed against the pre-step snapshot before any
particle is advanced (no sequential in-tick updates).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from gravstream.core.errors import NumericalInstabilityError
from gravstream.core.forces import ForceModel, net_forces
from gravstream.core.integrators import Integrator
from gravstream.core.particle import Particle, random_particle


@dataclass
class ParticleSystem:
    """
    N particles under mutual attraction, advanced one epoch per step.

    Args:
        particles: Initial snapshot (N >= 1, N fixed for the run)
        force_model: Pairwise force law
        integrator: Update scheme
        epoch: Fixed timestep
        check_finite: Raise NumericalInstabilityError on NaN/inf after a step
    """

    particles: tuple[Particle, ...]
    force_model: ForceModel
    integrator: Integrator
    epoch: float
    check_finite: bool = True

    tick: int = field(default=0, init=False)

    def __post_init__(self):
        self.particles = tuple(self.particles)
        if not self.particles:
            raise ValueError("a particle system needs at least one particle")
        if not self.epoch > 0:
            raise ValueError(f"epoch must be positive, got {self.epoch!r}")
        # Seed integrator state (leapfrog initial accelerations)
        forces = net_forces(self.particles, self.force_model)
        self.particles = tuple(self.integrator.prime(self.particles, forces))

    @classmethod
    def random(
        cls,
        count: int,
        rng: np.random.Generator,
        mass: float,
        spread: float,
        force_model: ForceModel,
        integrator: Integrator,
        epoch: float,
        check_finite: bool = True,
    ) -> ParticleSystem:
        """Create `count` particles at rest, scattered by the run's RNG."""
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        particles = [random_particle(rng, mass, spread) for _ in range(count)]
        return cls(
            particles=tuple(particles),
            force_model=force_model,
            integrator=integrator,
            epoch=epoch,
            check_finite=check_finite,
        )

    def __len__(self) -> int:
        return len(self.particles)

    @property
    def masses(self) -> tuple[float, ...]:
        return tuple(p.mass for p in self.particles)

    def forces(self):
        """Net force on each particle for the current snapshot."""
        return net_forces(self.particles, self.force_model)

    def step(self) -> tuple[Particle, ...]:
        """
        Advance the whole system by one epoch.

        Returns:
            The new snapshot (also stored on the system)
        """
        forces = self.forces()
        updated = tuple(
            self.integrator.advance(p, f, self.epoch)
            for p, f in zip(self.particles, forces)
        )
        if self.check_finite:
            _check_finite(updated, self.tick + 1)
        self.particles = updated
        self.tick += 1
        return updated

    def run(self, n_ticks: int) -> tuple[Particle, ...]:
        """Advance `n_ticks` epochs and return the final snapshot."""
        for _ in range(n_ticks):
            self.step()
        return self.particles

    def positions(self) -> np.ndarray:
        """Positions as an (N, 2) array."""
        return np.array([p.position for p in self.particles], dtype=np.float64)

    def velocities(self) -> np.ndarray:
        """Velocities as an (N, 2) array."""
        return np.array([p.velocity for p in self.particles], dtype=np.float64)


def _check_finite(particles: Sequence[Particle], tick: int):
    for index, p in enumerate(particles):
        bad = p.non_finite_component()
        if bad is not None:
            raise NumericalInstabilityError(tick, index, *bad)
