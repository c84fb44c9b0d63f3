"""
Integrators: advance one particle by one epoch given its net force.

Both schemes are explicit with respect to the tick: the force passed in was
computed against the pre-step snapshot of the whole system. The system, not
the integrator, guarantees that ordering.

- Leapfrog: half-kick with the previous acceleration, drift, then half-kick
  with the new acceleration, which is stored for the next tick.
- SymplecticEuler: drift with the current velocity, then kick with F/m.

Mass is copied through unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Protocol, Sequence

from gravstream.core.particle import Force, Particle


class Integrator(Protocol):
    """Protocol for single-particle update schemes."""

    def prime(self, particles: Sequence[Particle], forces: Sequence[Force]) -> list[Particle]:
        """
        Prepare per-particle state once, before the first tick.

        Args:
            particles: Initial snapshot
            forces: Net forces on that snapshot

        Returns:
            New snapshot ready for the first `advance`
        """
        ...

    def advance(self, p: Particle, force: Force, epoch: float) -> Particle:
        """Return the particle one epoch later."""
        ...


@dataclass(frozen=True)
class Leapfrog:
    """
    Kick-drift-kick leapfrog with acceleration carried between ticks.

    Update for timestep dt, previous acceleration a_prev, new force F:
        v_half = v + ½·dt·a_prev
        x'     = x + dt·v_half
        a'     = F / m
        v'     = v_half + ½·dt·a'
    """

    def prime(self, particles: Sequence[Particle], forces: Sequence[Force]) -> list[Particle]:
        """Seed each particle's acceleration from the initial net force."""
        return [
            replace(p, ax=f.x / p.mass, ay=f.y / p.mass)
            for p, f in zip(particles, forces)
        ]

    def advance(self, p: Particle, force: Force, epoch: float) -> Particle:
        half = 0.5 * epoch
        vx = p.vx + half * p.ax
        vy = p.vy + half * p.ay
        x = p.x + epoch * vx
        y = p.y + epoch * vy
        ax = force.x / p.mass
        ay = force.y / p.mass
        return Particle(
            mass=p.mass,
            x=x,
            y=y,
            vx=vx + half * ax,
            vy=vy + half * ay,
            ax=ax,
            ay=ay,
        )


@dataclass(frozen=True)
class SymplecticEuler:
    """Drift then kick. No persistent acceleration is needed."""

    def prime(self, particles: Sequence[Particle], forces: Sequence[Force]) -> list[Particle]:
        return list(particles)

    def advance(self, p: Particle, force: Force, epoch: float) -> Particle:
        return Particle(
            mass=p.mass,
            x=p.x + epoch * p.vx,
            y=p.y + epoch * p.vy,
            vx=p.vx + epoch * force.x / p.mass,
            vy=p.vy + epoch * force.y / p.mass,
        )


INTEGRATORS = {
    "leapfrog": Leapfrog,
    "euler": SymplecticEuler,
}


def create_integrator(name: str) -> Integrator:
    """Factory for an integrator by name ("leapfrog" or "euler")."""
    try:
        return INTEGRATORS[name]()
    except KeyError:
        raise ValueError(
            f"unknown integrator {name!r}, expected one of {sorted(INTEGRATORS)}"
        ) from None
