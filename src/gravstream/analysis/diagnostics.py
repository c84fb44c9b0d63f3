"""
Read-only diagnostics over a particle snapshot.

IMPORTANT: This is NOT seen by the integrator. One-way derivation only.

- kinetic_energy: Σ ½·m·v²
- potential_energy: Newtonian pair sum -G·m_i·m_j / r_ij (coincident pairs skipped)
- total_momentum, center_of_mass
- summarize: all of the above as a flat dict for logging
"""

from __future__ import annotations
from typing import Sequence

import numpy as np
from scipy.spatial.distance import pdist

from gravstream.core.particle import Particle


def _arrays(particles: Sequence[Particle]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    masses = np.array([p.mass for p in particles], dtype=np.float64)
    positions = np.array([p.position for p in particles], dtype=np.float64).reshape(-1, 2)
    velocities = np.array([p.velocity for p in particles], dtype=np.float64).reshape(-1, 2)
    return masses, positions, velocities


def kinetic_energy(particles: Sequence[Particle]) -> float:
    masses, _, velocities = _arrays(particles)
    return float(0.5 * np.sum(masses * np.sum(velocities**2, axis=1)))


def potential_energy(particles: Sequence[Particle], gravitational_constant: float) -> float:
    """
    Newtonian gravitational potential energy of the snapshot.

    Uses the unsoftened 1/r potential for every law, so it is a drift
    indicator for softened runs rather than their exact conserved energy.
    """
    if len(particles) < 2:
        return 0.0
    masses, positions, _ = _arrays(particles)
    distances = pdist(positions)
    # Pair products in the same (i < j) order as pdist
    i, j = np.triu_indices(len(particles), k=1)
    products = masses[i] * masses[j]
    apart = distances > 0
    return float(-gravitational_constant * np.sum(products[apart] / distances[apart]))


def total_momentum(particles: Sequence[Particle]) -> tuple[float, float]:
    masses, _, velocities = _arrays(particles)
    px, py = np.sum(masses[:, None] * velocities, axis=0)
    return float(px), float(py)


def center_of_mass(particles: Sequence[Particle]) -> tuple[float, float]:
    masses, positions, _ = _arrays(particles)
    cx, cy = np.sum(masses[:, None] * positions, axis=0) / masses.sum()
    return float(cx), float(cy)


def min_separation(particles: Sequence[Particle]) -> float:
    """Smallest pairwise distance (inf for a single particle)."""
    if len(particles) < 2:
        return float("inf")
    _, positions, _ = _arrays(particles)
    return float(pdist(positions).min())


def summarize(particles: Sequence[Particle], force_model=None) -> dict:
    """
    Flat dict of diagnostics for one snapshot.

    Potential and total energy are included when the force model exposes a
    `gravitational_constant`.
    """
    kinetic = kinetic_energy(particles)
    px, py = total_momentum(particles)
    cx, cy = center_of_mass(particles)
    stats = {
        "count": len(particles),
        "kinetic_energy": kinetic,
        "momentum_x": px,
        "momentum_y": py,
        "center_x": cx,
        "center_y": cy,
        "min_separation": min_separation(particles),
    }
    g = getattr(force_model, "gravitational_constant", None)
    if g is not None:
        potential = potential_energy(particles, g)
        stats["potential_energy"] = potential
        stats["total_energy"] = kinetic + potential
    return stats
