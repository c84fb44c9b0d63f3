"""
TrajectoryRecorder: keeps a bounded history of snapshots for offline plots.

Recording is opt-in and only meant for finite runs (the CLI `plot`
command). Streaming runs never record.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from gravstream.analysis.diagnostics import kinetic_energy, potential_energy
from gravstream.core.particle import Particle


@dataclass
class TrajectoryRecorder:
    """Collects positions and energies tick by tick."""

    gravitational_constant: float | None = None
    every: int = 1  # Record one snapshot out of `every`

    ticks: list[int] = field(default_factory=list, init=False)
    positions: list[np.ndarray] = field(default_factory=list, init=False)
    energies: list[float] = field(default_factory=list, init=False)

    def record(self, tick: int, particles: Sequence[Particle]):
        if tick % self.every:
            return
        self.ticks.append(tick)
        self.positions.append(np.array([p.position for p in particles], dtype=np.float64))
        energy = kinetic_energy(particles)
        if self.gravitational_constant is not None:
            energy += potential_energy(particles, self.gravitational_constant)
        self.energies.append(energy)

    def __len__(self) -> int:
        return len(self.ticks)

    def trajectory_arrays(self) -> np.ndarray:
        """Positions as a [n_records, n_particles, 2] array."""
        if not self.positions:
            return np.empty((0, 0, 2))
        return np.stack(self.positions)

    def relative_energy_drift(self) -> np.ndarray:
        """(E(t) - E(0)) / |E(0)| for each record."""
        energies = np.asarray(self.energies, dtype=np.float64)
        if energies.size == 0 or energies[0] == 0:
            return np.zeros_like(energies)
        return (energies - energies[0]) / abs(energies[0])
