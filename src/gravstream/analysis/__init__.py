"""
Analysis layer: derived quantities for logging and plotting.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- kinetic/potential energy, momentum, center of mass
- summarize: flat diagnostics dict for the run loop's log lines
- TrajectoryRecorder: bounded snapshot history for offline plots
"""

from gravstream.analysis.diagnostics import (
    kinetic_energy,
    potential_energy,
    total_momentum,
    center_of_mass,
    min_separation,
    summarize,
)
from gravstream.analysis.recorder import TrajectoryRecorder

__all__ = [
    "kinetic_energy",
    "potential_energy",
    "total_momentum",
    "center_of_mass",
    "min_separation",
    "summarize",
    "TrajectoryRecorder",
]
