"""
Visualization utilities.

- Trajectory plots
- Energy drift plots
"""

from gravstream.viz.trajectories import (
    plot_trajectories,
    plot_energy_drift,
    plot_run_summary,
    save_figure,
)

__all__ = [
    "plot_trajectories",
    "plot_energy_drift",
    "plot_run_summary",
    "save_figure",
]
