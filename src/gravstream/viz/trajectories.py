"""
Trajectory visualization for recorded runs.

Plots particle paths in world coordinates and the relative energy drift of
the integrator over the recorded ticks.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from gravstream.analysis.recorder import TrajectoryRecorder


def plot_trajectories(
    recorder: "TrajectoryRecorder",
    title: str = "Particle Trajectories",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    colors: Sequence[str] | None = None,
    show_start: bool = True,
    show_end: bool = True,
    extent: float | None = None,
) -> tuple[Figure, Axes]:
    """
    Plot every particle's path from a recorder.

    Args:
        recorder: TrajectoryRecorder with at least one record
        title: Plot title
        ax: Existing axes (creates new if None)
        colors: Optional color per particle
        show_start: Mark starting positions
        show_end: Mark final positions
        extent: Half-width of the shown square (the canvas is size / 2)

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    traj = recorder.trajectory_arrays()
    n_particles = traj.shape[1]

    if colors is None:
        cmap_lines = plt.get_cmap("tab10")
        colors = [cmap_lines(i % 10) for i in range(n_particles)]

    for i in range(n_particles):
        x_traj, y_traj = traj[:, i, 0], traj[:, i, 1]
        color = colors[i] if i < len(colors) else "black"
        ax.plot(x_traj, y_traj, color=color, linewidth=1.5, zorder=2, label=f"particle {i}")

        if show_start:
            ax.scatter(
                [x_traj[0]], [y_traj[0]],
                color=color, s=60, marker="o", zorder=3,
                edgecolors="black", linewidths=1
            )
        if show_end:
            ax.scatter(
                [x_traj[-1]], [y_traj[-1]],
                color=color, s=60, marker="s", zorder=3,
                edgecolors="black", linewidths=1
            )

    if extent is not None:
        ax.set_xlim(-extent, extent)
        ax.set_ylim(-extent, extent)

    # Screen convention: y grows downward on the rendered frames
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if n_particles:
        ax.legend(loc="upper right", fontsize=8)

    return fig, ax


def plot_energy_drift(
    recorder: "TrajectoryRecorder",
    title: str = "Relative Energy Drift",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """Plot (E(t) - E(0)) / |E(0)| against the tick number."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.plot(np.asarray(recorder.ticks), recorder.relative_energy_drift(), linewidth=1.5)
    ax.axhline(y=0.0, color="gray", linestyle=":", alpha=0.5)
    ax.set_xlabel("Time (ticks)")
    ax.set_ylabel("ΔE / |E₀|")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    return fig, ax


def plot_run_summary(
    recorder: "TrajectoryRecorder",
    title: str = "Run Summary",
    extent: float | None = None,
    figsize: tuple[float, float] = (14, 6),
) -> Figure:
    """Trajectories and energy drift side by side."""
    fig, axes = plt.subplots(1, 2, figsize=figsize)
    plot_trajectories(recorder, ax=axes[0], extent=extent)
    plot_energy_drift(recorder, ax=axes[1])
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150):
    """Save a figure, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
