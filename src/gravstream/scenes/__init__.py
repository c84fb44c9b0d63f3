"""
Scenes: frame sources driven one tick at a time.

- NBodyScene: particle system + renderer (render, then step)
- LissajousScene: phase-shifting Lissajous figure
- create_scene: build the scene a SimulationConfig describes
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from gravstream.scenes.base import Scene
from gravstream.scenes.nbody import NBodyScene, create_nbody_scene, create_force_model
from gravstream.scenes.lissajous import LissajousScene, create_lissajous_scene

if TYPE_CHECKING:
    from gravstream.config import SimulationConfig


def create_scene(config: "SimulationConfig", rng: np.random.Generator | None = None) -> Scene:
    """
    Build the scene for a config with its own random source.

    Args:
        config: Preset to build
        rng: Random source; a fresh one seeded from config.seed if None
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)
    if config.scene == "nbody":
        return create_nbody_scene(config.physics, config.render, rng)
    if config.scene == "lissajous":
        return create_lissajous_scene(config.lissajous, rng)
    raise ValueError(f"unknown scene {config.scene!r}")


__all__ = [
    "Scene",
    "NBodyScene",
    "create_nbody_scene",
    "create_force_model",
    "LissajousScene",
    "create_lissajous_scene",
    "create_scene",
]
