"""
Base class for scenes.

A scene is anything that produces one frame per tick:
- render() draws the current state, without changing it
- advance() moves the state forward by one tick

The run loop calls render, writes the frame, and only then advances, so a
frame that could not be delivered never costs a simulation step.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from gravstream.render.frame import Frame


class Scene(ABC):
    """Base class for frame sources."""

    def __init__(self):
        self.tick = 0

    @abstractmethod
    def render(self) -> Frame:
        """Draw the current state into a new frame."""
        ...

    @abstractmethod
    def advance(self) -> None:
        """Move the state forward by one tick."""
        ...

    def diagnostics(self) -> dict:
        """Measurements for periodic logging; empty by default."""
        return {"tick": self.tick}
