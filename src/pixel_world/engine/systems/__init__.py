"""Game systems for Pixel World."""

from __future__ import annotations

from .animation import AnimationSystem

__all__ = [
    "AnimationSystem",
]
