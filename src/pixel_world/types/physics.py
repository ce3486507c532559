"""Collider types handed to the physics collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np


class CombineRule(Enum):
    """How two touching colliders combine a material coefficient."""

    AVERAGE = "average"
    MIN = "min"
    MULTIPLY = "multiply"
    MAX = "max"


@dataclass(frozen=True)
class ColliderMaterial:
    """Surface material shared by all level colliders."""

    friction: float = 0.0
    restitution: float = 0.0
    friction_combine: CombineRule = CombineRule.MAX
    restitution_combine: CombineRule = CombineRule.MIN


@dataclass
class ConvexSubShape:
    """Convex polygon, (N, 2) counter-clockwise, plus its material."""

    points: np.ndarray
    material: ColliderMaterial = field(default_factory=ColliderMaterial)

    def scaled(self, factor: float) -> "ConvexSubShape":
        return replace(self, points=self.points * factor)

    @property
    def area(self) -> float:
        x = self.points[:, 0]
        y = self.points[:, 1]
        return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


@dataclass
class LayerColliders:
    """Collision output of one Tiles layer.

    Outlines are in world pixels; shapes are relative to `position`.
    """

    layer_index: int
    position: tuple[float, float]
    outlines: list[np.ndarray] = field(default_factory=list)
    shapes: list[ConvexSubShape] = field(default_factory=list)

    def to_physics_units(self, pixels_per_unit: float) -> "LayerColliders":
        """Copy with positions and shapes divided by the pixel scale."""
        factor = 1.0 / pixels_per_unit
        return LayerColliders(
            layer_index=self.layer_index,
            position=(self.position[0] * factor, self.position[1] * factor),
            outlines=[outline * factor for outline in self.outlines],
            shapes=[shape.scaled(factor) for shape in self.shapes],
        )
