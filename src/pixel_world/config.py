"""Pipeline configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from pixel_world.types import ColliderMaterial, CombineRule


@dataclass
class PipelineConfig:
    """Configuration for asset loading, collision building and playback."""

    pixels_per_unit: float = 32.0  # 1 physics unit = 32 px
    concavity: float = 0.0025  # Relative to the outline's bounding-box diagonal
    collider_material: ColliderMaterial = field(default_factory=ColliderMaterial)
    playback_speed: float = 2.0
    level_identifiers: tuple[str, ...] = ("Level_0",)
    strict_frame_names: bool = False
    character_sheet: str = "images/character.json"
    initial_clip: str = "wait"
    enemy_names: tuple[str, ...] = ("test",)
    max_frame_time: float = 0.25

    def __post_init__(self):
        if self.pixels_per_unit <= 0:
            raise ValueError("pixels_per_unit must be positive")
        if self.concavity < 0:
            raise ValueError("concavity must not be negative")
        if self.playback_speed <= 0:
            raise ValueError("playback_speed must be positive")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PipelineConfig":
        """Create a config from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a value has the wrong type.
        """
        config = cls()
        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                continue
            if key == "collider_material":
                updates[key] = _material_from_dict(value)
            elif key in ("level_identifiers", "enemy_names"):
                if isinstance(value, str) or not all(isinstance(v, str) for v in value):
                    raise ValueError(f"{key} must be a list of strings")
                updates[key] = tuple(value)
            elif key in ("pixels_per_unit", "concavity", "playback_speed", "max_frame_time"):
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"{key} must be a number, got {value!r}")
                updates[key] = float(value)
            elif key == "strict_frame_names":
                if not isinstance(value, bool):
                    raise ValueError(f"{key} must be a boolean, got {value!r}")
                updates[key] = value
            else:
                if not isinstance(value, str):
                    raise ValueError(f"{key} must be a string, got {value!r}")
                updates[key] = value

        return replace(config, **updates)

    @classmethod
    def from_file(cls, path: Path | str) -> "PipelineConfig":
        """Load a config from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


def _material_from_dict(data: dict[str, Any]) -> ColliderMaterial:
    try:
        return ColliderMaterial(
            friction=float(data.get("friction", 0.0)),
            restitution=float(data.get("restitution", 0.0)),
            friction_combine=CombineRule(data.get("friction_combine", "max")),
            restitution_combine=CombineRule(data.get("restitution_combine", "min")),
        )
    except (AttributeError, TypeError) as e:
        raise ValueError(f"invalid collider_material: {data!r}") from e
