"""Spawn events produced while parsing a level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .entities import Position


class SpawnEventType(Enum):
    """Types of spawn requests a level can emit."""

    SPAWN_PLAYER = "SPAWN_PLAYER"
    SPAWN_ENEMY = "SPAWN_ENEMY"


@dataclass(frozen=True)
class SpawnEvent:
    """Request to spawn an instance at a world position."""

    type: SpawnEventType
    position: Position
    name: Optional[str] = None
    level: Optional[str] = None

    @classmethod
    def player(cls, position: Position, level: Optional[str] = None) -> "SpawnEvent":
        return cls(type=SpawnEventType.SPAWN_PLAYER, position=position, level=level)

    @classmethod
    def enemy(cls, name: str, position: Position, level: Optional[str] = None) -> "SpawnEvent":
        return cls(type=SpawnEventType.SPAWN_ENEMY, position=position, name=name, level=level)
