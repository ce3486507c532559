"""Game engine for Pixel World."""

from __future__ import annotations

from .game_engine import GameEngine
from .entity import EntityManager
from .reporter import ErrorReporter, LoadFailure, LoadReport
from .spawn_queue import SpawnEventQueue

__all__ = [
    "GameEngine",
    "EntityManager",
    "ErrorReporter",
    "LoadFailure",
    "LoadReport",
    "SpawnEventQueue",
]
