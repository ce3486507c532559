"""Main application package."""

from __future__ import annotations

from .game_loop import GameLoop
from .cli import main

__all__ = [
    "GameLoop",
    "main",
]
