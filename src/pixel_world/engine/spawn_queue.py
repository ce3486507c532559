"""Ordered queue of spawn events produced by level loading."""

from __future__ import annotations

from collections import deque
from typing import Iterable

from pixel_world.types import SpawnEvent


class SpawnEventQueue:
    """FIFO of spawn requests, drained once per tick."""

    def __init__(self):
        self._events: deque[SpawnEvent] = deque()

    def push(self, event: SpawnEvent) -> None:
        self._events.append(event)

    def extend(self, events: Iterable[SpawnEvent]) -> None:
        self._events.extend(events)

    def drain(self) -> list[SpawnEvent]:
        """Remove and return every queued event, oldest first."""
        events = list(self._events)
        self._events.clear()
        return events

    def __len__(self) -> int:
        return len(self._events)
