"""Fixed-rate loop driving engine updates."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pixel_world.engine import GameEngine


class GameLoop:
    """Main loop that ticks the engine once per frame."""

    def __init__(
        self,
        engine: GameEngine,
        target_fps: int = 60,
        max_frame_time: Optional[float] = None,
    ):
        """Initialize the game loop.

        Args:
            engine: The game engine.
            target_fps: Target frames per second.
            max_frame_time: Delta time cap; defaults to the engine config's.
        """
        if target_fps <= 0:
            raise ValueError("target_fps must be positive")
        self.engine = engine
        self.target_fps = target_fps
        self.target_frame_time = 1.0 / target_fps
        self.max_frame_time = (
            max_frame_time if max_frame_time is not None else engine.config.max_frame_time
        )

        self._running = False
        self._last_time = 0.0
        self._frame_count = 0
        self._total_frames = 0
        self._fps = 0.0
        self._fps_update_time = 0.0

    def tick(self, dt: float) -> None:
        """Process a single game tick.

        Args:
            dt: Delta time in seconds.
        """
        self.engine.update(dt)

        # Track FPS
        self._total_frames += 1
        self._frame_count += 1
        self._fps_update_time += dt
        if self._fps_update_time >= 1.0:
            self._fps = self._frame_count / self._fps_update_time
            self._frame_count = 0
            self._fps_update_time = 0.0

    def start(self) -> None:
        """Start the game loop."""
        self._running = True
        self._last_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def frame_count(self) -> int:
        """Total ticks processed."""
        return self._total_frames

    def process_frame(self) -> float:
        """Process a single frame with timing.

        Returns:
            The delta time the engine was ticked with.
        """
        current_time = time.perf_counter()
        dt = current_time - self._last_time
        self._last_time = current_time

        # Cap delta time to prevent spiral of death
        if dt > self.max_frame_time:
            dt = self.max_frame_time

        self.tick(dt)

        return dt

    async def run_async(self, max_frames: Optional[int] = None) -> None:
        """Run the game loop asynchronously.

        Args:
            max_frames: Stop after this many frames; run until stopped if None.
        """
        self.start()
        frames = 0
        while self._running:
            frame_start = time.perf_counter()

            self.process_frame()
            frames += 1
            if max_frames is not None and frames >= max_frames:
                self.stop()
                break

            # Sleep to maintain target FPS
            frame_time = time.perf_counter() - frame_start
            sleep_time = max(0, self.target_frame_time - frame_time)

            if sleep_time > 0:
                await asyncio.sleep(sleep_time)
