"""Animated instance types and the per-instance playback state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .sprites import AnimationClip, SpriteSheet


class PlaybackPhase(Enum):
    """Where an animation state sits in its playback cycle."""

    DIRTY = "dirty"
    PLAYING = "playing"
    FROZEN = "frozen"


class EntityKind(Enum):
    """Kinds of instances spawned from level placements."""

    PLAYER = "player"
    ENEMY = "enemy"


@dataclass
class Position:
    """2D position in world pixels (Y up)."""

    x: float
    y: float

    def copy(self) -> "Position":
        """Create a copy of this position."""
        return Position(self.x, self.y)

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)


@dataclass
class FrameTimer:
    """One-shot countdown for the frame on display.

    Once finished it stays finished until reset, so a frozen clip never
    fires again.
    """

    duration: float = 0.0
    elapsed: float = 0.0
    finished: bool = False

    def reset(self, duration: float) -> None:
        self.duration = duration
        self.elapsed = 0.0
        self.finished = False

    def tick(self, dt: float) -> bool:
        """Advance by dt seconds. Returns True only on the tick that finishes."""
        if self.finished:
            return False
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self.finished = True
            return True
        return False

    @property
    def remaining(self) -> float:
        return max(0.0, self.duration - self.elapsed)


@dataclass
class AnimationState:
    """Current state of an instance's animation."""

    current_clip: str = ""
    frame_index: int = 0
    timer: FrameTimer = field(default_factory=FrameTimer)
    loop: bool = True
    dirty: bool = True
    speed: float = 1.0
    displayed_frame: Optional[int] = None  # Sheet ordinal the renderer draws

    def set_clip(self, name: str, loop: bool = True) -> None:
        """Switch to another clip; selecting the active clip does nothing."""
        if name == self.current_clip:
            return
        self.current_clip = name
        self.frame_index = 0
        self.loop = loop
        self.dirty = True

    def advance(self, sheet: "SpriteSheet", dt: float, speed: Optional[float] = None) -> bool:
        """Advance playback by dt seconds.

        A dirty state commits frame 0 of its clip and consumes no time.

        Args:
            sheet: Sprite sheet the clip is looked up in.
            dt: Elapsed time in seconds.
            speed: Playback speed override; defaults to the state's speed.

        Returns:
            True if the displayed frame changed.
        """
        speed = self.speed if speed is None else speed
        if speed <= 0:
            raise ValueError(f"playback speed must be positive, got {speed}")

        clip = sheet.clip(self.current_clip)

        if self.dirty:
            self.dirty = False
            if clip is None or not clip.frames:
                return False
            return self._commit_frame(clip, speed)

        if clip is None or not clip.frames:
            return False
        if not self.timer.tick(dt):
            return False

        if self.frame_index >= clip.last_index:
            if not self.loop:
                return False
            self.frame_index = 0
        else:
            self.frame_index += 1
        return self._commit_frame(clip, speed)

    def _commit_frame(self, clip: "AnimationClip", speed: float) -> bool:
        frame = clip.frames[self.frame_index]
        self.timer.reset(frame.duration / speed)
        changed = self.displayed_frame != frame.index
        self.displayed_frame = frame.index
        return changed

    @property
    def phase(self) -> PlaybackPhase:
        if self.dirty:
            return PlaybackPhase.DIRTY
        if self.timer.finished and not self.loop:
            return PlaybackPhase.FROZEN
        return PlaybackPhase.PLAYING

    def copy(self) -> "AnimationState":
        """Create a copy of this animation state."""
        return AnimationState(
            current_clip=self.current_clip,
            frame_index=self.frame_index,
            timer=FrameTimer(self.timer.duration, self.timer.elapsed, self.timer.finished),
            loop=self.loop,
            dirty=self.dirty,
            speed=self.speed,
            displayed_frame=self.displayed_frame,
        )


@dataclass
class AnimatedInstance:
    """An instance in the world that plays a sprite sheet animation."""

    id: str
    kind: EntityKind
    position: Position
    sheet_id: str
    animation: AnimationState
    name: Optional[str] = None

    def copy(self) -> "AnimatedInstance":
        """Create a copy of this instance."""
        return AnimatedInstance(
            id=self.id,
            kind=self.kind,
            position=self.position.copy(),
            sheet_id=self.sheet_id,
            animation=self.animation.copy(),
            name=self.name,
        )
