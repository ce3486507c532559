"""Sprite sheet and animation types."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FrameRect:
    """Sub-image rectangle inside the sheet texture."""

    x: int
    y: int
    w: int
    h: int

    @property
    def min(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def max(self) -> tuple[int, int]:
        return (self.x + self.w, self.y + self.h)

    def as_box(self) -> tuple[int, int, int, int]:
        """Return (left, top, right, bottom), the box Pillow crops with."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class Frame:
    """Single frame of animation."""

    index: int  # Ordinal position in the sheet
    duration: float  # Seconds


@dataclass(frozen=True)
class AnimationClip:
    """Named, ordered run of frames taken from a frame tag."""

    name: str
    frames: tuple[Frame, ...]
    direction: str = "forward"

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def last_index(self) -> int:
        return len(self.frames) - 1


@dataclass(frozen=True)
class TextureAtlas:
    """Atlas layout handed to the renderer."""

    image: Path
    size: tuple[int, int]
    rects: tuple[FrameRect, ...] = ()

    @classmethod
    def from_grid(
        cls,
        image: Path | str,
        tile_size: int,
        columns: int,
        rows: int,
    ) -> "TextureAtlas":
        """Create an atlas partitioned into a uniform grid, row-major."""
        rects = tuple(
            FrameRect(col * tile_size, row * tile_size, tile_size, tile_size)
            for row in range(rows)
            for col in range(columns)
        )
        return cls(image=Path(image), size=(columns * tile_size, rows * tile_size), rects=rects)

    def __len__(self) -> int:
        return len(self.rects)


@dataclass(frozen=True)
class SpriteSheet:
    """Parsed frame-packing export, shared read-only by animated instances."""

    frames: tuple[Frame, ...]
    rects: tuple[FrameRect, ...]
    clips: dict[str, AnimationClip] = field(default_factory=dict)
    atlas: Optional[TextureAtlas] = None

    def clip(self, name: str) -> Optional[AnimationClip]:
        """Get a clip by name."""
        return self.clips.get(name)

    def __len__(self) -> int:
        return len(self.frames)
