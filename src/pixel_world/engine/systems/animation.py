"""Animation system for sprite sheet playback."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pixel_world.types import AnimatedInstance, SpriteSheet


class AnimationSystem:
    """System that advances instance animations over time."""

    def update(
        self,
        instances: Iterable[AnimatedInstance],
        sheets: Callable[[str], Optional[SpriteSheet]],
        dt: float,
    ) -> list[AnimatedInstance]:
        """Advance every instance's animation once.

        Args:
            instances: Instances to update.
            sheets: Looks up a sprite sheet by ID.
            dt: Delta time in seconds.

        Returns:
            Instances whose displayed frame changed.
        """
        changed = []
        for instance in instances:
            sheet = sheets(instance.sheet_id)
            if sheet is None:
                continue
            if instance.animation.advance(sheet, dt):
                changed.append(instance)
        return changed
