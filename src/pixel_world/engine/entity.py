"""Instances spawned from level spawn events."""

from __future__ import annotations

from typing import Optional

from pixel_world.config import PipelineConfig
from pixel_world.logging_config import get_logger
from pixel_world.types import (
    AnimatedInstance,
    AnimationState,
    EntityKind,
    SpawnEvent,
    SpawnEventType,
)

logger = get_logger("engine.entity")


class EntityManager:
    """Owns the animated instances of the world."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        """Initialize the entity manager.

        Args:
            config: Sheet, initial clip and enemy names for spawned instances.
        """
        self._config = config or PipelineConfig()
        self._instances: dict[str, AnimatedInstance] = {}
        self._spawn_index = 0

    def spawn(self, event: SpawnEvent) -> Optional[AnimatedInstance]:
        """Create the instance a spawn event asks for.

        Args:
            event: The spawn request.

        Returns:
            The new instance, or None for an enemy name that is not spawned.
        """
        if event.type == SpawnEventType.SPAWN_PLAYER:
            kind = EntityKind.PLAYER
        else:
            if event.name not in self._config.enemy_names:
                logger.debug("Ignoring enemy %r", event.name)
                return None
            kind = EntityKind.ENEMY

        instance_id = f"{kind.value}_{self._spawn_index}"
        self._spawn_index += 1

        animation = AnimationState(speed=self._config.playback_speed)
        animation.set_clip(self._config.initial_clip, loop=True)

        instance = AnimatedInstance(
            id=instance_id,
            kind=kind,
            position=event.position.copy(),
            sheet_id=self._config.character_sheet,
            animation=animation,
            name=event.name,
        )
        self._instances[instance_id] = instance
        logger.debug("Spawned %s at (%.1f, %.1f)", instance_id, instance.position.x, instance.position.y)
        return instance

    def remove(self, instance_id: str) -> Optional[AnimatedInstance]:
        """Remove an instance by ID."""
        return self._instances.pop(instance_id, None)

    def get(self, instance_id: str) -> Optional[AnimatedInstance]:
        """Get an instance by ID."""
        return self._instances.get(instance_id)

    def by_kind(self, kind: EntityKind) -> list[AnimatedInstance]:
        """Get all instances of a kind, in spawn order."""
        return [i for i in self._instances.values() if i.kind == kind]

    @property
    def instances(self) -> list[AnimatedInstance]:
        return list(self._instances.values())
