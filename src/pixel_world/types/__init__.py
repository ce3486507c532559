"""Type definitions for Pixel World."""

from .sprites import (
    FrameRect,
    Frame,
    AnimationClip,
    TextureAtlas,
    SpriteSheet,
)
from .entities import (
    PlaybackPhase,
    EntityKind,
    Position,
    FrameTimer,
    AnimationState,
    AnimatedInstance,
)
from .level import (
    LayerType,
    TilesetDefinition,
    FieldInstance,
    EntityPlacement,
    TilePlacement,
    TileSprite,
    EntitiesLayer,
    TilesLayer,
    Layer,
    Level,
    LevelProject,
    TileLayerRender,
    LoadedLevel,
)
from .physics import (
    CombineRule,
    ColliderMaterial,
    ConvexSubShape,
    LayerColliders,
)
from .events import (
    SpawnEventType,
    SpawnEvent,
)

__all__ = [
    # Sprites
    "FrameRect",
    "Frame",
    "AnimationClip",
    "TextureAtlas",
    "SpriteSheet",
    # Entities
    "PlaybackPhase",
    "EntityKind",
    "Position",
    "FrameTimer",
    "AnimationState",
    "AnimatedInstance",
    # Level
    "LayerType",
    "TilesetDefinition",
    "FieldInstance",
    "EntityPlacement",
    "TilePlacement",
    "TileSprite",
    "EntitiesLayer",
    "TilesLayer",
    "Layer",
    "Level",
    "LevelProject",
    "TileLayerRender",
    "LoadedLevel",
    # Physics
    "CombineRule",
    "ColliderMaterial",
    "ConvexSubShape",
    "LayerColliders",
    # Events
    "SpawnEventType",
    "SpawnEvent",
]
