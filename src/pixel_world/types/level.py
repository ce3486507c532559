"""Tile level types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from pixel_world.errors import MissingReferenceError

from .entities import Position
from .physics import LayerColliders
from .sprites import TextureAtlas


class LayerType(Enum):
    """Layer kinds the loader understands."""

    ENTITIES = "Entities"
    TILES = "Tiles"


@dataclass
class TilesetDefinition:
    """A texture partitioned into a uniform grid of tiles."""

    uid: int
    tile_size: int
    columns: int
    rows: int
    rel_path: str
    # tile id -> local polygon, (N, 2) float array, pixels, Y up
    collisions: dict[int, np.ndarray] = field(default_factory=dict)

    def collision(self, tile_id: int) -> Optional[np.ndarray]:
        """Get the local collision polygon of a tile id."""
        return self.collisions.get(tile_id)

    def atlas(self, base_path: Optional[Path] = None) -> TextureAtlas:
        """Grid atlas for this tileset's texture."""
        image = Path(self.rel_path)
        if base_path is not None:
            image = base_path / image
        return TextureAtlas.from_grid(image, self.tile_size, self.columns, self.rows)


@dataclass
class FieldInstance:
    """Custom field on an entity placement."""

    identifier: str
    value: Any = None


@dataclass
class EntityPlacement:
    """Entity placed on an Entities layer."""

    identifier: str
    px: tuple[int, int]
    fields: list[FieldInstance] = field(default_factory=list)

    def get_field(self, identifier: str) -> Optional[FieldInstance]:
        """Find a field by identifier."""
        for field_instance in self.fields:
            if field_instance.identifier == identifier:
                return field_instance
        return None


@dataclass
class TilePlacement:
    """Tile placed on a Tiles layer."""

    px: tuple[int, int]
    tile_id: int


@dataclass
class TileSprite:
    """Render placement for one tile: atlas index at a world position."""

    position: Position
    atlas_index: int


@dataclass
class EntitiesLayer:
    """Layer of entity placements."""

    entities: list[EntityPlacement] = field(default_factory=list)
    index: int = 0  # Position in the export's layerInstances

    @property
    def type(self) -> LayerType:
        return LayerType.ENTITIES


@dataclass
class TilesLayer:
    """Uniform grid layer referencing one tileset."""

    tileset_uid: int
    grid_size: int
    tiles: list[TilePlacement] = field(default_factory=list)
    columns: int = 0
    rows: int = 0
    index: int = 0  # Position in the export's layerInstances

    @property
    def type(self) -> LayerType:
        return LayerType.TILES

    def grid(self) -> np.ndarray:
        """Tile ids as a (rows, columns) array, -1 for empty cells."""
        rows = self.rows
        columns = self.columns
        for tile in self.tiles:
            rows = max(rows, tile.px[1] // self.grid_size + 1)
            columns = max(columns, tile.px[0] // self.grid_size + 1)
        grid = np.full((rows, columns), -1, dtype=np.int32)
        for tile in self.tiles:
            grid[tile.px[1] // self.grid_size, tile.px[0] // self.grid_size] = tile.tile_id
        return grid

    def tile_sprites(self, offset: Position) -> list[TileSprite]:
        """Tile centers in world space (Y up) for the renderer."""
        half = self.grid_size * 0.5
        return [
            TileSprite(
                position=Position(tile.px[0] + half + offset.x, -tile.px[1] - half + offset.y),
                atlas_index=tile.tile_id,
            )
            for tile in self.tiles
        ]


Layer = Union[EntitiesLayer, TilesLayer]


@dataclass
class Level:
    """One level of a level project."""

    identifier: str
    world_x: int
    world_y: int
    layers: Optional[list[Layer]] = None

    @property
    def offset(self) -> Position:
        """World offset with the Y axis flipped up."""
        return Position(float(self.world_x), float(-self.world_y))

    def tiles_layers(self) -> list[tuple[int, TilesLayer]]:
        """(export layer index, layer) for every Tiles layer."""
        return [
            (layer.index, layer)
            for layer in self.layers or []
            if layer.type is LayerType.TILES
        ]


@dataclass
class LevelProject:
    """Parsed level export: levels plus tileset definitions."""

    levels: list[Level]
    tilesets: dict[int, TilesetDefinition] = field(default_factory=dict)
    file_path: Optional[Path] = None

    @property
    def identifiers(self) -> list[str]:
        return [level.identifier for level in self.levels]

    def level(self, identifier: str) -> Level:
        """Find a level with layers by identifier.

        Raises:
            MissingReferenceError: If the level does not exist or has no layers.
        """
        for level in self.levels:
            if level.identifier == identifier:
                if level.layers is None:
                    raise MissingReferenceError(f"{identifier} has no layers", level=identifier)
                return level
        raise MissingReferenceError(f"identifier {identifier} not found", level=identifier)


@dataclass
class TileLayerRender:
    """What the renderer needs to draw one Tiles layer."""

    layer_index: int
    atlas: TextureAtlas
    sprites: list[TileSprite]
    grid: np.ndarray


@dataclass
class LoadedLevel:
    """A level whose tiles, colliders and spawn events were built."""

    identifier: str
    offset: Position
    tile_layers: list[TileLayerRender] = field(default_factory=list)
    colliders: list[LayerColliders] = field(default_factory=list)
    spawn_count: int = 0

    def colliders_for(self, layer_index: int) -> Optional[LayerColliders]:
        for colliders in self.colliders:
            if colliders.layer_index == layer_index:
                return colliders
        return None
