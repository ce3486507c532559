"""Level export loading.

Parses a level project (levels, layer instances and tileset definitions)
and resolves the pieces a single level needs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import numpy as np

from pixel_world.errors import MalformedAssetError, MissingFieldError, MissingReferenceError
from pixel_world.logging_config import get_logger
from pixel_world.types import (
    EntitiesLayer,
    EntityPlacement,
    FieldInstance,
    Layer,
    LayerType,
    Level,
    LevelProject,
    Position,
    SpawnEvent,
    TilePlacement,
    TilesLayer,
    TilesetDefinition,
)

logger = get_logger("assets.level_loader")

PLAYER_START = "PlayerStart"
ENEMY = "Enemy"


def decode_collision(data: str, tile_size: int) -> np.ndarray:
    """Decode a serialized coordinate-pair list into a local polygon.

    Coordinates are in tile units with Y down; the result is in pixels
    with Y up.

    Raises:
        ValueError: If the string is not a JSON list of pairs.
    """
    pairs = json.loads(data)
    points = np.asarray(pairs, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"expected a list of coordinate pairs, got shape {points.shape}")
    return points * np.array([1.0, -1.0]) * float(tile_size)


def _parse_tileset(data: dict[str, Any]) -> TilesetDefinition:
    tile_size = int(data["tileGridSize"])
    collisions: dict[int, np.ndarray] = {}
    for entry in data.get("customData") or []:
        tile_id = entry.get("tileId")
        raw = entry.get("data")
        if isinstance(tile_id, bool) or not isinstance(tile_id, int) or not isinstance(raw, str):
            logger.debug("Skipping custom data entry %r", entry)
            continue
        try:
            collisions[tile_id] = decode_collision(raw, tile_size)
        except ValueError:
            logger.debug("Skipping undecodable collision data for tile %d: %r", tile_id, raw)
    return TilesetDefinition(
        uid=int(data["uid"]),
        tile_size=tile_size,
        columns=int(data["cWid"]),
        rows=int(data["cHei"]),
        rel_path=data.get("relPath") or "",
        collisions=collisions,
    )


def _parse_layer(data: dict[str, Any], index: int, level_id: str) -> Optional[Layer]:
    raw_type = data["__type"] if "__type" in data else data["type"]
    try:
        layer_type = LayerType(raw_type)
    except ValueError:
        logger.debug("Skipping %s layer in %s", raw_type, level_id)
        return None

    if layer_type is LayerType.ENTITIES:
        return EntitiesLayer(
            index=index,
            entities=[
                EntityPlacement(
                    identifier=entity["__identifier"] if "__identifier" in entity else entity["identifier"],
                    px=(int(entity["px"][0]), int(entity["px"][1])),
                    fields=[
                        FieldInstance(
                            identifier=f["__identifier"] if "__identifier" in f else f["identifier"],
                            value=f.get("__value", f.get("value")),
                        )
                        for f in entity.get("fieldInstances", [])
                    ],
                )
                for entity in data.get("entityInstances", [])
            ],
        )

    tileset_uid = data.get("__tilesetDefUid", data.get("tilesetDefUid"))
    if tileset_uid is None:
        logger.debug("Skipping Tiles layer %d without tileset in %s", index, level_id)
        return None
    return TilesLayer(
        tileset_uid=int(tileset_uid),
        grid_size=int(data["__gridSize"] if "__gridSize" in data else data["gridSize"]),
        tiles=[
            TilePlacement(px=(int(tile["px"][0]), int(tile["px"][1])), tile_id=int(tile["t"]))
            for tile in data.get("gridTiles", [])
        ],
        columns=int(data.get("__cWid", 0)),
        rows=int(data.get("__cHei", 0)),
        index=index,
    )


def _parse_level(data: dict[str, Any]) -> Level:
    identifier = data["identifier"]
    layer_instances = data.get("layerInstances")
    layers = None
    if layer_instances is not None:
        layers = [
            layer
            for layer in (
                _parse_layer(entry, index, identifier)
                for index, entry in enumerate(layer_instances)
            )
            if layer is not None
        ]
    return Level(
        identifier=identifier,
        world_x=int(data.get("worldX", 0)),
        world_y=int(data.get("worldY", 0)),
        layers=layers,
    )


def parse_project(
    data: dict[str, Any],
    file_path: Optional[Path] = None,
    asset: Optional[str] = None,
) -> LevelProject:
    """Parse a decoded level project.

    Accepts both the nested layout (`defs.tilesets`) and a flat
    `tilesets` list.

    Raises:
        MalformedAssetError: If the export does not have the expected shape.
    """
    try:
        defs = data.get("defs", {})
        tileset_data = defs.get("tilesets", data.get("tilesets", []))
        tilesets = {}
        for entry in tileset_data:
            tileset = _parse_tileset(entry)
            tilesets[tileset.uid] = tileset
        levels = [_parse_level(entry) for entry in data["levels"]]
    except (KeyError, TypeError, ValueError, AttributeError, IndexError) as e:
        raise MalformedAssetError(f"invalid level export: {e!r}", asset=asset) from e

    logger.debug("Parsed %d levels and %d tilesets from %s", len(levels), len(tilesets), asset or "export")
    return LevelProject(levels=levels, tilesets=tilesets, file_path=file_path)


def find_level(project: LevelProject, identifier: str) -> Level:
    """Find a level with layers by identifier.

    Raises:
        MissingReferenceError: If the level does not exist or has no layers.
    """
    return project.level(identifier)


def resolve_tilesets(project: LevelProject, level: Level) -> dict[int, TilesetDefinition]:
    """Tileset definitions used by a level's Tiles layers.

    Raises:
        MissingReferenceError: If a layer references an unknown tileset uid.
    """
    resolved: dict[int, TilesetDefinition] = {}
    for _, layer in level.tiles_layers():
        tileset = project.tilesets.get(layer.tileset_uid)
        if tileset is None:
            raise MissingReferenceError(
                f"failed to find tileset: {layer.tileset_uid}", level=level.identifier
            )
        resolved[tileset.uid] = tileset
    return resolved


def spawn_events(level: Level) -> list[SpawnEvent]:
    """Spawn requests for the level's entity placements, in layer then entity order.

    Raises:
        MissingFieldError: If an enemy has no string `name` field.
    """
    offset = level.offset
    events: list[SpawnEvent] = []
    for layer in level.layers or []:
        if layer.type is not LayerType.ENTITIES:
            continue
        for entity in layer.entities:
            position = Position(float(entity.px[0]), float(-entity.px[1])) + offset
            if entity.identifier == PLAYER_START:
                events.append(SpawnEvent.player(position, level=level.identifier))
            elif entity.identifier == ENEMY:
                name_field = entity.get_field("name")
                if name_field is None or not isinstance(name_field.value, str):
                    raise MissingFieldError(
                        f"no name field: {[f.identifier for f in entity.fields]}",
                        level=level.identifier,
                    )
                events.append(SpawnEvent.enemy(name_field.value, position, level=level.identifier))
    return events


class LevelLoader:
    """Loads and caches level projects."""

    def __init__(self, asset_path: Optional[Path] = None):
        self._asset_path = Path(asset_path) if asset_path else Path("assets")
        self._cache: dict[str, LevelProject] = {}

    def load(self, name: str) -> LevelProject:
        """Load a level project relative to the asset path.

        Raises:
            MissingReferenceError: If the file does not exist.
            MalformedAssetError: If the file is not a valid export.
        """
        if name in self._cache:
            return self._cache[name]
        path = self._asset_path / name
        if not path.exists():
            raise MissingReferenceError(f"level file not found: {path}", asset=name)
        project = load_project(path, asset=name)
        self._cache[name] = project
        return project

    def get(self, name: str) -> Optional[LevelProject]:
        return self._cache.get(name)


def load_project(path: Path | str, asset: Optional[str] = None) -> LevelProject:
    """Read and parse a level export file."""
    path = Path(path)
    asset = asset or path.name
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedAssetError(f"invalid JSON: {e}", asset=asset) from e
    return parse_project(data, file_path=path, asset=asset)
