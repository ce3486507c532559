"""Place per-tile collision polygons in world space."""

from __future__ import annotations

import numpy as np

from pixel_world.errors import MissingReferenceError
from pixel_world.types import Level, TilesetDefinition


def build_layer_polygons(
    level: Level,
    tilesets: dict[int, TilesetDefinition],
) -> dict[int, list[np.ndarray]]:
    """Collect the world polygons of every Tiles layer.

    Each tile with a registered collision polygon contributes that polygon
    translated by the tile position (Y flipped up) plus the level offset.

    Args:
        level: Level whose layers are scanned.
        tilesets: Resolved tileset definitions by uid.

    Returns:
        Layer index -> list of (N, 2) world polygons, unmerged.

    Raises:
        MissingReferenceError: If a layer's tileset is not in `tilesets`.
    """
    offset = level.offset
    origin = np.array([offset.x, offset.y])
    polygons: dict[int, list[np.ndarray]] = {}

    for index, layer in level.tiles_layers():
        tileset = tilesets.get(layer.tileset_uid)
        if tileset is None:
            raise MissingReferenceError(
                f"failed to find tileset: {layer.tileset_uid}", level=level.identifier
            )

        layer_polygons = []
        for tile in layer.tiles:
            local = tileset.collision(tile.tile_id)
            if local is None:
                continue
            position = np.array([tile.px[0], -tile.px[1]], dtype=np.float64)
            layer_polygons.append(local + position + origin)
        polygons[index] = layer_polygons

    return polygons
