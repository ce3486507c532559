"""Level collision pipeline: place, merge and decompose tile polygons."""

from __future__ import annotations

from typing import Optional

from pixel_world.config import PipelineConfig
from pixel_world.logging_config import get_logger
from pixel_world.types import LayerColliders, Level, TilesetDefinition
from .collision_builder import build_layer_polygons
from .decomposition import decompose_outline
from .polygon_merge import merge_polygons

logger = get_logger("physics.pipeline")


def build_level_colliders(
    level: Level,
    tilesets: dict[int, TilesetDefinition],
    config: Optional[PipelineConfig] = None,
) -> list[LayerColliders]:
    """Build the convex colliders of every Tiles layer of a level.

    Args:
        level: Level with parsed layers.
        tilesets: Resolved tileset definitions by uid.
        config: Concavity tolerance and collider material.

    Returns:
        One LayerColliders per Tiles layer, in layer order, in pixels.

    Raises:
        MissingReferenceError: If a layer's tileset is not resolved.
        GeometryError: If a collision polygon is not numeric.
    """
    config = config or PipelineConfig()
    offset = level.offset
    position = (offset.x, offset.y)

    colliders = []
    for layer_index, polygons in build_layer_polygons(level, tilesets).items():
        outlines = merge_polygons(polygons)
        shapes = []
        for outline in outlines:
            shapes.extend(
                decompose_outline(
                    outline,
                    config.concavity,
                    material=config.collider_material,
                    origin=position,
                )
            )
        logger.debug(
            "%s layer %d: %d polygons -> %d outlines -> %d shapes",
            level.identifier,
            layer_index,
            len(polygons),
            len(outlines),
            len(shapes),
        )
        colliders.append(
            LayerColliders(
                layer_index=layer_index,
                position=position,
                outlines=outlines,
                shapes=shapes,
            )
        )
    return colliders
