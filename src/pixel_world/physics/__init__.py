"""Tile collision geometry."""

from .collision_builder import build_layer_polygons
from .polygon_merge import merge_polygons, union_polygons, to_polygon
from .decomposition import decompose_outline, is_convex, concavity
from .pipeline import build_level_colliders

__all__ = [
    "build_layer_polygons",
    "merge_polygons",
    "union_polygons",
    "to_polygon",
    "decompose_outline",
    "is_convex",
    "concavity",
    "build_level_colliders",
]
