"""Boolean union of a layer's collision polygons."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.polygon import orient
from shapely.ops import unary_union

from pixel_world.errors import GeometryError
from pixel_world.logging_config import get_logger

logger = get_logger("physics.polygon_merge")

AREA_EPSILON = 1e-9
COLLINEAR_EPSILON = 1e-9


def to_polygon(points: Sequence[Sequence[float]] | np.ndarray) -> Polygon | None:
    """Build a single-ring polygon, or None for degenerate input.

    Raises:
        GeometryError: If the points are not a numeric (N, 2) sequence.
    """
    try:
        array = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise GeometryError(f"polygon points are not numeric: {e}") from e
    if array.size == 0:
        return None
    if array.ndim != 2 or array.shape[1] != 2:
        raise GeometryError(f"polygon points must have shape (N, 2), got {array.shape}")
    if not np.all(np.isfinite(array)):
        raise GeometryError("polygon points must be finite")

    if len(np.unique(array, axis=0)) < 3:
        logger.debug("Skipping degenerate polygon with %d points", len(array))
        return None

    polygon = Polygon(array)
    if not polygon.is_valid:
        polygon = polygon.buffer(0)
        if polygon.is_empty or not isinstance(polygon, Polygon):
            logger.debug("Skipping self-intersecting polygon %s", array.tolist())
            return None
    if polygon.area <= AREA_EPSILON:
        logger.debug("Skipping zero-area polygon")
        return None
    return polygon


def clean_ring(points: np.ndarray) -> np.ndarray:
    """Drop the closing point, repeated points and collinear vertices."""
    ring = np.asarray(points, dtype=np.float64)
    if len(ring) > 1 and np.array_equal(ring[0], ring[-1]):
        ring = ring[:-1]

    keep = np.any(ring != np.roll(ring, 1, axis=0), axis=1)
    ring = ring[keep]

    while len(ring) > 3:
        incoming = ring - np.roll(ring, 1, axis=0)
        outgoing = np.roll(ring, -1, axis=0) - ring
        cross = incoming[:, 0] * outgoing[:, 1] - incoming[:, 1] * outgoing[:, 0]
        scale = np.linalg.norm(incoming, axis=1) * np.linalg.norm(outgoing, axis=1)
        collinear = np.abs(cross) <= COLLINEAR_EPSILON * scale
        if not collinear.any():
            break
        ring = ring[~collinear]
    return ring


def canonical_ring(points: np.ndarray) -> np.ndarray:
    """Rotate a ring to start at its lowest, then leftmost, vertex."""
    start = int(np.lexsort((points[:, 0], points[:, 1]))[0])
    return np.roll(points, -start, axis=0)


def exterior_ring(polygon: Polygon) -> np.ndarray:
    """Counter-clockwise exterior ring as an (N, 2) array, not closed."""
    shell = orient(Polygon(polygon.exterior), 1.0)
    return canonical_ring(clean_ring(np.asarray(shell.exterior.coords)))


def union_polygons(polygons: Iterable[Polygon]) -> MultiPolygon:
    """Union polygons into one multi-polygon (empty for no input)."""
    merged = unary_union(list(polygons))
    if merged.is_empty:
        return MultiPolygon()
    if isinstance(merged, Polygon):
        return MultiPolygon([merged])
    if isinstance(merged, MultiPolygon):
        return merged
    return MultiPolygon([g for g in merged.geoms if isinstance(g, Polygon)])


def merge_polygons(polygons: Iterable[Sequence[Sequence[float]] | np.ndarray]) -> list[np.ndarray]:
    """Union world polygons into exterior outlines.

    Interior rings of the union are discarded, so enclosed voids become
    solid.

    Args:
        polygons: Closed, simple (N, 2) polygons.

    Returns:
        One counter-clockwise ring per connected region, ordered by lowest
        then leftmost vertex. Empty for empty input.

    Raises:
        GeometryError: If an input is not a numeric point sequence.
    """
    shapes = [p for p in (to_polygon(points) for points in polygons) if p is not None]
    if not shapes:
        return []

    merged = union_polygons(shapes)
    rings = [exterior_ring(polygon) for polygon in merged.geoms]
    rings.sort(key=lambda ring: (float(ring[0, 1]), float(ring[0, 0])))
    return rings
