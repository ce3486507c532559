"""Approximate convex decomposition of merged outlines.

An outline is cut recursively at its deepest reflex vertex until every
piece is within the concavity tolerance. Pieces that are exactly convex
are emitted as they are; pieces that are only nearly convex are emitted
as their convex hull.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import shapely
from shapely.geometry import LineString, Polygon
from shapely.ops import split, triangulate

from pixel_world.logging_config import get_logger
from pixel_world.types import ColliderMaterial, ConvexSubShape
from .polygon_merge import AREA_EPSILON, exterior_ring, to_polygon

logger = get_logger("physics.decomposition")

MAX_DEPTH = 64
CROSS_EPSILON = 1e-9


def is_convex(ring: np.ndarray) -> bool:
    """Check that a counter-clockwise ring turns left at every vertex."""
    if len(ring) < 3:
        return False
    incoming = ring - np.roll(ring, 1, axis=0)
    outgoing = np.roll(ring, -1, axis=0) - ring
    cross = incoming[:, 0] * outgoing[:, 1] - incoming[:, 1] * outgoing[:, 0]
    scale = np.linalg.norm(incoming, axis=1) * np.linalg.norm(outgoing, axis=1)
    return bool(np.all(cross >= -CROSS_EPSILON * scale))


def _hull_vertex_mask(ring: np.ndarray) -> np.ndarray:
    """Flag the ring vertices that are corners of its convex hull."""
    hull = np.asarray(Polygon(ring).convex_hull.exterior.coords)[:-1]
    scale = max(bbox_diagonal(ring), 1.0)
    gaps = np.linalg.norm(ring[:, None, :] - hull[None, :, :], axis=2)
    return np.any(gaps <= CROSS_EPSILON * scale, axis=1)


def vertex_depths(ring: np.ndarray) -> np.ndarray:
    """Depth of every vertex inside the pocket it belongs to.

    Each convex hull edge closes one pocket: the ring vertices between the
    edge's endpoints, in ring order. A vertex's depth is its distance to the
    line through that edge. Hull corners have depth 0.
    """
    depths = np.zeros(len(ring))
    corners = np.flatnonzero(_hull_vertex_mask(ring))
    if len(corners) < 2:
        return depths

    n = len(ring)
    for a, b in zip(corners, np.roll(corners, -1)):
        inner = np.arange(a + 1, b + n if b <= a else b) % n
        if len(inner) == 0:
            continue
        lid = ring[b] - ring[a]
        length = np.linalg.norm(lid)
        if length <= CROSS_EPSILON:
            continue
        offsets = ring[inner] - ring[a]
        depths[inner] = np.abs(lid[0] * offsets[:, 1] - lid[1] * offsets[:, 0]) / length
    return depths


def concavity(ring: np.ndarray) -> float:
    """Depth of the deepest pocket between the ring and its convex hull."""
    return float(np.max(vertex_depths(ring)))


def bbox_diagonal(ring: np.ndarray) -> float:
    extent = ring.max(axis=0) - ring.min(axis=0)
    return float(np.hypot(extent[0], extent[1]))


def _reflex_vertices(ring: np.ndarray) -> np.ndarray:
    incoming = ring - np.roll(ring, 1, axis=0)
    outgoing = np.roll(ring, -1, axis=0) - ring
    cross = incoming[:, 0] * outgoing[:, 1] - incoming[:, 1] * outgoing[:, 0]
    scale = np.linalg.norm(incoming, axis=1) * np.linalg.norm(outgoing, axis=1)
    return np.flatnonzero(cross < -CROSS_EPSILON * scale)


def _cut_directions(ring: np.ndarray, index: int) -> list[np.ndarray]:
    """Incoming-edge extension, outgoing-edge extension and bisector at a vertex."""
    vertex = ring[index]
    along_in = vertex - ring[index - 1]
    along_in = along_in / np.linalg.norm(along_in)
    back_out = vertex - ring[(index + 1) % len(ring)]
    back_out = back_out / np.linalg.norm(back_out)
    directions = [along_in, back_out]
    bisector = along_in + back_out
    norm = np.linalg.norm(bisector)
    if norm > CROSS_EPSILON:
        directions.append(bisector / norm)
    return directions


def _ray_hit(polygon: Polygon, origin: np.ndarray, direction: np.ndarray, reach: float) -> Optional[np.ndarray]:
    """Nearest boundary point hit by a ray leaving `origin`, or None."""
    start = origin + direction * (reach * 1e-9)
    ray = LineString([start, origin + direction * reach])
    hits = shapely.get_coordinates(ray.intersection(polygon.exterior))
    if len(hits) == 0:
        return None
    distances = np.linalg.norm(hits - origin, axis=1)
    valid = distances > reach * 1e-7
    if not valid.any():
        return None
    return hits[valid][np.argmin(distances[valid])]


def _best_cut(polygon: Polygon, ring: np.ndarray, index: int) -> Optional[list[Polygon]]:
    """Split at a reflex vertex along the shortest interior cut."""
    vertex = ring[index]
    reach = 2.0 * bbox_diagonal(ring)
    best: Optional[tuple[float, list[Polygon]]] = None

    for direction in _cut_directions(ring, index):
        hit = _ray_hit(polygon, vertex, direction, reach)
        if hit is None:
            continue
        length = float(np.linalg.norm(hit - vertex))
        if best is not None and length >= best[0]:
            continue
        # Run the cut slightly past the boundary so the splitter crosses it
        cut = LineString([vertex, hit + direction * (reach * 1e-6)])
        if not polygon.buffer(reach * 1e-9).contains(LineString([vertex, hit])):
            continue
        pieces = [
            geom
            for geom in split(polygon, cut).geoms
            if isinstance(geom, Polygon) and geom.area > AREA_EPSILON
        ]
        if len(pieces) >= 2:
            best = (length, pieces)

    return best[1] if best is not None else None


def _triangles(polygon: Polygon) -> list[np.ndarray]:
    """Delaunay triangles lying inside the polygon."""
    return [
        exterior_ring(triangle)
        for triangle in triangulate(polygon)
        if polygon.contains(triangle.representative_point()) and triangle.area > AREA_EPSILON
    ]


def _decompose(polygon: Polygon, tolerance: float, depth: int) -> list[np.ndarray]:
    ring = exterior_ring(polygon)
    if is_convex(ring):
        return [ring]

    depths = vertex_depths(ring)
    if float(depths.max()) <= tolerance:
        return [exterior_ring(polygon.convex_hull)]

    if depth >= MAX_DEPTH:
        logger.warning("Decomposition depth limit reached, triangulating %d-gon", len(ring))
        return _triangles(polygon)

    reflex = _reflex_vertices(ring)
    for index in reflex[np.argsort(-depths[reflex], kind="stable")]:
        pieces = _best_cut(Polygon(ring), ring, int(index))
        if pieces is not None:
            result: list[np.ndarray] = []
            for piece in pieces:
                result.extend(_decompose(piece, tolerance, depth + 1))
            return result

    logger.warning("No interior cut found, triangulating %d-gon", len(ring))
    return _triangles(polygon)


def decompose_outline(
    outline: np.ndarray,
    concavity_tolerance: float,
    material: Optional[ColliderMaterial] = None,
    origin: tuple[float, float] = (0.0, 0.0),
) -> list[ConvexSubShape]:
    """Split a merged outline into convex sub-shapes.

    Args:
        outline: Closed, simple (N, 2) ring in world pixels.
        concavity_tolerance: Allowed concavity relative to the outline's
            bounding-box diagonal.
        material: Collider material for every sub-shape.
        origin: Subtracted from every point, so shapes are relative to it.

    Returns:
        Sub-shapes whose union reconstructs the outline. Empty for a
        degenerate outline.
    """
    material = material or ColliderMaterial()
    polygon = to_polygon(outline)
    if polygon is None:
        return []

    tolerance = concavity_tolerance * bbox_diagonal(np.asarray(polygon.exterior.coords))
    pieces = _decompose(polygon, tolerance, 0)
    pieces.sort(key=lambda ring: (float(ring[0, 1]), float(ring[0, 0])))

    shift = np.asarray(origin, dtype=np.float64)
    return [ConvexSubShape(points=piece - shift, material=material) for piece in pieces]
