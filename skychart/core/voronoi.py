"""Lloyd (Voronoi) relaxation.
Bounded Voronoi cells come from a Delaunay triangulation of the generators plus
their mirror images across the four box edges: the bisector between a
generator and its mirror is exactly the box edge, so every generator's cell is
closed and clipped to the bounds.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import logging

import numpy as np
from scipy.spatial import Delaunay, QhullError

from skychart.core.points import Bounds, Point
from skychart.core.rng import Rng

log = logging.getLogger('skychart.points.voronoi')

DEFAULT_ITERATIONS = 4
DEGENERATE_AREA = 1e-10


def random_points(count: int, bounds: Bounds, rng: Rng) -> List[Point]:
    return [Point(bounds.x + rng() * bounds.width, bounds.y + rng() * bounds.height) for _ in range(count)]


def polygon_centroid(poly: np.ndarray) -> Tuple[float, float]:
    """Centroid via the signed-area formula; vertex average for degenerate cells."""
    x = poly[:, 0]
    y = poly[:, 1]
    xn = np.roll(x, -1)
    yn = np.roll(y, -1)
    cross = x * yn - xn * y
    area = 0.5 * float(cross.sum())
    if abs(area) < DEGENERATE_AREA:
        return float(x.mean()), float(y.mean())
    cx = float(((x + xn) * cross).sum()) / (6.0 * area)
    cy = float(((y + yn) * cross).sum()) / (6.0 * area)
    return cx, cy


def _mirrored(pts: np.ndarray, b: Bounds) -> np.ndarray:
    x = pts[:, 0]
    y = pts[:, 1]
    return np.vstack((
        pts,
        np.column_stack((2.0 * b.x - x, y)),
        np.column_stack((2.0 * b.right - x, y)),
        np.column_stack((x, 2.0 * b.y - y)),
        np.column_stack((x, 2.0 * b.bottom - y)),
    ))


def _circumcenters(tris: np.ndarray) -> np.ndarray:
    ax, ay = tris[:, 0, 0], tris[:, 0, 1]
    bx, by = tris[:, 1, 0], tris[:, 1, 1]
    cx, cy = tris[:, 2, 0], tris[:, 2, 1]
    d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    a2 = ax * ax + ay * ay
    b2 = bx * bx + by * by
    c2 = cx * cx + cy * cy
    with np.errstate(divide='ignore', invalid='ignore'):
        ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
        uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
    return np.column_stack((ux, uy))


def voronoi_cells(points: List[Point], bounds: Bounds) -> List[Optional[np.ndarray]]:
    """Return the bounded Voronoi polygon (ordered vertices) of each generator.
    A generator that Qhull drops (duplicate or on the box edge) gets None.
    """
    n = len(points)
    pts = np.array([(p.x, p.y) for p in points], dtype=float)
    allp = _mirrored(pts, bounds)
    tri = Delaunay(allp)
    simplices = tri.simplices
    centers = _circumcenters(allp[simplices])
    owned: List[List[int]] = [[] for _ in range(n)]
    rows, cols = np.nonzero(simplices < n)
    for s, v in zip(rows.tolist(), simplices[rows, cols].tolist()):
        owned[v].append(s)
    cells: List[Optional[np.ndarray]] = []
    for i in range(n):
        if not owned[i]:
            cells.append(None)
            continue
        verts = centers[owned[i]]
        verts = verts[np.all(np.isfinite(verts), axis=1)]
        if len(verts) == 0:
            cells.append(None)
            continue
        angles = np.arctan2(verts[:, 1] - pts[i, 1], verts[:, 0] - pts[i, 0])
        cells.append(verts[np.argsort(angles)])
    return cells


def lloyd_iteration(points: List[Point], bounds: Bounds) -> List[Point]:
    """Move each point to the centroid of its Voronoi cell."""
    if not points:
        return points
    if len(points) == 1:
        return [bounds.clamp(points[0])]
    try:
        cells = voronoi_cells(points, bounds)
    except (QhullError, ValueError) as e:
        log.info('[POINTS] Triangulation failed for %d points, keeping positions: %s', len(points), e)
        return [bounds.clamp(p) for p in points]
    out: List[Point] = []
    for p, cell in zip(points, cells):
        if cell is None:
            out.append(bounds.clamp(p))
            continue
        cx, cy = polygon_centroid(cell)
        out.append(bounds.clamp(Point(cx, cy)))
    return out


def relaxed_points(count: int, bounds: Bounds, rng: Rng, iterations: int = DEFAULT_ITERATIONS) -> List[Point]:
    if count <= 0 or bounds.is_degenerate:
        return []
    pts = random_points(count, bounds, rng)
    for _ in range(max(0, int(iterations))):
        pts = lloyd_iteration(pts, bounds)
    return pts
