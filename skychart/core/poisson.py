"""Fast Poisson-disk sampling (Bridson).
Guarantees a hard minimum spacing between every pair of returned points.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import math
import logging

from skychart.core.points import Bounds, Point
from skychart.core.rng import Rng

log = logging.getLogger('skychart.points.poisson')

DEFAULT_MAX_ATTEMPTS = 30
# Spacing derived from density when the caller gives none
DENSITY_SPACING_FACTOR = 0.8
SEARCH_RADIUS_CELLS = 2


class SpatialGrid:
    """Uniform grid holding at most one point per cell (cell = d/sqrt(2))."""

    def __init__(self, bounds: Bounds, cell_size: float):
        self.cell_size = cell_size
        self.offset_x = bounds.x
        self.offset_y = bounds.y
        self.cols = max(1, math.ceil(bounds.width / cell_size))
        self.rows = max(1, math.ceil(bounds.height / cell_size))
        self.cells: List[List[Optional[Point]]] = [[None] * self.cols for _ in range(self.rows)]

    def _cell(self, x: float, y: float) -> Tuple[int, int]:
        col = int(math.floor((x - self.offset_x) / self.cell_size))
        row = int(math.floor((y - self.offset_y) / self.cell_size))
        return row, col

    def insert(self, p: Point) -> None:
        row, col = self._cell(p.x, p.y)
        if 0 <= row < self.rows and 0 <= col < self.cols:
            self.cells[row][col] = p

    def is_valid(self, p: Point, min_distance: float) -> bool:
        row, col = self._cell(p.x, p.y)
        min_sq = min_distance * min_distance
        for r in range(max(0, row - SEARCH_RADIUS_CELLS), min(self.rows, row + SEARCH_RADIUS_CELLS + 1)):
            for c in range(max(0, col - SEARCH_RADIUS_CELLS), min(self.cols, col + SEARCH_RADIUS_CELLS + 1)):
                other = self.cells[r][c]
                if other is None:
                    continue
                dx = p.x - other.x
                dy = p.y - other.y
                if dx * dx + dy * dy < min_sq:
                    return False
        return True


def default_min_distance(count: int, bounds: Bounds) -> float:
    return math.sqrt(bounds.area / count) * DENSITY_SPACING_FACTOR


def poisson_disk_points(
    count: int,
    bounds: Bounds,
    rng: Rng,
    min_distance: Optional[float] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[Point]:
    if count <= 0 or bounds.is_degenerate:
        return []
    if not min_distance or min_distance <= 0:
        min_distance = default_min_distance(count, bounds)

    grid = SpatialGrid(bounds, min_distance / math.sqrt(2.0))
    first = Point(bounds.x + rng() * bounds.width, bounds.y + rng() * bounds.height)
    points: List[Point] = [first]
    active: List[Point] = [first]
    grid.insert(first)

    limit = count * 2
    while active and len(points) < limit:
        idx = int(rng() * len(active))
        origin = active[idx]
        found = False
        for _ in range(max_attempts):
            angle = rng() * 2.0 * math.pi
            radius = min_distance + rng() * min_distance
            cand = Point(origin.x + radius * math.cos(angle), origin.y + radius * math.sin(angle))
            if not (bounds.x <= cand.x < bounds.right and bounds.y <= cand.y < bounds.bottom):
                continue
            if grid.is_valid(cand, min_distance):
                points.append(cand)
                active.append(cand)
                grid.insert(cand)
                found = True
                break
        if not found:
            active.pop(idx)

    if len(points) < count:
        log.debug('[POINTS] Poisson sampling exhausted: %d/%d placed (d=%.2f)', len(points), count, min_distance)
    return points[:count]
