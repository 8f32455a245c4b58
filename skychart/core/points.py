"""Point / Bounds values and jittered-grid sampling."""
from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math

from skychart.core.rng import Rng


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_degenerate(self) -> bool:
        return not (self.width > 0.0 and self.height > 0.0)

    def contains(self, p: Point, tol: float = 1e-9) -> bool:
        return (self.x - tol <= p.x <= self.right + tol) and (self.y - tol <= p.y <= self.bottom + tol)

    def clamp(self, p: Point) -> Point:
        return Point(max(self.x, min(self.right, p.x)), max(self.y, min(self.bottom, p.y)))


def jittered_grid_points(count: int, bounds: Bounds, rng: Rng) -> List[Point]:
    """One randomly jittered point per near-square cell.
    Cells in the ragged last row/column may fall outside bounds and are dropped,
    so the result is approximately `count` points.
    """
    if count <= 0 or bounds.is_degenerate:
        return []
    cell = math.sqrt(bounds.area / count)
    cols = math.ceil(bounds.width / cell)
    rows = math.ceil(bounds.height / cell)
    pts: List[Point] = []
    for row in range(rows):
        for col in range(cols):
            x = bounds.x + (col + rng()) * cell
            y = bounds.y + (row + rng()) * cell
            if x < bounds.right and y < bounds.bottom:
                pts.append(Point(x, y))
    return pts
