"""Point distribution front door: strategy selection and optional memoisation."""
from __future__ import annotations
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple
import logging
import math

from skychart.core.points import Bounds, Point, jittered_grid_points
from skychart.core.poisson import DEFAULT_MAX_ATTEMPTS, poisson_disk_points
from skychart.core.rng import Rng, create_rng, default_rng
from skychart.core.voronoi import DEFAULT_ITERATIONS, relaxed_points

log = logging.getLogger('skychart.points')

MAX_RELAX_ITERATIONS = 5
RELAX_DIVISOR = 3
POINT_CACHE_SIZE = 256


class DistributionAlgorithm(str, Enum):
    JITTERED = 'jittered'
    POISSON = 'poisson'
    VORONOI = 'voronoi'

    @classmethod
    def parse(cls, value) -> 'DistributionAlgorithm':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown distribution algorithm: {value!r} (expected one of {[a.value for a in cls]})") from None


def relaxation_iterations(count: int, cap: int = MAX_RELAX_ITERATIONS, divisor: int = RELAX_DIVISOR) -> int:
    """Fewer relaxation rounds for small fields: min(cap, max(1, ceil(count/divisor)))."""
    return min(cap, max(1, math.ceil(count / divisor)))


def generate_points(
    count: int,
    bounds: Bounds,
    algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI,
    rng: Optional[Rng] = None,
    *,
    iterations: Optional[int] = None,
    min_distance: Optional[float] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[Point]:
    """Scatter about `count` points evenly inside `bounds`. Never raises for count <= 0."""
    if count <= 0 or bounds.is_degenerate:
        return []
    rng = rng or default_rng()
    algorithm = DistributionAlgorithm.parse(algorithm)
    if algorithm is DistributionAlgorithm.JITTERED:
        pts = jittered_grid_points(count, bounds, rng)
    elif algorithm is DistributionAlgorithm.POISSON:
        pts = poisson_disk_points(count, bounds, rng, min_distance=min_distance, max_attempts=max_attempts)
    else:
        its = DEFAULT_ITERATIONS if iterations is None else iterations
        pts = relaxed_points(count, bounds, rng, iterations=its)
    log.debug('[POINTS] %s: %d requested, %d placed in %.0fx%.0f', algorithm.value, count, len(pts), bounds.width, bounds.height)
    return pts


@lru_cache(maxsize=POINT_CACHE_SIZE)
def cached_points(
    count: int,
    bounds: Bounds,
    seed: str,
    algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI,
    iterations: Optional[int] = None,
    min_distance: Optional[float] = None,
) -> Tuple[Point, ...]:
    """Memoised `generate_points` driven by `create_rng(seed)`."""
    pts = generate_points(count, bounds, algorithm, create_rng(seed), iterations=iterations, min_distance=min_distance)
    return tuple(pts)
