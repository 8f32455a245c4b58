"""Per-bucket precipitation particle fields."""
from __future__ import annotations
from typing import List, Optional
import logging
import math

from skychart.core.distribution import DistributionAlgorithm, cached_points, relaxation_iterations
from skychart.core.drawops import Circle, DrawOp, Line
from skychart.core.models import ForecastPoint
from skychart.core.points import Bounds
from skychart.core.rng import create_rng
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.weather import (
    HOURLY_RAIN_MULTIPLIER, HOURLY_SNOW_MULTIPLIER, PrecipitationKind,
    precipitation_amount, precipitation_kind, precipitation_opacity,
    precipitation_particle_count, precipitation_particle_size,
)

log = logging.getLogger('skychart.scene.precipitation')

POISSON_SPACING_FACTOR = 0.9
POISSON_MIN_SPACING = 8.0
POISSON_MAX_SPACING = 20.0
RAIN_SLANT = 0.25
MIXED_RAIN_SHARE = 0.5


def particle_spacing(bounds: Bounds, count: int) -> float:
    """Poisson spacing for a particle field, clamped to [8, 20] px."""
    spacing = math.sqrt(bounds.area / count) * POISSON_SPACING_FACTOR
    return max(POISSON_MIN_SPACING, min(POISSON_MAX_SPACING, spacing))


def rain_drop(x: float, y: float, size: float, color: str, opacity: float) -> Line:
    half = size / 2.0
    return Line(x - size * RAIN_SLANT / 2.0, y - half, x + size * RAIN_SLANT / 2.0, y + half,
                color, width=max(1.0, size / 6.0), opacity=opacity)


def snow_flake(x: float, y: float, size: float, color: str, opacity: float) -> Circle:
    return Circle(x, y, max(0.75, size * 0.3), color, opacity)


def particle_ops(
    point: ForecastPoint,
    bounds: Bounds,
    seed: str,
    *,
    rain_multiplier: float = HOURLY_RAIN_MULTIPLIER,
    snow_multiplier: float = HOURLY_SNOW_MULTIPLIER,
    algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI,
    styles: Optional[StyleRegistry] = None,
    size_scale: float = 1.0,
    max_size: Optional[float] = None,
) -> List[DrawOp]:
    """Particles for one bucket, confined to `bounds` and fully determined by `seed`."""
    kind = precipitation_kind(point.condition)
    amount = precipitation_amount(point.precipitation)
    if kind is None or amount <= 0 or bounds.is_degenerate:
        return []
    count = precipitation_particle_count(amount, bounds.area, kind is PrecipitationKind.SNOW,
                                         rain_multiplier=rain_multiplier, snow_multiplier=snow_multiplier)
    if count == 0:
        return []
    algorithm = DistributionAlgorithm.parse(algorithm)
    if algorithm is DistributionAlgorithm.POISSON:
        pts = cached_points(count, bounds, seed, algorithm, min_distance=particle_spacing(bounds, count))
    elif algorithm is DistributionAlgorithm.VORONOI:
        pts = cached_points(count, bounds, seed, algorithm, relaxation_iterations(count))
    else:
        pts = cached_points(count, bounds, seed, algorithm)

    s = styles or default_styles()
    size = precipitation_particle_size(amount) * size_scale
    if max_size is not None:
        size = min(size, max_size)
    opacity = precipitation_opacity(point.precipitation_probability)
    kind_rng = create_rng(f"{seed}-kind")
    ops: List[DrawOp] = []
    for p in pts:
        if kind is PrecipitationKind.MIXED:
            is_rain = kind_rng() < MIXED_RAIN_SHARE
        else:
            is_rain = kind is PrecipitationKind.RAIN
        if is_rain:
            ops.append(rain_drop(p.x, p.y, size, s['particle.rain'], opacity))
        else:
            ops.append(snow_flake(p.x, p.y, size, s['particle.snow'], opacity))
    log.debug('[SCENE] %s: %s x%d (%.2f in)', seed, kind.value, len(ops), amount)
    return ops
