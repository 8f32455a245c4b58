"""Sky phase, sky colors and the decor drawn over the sky band (stars, clouds).
Sun times are the host's "next" occurrences, so phase checks compare the time
of day only; the gradient hard edges use absolute instants inside the window.
"""
from __future__ import annotations
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence
import logging
import math

from skychart.core.colors import interpolate_color
from skychart.core.distribution import DistributionAlgorithm, cached_points
from skychart.core.drawops import Circle, ColorStop, DrawOp, Rect
from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.points import Bounds
from skychart.core.rng import create_rng
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.weather import cloud_coverage

log = logging.getLogger('skychart.scene.sky')

SUN_EDGE_OFFSET = 0.001
DAY_SECONDS = 24 * 3600.0
STAR_DENSITY = 0.002          # stars per px² on a clear night
CLOUD_DENSITY = 0.008         # clouds per px² at 100% coverage
CLOUD_MIN_COVERAGE = 5.0
DECOR_BAND_FRACTION = 0.25    # decor stays in the top quarter of the band

# Vertical fade of the sky fill, as fractions from the top
FADE_OPAQUE_UNTIL = 0.15
FADE_TRANSPARENT_FROM = 0.50


class SkyPhase(str, Enum):
    DAWN = 'dawn'
    DAY = 'day'
    DUSK = 'dusk'
    NIGHT = 'night'


def _align(value: datetime, ref: datetime) -> datetime:
    """Express `value` in `ref`'s timezone; drop tzinfo on a naive/aware mismatch."""
    if value.tzinfo is not None and ref.tzinfo is not None:
        return value.astimezone(ref.tzinfo)
    if value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _clock(value: datetime, ref: datetime) -> float:
    v = _align(value, ref)
    return v.hour * 3600.0 + v.minute * 60.0 + v.second + v.microsecond / 1e6


def _naive(value: datetime) -> datetime:
    return value.replace(tzinfo=None) if value.tzinfo is not None else value


def _within(t: float, start: datetime, end: datetime, ref: datetime) -> bool:
    """Clock `t` lies in [start, end), wrapping past midnight when start's clock is later."""
    a, b = _clock(start, ref), _clock(end, ref)
    if a == b:
        # equal clocks: a full 24h (polar day) or nothing
        span = _naive(_align(end, ref)) - _naive(_align(start, ref))
        return abs(span.total_seconds()) >= DAY_SECONDS
    if a < b:
        return a <= t < b
    return t >= a or t < b


def classify_sky_phase(dt: datetime, sun_times: Optional[SunTimes]) -> SkyPhase:
    sun = sun_times or SunTimes()
    t = _clock(dt, dt)
    if sun.has_twilight:
        if _within(t, sun.sunrise, sun.sunset, dt):
            return SkyPhase.DAY
        if _within(t, sun.dawn, sun.sunrise, dt):
            return SkyPhase.DAWN
        if _within(t, sun.sunset, sun.dusk, dt):
            return SkyPhase.DUSK
        return SkyPhase.NIGHT
    if sun.has_sun_events:
        return SkyPhase.DAY if is_daytime(dt, sun) else SkyPhase.NIGHT
    hour = dt.hour
    if 5 <= hour < 7:
        return SkyPhase.DAWN
    if 7 <= hour < 18:
        return SkyPhase.DAY
    if 18 <= hour < 20:
        return SkyPhase.DUSK
    return SkyPhase.NIGHT


def is_daytime(dt: datetime, sun_times: Optional[SunTimes]) -> bool:
    sun = sun_times or SunTimes()
    if not sun.has_sun_events:
        return 6 <= dt.hour < 18
    return _within(_clock(dt, dt), sun.sunrise, sun.sunset, dt)


def phase_color(phase: SkyPhase, cloud_factor: float, styles: Optional[StyleRegistry] = None) -> str:
    s = styles or default_styles()
    cf = max(0.0, min(1.0, cloud_factor))
    if phase is SkyPhase.DAWN:
        return interpolate_color(s['sky.dawn'], s['sky.day_cloudy'], cf * 0.5)
    if phase is SkyPhase.DUSK:
        return interpolate_color(s['sky.dusk'], s['sky.day_cloudy'], cf * 0.5)
    if phase is SkyPhase.NIGHT:
        return interpolate_color(s['sky.night_clear'], s['sky.night_cloudy'], cf)
    return interpolate_color(s['sky.day_clear'], s['sky.day_cloudy'], cf)


def sky_color(dt: datetime, coverage: Optional[float], sun_times: Optional[SunTimes],
              styles: Optional[StyleRegistry] = None) -> str:
    phase = classify_sky_phase(dt, sun_times)
    return phase_color(phase, cloud_coverage(coverage) / 100.0, styles)


def _event_position(event: Optional[datetime], first: datetime, last: datetime) -> Optional[float]:
    if event is None:
        return None
    start, end = _naive(first), _naive(_align(last, first))
    when = _naive(_align(event, first))
    if when < start:
        when += timedelta(hours=24)
    if not (start <= when <= end):
        return None
    span = (end - start).total_seconds()
    if span <= 0:
        return 0.0
    return (when - start).total_seconds() / span


def sky_gradient_stops(forecast: Sequence[ForecastPoint], sun_times: Optional[SunTimes],
                       styles: Optional[StyleRegistry] = None) -> List[ColorStop]:
    """Horizontal stops: one per bucket, plus a hard edge at each sun event in the window."""
    if not forecast:
        return []
    s = styles or default_styles()
    sun = sun_times or SunTimes()
    n = len(forecast)
    stops = [
        ColorStop(i / (n - 1) if n > 1 else 0.0, sky_color(p.datetime, p.cloud_coverage, sun, s))
        for i, p in enumerate(forecast)
    ]
    avg = sum(cloud_coverage(p.cloud_coverage) for p in forecast) / n / 100.0
    night = phase_color(SkyPhase.NIGHT, avg, s)
    day = phase_color(SkyPhase.DAY, avg, s)
    first, last = forecast[0].datetime, forecast[-1].datetime
    for event, before, after in ((sun.sunrise, night, day), (sun.sunset, day, night)):
        pos = _event_position(event, first, last)
        if pos is None:
            continue
        stops.append(ColorStop(max(0.0, pos - SUN_EDGE_OFFSET), before))
        stops.append(ColorStop(min(1.0, pos + SUN_EDGE_OFFSET), after))
    # stable: bucket stops stay ahead of a coincident sun edge
    stops.sort(key=lambda st: st.offset)
    return stops


def sky_fade_stops() -> List[ColorStop]:
    """Vertical alpha mask: opaque at the top, transparent from the middle down."""
    return [
        ColorStop(0.0, '#000000', 1.0),
        ColorStop(FADE_OPAQUE_UNTIL, '#000000', 1.0),
        ColorStop(FADE_TRANSPARENT_FROM, '#000000', 0.0),
        ColorStop(1.0, '#000000', 0.0),
    ]


# ---------------------------------------------------------------------------
# Decor
# ---------------------------------------------------------------------------

def decor_bounds(x: float, width: float, band_top: float, band_height: float) -> Bounds:
    return Bounds(x, band_top, width, band_height * DECOR_BAND_FRACTION)


def star_count(bounds: Bounds, coverage: Optional[float]) -> int:
    clearness = 1.0 - cloud_coverage(coverage) / 100.0
    return max(1, int(round(bounds.area * STAR_DENSITY * clearness)))


def cloud_count(bounds: Bounds, coverage: Optional[float]) -> int:
    cov = 0.0 if coverage is None else float(coverage)
    if cov <= CLOUD_MIN_COVERAGE:
        return 0
    return max(0, int(round(bounds.area * CLOUD_DENSITY * cov / 100.0)))


def star_ops(point: ForecastPoint, bounds: Bounds, styles: Optional[StyleRegistry] = None,
             algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI) -> List[DrawOp]:
    s = styles or default_styles()
    n = star_count(bounds, point.cloud_coverage)
    its = min(3, max(1, math.ceil(n / 5)))
    seed = f"{point.seed}-stars"
    pts = cached_points(n, bounds, seed, algorithm, its)
    rng = create_rng(f"{seed}-size")
    ops: List[DrawOp] = []
    for p in pts:
        r = 0.5 + rng() * 1.5
        ops.append(Circle(p.x, p.y, r, s['decor.star'], opacity=0.4 + rng() * 0.6))
    return ops


def cloud_glyph(x: float, y: float, size: float, color: str, opacity: float = 0.9) -> List[DrawOp]:
    """Three overlapping puffs on a flat base, centred on (x, y)."""
    u = size / 4.0
    return [
        Circle(x - 1.2 * u, y + 0.3 * u, 0.9 * u, color, opacity),
        Circle(x, y - 0.3 * u, 1.3 * u, color, opacity),
        Circle(x + 1.2 * u, y + 0.3 * u, 0.9 * u, color, opacity),
        Rect(x - 1.2 * u, y + 0.3 * u, 2.4 * u, 0.9 * u, color, opacity),
    ]


def cloud_ops(point: ForecastPoint, bounds: Bounds, styles: Optional[StyleRegistry] = None,
              algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI) -> List[DrawOp]:
    n = cloud_count(bounds, point.cloud_coverage)
    if n == 0:
        return []
    s = styles or default_styles()
    its = min(3, max(1, math.ceil(n / 3)))
    seed = f"{point.seed}-clouds"
    pts = cached_points(n, bounds, seed, algorithm, its)
    rng = create_rng(f"{seed}-size")
    ops: List[DrawOp] = []
    for p in pts:
        ops.extend(cloud_glyph(p.x, p.y, 10.0 + rng() * 4.0, s['decor.cloud']))
    return ops


def decor_ops(forecast: Sequence[ForecastPoint], sun_times: Optional[SunTimes], x0: float, column_width: float,
              band_top: float, band_height: float, styles: Optional[StyleRegistry] = None,
              algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI) -> List[DrawOp]:
    """Stars over night buckets and clouds over day buckets, seeded per bucket."""
    ops: List[DrawOp] = []
    for i, point in enumerate(forecast):
        bounds = decor_bounds(x0 + i * column_width, column_width, band_top, band_height)
        if bounds.is_degenerate:
            continue
        if is_daytime(point.datetime, sun_times):
            ops.extend(cloud_ops(point, bounds, styles, algorithm))
        else:
            ops.extend(star_ops(point, bounds, styles, algorithm))
    log.debug('[SCENE] decor: %d ops over %d buckets', len(ops), len(forecast))
    return ops
