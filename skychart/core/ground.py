"""Optional ground strip under the hourly chart: ice, puddles, sand or a seasonal row."""
from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from skychart.core.colors import interpolate_color
from skychart.core.drawops import DrawOp, Icon, Path, Rect
from skychart.core.models import ForecastPoint
from skychart.core.rng import create_rng
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.weather import (
    GroundType, Season, dominant_condition, ground_type, high_temperature, ice_color, ice_height,
    ice_intensity, precipitation_amount, precipitation_probability, puddle_intensity,
    sand_intensity, season_for,
)

log = logging.getLogger('skychart.scene.ground')

SEASON_ICONS = {
    Season.SPRING: ('mdi:flower', 'mdi:sprout', 'mdi:flower-tulip', 'mdi:sprout', 'mdi:flower'),
    Season.SUMMER: ('mdi:grass', 'mdi:clover', 'mdi:flower-outline', 'mdi:grass', 'mdi:clover'),
    Season.FALL: ('mdi:leaf', 'mdi:leaf-maple', 'mdi:leaf', 'mdi:leaf-maple', 'mdi:leaf'),
    Season.WINTER: ('mdi:pine-tree', 'mdi:snowflake', 'mdi:pine-tree', 'mdi:snowflake', 'mdi:pine-tree'),
}
SEASON_COLORS = {
    Season.SPRING: '#f8bbd0',
    Season.SUMMER: '#81c784',
    Season.FALL: '#ff9800',
    Season.WINTER: '#e0f2f1',
}
SAND_LIGHT = '#f4e4bc'
SAND_DEEP = '#d2a56d'
ICE_SPIKES = 9


def summarize(forecast: Sequence[ForecastPoint]):
    """(avg temp, total precip, dominant condition, avg probability) over the window."""
    n = len(forecast)
    avg_temp = sum(high_temperature(p.temperature) for p in forecast) / n
    total = sum(precipitation_amount(p.precipitation) for p in forecast)
    avg_prob = sum(precipitation_probability(p.precipitation_probability) for p in forecast) / n
    return avg_temp, total, dominant_condition(p.condition for p in forecast), avg_prob


def _ice(x: float, y: float, width: float, height: float, avg_temp: float) -> List[DrawOp]:
    intensity = ice_intensity(avg_temp)
    spike = min(height, ice_height(intensity))
    base = y + height
    step = width / ICE_SPIKES
    pts = [(x, base)]
    for i in range(ICE_SPIKES):
        pts.append((x + (i + 0.5) * step, base - spike * (0.6 if i % 2 else 1.0)))
        pts.append((x + (i + 1) * step, base))
    return [Path(tuple(pts), fill=ice_color(intensity), opacity=0.85, closed=True)]


def _puddles(x: float, y: float, width: float, height: float, total: float, seed: str, color: str) -> List[DrawOp]:
    intensity = puddle_intensity(total)
    rng = create_rng(f"{seed}-ground")
    ops: List[DrawOp] = []
    for _ in range(int(3 + intensity * 5)):
        pw = 15.0 + rng() * 25.0 * intensity
        ph = 3.0 + rng() * 4.0 * intensity
        px = x + rng() * max(0.0, width - pw)
        py = y + height * 0.5 + rng() * max(0.0, height * 0.5 - ph)
        ops.append(Rect(px, py, pw, ph, color, opacity=0.6, radius=ph / 2.0))
    return ops


def _sand(x: float, y: float, width: float, height: float, avg_temp: float) -> List[DrawOp]:
    intensity = sand_intensity(avg_temp)
    color = interpolate_color(SAND_LIGHT, SAND_DEEP, intensity)
    crest = height * (0.3 + 0.4 * intensity)
    base = y + height
    pts = [(x, base)]
    for i in range(9):
        t = i / 8.0
        pts.append((x + t * width, base - crest * (0.6 + 0.4 * (i % 2))))
    pts.append((x + width, base))
    return [Path(tuple(pts), fill=color, opacity=0.8, closed=True)]


def _seasonal(x: float, y: float, width: float, height: float, season: Season) -> List[DrawOp]:
    icons = SEASON_ICONS[season]
    spacing = width / (len(icons) + 1)
    size = min(height * 0.8, spacing)
    return [Icon(x + spacing * (i + 1), y + height / 2.0, size, icon, SEASON_COLORS[season])
            for i, icon in enumerate(icons)]


def ground_ops(forecast: Sequence[ForecastPoint], x: float, y: float, width: float, height: float,
               latitude: Optional[float] = None, styles: Optional[StyleRegistry] = None) -> List[DrawOp]:
    if not forecast or width <= 0 or height <= 0:
        return []
    s = styles or default_styles()
    avg_temp, total, dominant, avg_prob = summarize(forecast)
    kind = ground_type(avg_temp, total, dominant, avg_prob, latitude)
    log.debug('[SCENE] ground=%s avg=%.1fF total=%.2fin dominant=%s', kind.value, avg_temp, total, dominant.value)
    if kind is GroundType.ICE:
        return _ice(x, y, width, height, avg_temp)
    if kind is GroundType.PUDDLES:
        return _puddles(x, y, width, height, total, forecast[0].seed, s['ground.puddle'])
    if kind is GroundType.SAND:
        return _sand(x, y, width, height, avg_temp)
    if kind is GroundType.SEASONAL:
        return _seasonal(x, y, width, height, season_for(forecast[0].datetime, latitude))
    return []
