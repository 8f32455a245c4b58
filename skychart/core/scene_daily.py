"""Daily chart composer: one column per day with a high/low gradient bar."""
from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from skychart.core.colors import ColorFn, temperature_to_color
from skychart.core.conditions import condition_icon
from skychart.core.config import DailyLayout
from skychart.core.distribution import DistributionAlgorithm
from skychart.core.drawops import ColorStop, DrawOp, Icon, LinearGradient, Placeholder, Rect, Scene, Text, group
from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.points import Bounds
from skychart.core.precipitation import particle_ops
from skychart.core.sky import SkyPhase, phase_color
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.temperature import TemperatureScale, bar_range
from skychart.core.units import format_precipitation, format_temperature
from skychart.core.weather import (
    DAILY_RAIN_MULTIPLIER, DAILY_SNOW_MULTIPLIER, cloud_coverage, high_temperature, low_temperature,
)
from skychart.core.wind import wind_ops

log = logging.getLogger('skychart.scene.daily')

PARTICLE_SIZE_SCALE = 0.7
PARTICLE_MAX_SIZE = 5.0
LABEL_GAP = 2.0
WIND_ROW_OFFSET = 10.0


def day_name(dt) -> str:
    return dt.strftime('%a')


def _background(items, layout: DailyLayout, styles: StyleRegistry) -> List[DrawOp]:
    if not layout.show_background:
        return []
    n = len(items)
    stops = tuple(
        ColorStop(i / (n - 1) if n > 1 else 0.0, phase_color(SkyPhase.DAY, cloud_coverage(p.cloud_coverage) / 100.0, styles))
        for i, p in enumerate(items)
    )
    return [Rect(0.0, layout.chart_top, layout.width, layout.chart_height,
                 LinearGradient(0.0, 0.0, layout.width, 0.0, stops), opacity=0.8)]


def _header(items, layout: DailyLayout, styles: StyleRegistry, column_w: float) -> List[DrawOp]:
    color = styles['text.light']
    muted = styles['text.secondary']
    ops: List[DrawOp] = []
    for i, point in enumerate(items):
        cx = (i + 0.5) * column_w
        ops.append(Text(cx, layout.day_row / 2.0, day_name(point.datetime), layout.label_size, color, weight='bold'))
        ops.append(Icon(cx, layout.day_row + layout.icon_row / 2.0, layout.icon_size, condition_icon(point.condition), color))
        precip = format_precipitation(point.precipitation, layout.precipitation_unit)
        if precip:
            ops.append(Text(cx, layout.day_row + layout.icon_row + layout.precip_row / 2.0, precip,
                            layout.label_size * 0.8, muted))
    return ops


def _bars(items, layout: DailyLayout, styles, color_fn: ColorFn, scale: TemperatureScale, column_w: float):
    bar_w = column_w * layout.bar_width_ratio
    bars: List[DrawOp] = []
    labels: List[DrawOp] = []
    color = styles['text.light']
    for i, point in enumerate(items):
        high = high_temperature(point.temperature)
        low = low_temperature(point.templow, point.temperature)
        top, bottom = scale.y(high), scale.y(low)
        x = i * column_w + (column_w - bar_w) / 2.0
        fill = LinearGradient(0.0, top, 0.0, bottom, (ColorStop(0.0, color_fn(high)), ColorStop(1.0, color_fn(low))))
        bars.append(Rect(x, top, bar_w, max(0.0, bottom - top), fill, radius=layout.bar_radius))
        cx = (i + 0.5) * column_w
        labels.append(Text(cx, top - LABEL_GAP, format_temperature(high, layout.temperature_unit),
                           layout.label_size, color, baseline='bottom', weight='bold'))
        labels.append(Text(cx, bottom + LABEL_GAP, format_temperature(low, layout.temperature_unit),
                           layout.label_size, color, baseline='top', weight='bold'))
    return bars, labels


def _precipitation(items, layout: DailyLayout, styles, algorithm, column_w: float) -> List[DrawOp]:
    ops: List[DrawOp] = []
    for i, point in enumerate(items):
        bounds = Bounds(i * column_w, layout.chart_top, column_w, layout.chart_height)
        ops.extend(particle_ops(point, bounds, f"{point.seed}-daily-precip",
                                rain_multiplier=DAILY_RAIN_MULTIPLIER, snow_multiplier=DAILY_SNOW_MULTIPLIER,
                                algorithm=algorithm, styles=styles,
                                size_scale=PARTICLE_SIZE_SCALE, max_size=PARTICLE_MAX_SIZE))
    return ops


def compose_daily(
    forecast: Sequence[ForecastPoint],
    sun_times: Optional[SunTimes] = None,
    layout: Optional[DailyLayout] = None,
    *,
    latitude: Optional[float] = None,
    color_fn: Optional[ColorFn] = None,
    styles: Optional[StyleRegistry] = None,
    algorithm: Optional[DistributionAlgorithm] = None,
) -> Scene:
    """Build the daily chart. `sun_times` and `latitude` are accepted for a uniform
    composer signature; the daily view does not depend on them.
    """
    layout = layout or DailyLayout()
    styles = styles or default_styles()
    color_fn = color_fn or temperature_to_color
    algorithm = DistributionAlgorithm.parse(algorithm or layout.algorithm)
    items = list(forecast)[:layout.max_items]
    columns = layout.column_count(len(items))
    items = items[:columns]
    if not items:
        log.info('[SCENE] daily: empty forecast, placeholder only')
        return Scene(layout.width, layout.height,
                     (Placeholder(0.0, 0.0, layout.width, layout.height, color=styles['placeholder.text']),))

    column_w = layout.width / columns
    scale = TemperatureScale.inset(bar_range(items), layout.chart_top, layout.chart_height, layout.bar_padding)
    bars, labels = _bars(items, layout, styles, color_fn, scale, column_w)
    wind = []
    if layout.show_wind:
        wind = wind_ops(items, [(i + 0.5) * column_w for i in range(columns)],
                        layout.chart_top + WIND_ROW_OFFSET, styles)

    layers = (
        group('background', _background(items, layout, styles)),
        group('decor', ()),
        group('precipitation', _precipitation(items, layout, styles, algorithm, column_w)),
        group('temperature', bars),
        group('wind', wind),
        group('overlay', _header(items, layout, styles, column_w) + labels),
    )
    log.debug('[SCENE] daily: %d of %d days in %d columns', len(items), len(forecast), columns)
    return Scene(layout.width, layout.height, layers)
