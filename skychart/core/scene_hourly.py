"""Hourly chart composer: forecast slice + sun times -> Scene.

Layers, back to front: background (sky gradient with sun-event hard edges),
decor (stars / clouds), precipitation particles, temperature fill and curve,
optional ground strip, wind arrows, and the text/icon overlay.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from skychart.core.colors import ColorFn, temperature_to_color, text_color_for_background
from skychart.core.conditions import WeatherCondition, condition_icon
from skychart.core.config import HourlyLayout
from skychart.core.distribution import DistributionAlgorithm
from skychart.core.drawops import (
    Clip, ColorStop, DrawOp, Icon, Line, LinearGradient, Path, Placeholder, Rect, Scene, Text, group,
)
from skychart.core.ground import ground_ops
from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.points import Bounds
from skychart.core.precipitation import particle_ops
from skychart.core.sky import decor_ops, is_daytime, sky_color, sky_fade_stops, sky_gradient_stops
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.temperature import TemperatureScale, catmull_rom, changed_labels, curve_temperatures, fill_polygon
from skychart.core.units import format_temperature
from skychart.core.weather import HOURLY_RAIN_MULTIPLIER, HOURLY_SNOW_MULTIPLIER
from skychart.core.wind import wind_ops

log = logging.getLogger('skychart.scene.hourly')

LABEL_EVERY_HOURS = 3
RULE_OPACITY = 0.3
TICK_HEIGHT = 6.0
ICON_MIN_SCALE = 0.5
ICON_MAX_SCALE = 1.125
ICON_RUN_UNIT = 24.0      # run width (px) that maps to scale 1.0
CURVE_TOP = 0.05          # curve area within the band, as fractions of its height
CURVE_HEIGHT = 0.85
WIND_ROW = 0.10
LABEL_OFFSET = 6.0


@dataclass(frozen=True)
class IconRun:
    start: int
    end: int
    condition: WeatherCondition

    @property
    def multi(self) -> bool:
        return self.end > self.start


def icon_runs(forecast: Sequence[ForecastPoint]) -> List[IconRun]:
    """Consecutive identical conditions, first and last buckets excluded."""
    runs: List[IconRun] = []
    for i in range(1, len(forecast) - 1):
        cond = WeatherCondition.parse(forecast[i].condition)
        if runs and runs[-1].condition is cond:
            runs[-1] = IconRun(runs[-1].start, i, cond)
        else:
            runs.append(IconRun(i, i, cond))
    return runs


def hour_label(dt) -> str:
    return str(dt.hour % 12 or 12)


def _xs(n: int, x0: float, width: float) -> List[float]:
    if n == 1:
        return [x0 + width / 2.0]
    return [x0 + i / (n - 1) * width for i in range(n)]


def _offsets(n: int) -> List[float]:
    return [i / (n - 1) if n > 1 else 0.0 for i in range(n)]


def _placeholder(layout: HourlyLayout, styles: StyleRegistry) -> Scene:
    return Scene(layout.width, layout.height,
                 (Placeholder(0.0, 0.0, layout.width, layout.height, color=styles['placeholder.text']),))


def _background(forecast, sun_times, layout: HourlyLayout, styles: StyleRegistry) -> List[DrawOp]:
    band_bottom = layout.band_bottom
    fade = None
    if layout.sky_fade:
        fade = LinearGradient(0.0, 0.0, 0.0, band_bottom, tuple(sky_fade_stops()))
    sky = LinearGradient(0.0, 0.0, layout.width, 0.0, tuple(sky_gradient_stops(forecast, sun_times, styles)))
    return [
        Rect(0.0, band_bottom, layout.width, layout.height - band_bottom, styles['chrome.neutral']),
        Rect(0.0, 0.0, layout.width, band_bottom, sky, fade=fade),
    ]


def _precipitation(forecast, layout: HourlyLayout, styles, algorithm) -> List[DrawOp]:
    n = len(forecast)
    slice_w = layout.content_width / n
    ops: List[DrawOp] = []
    for i, point in enumerate(forecast):
        bounds = Bounds(layout.padding + i * slice_w, layout.band_top, slice_w, layout.band_height)
        ops.extend(particle_ops(point, bounds, f"{point.seed}-precip",
                                rain_multiplier=HOURLY_RAIN_MULTIPLIER, snow_multiplier=HOURLY_SNOW_MULTIPLIER,
                                algorithm=algorithm, styles=styles))
    return ops


def _temperature(forecast, layout: HourlyLayout, styles, color_fn: ColorFn, scale: TemperatureScale) -> List[DrawOp]:
    temps = curve_temperatures(forecast)
    xs = _xs(len(forecast), 0.0, layout.width)
    curve = [(x, scale.y(t)) for x, t in zip(xs, temps)]
    if layout.smooth_curve:
        curve = catmull_rom(curve)
    stops = tuple(ColorStop(o, color_fn(t)) for o, t in zip(_offsets(len(temps)), temps))
    fill = Rect(0.0, layout.band_top, layout.width, layout.band_height,
                LinearGradient(0.0, 0.0, layout.width, 0.0, stops), opacity=layout.fill_opacity)
    return [
        Clip(fill_polygon(curve, layout.band_bottom), (fill,)),
        Path(tuple(curve), stroke=styles['temperature.line'], width=layout.line_width, opacity=0.9),
    ]


def _icon_row(forecast, sun_times, layout: HourlyLayout, styles) -> List[DrawOp]:
    runs = icon_runs(forecast)
    if not runs:
        return []
    n = len(forecast)
    xs = _xs(n, 0.0, layout.width)
    slot = layout.content_width / n
    smallest = min((r.end - r.start + 1) * slot for r in runs)
    size = layout.icon_size * max(ICON_MIN_SCALE, min(ICON_MAX_SCALE, smallest / ICON_RUN_UNIT))
    rule = styles['chrome.rule']
    row_bottom = layout.band_top - 1.0
    icon_y = layout.padding + layout.icon_row_height / 2.0
    ops: List[DrawOp] = []
    for k, run in enumerate(runs):
        x0, x1 = xs[run.start], xs[run.end]
        if run.multi:
            ops.append(Line(x0, row_bottom, x1, row_bottom, rule, width=1.0, opacity=RULE_OPACITY))
            ops.append(Line(x0, row_bottom, x0, row_bottom - TICK_HEIGHT, rule, width=1.0, opacity=RULE_OPACITY))
            if k < len(runs) - 1:
                ops.append(Line(x1, row_bottom, x1, row_bottom - TICK_HEIGHT, rule, width=1.0, opacity=RULE_OPACITY))
        middle = forecast[(run.start + run.end) // 2]
        night = not is_daytime(middle.datetime, sun_times)
        ops.append(Icon((x0 + x1) / 2.0, icon_y, size, condition_icon(run.condition, night=night), styles['text.light']))
    return ops


def _temperature_labels(forecast, sun_times, layout: HourlyLayout, styles, scale: TemperatureScale) -> List[DrawOp]:
    temps = curve_temperatures(forecast)
    xs = _xs(len(forecast), 0.0, layout.width)
    ops: List[DrawOp] = []
    for i in changed_labels(temps):
        point = forecast[i]
        background = sky_color(point.datetime, point.cloud_coverage, sun_times, styles)
        color = text_color_for_background(background, styles['text.light'], styles['text.dark'])
        ops.append(Text(xs[i], scale.y(temps[i]) - LABEL_OFFSET, format_temperature(temps[i], layout.temperature_unit),
                        layout.label_size, color, baseline='bottom', weight='bold'))
    return ops


def _hour_labels(forecast, layout: HourlyLayout, styles) -> List[DrawOp]:
    xs = _xs(len(forecast), 0.0, layout.width)
    y = layout.band_bottom + layout.label_row_height * 0.7
    color = styles['text.light']
    ops: List[DrawOp] = []
    for i in range(1, len(forecast) - 1):
        dt = forecast[i].datetime
        if dt.hour % LABEL_EVERY_HOURS == 0:
            ops.append(Text(xs[i], y, hour_label(dt), layout.label_size, color))
        else:
            ops.append(Line(xs[i], y - TICK_HEIGHT / 2.0, xs[i], y + TICK_HEIGHT / 2.0, color, width=1.0))
    return ops


def compose_hourly(
    forecast: Sequence[ForecastPoint],
    sun_times: Optional[SunTimes] = None,
    layout: Optional[HourlyLayout] = None,
    *,
    latitude: Optional[float] = None,
    color_fn: Optional[ColorFn] = None,
    styles: Optional[StyleRegistry] = None,
    algorithm: Optional[DistributionAlgorithm] = None,
) -> Scene:
    """Build the hourly chart. Pure: equal inputs give equal scenes."""
    layout = layout or HourlyLayout()
    styles = styles or default_styles()
    color_fn = color_fn or temperature_to_color
    algorithm = DistributionAlgorithm.parse(algorithm or layout.algorithm)
    latitude = layout.latitude if latitude is None else latitude
    items = list(forecast)[:layout.max_items]
    if not items:
        log.info('[SCENE] hourly: empty forecast, placeholder only')
        return _placeholder(layout, styles)

    scale = TemperatureScale.padded(curve_temperatures(items), layout.band_top + layout.band_height * CURVE_TOP,
                                    layout.band_height * CURVE_HEIGHT)
    column_w = layout.content_width / len(items)
    wind_xs = _xs(len(items), layout.padding, layout.content_width)

    layers = [
        group('background', _background(items, sun_times, layout, styles)),
        group('decor', decor_ops(items, sun_times, layout.padding, column_w, layout.band_top, layout.band_height,
                                 styles, algorithm)),
        group('precipitation', _precipitation(items, layout, styles, algorithm)),
        group('temperature', _temperature(items, layout, styles, color_fn, scale)),
    ]
    if layout.show_ground:
        layers.append(group('ground', ground_ops(items, layout.padding, layout.band_bottom, layout.content_width,
                                                 layout.label_row_height * 0.5, latitude, styles)))
    layers.append(group('wind', wind_ops(items, wind_xs, layout.band_top + layout.band_height * WIND_ROW, styles)))
    layers.append(group('overlay', _icon_row(items, sun_times, layout, styles)
                        + _temperature_labels(items, sun_times, layout, styles, scale)
                        + _hour_labels(items, layout, styles)))
    scene = Scene(layout.width, layout.height, tuple(layers))
    log.debug('[SCENE] hourly: %d buckets, %d ops', len(items), sum(1 for _ in scene.flatten()))
    return scene
