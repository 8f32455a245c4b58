"""Hex color helpers and the temperature color scale."""
from __future__ import annotations
from typing import Callable, Iterable, List, Tuple

RGB = Tuple[int, int, int]
ColorFn = Callable[[float], str]


def hex_to_rgb(hex_str: str) -> RGB:
    h = hex_str.lstrip('#')
    if len(h) == 3:
        h = ''.join(ch * 2 for ch in h)
    if len(h) != 6:
        return 0, 0, 0
    try:
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    except ValueError:
        return 0, 0, 0


def rgb_to_hex(rgb: Tuple[float, float, float]) -> str:
    r, g, b = (int(max(0, min(255, round(c)))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def interpolate_color(c0: str, c1: str, factor: float) -> str:
    u = max(0.0, min(1.0, float(factor)))
    a = hex_to_rgb(c0)
    b = hex_to_rgb(c1)
    return rgb_to_hex(tuple(round(a[i] + (b[i] - a[i]) * u) for i in range(3)))


def darker(hex_str: str, factor: float = 0.85) -> str:
    r, g, b = hex_to_rgb(hex_str)
    return rgb_to_hex((r * factor, g * factor, b * factor))


def brightness(hex_str: str) -> float:
    r, g, b = hex_to_rgb(hex_str)
    return (r * 299 + g * 587 + b * 114) / 1000.0


def text_color_for_background(background: str, light: str = '#ffffff', dark: str = '#000000') -> str:
    """Dark text on bright backgrounds, light text otherwise."""
    return dark if brightness(background) > 128 else light


# 0°F..104°F, deep purple through deep red
TEMPERATURE_STOPS: List[Tuple[float, str]] = [
    (0.0, '#6666cc'),    # deep purple
    (10.0, '#8888ff'),   # freezing purple
    (20.0, '#6677ff'),   # ice blue
    (30.0, '#66aaff'),   # cold blue
    (40.0, '#44bbff'),   # cool blue
    (50.0, '#66cc99'),   # cool green
    (60.0, '#88dd88'),   # mild green
    (70.0, '#ffee44'),   # warm yellow
    (80.0, '#ffbb44'),   # mild orange
    (90.0, '#ff8844'),   # warm orange
    (100.0, '#ff4444'),  # hot red
    (104.0, '#cc0000'),  # deep red
]


def temperature_to_color(temp_f: float) -> str:
    """Piecewise-linear RGB interpolation across TEMPERATURE_STOPS, clamped at both ends."""
    t = float(temp_f)
    if t <= TEMPERATURE_STOPS[0][0]:
        return TEMPERATURE_STOPS[0][1]
    if t >= TEMPERATURE_STOPS[-1][0]:
        return TEMPERATURE_STOPS[-1][1]
    for i in range(len(TEMPERATURE_STOPS) - 1):
        t0, c0 = TEMPERATURE_STOPS[i]
        t1, c1 = TEMPERATURE_STOPS[i + 1]
        if t0 <= t <= t1:
            return interpolate_color(c0, c1, (t - t0) / (t1 - t0))
    return TEMPERATURE_STOPS[-1][1]


def adaptive_temperature_color(temps: Iterable[float], min_span: float = 30.0) -> ColorFn:
    """Color function stretched over the visible range instead of the absolute scale.
    The range [min, max] is widened to at least `min_span` degrees around its
    midpoint, then mapped linearly onto the full stop scale.
    """
    values = [float(t) for t in temps]
    if not values:
        return temperature_to_color
    lo, hi = min(values), max(values)
    if hi - lo < min_span:
        mid = (lo + hi) / 2.0
        lo, hi = mid - min_span / 2.0, mid + min_span / 2.0
    scale_lo = TEMPERATURE_STOPS[0][0]
    scale_hi = TEMPERATURE_STOPS[-1][0]

    def color(temp: float) -> str:
        u = (float(temp) - lo) / (hi - lo)
        return temperature_to_color(scale_lo + u * (scale_hi - scale_lo))

    return color
