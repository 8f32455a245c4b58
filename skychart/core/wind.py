"""Wind arrows: a shaft toward where the wind blows, with a two-stroke head."""
from __future__ import annotations
from typing import List, Optional, Sequence
import math

from skychart.core.drawops import DrawOp, Line, Path
from skychart.core.models import ForecastPoint
from skychart.core.styles import StyleRegistry, default_styles
from skychart.core.weather import WindArrow, wind_arrow_geometry

HEAD_ANGLE = 0.5   # radians either side of the shaft
ARROW_OPACITY = 0.6
HEAD_WIDTH_RATIO = 0.8


def arrow_ops(x: float, y: float, arrow: WindArrow, color: str) -> List[DrawOp]:
    """Arrow centred on (x, y), pointing along `arrow.angle` (0 = up the screen)."""
    a = math.radians(arrow.angle)
    half = arrow.length / 2.0
    start_x = x - math.sin(a) * half
    start_y = y + math.cos(a) * half
    end_x = x + math.sin(a) * half
    end_y = y - math.cos(a) * half
    h1 = (end_x - math.sin(a - HEAD_ANGLE) * arrow.head_size, end_y + math.cos(a - HEAD_ANGLE) * arrow.head_size)
    h2 = (end_x - math.sin(a + HEAD_ANGLE) * arrow.head_size, end_y + math.cos(a + HEAD_ANGLE) * arrow.head_size)
    return [
        Line(start_x, start_y, end_x, end_y, color, width=arrow.thickness, opacity=ARROW_OPACITY),
        Path((h1, (end_x, end_y), h2), stroke=color, width=arrow.thickness * HEAD_WIDTH_RATIO, opacity=ARROW_OPACITY),
    ]


def wind_ops(forecast: Sequence[ForecastPoint], xs: Sequence[float], y: float,
             styles: Optional[StyleRegistry] = None) -> List[DrawOp]:
    """One arrow per bucket whose wind reaches the visibility threshold."""
    color = (styles or default_styles())['wind.stroke']
    ops: List[DrawOp] = []
    for point, x in zip(forecast, xs):
        arrow = wind_arrow_geometry(point.wind_bearing, point.wind_speed)
        if arrow is not None:
            ops.extend(arrow_ops(x, y, arrow, color))
    return ops
