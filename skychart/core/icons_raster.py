"""Pillow glyphs for the `mdi:` condition icon ids.
Geometry is laid out on a 48x48 design grid and scaled to the requested size.
Unknown ids get a small ring marker so a missing glyph is visible but harmless.
"""
from __future__ import annotations
from typing import Callable, Dict, Tuple
import math

from PIL import Image, ImageDraw

GRID = 48.0
RGBA = Tuple[int, int, int, int]

SUN_YELLOW = (255, 213, 0, 255)
SUN_CORE = (255, 235, 120, 255)
MOON_PALE = (235, 235, 210, 255)
CLOUD_GRAY = (200, 200, 200, 255)
CLOUD_DARK = (170, 170, 170, 255)
DROP_BLUE = (60, 130, 220, 255)
FLAKE_WHITE = (245, 250, 255, 255)
BOLT_AMBER = (255, 190, 30, 255)
FOG_GRAY = (190, 190, 190, 220)
STEM_GREEN = (90, 160, 80, 255)


class _Pen:
    """Maps design-grid coordinates onto a (cx, cy, size) box."""

    def __init__(self, draw: ImageDraw.ImageDraw, cx: float, cy: float, size: float):
        self.draw = draw
        self.k = size / GRID
        self.ox = cx - size / 2.0
        self.oy = cy - size / 2.0

    def p(self, x: float, y: float) -> Tuple[float, float]:
        return self.ox + x * self.k, self.oy + y * self.k

    def w(self, v: float) -> int:
        return max(1, int(round(v * self.k)))

    def circle(self, cx: float, cy: float, r: float, fill: RGBA) -> None:
        x0, y0 = self.p(cx - r, cy - r)
        x1, y1 = self.p(cx + r, cy + r)
        self.draw.ellipse((x0, y0, x1, y1), fill=fill)

    def line(self, x0, y0, x1, y1, fill: RGBA, width: float) -> None:
        self.draw.line((*self.p(x0, y0), *self.p(x1, y1)), fill=fill, width=self.w(width))

    def polygon(self, pts, fill: RGBA) -> None:
        self.draw.polygon([self.p(x, y) for x, y in pts], fill=fill)

    def rect(self, x0, y0, x1, y1, fill: RGBA) -> None:
        self.draw.rectangle((*self.p(x0, y0), *self.p(x1, y1)), fill=fill)


def draw_sun(pen: _Pen, cx: float = 24, cy: float = 24, r: float = 10) -> None:
    for i in range(8):
        a = math.radians(i * 45.0)
        pen.line(cx, cy, cx + r * 1.8 * math.cos(a), cy + r * 1.8 * math.sin(a), SUN_YELLOW, 3)
    pen.circle(cx, cy, r, SUN_YELLOW)
    pen.circle(cx, cy, r - 3, SUN_CORE)


def draw_moon(pen: _Pen, cx: float = 24, cy: float = 22, r: float = 11, background: RGBA = (0, 0, 0, 0)) -> None:
    pen.circle(cx, cy, r, MOON_PALE)
    pen.circle(cx + r * 0.55, cy - r * 0.35, r * 0.85, background)


def draw_cloud(pen: _Pen, x: float = 6, y: float = 14, w: float = 36, h: float = 20, fill: RGBA = CLOUD_GRAY) -> None:
    pen.circle(x + w * 0.30, y + h * 0.50, h * 0.38, fill)
    pen.circle(x + w * 0.55, y + h * 0.40, h * 0.30, fill)
    pen.circle(x + w * 0.75, y + h * 0.55, h * 0.32, fill)
    pen.rect(x + w * 0.25, y + h * 0.60, x + w * 0.85, y + h * 0.75, fill)
    pen.line(x + w * 0.25, y + h * 0.60, x + w * 0.85, y + h * 0.60, CLOUD_DARK, 1)


def draw_drop(pen: _Pen, cx: float, cy: float, r: float = 3) -> None:
    pen.circle(cx, cy, r, DROP_BLUE)
    pen.polygon(((cx, cy - r - 2), (cx - r, cy), (cx + r, cy)), DROP_BLUE)


def draw_flake(pen: _Pen, cx: float, cy: float, r: float = 3.5) -> None:
    for i in range(3):
        a = math.radians(i * 60.0)
        dx, dy = r * math.cos(a), r * math.sin(a)
        pen.line(cx - dx, cy - dy, cx + dx, cy + dy, FLAKE_WHITE, 1.5)


def draw_bolt(pen: _Pen, x: float = 22, y: float = 30) -> None:
    pen.polygon(((x, y), (x + 6, y), (x + 2, y + 7), (x + 7, y + 7), (x - 2, y + 17), (x + 1, y + 9), (x - 3, y + 9)), BOLT_AMBER)


def draw_fog(pen: _Pen) -> None:
    for i, (x0, x1) in enumerate(((8, 40), (12, 36), (8, 40))):
        y = 32 + i * 5
        pen.line(x0, y, x1, y, FOG_GRAY, 2.5)


def draw_wind(pen: _Pen) -> None:
    for y, x1 in ((18, 34), (26, 40), (34, 30)):
        pen.line(8, y, x1, y, CLOUD_GRAY, 2.5)
        pen.circle(x1, y - 3, 3, CLOUD_GRAY)


def draw_plant(pen: _Pen, bloom: RGBA) -> None:
    pen.line(24, 42, 24, 22, STEM_GREEN, 2.5)
    pen.polygon(((24, 34), (16, 28), (24, 30)), STEM_GREEN)
    pen.circle(24, 18, 7, bloom)


def draw_marker(pen: _Pen) -> None:
    pen.circle(24, 24, 8, CLOUD_DARK)
    pen.circle(24, 24, 5, (0, 0, 0, 0))


def _rain(n: int) -> Callable[[_Pen], None]:
    def paint(pen: _Pen) -> None:
        draw_cloud(pen, y=10)
        for i in range(n):
            draw_drop(pen, 8 + (i + 0.5) * 32 / n, 37)
    return paint


def _snow(pen: _Pen) -> None:
    draw_cloud(pen, y=10)
    for i in range(3):
        draw_flake(pen, 14 + i * 10, 37)


def _sleet(pen: _Pen) -> None:
    draw_cloud(pen, y=10)
    draw_drop(pen, 14, 37)
    draw_flake(pen, 24, 37)
    draw_drop(pen, 34, 37)


def _hail(pen: _Pen) -> None:
    draw_cloud(pen, y=10)
    for i in range(3):
        pen.circle(14 + i * 10, 37, 2.5, FLAKE_WHITE)


def _partly(pen: _Pen) -> None:
    draw_sun(pen, 16, 16, 9)
    draw_cloud(pen, 8, 16, 32, 18)


def _night_partly(pen: _Pen) -> None:
    draw_moon(pen, 17, 16, 9)
    draw_cloud(pen, 8, 16, 32, 18)


def _lightning(rain: bool) -> Callable[[_Pen], None]:
    def paint(pen: _Pen) -> None:
        draw_cloud(pen, y=8, fill=CLOUD_DARK)
        draw_bolt(pen)
        if rain:
            draw_drop(pen, 12, 38)
            draw_drop(pen, 36, 38)
    return paint


def _fog(pen: _Pen) -> None:
    draw_cloud(pen, y=6)
    draw_fog(pen)


def _cloudy_alert(pen: _Pen) -> None:
    draw_cloud(pen)
    draw_bolt(pen, 22, 32)


def _windy_variant(pen: _Pen) -> None:
    draw_cloud(pen, y=2, h=16)
    draw_wind(pen)


def _alert(pen: _Pen) -> None:
    pen.circle(24, 24, 14, BOLT_AMBER)
    pen.circle(24, 24, 11, (0, 0, 0, 0))
    pen.line(24, 16, 24, 27, BOLT_AMBER, 3)
    pen.circle(24, 32, 2, BOLT_AMBER)


GLYPHS: Dict[str, Callable[[_Pen], None]] = {
    'mdi:weather-sunny': lambda pen: draw_sun(pen),
    'mdi:weather-night': lambda pen: draw_moon(pen),
    'mdi:weather-partly-cloudy': _partly,
    'mdi:weather-night-partly-cloudy': _night_partly,
    'mdi:weather-cloudy': lambda pen: draw_cloud(pen),
    'mdi:weather-cloudy-alert': _cloudy_alert,
    'mdi:weather-rainy': _rain(3),
    'mdi:weather-pouring': _rain(5),
    'mdi:weather-snowy': _snow,
    'mdi:weather-snowy-rainy': _sleet,
    'mdi:weather-hail': _hail,
    'mdi:weather-lightning': _lightning(False),
    'mdi:weather-lightning-rainy': _lightning(True),
    'mdi:weather-fog': _fog,
    'mdi:weather-windy': draw_wind,
    'mdi:weather-windy-variant': _windy_variant,
    'mdi:alert-circle-outline': _alert,
    'mdi:snowflake': lambda pen: draw_flake(pen, 24, 24, 14),
    'mdi:flower': lambda pen: draw_plant(pen, (240, 120, 170, 255)),
    'mdi:flower-tulip': lambda pen: draw_plant(pen, (230, 70, 90, 255)),
    'mdi:flower-outline': lambda pen: draw_plant(pen, (255, 215, 80, 255)),
    'mdi:sprout': lambda pen: draw_plant(pen, STEM_GREEN),
    'mdi:grass': lambda pen: draw_plant(pen, STEM_GREEN),
    'mdi:clover': lambda pen: draw_plant(pen, (70, 150, 70, 255)),
    'mdi:leaf': lambda pen: draw_plant(pen, (220, 130, 40, 255)),
    'mdi:leaf-maple': lambda pen: draw_plant(pen, (200, 70, 30, 255)),
    'mdi:pine-tree': lambda pen: pen.polygon(((24, 6), (38, 38), (10, 38)), (40, 110, 60, 255)),
}


def has_glyph(icon_id: str) -> bool:
    return icon_id in GLYPHS


def draw_icon(draw: ImageDraw.ImageDraw, icon_id: str, cx: float, cy: float, size: float) -> None:
    GLYPHS.get(icon_id, draw_marker)(_Pen(draw, cx, cy, size))


def icon_image(icon_id: str, size: int = 48) -> Image.Image:
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw_icon(ImageDraw.Draw(img), icon_id, size / 2.0, size / 2.0, size)
    return img
