"""Immediate-mode Pillow render target.

Every op is rasterised as a coverage mask (mode "L") at device scale, painted
with a solid color or a numpy-evaluated gradient, multiplied by the active clip
mask and alpha-composited onto the canvas.
"""
from __future__ import annotations
from pathlib import Path as FsPath
from typing import List, Optional, Tuple, Union
import logging

import numpy as np
from PIL import Image, ImageChops, ImageDraw, ImageFont

from skychart.core.colors import hex_to_rgb
from skychart.core.drawops import (
    Circle, Clip, Icon, Line, LinearGradient, Paint, Path, Placeholder, Rect, Scene, Text, replay,
)
from skychart.core.icons_raster import draw_icon, has_glyph

log = logging.getLogger('skychart.render.raster')

H_ANCHORS = {'start': 'l', 'middle': 'm', 'end': 'r'}
V_ANCHORS = {'top': 't', 'middle': 'm', 'bottom': 's'}


def gradient_array(g: LinearGradient, size: Tuple[int, int], scale: float) -> np.ndarray:
    """RGBA float array (h, w, 4) of `g` evaluated over a device-pixel canvas."""
    w, h = size
    xs = (np.arange(w, dtype=np.float64) + 0.5) / scale
    ys = (np.arange(h, dtype=np.float64) + 0.5) / scale
    gx, gy = np.meshgrid(xs, ys)
    dx, dy = g.x2 - g.x1, g.y2 - g.y1
    length2 = dx * dx + dy * dy
    if length2 <= 0:
        t = np.zeros_like(gx)
    else:
        t = np.clip(((gx - g.x1) * dx + (gy - g.y1) * dy) / length2, 0.0, 1.0)
    stops = sorted(g.stops, key=lambda st: st.offset) if g.stops else []
    if not stops:
        return np.zeros((h, w, 4), dtype=np.float64)
    offsets = np.array([st.offset for st in stops], dtype=np.float64)
    rgb = np.array([hex_to_rgb(st.color) for st in stops], dtype=np.float64)
    alpha = np.array([st.opacity * 255.0 for st in stops], dtype=np.float64)
    out = np.empty((h, w, 4), dtype=np.float64)
    for c in range(3):
        out[..., c] = np.interp(t, offsets, rgb[:, c])
    out[..., 3] = np.interp(t, offsets, alpha)
    return out


class RasterTarget:
    def __init__(self, width: float, height: float, scale: float = 2.0, background: Optional[str] = None):
        self.scale = float(scale)
        self.size = (max(1, int(round(width * self.scale))), max(1, int(round(height * self.scale))))
        fill = (*hex_to_rgb(background), 255) if background else (0, 0, 0, 0)
        self.image = Image.new('RGBA', self.size, fill)
        self._clips: List[Image.Image] = []
        self._fonts = {}

    # -- helpers ---------------------------------------------------------

    def _s(self, v: float) -> float:
        return v * self.scale

    def _pt(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale, y * self.scale

    def _width(self, w: float) -> int:
        return max(1, int(round(w * self.scale)))

    def _mask(self) -> Tuple[Image.Image, ImageDraw.ImageDraw]:
        m = Image.new('L', self.size, 0)
        return m, ImageDraw.Draw(m)

    def _font(self, size: float):
        px = max(1, int(round(size * self.scale)))
        if px not in self._fonts:
            self._fonts[px] = ImageFont.load_default(size=px)
        return self._fonts[px]

    def _composite(self, layer: Image.Image, opacity: float = 1.0) -> None:
        alpha = layer.getchannel('A')
        if opacity < 1.0:
            alpha = alpha.point(lambda a: int(round(a * max(0.0, opacity))))
        if self._clips:
            alpha = ImageChops.multiply(alpha, self._clips[-1])
        layer.putalpha(alpha)
        self.image = Image.alpha_composite(self.image, layer)

    def _paint(self, paint: Paint, mask: Image.Image, opacity: float = 1.0,
               fade: Optional[LinearGradient] = None) -> None:
        if isinstance(paint, LinearGradient):
            arr = gradient_array(paint, self.size, self.scale)
            arr[..., 3] *= np.asarray(mask, dtype=np.float64) / 255.0
            layer = Image.fromarray(np.clip(np.rint(arr), 0, 255).astype(np.uint8), 'RGBA')
        else:
            layer = Image.new('RGBA', self.size, (*hex_to_rgb(paint), 255))
            layer.putalpha(mask)
        if fade is not None:
            fade_alpha = gradient_array(fade, self.size, self.scale)[..., 3] / 255.0
            a = np.asarray(layer.getchannel('A'), dtype=np.float64) * fade_alpha
            layer.putalpha(Image.fromarray(np.clip(np.rint(a), 0, 255).astype(np.uint8), 'L'))
        self._composite(layer, opacity)

    # -- RenderTarget ----------------------------------------------------

    def rect(self, op: Rect) -> None:
        if op.width <= 0 or op.height <= 0:
            return
        mask, d = self._mask()
        box = (*self._pt(op.x, op.y), *self._pt(op.x + op.width, op.y + op.height))
        if op.radius > 0:
            r = min(self._s(op.radius), (box[2] - box[0]) / 2.0, (box[3] - box[1]) / 2.0)
            d.rounded_rectangle(box, radius=r, fill=255)
        else:
            d.rectangle(box, fill=255)
        self._paint(op.fill, mask, op.opacity, op.fade)

    def line(self, op: Line) -> None:
        mask, d = self._mask()
        d.line((*self._pt(op.x1, op.y1), *self._pt(op.x2, op.y2)), fill=255, width=self._width(op.width))
        self._paint(op.stroke, mask, op.opacity)

    def path(self, op: Path) -> None:
        if len(op.points) < 2:
            return
        pts = [self._pt(x, y) for x, y in op.points]
        if op.fill is not None and len(pts) >= 3:
            mask, d = self._mask()
            d.polygon(pts, fill=255)
            self._paint(op.fill, mask, op.opacity)
        if op.stroke is not None:
            mask, d = self._mask()
            if op.closed:
                pts = pts + [pts[0]]
            d.line(pts, fill=255, width=self._width(op.width), joint='curve')
            self._paint(op.stroke, mask, op.opacity)

    def circle(self, op: Circle) -> None:
        mask, d = self._mask()
        d.ellipse((*self._pt(op.cx - op.r, op.cy - op.r), *self._pt(op.cx + op.r, op.cy + op.r)), fill=255)
        self._paint(op.fill, mask, op.opacity)

    def text(self, op: Text) -> None:
        if not op.text:
            return
        mask, d = self._mask()
        anchor = H_ANCHORS.get(op.anchor, 'm') + V_ANCHORS.get(op.baseline, 'm')
        d.text(self._pt(op.x, op.y), op.text, fill=255, font=self._font(op.size), anchor=anchor)
        self._paint(op.color, mask)

    def icon(self, op: Icon) -> None:
        if not has_glyph(op.icon):
            log.debug('[RENDER] No raster glyph for %s, drawing marker', op.icon)
        layer = Image.new('RGBA', self.size, (0, 0, 0, 0))
        draw_icon(ImageDraw.Draw(layer), op.icon, *self._pt(op.x, op.y), self._s(op.size))
        self._composite(layer)

    def clip(self, op: Clip) -> None:
        if len(op.shape) < 3:
            return
        mask, d = self._mask()
        d.polygon([self._pt(x, y) for x, y in op.shape], fill=255)
        if self._clips:
            mask = ImageChops.multiply(mask, self._clips[-1])
        self._clips.append(mask)
        try:
            replay(op.children, self)
        finally:
            self._clips.pop()

    def placeholder(self, op: Placeholder) -> None:
        self.text(Text(op.x + op.width / 2.0, op.y + op.height / 2.0, op.message, 14.0, op.color))

    def to_image(self) -> Image.Image:
        return self.image


def render_image(scene: Scene, scale: float = 2.0, background: Optional[str] = None) -> Image.Image:
    target = RasterTarget(scene.width, scene.height, scale, background)
    replay(scene.ops, target)
    return target.to_image()


def save_png(scene: Scene, path: Union[str, FsPath], scale: float = 2.0, background: Optional[str] = None) -> FsPath:
    out = FsPath(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_image(scene, scale, background).save(out, format='PNG')
    log.info('[RENDER] Wrote %s', out)
    return out
