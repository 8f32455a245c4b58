"""Retained-mode SVG render target. Ids are sequential, so equal scenes give equal markup."""
from __future__ import annotations
from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

from skychart.core.drawops import (
    Circle, Clip, Icon, Line, LinearGradient, Paint, Path, Placeholder, Rect, Scene, Text, replay,
)

ANCHORS = {'start': 'start', 'middle': 'middle', 'end': 'end'}
BASELINES = {'top': 'hanging', 'middle': 'central', 'bottom': 'alphabetic'}
FONT_FAMILY = 'system-ui, sans-serif'


def _n(v: float) -> str:
    return f"{v:.2f}"


def _attr(value) -> str:
    """Escape a color or other style value for a double-quoted attribute."""
    return escape(str(value), {'"': '&quot;'})


def _points(coords) -> str:
    return ' '.join(f"{_n(x)},{_n(y)}" for x, y in coords)


def _path_d(coords, closed: bool) -> str:
    if not coords:
        return ''
    head, *rest = coords
    d = f"M {_n(head[0])} {_n(head[1])}" + ''.join(f" L {_n(x)} {_n(y)}" for x, y in rest)
    return d + ' Z' if closed else d


class SvgTarget:
    def __init__(self, width: float, height: float, id_prefix: str = 'sc'):
        self.width = width
        self.height = height
        self.id_prefix = id_prefix
        self._defs: List[str] = []
        self._body: List[str] = []
        self._counter = 0

    def _id(self, kind: str) -> str:
        self._counter += 1
        return f"{self.id_prefix}-{kind}-{self._counter}"

    def _gradient(self, g: LinearGradient, white: bool = False) -> str:
        gid = self._id('grad')
        stops = ''.join(
            f"<stop offset=\"{st.offset:.4f}\" stop-color=\"{'#ffffff' if white else _attr(st.color)}\" stop-opacity=\"{st.opacity:.3f}\"/>"
            for st in g.stops
        )
        self._defs.append(
            f"<linearGradient id=\"{gid}\" gradientUnits=\"userSpaceOnUse\" "
            f"x1=\"{_n(g.x1)}\" y1=\"{_n(g.y1)}\" x2=\"{_n(g.x2)}\" y2=\"{_n(g.y2)}\">{stops}</linearGradient>"
        )
        return gid

    def _paint(self, paint: Optional[Paint]) -> str:
        if paint is None:
            return 'none'
        if isinstance(paint, LinearGradient):
            return f"url(#{self._gradient(paint)})"
        return _attr(paint)

    def rect(self, op: Rect) -> None:
        extra = ''
        if op.radius:
            r = min(op.radius, op.width / 2.0, op.height / 2.0)
            extra += f" rx=\"{_n(r)}\" ry=\"{_n(r)}\""
        if op.fade is not None:
            mid = self._id('mask')
            gid = self._gradient(op.fade, white=True)
            self._defs.append(
                f"<mask id=\"{mid}\" maskUnits=\"userSpaceOnUse\">"
                f"<rect x=\"{_n(op.x)}\" y=\"{_n(op.y)}\" width=\"{_n(op.width)}\" height=\"{_n(op.height)}\" fill=\"url(#{gid})\"/>"
                f"</mask>"
            )
            extra += f" mask=\"url(#{mid})\""
        self._body.append(
            f"<rect x=\"{_n(op.x)}\" y=\"{_n(op.y)}\" width=\"{_n(op.width)}\" height=\"{_n(op.height)}\" "
            f"fill=\"{self._paint(op.fill)}\" opacity=\"{op.opacity:.3f}\"{extra}/>"
        )

    def line(self, op: Line) -> None:
        self._body.append(
            f"<line x1=\"{_n(op.x1)}\" y1=\"{_n(op.y1)}\" x2=\"{_n(op.x2)}\" y2=\"{_n(op.y2)}\" "
            f"stroke=\"{self._paint(op.stroke)}\" stroke-width=\"{_n(op.width)}\" stroke-linecap=\"round\" opacity=\"{op.opacity:.3f}\"/>"
        )

    def path(self, op: Path) -> None:
        if not op.points:
            return
        self._body.append(
            f"<path d=\"{_path_d(op.points, op.closed)}\" fill=\"{self._paint(op.fill)}\" "
            f"stroke=\"{self._paint(op.stroke)}\" stroke-width=\"{_n(op.width)}\" "
            f"stroke-linecap=\"round\" stroke-linejoin=\"round\" opacity=\"{op.opacity:.3f}\"/>"
        )

    def circle(self, op: Circle) -> None:
        self._body.append(
            f"<circle cx=\"{_n(op.cx)}\" cy=\"{_n(op.cy)}\" r=\"{_n(op.r)}\" fill=\"{self._paint(op.fill)}\" opacity=\"{op.opacity:.3f}\"/>"
        )

    def text(self, op: Text) -> None:
        self._body.append(
            f"<text x=\"{_n(op.x)}\" y=\"{_n(op.y)}\" font-size=\"{_n(op.size)}\" font-family=\"{FONT_FAMILY}\" "
            f"font-weight=\"{op.weight}\" fill=\"{_attr(op.color)}\" text-anchor=\"{ANCHORS.get(op.anchor, 'middle')}\" "
            f"dominant-baseline=\"{BASELINES.get(op.baseline, 'central')}\">{escape(op.text)}</text>"
        )

    def icon(self, op: Icon) -> None:
        # Left to the host to resolve; the box keeps layout visible without it
        half = op.size / 2.0
        self._body.append(
            f"<g class=\"icon\" data-icon={quoteattr(op.icon)} color=\"{_attr(op.color)}\">"
            f"<rect x=\"{_n(op.x - half)}\" y=\"{_n(op.y - half)}\" width=\"{_n(op.size)}\" height=\"{_n(op.size)}\" fill=\"none\"/>"
            f"</g>"
        )

    def clip(self, op: Clip) -> None:
        cid = self._id('clip')
        self._defs.append(f"<clipPath id=\"{cid}\"><polygon points=\"{_points(op.shape)}\"/></clipPath>")
        self._body.append(f"<g clip-path=\"url(#{cid})\">")
        replay(op.children, self)
        self._body.append("</g>")

    def placeholder(self, op: Placeholder) -> None:
        self._body.append(
            f"<text x=\"{_n(op.x + op.width / 2.0)}\" y=\"{_n(op.y + op.height / 2.0)}\" font-size=\"14\" "
            f"font-family=\"{FONT_FAMILY}\" fill=\"{_attr(op.color)}\" text-anchor=\"middle\" "
            f"dominant-baseline=\"central\">{escape(op.message)}</text>"
        )

    def to_string(self) -> str:
        defs = f"<defs>{''.join(self._defs)}</defs>" if self._defs else ''
        return (
            f"<svg xmlns=\"http://www.w3.org/2000/svg\" width=\"{_n(self.width)}\" height=\"{_n(self.height)}\" "
            f"viewBox=\"0 0 {_n(self.width)} {_n(self.height)}\">"
            f"{defs}{''.join(self._body)}</svg>"
        )


def render_svg(scene: Scene, id_prefix: str = 'sc') -> str:
    target = SvgTarget(scene.width, scene.height, id_prefix)
    replay(scene.ops, target)
    return target.to_string()
