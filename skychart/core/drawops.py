"""Draw operations and the render-target contract.
Composers emit a `Scene` of immutable ops; a target (SVG, Pillow raster, or a
test recorder) replays them. Coordinates are logical viewport units.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class ColorStop:
    offset: float
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class LinearGradient:
    x1: float
    y1: float
    x2: float
    y2: float
    stops: Tuple[ColorStop, ...]

    @property
    def horizontal(self) -> bool:
        return self.y1 == self.y2


Paint = Union[str, LinearGradient]
Coords = Tuple[Tuple[float, float], ...]


@dataclass(frozen=True)
class Rect:
    kind: ClassVar[str] = 'rect'
    x: float
    y: float
    width: float
    height: float
    fill: Paint
    opacity: float = 1.0
    radius: float = 0.0
    fade: Optional[LinearGradient] = None   # alpha mask; stop opacities scale the fill


@dataclass(frozen=True)
class Line:
    kind: ClassVar[str] = 'line'
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    width: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True)
class Path:
    """Polyline or polygon (`closed`)."""
    kind: ClassVar[str] = 'path'
    points: Coords
    fill: Optional[Paint] = None
    stroke: Optional[Paint] = None
    width: float = 1.0
    opacity: float = 1.0
    closed: bool = False


@dataclass(frozen=True)
class Circle:
    kind: ClassVar[str] = 'circle'
    cx: float
    cy: float
    r: float
    fill: str
    opacity: float = 1.0


@dataclass(frozen=True)
class Text:
    kind: ClassVar[str] = 'text'
    x: float
    y: float
    text: str
    size: float
    color: str
    anchor: str = 'middle'      # start | middle | end
    baseline: str = 'middle'    # top | middle | bottom
    weight: str = 'normal'


@dataclass(frozen=True)
class Icon:
    """Opaque icon reference (e.g. 'mdi:weather-sunny') centred on (x, y)."""
    kind: ClassVar[str] = 'icon'
    x: float
    y: float
    size: float
    icon: str
    color: str = '#ffffff'


@dataclass(frozen=True)
class Clip:
    """Children drawn only inside the polygon `shape`."""
    kind: ClassVar[str] = 'clip'
    shape: Coords
    children: Tuple['DrawOp', ...] = ()


@dataclass(frozen=True)
class Group:
    kind: ClassVar[str] = 'group'
    name: str
    children: Tuple['DrawOp', ...] = ()


@dataclass(frozen=True)
class Placeholder:
    kind: ClassVar[str] = 'placeholder'
    x: float
    y: float
    width: float
    height: float
    message: str = 'No forecast data available'
    color: str = '#888888'


DrawOp = Union[Rect, Line, Path, Circle, Text, Icon, Clip, Group, Placeholder]


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    ops: Tuple[DrawOp, ...] = field(default_factory=tuple)

    def layer(self, name: str) -> Optional[Group]:
        for op in self.ops:
            if isinstance(op, Group) and op.name == name:
                return op
        return None

    def layer_names(self) -> Tuple[str, ...]:
        return tuple(op.name for op in self.ops if isinstance(op, Group))

    def flatten(self) -> Iterator[DrawOp]:
        """Primitive ops in paint order; groups and clips are expanded."""
        yield from _walk(self.ops)


def _walk(ops) -> Iterator[DrawOp]:
    for op in ops:
        if isinstance(op, (Group, Clip)):
            yield from _walk(op.children)
        else:
            yield op


class RenderTarget(Protocol):
    def rect(self, op: Rect) -> None: ...
    def line(self, op: Line) -> None: ...
    def path(self, op: Path) -> None: ...
    def circle(self, op: Circle) -> None: ...
    def text(self, op: Text) -> None: ...
    def icon(self, op: Icon) -> None: ...
    def clip(self, op: Clip) -> None: ...
    def placeholder(self, op: Placeholder) -> None: ...


def replay(ops, target: RenderTarget) -> None:
    """Dispatch ops to the target; groups are transparent, clips are the target's job."""
    for op in ops:
        if isinstance(op, Group):
            replay(op.children, target)
        else:
            getattr(target, op.kind)(op)


def group(name: str, ops) -> Group:
    return Group(name=name, children=tuple(ops))
