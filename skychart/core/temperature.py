"""Temperature → Y mapping for the hourly curve and the daily bars, plus curve smoothing."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from skychart.core.weather import high_temperature, low_temperature

CURVE_PADDING = 0.15      # fraction of the range added above and below the hourly curve
BAR_PADDING_PX = 20.0
CATMULL_TENSION = 0.5
CURVE_SAMPLES = 8         # bezier samples per segment when flattening

XY = Tuple[float, float]


@dataclass(frozen=True)
class TemperatureScale:
    """Maps °F onto [top, top+height] with the warmest value near the top."""
    lo: float
    hi: float
    top: float
    height: float

    @classmethod
    def padded(cls, temps: Iterable[float], top: float, height: float, padding: float = CURVE_PADDING) -> 'TemperatureScale':
        values = [float(t) for t in temps]
        if not values:
            return cls(0.0, 0.0, top, height)
        lo, hi = min(values), max(values)
        span = hi - lo
        return cls(lo - span * padding, hi + span * padding, top, height)

    @classmethod
    def inset(cls, temps: Iterable[float], top: float, height: float, inset_px: float = BAR_PADDING_PX) -> 'TemperatureScale':
        """Range spans the values exactly, inset by a fixed pixel margin."""
        values = [float(t) for t in temps]
        lo = min(values) if values else 0.0
        hi = max(values) if values else 0.0
        inner = max(0.0, height - 2.0 * inset_px)
        return cls(lo, hi, top + (height - inner) / 2.0, inner)

    @property
    def span(self) -> float:
        return self.hi - self.lo

    def y(self, temp: float) -> float:
        if self.span <= 0:
            return self.top + self.height / 2.0
        return self.top + (1.0 - (float(temp) - self.lo) / self.span) * self.height


def curve_temperatures(forecast) -> List[float]:
    return [high_temperature(p.temperature) for p in forecast]


def bar_range(forecast) -> List[float]:
    temps: List[float] = []
    for p in forecast:
        temps.append(high_temperature(p.temperature))
        temps.append(low_temperature(p.templow, p.temperature))
    return temps


def catmull_rom(points: Sequence[XY], tension: float = CATMULL_TENSION, samples: int = CURVE_SAMPLES) -> List[XY]:
    """Flatten a Catmull-Rom spline (as cubic beziers) through `points`.
    Two or fewer points come back unchanged.
    """
    if len(points) <= 2:
        return list(points)
    out: List[XY] = [points[0]]
    n = len(points)
    for i in range(n - 1):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(n - 1, i + 2)]
        c1 = (p1[0] + (p2[0] - p0[0]) / 6.0 * tension, p1[1] + (p2[1] - p0[1]) / 6.0 * tension)
        c2 = (p2[0] - (p3[0] - p1[0]) / 6.0 * tension, p2[1] - (p3[1] - p1[1]) / 6.0 * tension)
        for k in range(1, samples + 1):
            t = k / samples
            u = 1.0 - t
            x = u ** 3 * p1[0] + 3 * u * u * t * c1[0] + 3 * u * t * t * c2[0] + t ** 3 * p2[0]
            y = u ** 3 * p1[1] + 3 * u * u * t * c1[1] + 3 * u * t * t * c2[1] + t ** 3 * p2[1]
            out.append((x, y))
    return out


def fill_polygon(curve: Sequence[XY], bottom: float) -> Tuple[XY, ...]:
    """Area under the curve down to `bottom`."""
    if not curve:
        return ()
    return tuple(curve) + ((curve[-1][0], bottom), (curve[0][0], bottom))


def changed_labels(temps: Sequence[float], skip_ends: bool = True) -> List[int]:
    """Indexes whose rounded temperature differs from the last emitted label."""
    picked: List[int] = []
    last: Optional[int] = None
    for i, t in enumerate(temps):
        if skip_ends and (i == 0 or i == len(temps) - 1):
            continue
        rounded = int(round(t))
        if last is None or rounded != last:
            picked.append(i)
            last = rounded
    return picked
