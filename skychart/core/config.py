"""Layout settings, the JSON/env settings loader and script logging setup."""
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
import json
import logging
import os

from skychart.core.distribution import DistributionAlgorithm

log = logging.getLogger('skychart.config')

ENV_PREFIX = 'SKYCHART_'
TRUTHY = ('1', 'true', 'yes', 'on')
FALSY = ('0', 'false', 'no', 'off', '')


@dataclass(frozen=True)
class HourlyLayout:
    """Fractions are of the content height (viewport minus padding)."""
    width: float = 400.0
    height: float = 150.0
    padding: float = 5.0
    icon_row: float = 0.12
    chart_band: float = 0.58
    label_row: float = 0.30
    algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI
    max_items: int = 12
    temperature_unit: str = 'F'
    show_ground: bool = False
    smooth_curve: bool = False
    sky_fade: bool = False
    line_width: float = 3.0
    fill_opacity: float = 0.85
    label_size: float = 11.0
    icon_size: float = 16.0
    latitude: Optional[float] = None

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.padding

    @property
    def content_height(self) -> float:
        return self.height - 2 * self.padding

    @property
    def icon_row_height(self) -> float:
        return self.content_height * self.icon_row

    @property
    def band_top(self) -> float:
        return self.padding + self.icon_row_height

    @property
    def band_height(self) -> float:
        return self.content_height * self.chart_band

    @property
    def band_bottom(self) -> float:
        return self.band_top + self.band_height

    @property
    def label_row_height(self) -> float:
        return self.content_height * self.label_row


@dataclass(frozen=True)
class DailyLayout:
    width: float = 400.0
    height: float = 160.0
    min_column_width: float = 50.0
    day_row: float = 16.0
    icon_row: float = 20.0
    precip_row: float = 12.0
    bar_width_ratio: float = 0.7
    bar_radius: float = 8.0
    bar_padding: float = 20.0
    algorithm: DistributionAlgorithm = DistributionAlgorithm.VORONOI
    max_items: int = 7
    temperature_unit: str = 'F'
    precipitation_unit: str = 'in'
    show_wind: bool = False
    show_background: bool = False
    label_size: float = 11.0
    icon_size: float = 16.0

    @property
    def header_height(self) -> float:
        return self.day_row + self.icon_row + self.precip_row

    @property
    def chart_top(self) -> float:
        return self.header_height

    @property
    def chart_height(self) -> float:
        return max(0.0, self.height - self.header_height)

    def column_count(self, n: int) -> int:
        """Visible columns: min(n, floor(width / min_column_width)), at least one when n > 0."""
        if n <= 0:
            return 0
        return max(1, min(n, int(self.width // self.min_column_width)))


@dataclass(frozen=True)
class Settings:
    hourly: HourlyLayout = field(default_factory=HourlyLayout)
    daily: DailyLayout = field(default_factory=DailyLayout)
    styles: Dict[str, str] = field(default_factory=dict)


def parse_bool(value: Union[str, bool, int]) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in TRUTHY:
        return True
    if s in FALSY:
        return False
    raise ValueError(f"Not a boolean flag: {value!r}")


def _coerce(layout, name: str, value: Any):
    """Convert a raw JSON/env value to the type of `layout.name`."""
    current = getattr(layout, name)
    try:
        if name == 'algorithm':
            return DistributionAlgorithm.parse(value)
        if isinstance(current, bool):
            return parse_bool(value)
        if isinstance(current, int):
            return int(value)
        if isinstance(current, float) or (current is None and name == 'latitude'):
            return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {type(layout).__name__}.{name}: {value!r} ({e})") from e
    return str(value)


def _apply(layout, values: Mapping[str, Any]):
    known = {f.name for f in fields(layout)}
    changes = {}
    for key, value in values.items():
        if key not in known:
            log.warning('[CONFIG] Ignoring unknown %s key: %s', type(layout).__name__, key)
            continue
        changes[key] = _coerce(layout, key, value)
    return replace(layout, **changes) if changes else layout


# env var -> ((section, key), ...)
ENV_KEYS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    'ALGORITHM': (('hourly', 'algorithm'), ('daily', 'algorithm')),
    'MAX_HOURLY': (('hourly', 'max_items'),),
    'MAX_DAILY': (('daily', 'max_items'),),
    'TEMPERATURE_UNIT': (('hourly', 'temperature_unit'), ('daily', 'temperature_unit')),
    'PRECIPITATION_UNIT': (('daily', 'precipitation_unit'),),
    'SHOW_GROUND': (('hourly', 'show_ground'),),
    'SMOOTH_CURVE': (('hourly', 'smooth_curve'),),
}


def load_settings(path: Optional[Union[str, Path]] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    """Defaults, then the JSON file (if any), then SKYCHART_* environment overrides.

    The file holds optional "hourly", "daily" and "styles" objects. Malformed
    values and unknown algorithm names raise ValueError.
    """
    env = os.environ if env is None else env
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        with p.open('r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must hold a JSON object: {p}")
        log.info('[CONFIG] Loaded settings from %s', p)

    sections = {
        'hourly': _apply(HourlyLayout(), data.get('hourly') or {}),
        'daily': _apply(DailyLayout(), data.get('daily') or {}),
    }
    for suffix, targets in ENV_KEYS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is None:
            continue
        for section, key in targets:
            sections[section] = _apply(sections[section], {key: raw})
        log.debug('[CONFIG] %s%s=%s', ENV_PREFIX, suffix, raw)

    styles = data.get('styles') or {}
    if not isinstance(styles, dict):
        raise ValueError("'styles' must be an object of name -> color")
    return Settings(hourly=sections['hourly'], daily=sections['daily'], styles={str(k): str(v) for k, v in styles.items()})


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    logging.basicConfig(level=level, format='[%(levelname)s] %(message)s')
