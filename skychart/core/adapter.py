"""Data adapter: raw forecast records (Home Assistant style) -> ForecastPoint lists.

Numbers are coerced with pandas (bad values become None, never NaN), units
are normalised to °F / mph / inches, and the time-window filters that decide
what the composers see live here.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Union
import logging
import math

import pandas as pd

from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.units import precipitation_to_in, temperature_to_f, wind_to_mph

log = logging.getLogger('skychart.adapter')

NUMERIC_FIELDS = (
    'temperature', 'templow', 'precipitation', 'precipitation_probability', 'cloud_coverage',
    'wind_speed', 'wind_bearing', 'humidity', 'uv_index',
)
DEFAULT_UNITS = {'temperature': 'F', 'wind_speed': 'mph', 'precipitation': 'in'}

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def _clean(value) -> Optional[float]:
    if value is None:
        return None
    v = float(value)
    return None if math.isnan(v) else v


def _parse_datetime(value) -> Optional[datetime]:
    """One value at a time so mixed UTC offsets survive as given."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    ts = pd.to_datetime(value, errors='coerce')
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _convert(name: str, value: Optional[float], units: Mapping[str, str]) -> Optional[float]:
    if value is None:
        return None
    if name in ('temperature', 'templow'):
        return temperature_to_f(value, units.get('temperature'))
    if name == 'wind_speed':
        return wind_to_mph(value, units.get('wind_speed'))
    if name == 'precipitation':
        return precipitation_to_in(value, units.get('precipitation'))
    return value


def forecast_from_records(records: Records, units: Optional[Mapping[str, str]] = None) -> List[ForecastPoint]:
    """Build sorted ForecastPoints from mappings or a DataFrame.

    Rows whose datetime cannot be parsed are dropped (logged); input without a
    `datetime` field at all raises ValueError.
    """
    unit_map = dict(DEFAULT_UNITS)
    unit_map.update(units or {})
    df = records if isinstance(records, pd.DataFrame) else pd.DataFrame(list(records))
    if df.empty and len(df.columns) == 0:
        return []
    if 'datetime' not in df.columns:
        raise ValueError(f"Forecast records have no 'datetime' field (columns: {sorted(map(str, df.columns))})")

    stamps = [_parse_datetime(v) for v in df['datetime']]
    numeric = {
        c: pd.to_numeric(df[c], errors='coerce').tolist() if c in df.columns else [None] * len(df)
        for c in NUMERIC_FIELDS
    }
    conditions = df['condition'].tolist() if 'condition' in df.columns else [None] * len(df)

    points: List[ForecastPoint] = []
    dropped = 0
    for i, dt in enumerate(stamps):
        if dt is None:
            dropped += 1
            continue
        cond = conditions[i]
        if cond is not None and not isinstance(cond, str):
            cond = None if pd.isna(cond) else str(cond)
        values = {c: _convert(c, _clean(numeric[c][i]), unit_map) for c in NUMERIC_FIELDS}
        points.append(ForecastPoint(datetime=dt, condition=cond, **values))
    if dropped:
        log.warning('[ADAPTER] Dropped %d record(s) without a parsable datetime', dropped)
    points.sort(key=lambda p: p.datetime)
    log.debug('[ADAPTER] %d forecast points (units %s)', len(points), unit_map)
    return points


def _comparable(value: datetime, ref: datetime) -> datetime:
    if value.tzinfo is not None and ref.tzinfo is not None:
        return value.astimezone(ref.tzinfo)
    if value.tzinfo is not None or ref.tzinfo is not None:
        return value.replace(tzinfo=ref.tzinfo)
    return value


def next_whole_hour(now: datetime) -> datetime:
    return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def prepare_hourly(forecast: Iterable[ForecastPoint], now: datetime, max_items: int = 12) -> List[ForecastPoint]:
    """Buckets at or after the next whole hour, capped to `max_items`."""
    start = next_whole_hour(now)
    kept = [p for p in forecast if _comparable(p.datetime, start) >= start]
    return kept[:max(0, max_items)]


def _local_date(value: datetime, now: datetime) -> date:
    return _comparable(value, now).date()


def prepare_daily(forecast: Iterable[ForecastPoint], now: datetime, max_items: int = 7) -> List[ForecastPoint]:
    """Days strictly after today, capped to `max_items`."""
    today = now.date()
    kept = [p for p in forecast if _local_date(p.datetime, now) > today]
    return kept[:max(0, max_items)]


def sun_times_from_attributes(attrs: Optional[Mapping[str, Any]]) -> SunTimes:
    """Map `sun.sun` style attributes (next_rising, next_setting, next_dawn, next_dusk)."""
    attrs = attrs or {}

    def get(key: str) -> Optional[datetime]:
        value = attrs.get(key)
        if value is None or value == '':
            return None
        dt = _parse_datetime(value)
        if dt is None:
            log.warning('[ADAPTER] Ignoring unparsable %s: %r', key, value)
        return dt

    return SunTimes(sunrise=get('next_rising'), sunset=get('next_setting'), dawn=get('next_dawn'), dusk=get('next_dusk'))
