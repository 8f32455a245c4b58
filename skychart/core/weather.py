"""Physical-ish mappings: defaults, precipitation particles, wind arrows, ground type.
Pure functions over primitives; no drawing here.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, Optional
import math

from skychart.core.colors import interpolate_color
from skychart.core.conditions import NICE_CONDITIONS, RAINY_CONDITIONS, WeatherCondition

# Missing-data defaults
DEFAULT_CLOUD_COVERAGE = 50.0
DEFAULT_PRECIP_PROBABILITY = 100.0
DEFAULT_PRECIPITATION = 0.0
DEFAULT_WIND_SPEED = 0.0
DEFAULT_WIND_BEARING = 0.0
DEFAULT_HIGH_TEMPERATURE = 50.0
DEFAULT_LOW_OFFSET = 10.0
DEFAULT_LATITUDE = 40.0

# Particles per inch of precipitation per 10,000 px² (visual density, not physics)
PARTICLE_AREA_UNIT = 10000.0
HOURLY_RAIN_MULTIPLIER = 15.0
HOURLY_SNOW_MULTIPLIER = 4.0
DAILY_RAIN_MULTIPLIER = 15.0
DAILY_SNOW_MULTIPLIER = 5.0

# Wind arrows
WIND_VISIBILITY_MPH = 8.0
WIND_THICKNESS_BASE = 2.0
WIND_THICKNESS_STEP_MPH = 8.0
WIND_THICKNESS_MAX_EXTRA = 3.0

# Ground thresholds (°F, %)
FREEZING_F = 32.0
HOT_F = 90.0
NICE_MIN_F = 55.0
NICE_MAX_F = 85.0
NICE_MAX_PROBABILITY = 20.0
RAIN_PROBABILITY_THRESHOLD = 20.0


def _or(value: Optional[float], default: float) -> float:
    if value is None:
        return default
    v = float(value)
    return default if math.isnan(v) else v


def cloud_coverage(value: Optional[float]) -> float:
    return _or(value, DEFAULT_CLOUD_COVERAGE)


def precipitation_probability(value: Optional[float]) -> float:
    return _or(value, DEFAULT_PRECIP_PROBABILITY)


def precipitation_amount(value: Optional[float]) -> float:
    return _or(value, DEFAULT_PRECIPITATION)


def wind_speed(value: Optional[float]) -> float:
    return _or(value, DEFAULT_WIND_SPEED)


def high_temperature(value: Optional[float]) -> float:
    return _or(value, DEFAULT_HIGH_TEMPERATURE)


def low_temperature(low: Optional[float], high: Optional[float]) -> float:
    return _or(low, high_temperature(high) - DEFAULT_LOW_OFFSET)


# ---------------------------------------------------------------------------
# Precipitation
# ---------------------------------------------------------------------------

class PrecipitationKind(str, Enum):
    RAIN = 'rain'
    SNOW = 'snow'
    MIXED = 'mixed'


def precipitation_kind(condition) -> Optional[PrecipitationKind]:
    cond = WeatherCondition.parse(condition)
    if cond is WeatherCondition.SNOWY:
        return PrecipitationKind.SNOW
    if cond in (WeatherCondition.SNOWY_RAINY, WeatherCondition.HAIL):
        return PrecipitationKind.MIXED
    if cond in RAINY_CONDITIONS:
        return PrecipitationKind.RAIN
    return None


def precipitation_particle_count(
    amount: float,
    area: float,
    is_snow: bool,
    rain_multiplier: float = HOURLY_RAIN_MULTIPLIER,
    snow_multiplier: float = HOURLY_SNOW_MULTIPLIER,
) -> int:
    """round(amount * multiplier * area/10000), at least 1 whenever anything falls."""
    if amount is None or amount <= 0 or area <= 0:
        return 0
    mult = snow_multiplier if is_snow else rain_multiplier
    return max(1, int(round(amount * mult * area / PARTICLE_AREA_UNIT)))


def precipitation_opacity(probability: Optional[float]) -> float:
    prob = precipitation_probability(probability)
    if prob <= 30:
        return 0.3
    if prob <= 60:
        return 0.5
    if prob <= 90:
        return 0.7
    return 1.0


def precipitation_particle_size(amount_in: float) -> float:
    """Glyph size in px from amount (inches)."""
    a = precipitation_amount(amount_in)
    if a <= 0:
        return 0.0
    if a <= 0.02:
        return 3.0
    if a <= 0.08:
        return 5.0
    if a <= 0.2:
        return 8.0
    return 12.0


# ---------------------------------------------------------------------------
# Wind
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WindArrow:
    angle: float        # degrees clockwise from north, direction the wind blows TO
    length: float
    head_size: float
    thickness: float


def wind_arrow_geometry(bearing: Optional[float], speed_mph: Optional[float]) -> Optional[WindArrow]:
    """Arrow for a wind reading, or None below the visibility threshold.
    `bearing` is meteorological (where the wind comes FROM).
    """
    speed = wind_speed(speed_mph)
    if speed < WIND_VISIBILITY_MPH:
        return None
    thickness = WIND_THICKNESS_BASE + min((speed - WIND_VISIBILITY_MPH) / WIND_THICKNESS_STEP_MPH, WIND_THICKNESS_MAX_EXTRA)
    angle = (_or(bearing, DEFAULT_WIND_BEARING) + 180.0) % 360.0
    return WindArrow(angle=angle, length=8.0 + thickness * 2.0, head_size=3.0 + thickness, thickness=thickness)


# ---------------------------------------------------------------------------
# Ground
# ---------------------------------------------------------------------------

class GroundType(str, Enum):
    ICE = 'ice'
    PUDDLES = 'puddles'
    SAND = 'sand'
    SEASONAL = 'seasonal'
    NONE = 'none'


class Season(str, Enum):
    SPRING = 'spring'
    SUMMER = 'summer'
    FALL = 'fall'
    WINTER = 'winter'


SOUTHERN_FLIP: Dict[Season, Season] = {
    Season.SPRING: Season.FALL,
    Season.SUMMER: Season.WINTER,
    Season.FALL: Season.SPRING,
    Season.WINTER: Season.SUMMER,
}


def is_nice_weather(condition, temp_f: float, probability: float) -> bool:
    return (
        WeatherCondition.parse(condition) in NICE_CONDITIONS
        and NICE_MIN_F <= temp_f <= NICE_MAX_F
        and probability < NICE_MAX_PROBABILITY
    )


def ground_type(
    avg_temp: float,
    total_precip: float,
    dominant_condition,
    avg_probability: float,
    latitude: Optional[float] = None,
) -> GroundType:
    """Priority: ice > puddles > sand > seasonal > none."""
    if avg_temp <= FREEZING_F:
        return GroundType.ICE
    cond = WeatherCondition.parse(dominant_condition)
    if cond in RAINY_CONDITIONS or (total_precip > 0 and avg_probability > RAIN_PROBABILITY_THRESHOLD):
        return GroundType.PUDDLES
    if avg_temp >= HOT_F:
        return GroundType.SAND
    if is_nice_weather(cond, avg_temp, avg_probability):
        return GroundType.SEASONAL
    return GroundType.NONE


def season_for(day, latitude: Optional[float] = None) -> Season:
    """Meteorological season for the month, flipped south of the equator."""
    month = day.month if isinstance(day, (date, datetime)) else int(day)
    if 3 <= month <= 5:
        season = Season.SPRING
    elif 6 <= month <= 8:
        season = Season.SUMMER
    elif 9 <= month <= 11:
        season = Season.FALL
    else:
        season = Season.WINTER
    if _or(latitude, DEFAULT_LATITUDE) < 0:
        season = SOUTHERN_FLIP[season]
    return season


def ice_intensity(temp_f: float) -> float:
    """0 at 32°F, 1 at -10°F."""
    if temp_f > FREEZING_F:
        return 0.0
    return max(0.0, min(1.0, (FREEZING_F - temp_f) / 42.0))


def ice_height(intensity: float) -> float:
    return 4.0 + intensity * 26.0


def ice_color(intensity: float) -> str:
    return interpolate_color('#e3f2fd', '#1565c0', intensity)


def sand_intensity(temp_f: float) -> float:
    """0 at 90°F, 1 at 110°F."""
    if temp_f < HOT_F:
        return 0.0
    return max(0.0, min(1.0, (temp_f - HOT_F) / 20.0))


def puddle_intensity(total_precip_in: float) -> float:
    """0 when dry, 1 at 0.2 in and above."""
    return max(0.0, min(1.0, total_precip_in / 0.2))


def dominant_condition(conditions: Iterable) -> WeatherCondition:
    """Most common condition; first seen wins ties."""
    parsed = [WeatherCondition.parse(c) for c in conditions]
    if not parsed:
        return WeatherCondition.UNKNOWN
    counts = Counter(parsed)
    best = max(counts.values())
    for cond in parsed:
        if counts[cond] == best:
            return cond
    return WeatherCondition.UNKNOWN
