"""Hand-made 24-hour weather patterns for debug renders and tests.

Each pattern row is (condition, cloud_coverage, precipitation, precipitation_probability,
wind_speed, humidity); temperatures come from a diurnal curve over a seasonal range.
"""
from __future__ import annotations
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Sequence, Tuple, Union
import math

import pandas as pd

from skychart.core.adapter import forecast_from_records
from skychart.core.models import ForecastPoint, SunTimes

Row = Tuple[str, float, float, float, float, float]

# (low °F, high °F, representative date)
SEASONS: Dict[str, Tuple[float, float, str]] = {
    'winter': (25, 38, '2026-01-15'),
    'early_spring': (40, 55, '2026-03-20'),
    'late_spring': (55, 70, '2026-05-10'),
    'summer': (75, 90, '2026-07-15'),
    'early_fall': (60, 75, '2026-09-25'),
    'late_fall': (38, 50, '2026-11-10'),
}

BUILDING_STORM: List[Row] = [
    ('clear-night', 10, 0, 5, 5, 60), ('clear-night', 15, 0, 5, 5, 62), ('clear-night', 15, 0, 5, 5, 65),
    ('clear-night', 20, 0, 10, 5, 65), ('clear-night', 25, 0, 10, 6, 68), ('clear-night', 30, 0, 15, 6, 70),
    ('partlycloudy', 35, 0, 15, 7, 70), ('partlycloudy', 45, 0, 20, 8, 72), ('partlycloudy', 55, 0, 30, 8, 75),
    ('cloudy', 70, 0, 45, 10, 78), ('cloudy', 85, 0, 60, 12, 80), ('cloudy', 95, 0, 75, 14, 82),
    ('rainy', 100, 0.3, 90, 15, 88), ('rainy', 100, 0.5, 95, 16, 90), ('cloudy', 100, 0.05, 40, 18, 85),
    ('cloudy', 95, 0, 25, 20, 80), ('cloudy', 90, 0, 15, 22, 75), ('windy', 85, 0, 10, 25, 70),
    ('windy', 70, 0, 5, 22, 65), ('windy-variant', 55, 0, 5, 20, 60), ('partlycloudy', 40, 0, 5, 15, 58),
    ('partlycloudy', 30, 0, 5, 12, 55), ('clear-night', 25, 0, 5, 10, 55), ('clear-night', 20, 0, 5, 8, 55),
]

RAINY_MORNING: List[Row] = [
    ('cloudy', 85, 0, 40, 8, 75), ('cloudy', 88, 0, 50, 8, 78), ('cloudy', 90, 0, 55, 9, 80),
    ('cloudy', 92, 0, 65, 10, 82), ('cloudy', 95, 0, 75, 10, 85), ('cloudy', 98, 0.05, 80, 11, 87),
    ('rainy', 100, 0.3, 90, 12, 90), ('rainy', 100, 0.5, 95, 14, 92), ('rainy', 100, 0.4, 90, 12, 90),
    ('rainy', 100, 0.2, 75, 10, 85), ('cloudy', 80, 0, 40, 8, 75), ('partlycloudy', 50, 0, 20, 7, 65),
    ('sunny', 25, 0, 10, 6, 55), ('sunny', 20, 0, 10, 6, 50), ('partlycloudy', 35, 0, 15, 7, 52),
    ('partlycloudy', 50, 0, 20, 8, 55), ('cloudy', 60, 0, 25, 8, 58), ('cloudy', 65, 0, 25, 7, 60),
    ('cloudy', 70, 0, 20, 6, 62), ('cloudy', 70, 0, 15, 6, 65), ('cloudy', 75, 0, 15, 5, 68),
    ('cloudy', 78, 0, 15, 5, 70), ('cloudy', 80, 0, 20, 5, 72), ('cloudy', 82, 0, 25, 5, 74),
]

PERFECT_CLEAR: List[Row] = [
    ('clear-night', 0, 0, 0, 3, 55), ('clear-night', 0, 0, 0, 3, 58), ('clear-night', 2, 0, 0, 2, 60),
    ('clear-night', 3, 0, 0, 2, 62), ('clear-night', 5, 0, 0, 2, 60), ('clear-night', 5, 0, 0, 3, 58),
    ('sunny', 5, 0, 0, 4, 55), ('sunny', 8, 0, 0, 5, 50), ('sunny', 8, 0, 0, 5, 48),
    ('sunny', 10, 0, 0, 6, 45), ('sunny', 10, 0, 0, 6, 42), ('sunny', 12, 0, 0, 7, 40),
    ('sunny', 15, 0, 0, 7, 38), ('sunny', 15, 0, 0, 7, 38), ('sunny', 12, 0, 0, 6, 40),
    ('sunny', 10, 0, 0, 6, 42), ('sunny', 8, 0, 0, 5, 45), ('sunny', 5, 0, 0, 5, 48),
    ('partlycloudy', 10, 0, 0, 4, 50), ('clear-night', 5, 0, 0, 4, 52), ('clear-night', 3, 0, 0, 3, 54),
    ('clear-night', 2, 0, 0, 3, 55), ('clear-night', 0, 0, 0, 3, 55), ('clear-night', 0, 0, 0, 3, 55),
]

WINTER_SNOW: List[Row] = [
    ('snowy', 100, p, prob, w, h) for p, prob, w, h in (
        (0.1, 80, 8, 85), (0.1, 80, 8, 85), (0.15, 85, 10, 86), (0.15, 85, 10, 87), (0.2, 88, 12, 88),
        (0.25, 90, 12, 88), (0.3, 95, 14, 90), (0.4, 95, 15, 90), (0.5, 98, 16, 92), (0.5, 98, 16, 92),
        (0.4, 95, 15, 90), (0.35, 92, 14, 88), (0.25, 88, 12, 86), (0.2, 85, 12, 85), (0.15, 80, 10, 84),
        (0.15, 78, 10, 83), (0.1, 75, 8, 82), (0.1, 72, 8, 82), (0.08, 65, 7, 82), (0.05, 60, 6, 82),
        (0.05, 55, 6, 83), (0.05, 50, 5, 84), (0.08, 55, 6, 84), (0.1, 60, 7, 85),
    )
]

PATTERNS: Dict[str, List[Row]] = {
    'building_storm': BUILDING_STORM,
    'rainy_morning': RAINY_MORNING,
    'perfect_clear': PERFECT_CLEAR,
    'winter_snow': WINTER_SNOW,
}

DAILY_WEEK: List[Tuple[str, float, float, float, float, float]] = [
    # condition, high, low, precipitation, cloud_coverage, wind_speed
    ('sunny', 72, 55, 0, 10, 6),
    ('partlycloudy', 68, 52, 0, 40, 9),
    ('rainy', 60, 50, 0.4, 95, 14),
    ('pouring', 58, 49, 1.2, 100, 18),
    ('cloudy', 61, 47, 0.05, 80, 10),
    ('snowy-rainy', 38, 29, 0.3, 100, 12),
    ('sunny', 65, 44, 0, 5, 5),
]


def diurnal_temperature(hour: int, low: float, high: float) -> int:
    """Sine over the day: coolest around 05:00-06:00, warmest mid-afternoon."""
    factor = (math.sin((hour - 5) / 24.0 * 2.0 * math.pi) + 1.0) / 2.0
    return int(round(low + (high - low) * factor))


def _day(day: Union[str, date]) -> date:
    return date.fromisoformat(day) if isinstance(day, str) else day


def sample_records(pattern: Union[str, Sequence[Row]], season: str = 'winter') -> pd.DataFrame:
    """24 hourly rows starting at local midnight of the season's date."""
    rows = PATTERNS[pattern] if isinstance(pattern, str) else pattern
    low, high, day = SEASONS[season]
    start = datetime.combine(_day(day), time(0))
    records = []
    for hour, (cond, cover, precip, prob, wind, humidity) in enumerate(rows):
        night = hour < 6 or hour >= 19
        records.append({
            'datetime': (start + timedelta(hours=hour)).isoformat(),
            'condition': cond,
            'temperature': diurnal_temperature(hour, low, high),
            'cloud_coverage': cover,
            'precipitation': precip,
            'precipitation_probability': prob,
            'wind_speed': wind,
            'wind_bearing': 180,
            'humidity': humidity,
            'uv_index': 0 if night else min(10, round((1 - cover / 100.0) * 8)),
        })
    return pd.DataFrame.from_records(records)


def sample_forecast(pattern: Union[str, Sequence[Row]], season: str = 'winter') -> List[ForecastPoint]:
    return forecast_from_records(sample_records(pattern, season))


def sample_daily(start: Union[str, date] = '2026-01-16') -> List[ForecastPoint]:
    first = datetime.combine(_day(start), time(12))
    records = [
        {'datetime': (first + timedelta(days=i)).isoformat(), 'condition': cond, 'temperature': high,
         'templow': low, 'precipitation': precip, 'cloud_coverage': cover, 'wind_speed': wind, 'wind_bearing': 270}
        for i, (cond, high, low, precip, cover, wind) in enumerate(DAILY_WEEK)
    ]
    return forecast_from_records(records)


def calculate_sun_times(day: Union[str, date], latitude: float = 40.0) -> SunTimes:
    """Rough sunrise/sunset for mid-latitudes; dawn and dusk 30 minutes outside them."""
    d = _day(day)
    noon = datetime.combine(d, time(12))
    doy = d.timetuple().tm_yday
    declination = 23.45 * math.sin(math.radians(360.0 * (284 + doy) / 365.0))
    x = -math.tan(math.radians(latitude)) * math.tan(math.radians(declination))
    # polar day / night: clamp so the sun still rises and sets
    hour_angle = math.degrees(math.acos(max(-1.0, min(1.0, x))))
    half_day = timedelta(hours=hour_angle / 15.0)
    sunrise = (noon - half_day).replace(second=0, microsecond=0)
    sunset = (noon + half_day).replace(second=0, microsecond=0)
    return SunTimes(
        sunrise=sunrise,
        sunset=sunset,
        dawn=sunrise - timedelta(minutes=30),
        dusk=sunset + timedelta(minutes=30),
    )
