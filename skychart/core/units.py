"""Unit conversion and label formatting.
Everything below the adapter works in °F, mph and inches.
"""
from __future__ import annotations
from typing import Optional

MM_PER_INCH = 25.4
KMH_PER_MPH = 1.609344
MS_PER_MPH = 0.44704


def c_to_f(c: float) -> float:
    return c * 9.0 / 5.0 + 32.0


def f_to_c(f: float) -> float:
    return (f - 32.0) * 5.0 / 9.0


def normalize_unit(unit: Optional[str]) -> str:
    u = (unit or '').strip().lower().replace('°', '')
    return {'kmh': 'km/h', 'kph': 'km/h', 'ms': 'm/s', 'mps': 'm/s', 'inch': 'in', 'inches': 'in'}.get(u, u)


def temperature_to_f(value: float, unit: Optional[str]) -> float:
    return c_to_f(value) if normalize_unit(unit) == 'c' else value


def wind_to_mph(value: float, unit: Optional[str]) -> float:
    u = normalize_unit(unit)
    if u == 'km/h':
        return value / KMH_PER_MPH
    if u == 'm/s':
        return value / MS_PER_MPH
    if u == 'kn':
        return value * 1.150779
    return value


def precipitation_to_in(value: float, unit: Optional[str]) -> float:
    u = normalize_unit(unit)
    if u == 'mm':
        return value / MM_PER_INCH
    if u == 'cm':
        return value * 10.0 / MM_PER_INCH
    return value


def format_temperature(temp_f: float, unit: str = 'F') -> str:
    value = f_to_c(temp_f) if normalize_unit(unit) == 'c' else temp_f
    return f"{int(round(value))}°"


def format_precipitation(amount_in: Optional[float], unit: str = 'in') -> str:
    """'0.3"' for inches, '8mm' for millimetres, '' when nothing falls."""
    if not amount_in:
        return ''
    if normalize_unit(unit) == 'mm':
        return f"{int(round(amount_in * MM_PER_INCH))}mm"
    return f'{amount_in:.1f}"'
