"""Input records consumed by the composers."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ForecastPoint:
    """One hourly or daily forecast bucket. Units: °F, mph, inches."""
    datetime: datetime
    condition: Optional[str] = None
    temperature: Optional[float] = None
    templow: Optional[float] = None
    precipitation: Optional[float] = None
    precipitation_probability: Optional[float] = None
    cloud_coverage: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_bearing: Optional[float] = None
    humidity: Optional[float] = None
    uv_index: Optional[float] = None

    @property
    def seed(self) -> str:
        return self.datetime.isoformat()


@dataclass(frozen=True)
class SunTimes:
    """Next occurrence of each solar event; compared by time of day only."""
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    dawn: Optional[datetime] = None
    dusk: Optional[datetime] = None

    @property
    def has_sun_events(self) -> bool:
        return self.sunrise is not None and self.sunset is not None

    @property
    def has_twilight(self) -> bool:
        return self.has_sun_events and self.dawn is not None and self.dusk is not None
