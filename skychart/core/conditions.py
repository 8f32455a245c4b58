"""Weather condition variants and their icon identifiers."""
from __future__ import annotations
from enum import Enum
from typing import Dict, Optional


class WeatherCondition(str, Enum):
    CLEAR = 'clear'
    CLEAR_NIGHT = 'clear-night'
    CLOUDY = 'cloudy'
    EXCEPTIONAL = 'exceptional'
    FOG = 'fog'
    HAIL = 'hail'
    LIGHTNING = 'lightning'
    LIGHTNING_RAINY = 'lightning-rainy'
    PARTLY_CLOUDY = 'partlycloudy'
    POURING = 'pouring'
    RAINY = 'rainy'
    SNOWY = 'snowy'
    SNOWY_RAINY = 'snowy-rainy'
    SUNNY = 'sunny'
    WINDY = 'windy'
    WINDY_VARIANT = 'windy-variant'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'WeatherCondition':
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


RAINY_CONDITIONS = frozenset({
    WeatherCondition.RAINY,
    WeatherCondition.POURING,
    WeatherCondition.LIGHTNING_RAINY,
    WeatherCondition.SNOWY_RAINY,
})

NICE_CONDITIONS = frozenset({
    WeatherCondition.SUNNY,
    WeatherCondition.PARTLY_CLOUDY,
    WeatherCondition.CLEAR_NIGHT,
})

UNKNOWN_ICON = 'mdi:weather-cloudy-alert'

CONDITION_ICONS: Dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR: 'mdi:weather-sunny',
    WeatherCondition.CLEAR_NIGHT: 'mdi:weather-night',
    WeatherCondition.CLOUDY: 'mdi:weather-cloudy',
    WeatherCondition.EXCEPTIONAL: 'mdi:alert-circle-outline',
    WeatherCondition.FOG: 'mdi:weather-fog',
    WeatherCondition.HAIL: 'mdi:weather-hail',
    WeatherCondition.LIGHTNING: 'mdi:weather-lightning',
    WeatherCondition.LIGHTNING_RAINY: 'mdi:weather-lightning-rainy',
    WeatherCondition.PARTLY_CLOUDY: 'mdi:weather-partly-cloudy',
    WeatherCondition.POURING: 'mdi:weather-pouring',
    WeatherCondition.RAINY: 'mdi:weather-rainy',
    WeatherCondition.SNOWY: 'mdi:weather-snowy',
    WeatherCondition.SNOWY_RAINY: 'mdi:weather-snowy-rainy',
    WeatherCondition.SUNNY: 'mdi:weather-sunny',
    WeatherCondition.WINDY: 'mdi:weather-windy',
    WeatherCondition.WINDY_VARIANT: 'mdi:weather-windy-variant',
    WeatherCondition.UNKNOWN: UNKNOWN_ICON,
}

NIGHT_ICONS: Dict[WeatherCondition, str] = {
    WeatherCondition.PARTLY_CLOUDY: 'mdi:weather-night-partly-cloudy',
}


def condition_icon(condition, night: bool = False) -> str:
    """Icon id for a condition; night variant where one exists."""
    cond = WeatherCondition.parse(condition)
    if night and cond in NIGHT_ICONS:
        return NIGHT_ICONS[cond]
    return CONDITION_ICONS.get(cond, UNKNOWN_ICON)
