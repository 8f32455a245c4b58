"""Named colors and visual constants, registered explicitly by the caller.
The composition root builds one registry (usually `default_styles()`), applies
its overrides and hands it to the composers; nothing is registered at import.
"""
from __future__ import annotations
from typing import Dict, Iterator, Mapping, Optional

DEFAULT_STYLES: Dict[str, str] = {
    # Sky palette
    'sky.day_clear': '#87ceeb',
    'sky.day_cloudy': '#708090',
    'sky.night_clear': '#0a1628',
    'sky.night_cloudy': '#1a1a1a',
    'sky.dawn': '#ffb347',
    'sky.dusk': '#ff8c42',
    # Text and chrome
    'text.light': '#ffffff',
    'text.dark': '#000000',
    'text.secondary': '#aaaaaa',
    'chrome.neutral': '#1c1c1c',
    'chrome.rule': '#ffffff',
    # Layers
    'temperature.line': '#ffffff',
    'particle.rain': '#9bd7ff',
    'particle.snow': '#ffffff',
    'decor.star': '#ffffff',
    'decor.cloud': '#ffffff',
    'wind.stroke': '#ffffff',
    'ground.puddle': '#6bb7ff',
    'placeholder.text': '#888888',
}


class StyleRegistry:
    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    def register(self, name: str, value: str) -> 'StyleRegistry':
        self._values[name] = value
        return self

    def get(self, name: str, default: Optional[str] = None) -> str:
        if name in self._values:
            return self._values[name]
        if default is not None:
            return default
        raise KeyError(f"Style not registered: {name}")

    def __getitem__(self, name: str) -> str:
        return self.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def with_overrides(self, overrides: Mapping[str, str]) -> 'StyleRegistry':
        merged = dict(self._values)
        merged.update(overrides)
        return StyleRegistry(merged)


def default_styles() -> StyleRegistry:
    return StyleRegistry(DEFAULT_STYLES)
