import pytest

from skychart.core.colors import (
    adaptive_temperature_color, hex_to_rgb, interpolate_color, temperature_to_color,
    text_color_for_background,
)
from skychart.core.conditions import UNKNOWN_ICON, WeatherCondition, condition_icon
from skychart.core.styles import DEFAULT_STYLES, StyleRegistry, default_styles
from skychart.core.units import (
    c_to_f, format_precipitation, format_temperature, precipitation_to_in, wind_to_mph,
)


def test_hex_parsing():
    assert hex_to_rgb('#87ceeb') == (135, 206, 235)
    assert hex_to_rgb('fff') == (255, 255, 255)
    assert hex_to_rgb('#bogus') == (0, 0, 0)


def test_interpolate_clamps_factor():
    assert interpolate_color('#000000', '#ffffff', 0.5) == '#808080'
    assert interpolate_color('#000000', '#ffffff', -1) == '#000000'
    assert interpolate_color('#000000', '#ffffff', 7) == '#ffffff'


def test_temperature_scale_ends_clamp():
    assert temperature_to_color(-20) == '#6666cc'
    assert temperature_to_color(0) == '#6666cc'
    assert temperature_to_color(104) == '#cc0000'
    assert temperature_to_color(130) == '#cc0000'
    assert temperature_to_color(70) == '#ffee44'


def test_temperature_between_stops():
    r, g, b = hex_to_rgb(temperature_to_color(25))
    # 20°F #6677ff -> 30°F #66aaff: only green moves
    assert (r, b) == (0x66, 0xff)
    assert 0x77 < g < 0xaa


def test_adaptive_color_widens_narrow_range():
    color = adaptive_temperature_color([60, 70])
    assert color(50) == temperature_to_color(0)
    assert color(80) == temperature_to_color(104)
    assert adaptive_temperature_color([]) is temperature_to_color


def test_text_contrast():
    assert text_color_for_background('#ffffff') == '#000000'
    assert text_color_for_background('#0a1628') == '#ffffff'
    assert text_color_for_background('#87ceeb', light='#eeeeee', dark='#111111') == '#111111'


def test_condition_icons():
    assert condition_icon('sunny') == 'mdi:weather-sunny'
    assert condition_icon('clear') == 'mdi:weather-sunny'
    assert condition_icon('partlycloudy', night=True) == 'mdi:weather-night-partly-cloudy'
    assert condition_icon('rainy', night=True) == 'mdi:weather-rainy'
    assert condition_icon('tornado') == UNKNOWN_ICON
    assert condition_icon(None) == UNKNOWN_ICON
    assert WeatherCondition.parse(' Snowy-Rainy ') is WeatherCondition.SNOWY_RAINY


def test_unit_conversion():
    assert c_to_f(100) == 212
    assert wind_to_mph(16.09344, 'km/h') == pytest.approx(10.0)
    assert wind_to_mph(10, 'mph') == 10
    assert wind_to_mph(4.4704, 'm/s') == pytest.approx(10.0)
    assert precipitation_to_in(25.4, 'mm') == pytest.approx(1.0)


def test_labels():
    assert format_temperature(72) == '72°'
    assert format_temperature(71.6) == '72°'
    assert format_temperature(212, 'C') == '100°'
    assert format_temperature(212, '°C') == '100°'
    assert format_precipitation(0) == ''
    assert format_precipitation(None) == ''
    assert format_precipitation(0.3) == '0.3"'
    assert format_precipitation(0.5, 'mm') == '13mm'


def test_style_registry_is_explicit():
    styles = StyleRegistry()
    with pytest.raises(KeyError):
        styles['sky.day_clear']
    styles.register('sky.day_clear', '#123456')
    assert styles['sky.day_clear'] == '#123456'
    assert styles.get('missing', '#000000') == '#000000'


def test_style_overrides_do_not_mutate_defaults():
    base = default_styles()
    custom = base.with_overrides({'text.light': '#eeeeee'})
    assert custom['text.light'] == '#eeeeee'
    assert base['text.light'] == DEFAULT_STYLES['text.light']
    assert set(DEFAULT_STYLES) <= set(custom)
