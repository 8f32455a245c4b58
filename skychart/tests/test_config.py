import json

import pytest

from skychart.core.config import DailyLayout, HourlyLayout, load_settings, parse_bool
from skychart.core.distribution import DistributionAlgorithm


def test_defaults():
    settings = load_settings(env={})
    assert settings.hourly == HourlyLayout()
    assert settings.daily == DailyLayout()
    assert settings.styles == {}
    assert settings.hourly.algorithm is DistributionAlgorithm.VORONOI


def test_layout_geometry():
    layout = HourlyLayout()
    assert layout.content_height == 140
    assert layout.band_top == pytest.approx(5 + 140 * 0.12)
    assert layout.band_bottom == pytest.approx(layout.band_top + 140 * 0.58)
    assert DailyLayout().chart_top == 48


def test_env_overrides():
    settings = load_settings(env={
        'SKYCHART_ALGORITHM': 'Poisson',
        'SKYCHART_MAX_HOURLY': '8',
        'SKYCHART_SHOW_GROUND': 'yes',
        'SKYCHART_TEMPERATURE_UNIT': 'C',
        'UNRELATED': 'x',
    })
    assert settings.hourly.algorithm is DistributionAlgorithm.POISSON
    assert settings.daily.algorithm is DistributionAlgorithm.POISSON
    assert settings.hourly.max_items == 8
    assert settings.hourly.show_ground is True
    assert settings.daily.temperature_unit == 'C'


def test_json_then_env(tmp_path):
    path = tmp_path / 'skychart.json'
    path.write_text(json.dumps({
        'hourly': {'width': 600, 'smooth_curve': True, 'latitude': -33.9, 'bogus': 1},
        'daily': {'max_items': 5, 'show_wind': 'on'},
        'styles': {'sky.day_clear': '#aaccee'},
    }), encoding='utf-8')
    settings = load_settings(path, env={'SKYCHART_MAX_DAILY': '3'})
    assert settings.hourly.width == 600.0
    assert settings.hourly.smooth_curve is True
    assert settings.hourly.latitude == -33.9
    assert settings.daily.max_items == 3
    assert settings.daily.show_wind is True
    assert settings.styles == {'sky.day_clear': '#aaccee'}


def test_unknown_algorithm_rejected():
    with pytest.raises(ValueError):
        load_settings(env={'SKYCHART_ALGORITHM': 'hexagonal'})


def test_malformed_values_rejected(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'hourly': {'max_items': 'many'}}), encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(path, env={})
    with pytest.raises(ValueError):
        load_settings(env={'SKYCHART_SMOOTH_CURVE': 'maybe'})


def test_settings_file_must_be_object(tmp_path):
    path = tmp_path / 'list.json'
    path.write_text('[1, 2]', encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(path, env={})


def test_parse_bool():
    assert parse_bool('ON') is True
    assert parse_bool('0') is False
    assert parse_bool(True) is True
    with pytest.raises(ValueError):
        parse_bool('sometimes')
