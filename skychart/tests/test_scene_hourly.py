from dataclasses import replace
from datetime import datetime

from skychart.core.colors import adaptive_temperature_color
from skychart.core.config import HourlyLayout
from skychart.core.drawops import Clip, Icon, Line, LinearGradient, Path, Placeholder, Rect, Text
from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.samples import calculate_sun_times, sample_forecast
from skychart.core.scene_hourly import IconRun, compose_hourly, hour_label, icon_runs
from skychart.core.conditions import WeatherCondition
from skychart.core.target_svg import render_svg

SUN = calculate_sun_times('2026-05-10')
LAYERS = ('background', 'decor', 'precipitation', 'temperature', 'wind', 'overlay')


def rainy_morning():
    # 01:00 .. 12:00, rain from 06:00 to 09:00
    return sample_forecast('rainy_morning', 'late_spring')[1:13]


def test_empty_forecast_gives_placeholder():
    scene = compose_hourly([])
    ops = list(scene.flatten())
    assert len(ops) == 1
    assert isinstance(ops[0], Placeholder)
    assert ops[0].message == 'No forecast data available'
    assert scene.layer_names() == ()


def test_layer_order():
    scene = compose_hourly(rainy_morning(), SUN)
    assert scene.layer_names() == LAYERS
    assert (scene.width, scene.height) == (400.0, 150.0)
    grounded = compose_hourly(rainy_morning(), SUN, HourlyLayout(show_ground=True))
    assert grounded.layer_names() == LAYERS[:4] + ('ground',) + LAYERS[4:]


def test_forecast_capped_to_max_items():
    forecast = sample_forecast('perfect_clear', 'summer')
    scene = compose_hourly(forecast, SUN)
    curve = [op for op in scene.layer('temperature').children if isinstance(op, Path)]
    assert len(curve[0].points) == 12
    short = compose_hourly(forecast, SUN, HourlyLayout(max_items=6))
    curve = [op for op in short.layer('temperature').children if isinstance(op, Path)]
    assert len(curve[0].points) == 6


def test_same_input_same_scene():
    a = compose_hourly(rainy_morning(), SUN)
    b = compose_hourly(rainy_morning(), SUN)
    assert a == b
    assert render_svg(a) == render_svg(b)


def test_background_has_sunrise_edge():
    scene = compose_hourly(rainy_morning(), SUN)
    neutral, sky = scene.layer('background').children
    assert isinstance(neutral, Rect) and neutral.fill == '#1c1c1c'
    assert isinstance(sky.fill, LinearGradient) and sky.fill.horizontal
    # sunrise (~05:00) lies between 01:00 and 12:00: two extra hard-edge stops
    assert len(sky.fill.stops) == 14
    assert sky.fade is None
    faded = compose_hourly(rainy_morning(), SUN, HourlyLayout(sky_fade=True))
    assert faded.layer('background').children[1].fade is not None


def test_rain_particles_only_in_rainy_buckets():
    layout = HourlyLayout()
    scene = compose_hourly(rainy_morning(), SUN, layout)
    drops = scene.layer('precipitation').children
    assert drops and all(isinstance(op, Line) for op in drops)
    slot = layout.content_width / 12
    # rainy buckets are 06:00-09:00, i.e. slots 5-8
    assert all(layout.padding + 5 * slot <= op.x1 + 2 and op.x2 - 2 <= layout.padding + 9 * slot for op in drops)


def test_temperature_fill_is_clipped_gradient():
    layout = HourlyLayout()
    clip, stroke = compose_hourly(rainy_morning(), SUN, layout).layer('temperature').children
    assert isinstance(clip, Clip)
    assert isinstance(clip.children[0].fill, LinearGradient)
    assert clip.children[0].opacity == layout.fill_opacity
    assert clip.shape[-1][1] == layout.band_bottom
    assert stroke.width == layout.line_width


def test_smooth_curve_adds_samples():
    smooth = compose_hourly(rainy_morning(), SUN, HourlyLayout(smooth_curve=True))
    stroke = smooth.layer('temperature').children[1]
    assert len(stroke.points) == 1 + 11 * 8


def test_custom_color_function():
    forecast = rainy_morning()
    color_fn = adaptive_temperature_color(p.temperature for p in forecast)
    scene = compose_hourly(forecast, SUN, color_fn=color_fn)
    fill = scene.layer('temperature').children[0].children[0].fill
    assert fill.stops[0].color == color_fn(forecast[0].temperature)


def test_hour_labels_every_third_hour():
    overlay = compose_hourly(rainy_morning(), SUN).layer('overlay').children
    hours = [op.text for op in overlay if isinstance(op, Text) and not op.text.endswith('°')]
    assert hours == ['3', '6', '9']


def test_icons_use_night_variant():
    forecast = [ForecastPoint(datetime=datetime(2026, 5, 10, h), condition='partlycloudy', temperature=60)
                for h in range(18, 24)]
    overlay = compose_hourly(forecast, SunTimes(sunrise=datetime(2026, 5, 10, 6), sunset=datetime(2026, 5, 10, 20)))
    icons = [op.icon for op in overlay.layer('overlay').children if isinstance(op, Icon)]
    assert icons == ['mdi:weather-night-partly-cloudy']


def test_icon_runs_skip_first_and_last():
    forecast = [ForecastPoint(datetime=datetime(2026, 5, 10, h), condition=c)
                for h, c in enumerate(['sunny', 'rainy', 'rainy', 'rainy', 'cloudy', 'fog'])]
    assert icon_runs(forecast) == [
        IconRun(1, 3, WeatherCondition.RAINY),
        IconRun(4, 4, WeatherCondition.CLOUDY),
    ]
    assert icon_runs(forecast[:2]) == []


def test_hour_label_is_twelve_hour_clock():
    assert hour_label(datetime(2026, 1, 1, 0)) == '12'
    assert hour_label(datetime(2026, 1, 1, 12)) == '12'
    assert hour_label(datetime(2026, 1, 1, 15)) == '3'


def test_algorithm_override():
    layout = replace(HourlyLayout(), algorithm='poisson')
    scene = compose_hourly(rainy_morning(), SUN, layout)
    assert scene.layer('precipitation').children
    assert compose_hourly(rainy_morning(), SUN, algorithm='jittered').layer('precipitation').children
