from datetime import datetime, timedelta
import math

import pytest

from skychart.core.distribution import DistributionAlgorithm
from skychart.core.drawops import Circle, Icon, Line, Path, Rect
from skychart.core.ground import SEASON_ICONS, ground_ops
from skychart.core.models import ForecastPoint
from skychart.core.points import Bounds, Point
from skychart.core.precipitation import particle_ops, particle_spacing
from skychart.core.temperature import (
    TemperatureScale, bar_range, catmull_rom, changed_labels, curve_temperatures, fill_polygon,
)
from skychart.core.weather import Season, ice_color, ice_intensity, wind_arrow_geometry
from skychart.core.wind import arrow_ops, wind_ops

START = datetime(2026, 4, 10, 9)
BOX = Bounds(0, 0, 100, 100)


def bucket(condition='rainy', precipitation=0.4, probability=95, **kw):
    return ForecastPoint(datetime=kw.pop('datetime', START), condition=condition, precipitation=precipitation,
                         precipitation_probability=probability, **kw)


def window(n=6, **kw):
    return [ForecastPoint(datetime=START + timedelta(hours=i), **kw) for i in range(n)]


def test_padded_scale():
    scale = TemperatureScale.padded([40, 50], top=10, height=100)
    assert scale.y(51.5) == pytest.approx(10)
    assert scale.y(38.5) == pytest.approx(110)
    assert scale.y(45) == pytest.approx(60)
    assert TemperatureScale.padded([50, 50], 10, 100).y(50) == 60


def test_inset_scale():
    scale = TemperatureScale.inset([30, 70], 0, 100, 20)
    assert scale.y(70) == pytest.approx(20)
    assert scale.y(30) == pytest.approx(80)


def test_missing_temperatures_default():
    points = [ForecastPoint(datetime=START), ForecastPoint(datetime=START, temperature=70)]
    assert curve_temperatures(points) == [50.0, 70.0]
    assert bar_range([ForecastPoint(datetime=START, temperature=70)]) == [70.0, 60.0]


def test_catmull_rom_passes_through_points():
    pts = [(0.0, 10.0), (10.0, 0.0), (20.0, 10.0)]
    assert catmull_rom(pts[:2]) == pts[:2]
    smooth = catmull_rom(pts, samples=8)
    assert len(smooth) == 17
    assert smooth[8] == pytest.approx(pts[1])
    assert smooth[-1] == pytest.approx(pts[-1])


def test_fill_polygon_closes_to_bottom():
    assert fill_polygon([(0, 5), (10, 3)], 20) == ((0, 5), (10, 3), (10, 20), (0, 20))
    assert fill_polygon([], 20) == ()


def test_labels_only_on_change():
    temps = [50, 50, 51, 51.2, 49, 60]
    assert changed_labels(temps) == [1, 2, 4]
    assert changed_labels(temps, skip_ends=False) == [0, 2, 4, 5]


def test_particle_spacing_clamped():
    assert particle_spacing(BOX, 1) == 20.0
    assert particle_spacing(BOX, 10000) == 8.0
    assert particle_spacing(BOX, 100) == pytest.approx(9.0)


def test_rain_particles():
    ops = particle_ops(bucket(), BOX, 'rain-seed')
    assert len(ops) == 6
    assert all(isinstance(op, Line) and op.opacity == 1.0 for op in ops)
    assert particle_ops(bucket(), BOX, 'rain-seed') == ops


def test_snow_particles():
    ops = particle_ops(bucket('snowy', probability=45), BOX, 'snow-seed')
    assert len(ops) == 2
    assert all(isinstance(op, Circle) and op.opacity == 0.5 for op in ops)


def test_mixed_particles_are_rain_or_snow():
    ops = particle_ops(bucket('snowy-rainy'), BOX, 'mixed-seed', algorithm=DistributionAlgorithm.JITTERED)
    assert ops
    assert all(isinstance(op, (Line, Circle)) for op in ops)


def test_no_particles_without_precipitation():
    assert particle_ops(bucket('sunny'), BOX, 's') == []
    assert particle_ops(bucket('rainy', precipitation=0), BOX, 's') == []
    assert particle_ops(bucket('rainy', precipitation=None), BOX, 's') == []
    assert particle_ops(bucket(), Bounds(0, 0, 0, 10), 's') == []


@pytest.mark.parametrize('algorithm', list(DistributionAlgorithm))
def test_particles_inside_bounds(algorithm):
    box = Bounds(30, 40, 60, 80)
    for op in particle_ops(bucket('snowy', precipitation=2.0), box, 'bounded', algorithm=algorithm):
        assert box.contains(Point(op.cx, op.cy))


def test_particle_size_cap():
    ops = particle_ops(bucket(precipitation=0.5), BOX, 'cap', size_scale=0.7, max_size=5.0)
    assert all(op.y2 - op.y1 == pytest.approx(5.0) for op in ops)


def test_wind_arrows_only_above_threshold():
    forecast = [bucket('windy', 0, 0, wind_speed=5, wind_bearing=0),
                bucket('windy', 0, 0, wind_speed=20, wind_bearing=0)]
    ops = wind_ops(forecast, [10, 30], 50)
    assert [type(op) for op in ops] == [Line, Path]
    shaft = ops[0]
    # wind from the north blows south: shaft points down the screen
    assert shaft.x1 == pytest.approx(30)
    assert shaft.x2 == pytest.approx(30)
    assert shaft.y2 > shaft.y1
    # centred on the bucket: midpoint sits at (x, y)
    assert (shaft.y1 + shaft.y2) / 2 == pytest.approx(50)
    assert shaft.y2 - shaft.y1 == pytest.approx(wind_arrow_geometry(0, 20).length)
    head = ops[1]
    assert head.points[1] == (shaft.x2, shaft.y2)


def test_wind_arrow_centred_for_any_bearing():
    for bearing in (45, 90, 200, 315):
        arrow = wind_arrow_geometry(bearing, 16)
        shaft = arrow_ops(100, 40, arrow, '#ffffff')[0]
        assert (shaft.x1 + shaft.x2) / 2 == pytest.approx(100)
        assert (shaft.y1 + shaft.y2) / 2 == pytest.approx(40)
        assert math.hypot(shaft.x2 - shaft.x1, shaft.y2 - shaft.y1) == pytest.approx(arrow.length)


def test_ground_ice():
    ops = ground_ops(window(temperature=20, condition='sunny'), 0, 100, 200, 20)
    assert len(ops) == 1
    assert isinstance(ops[0], Path) and ops[0].closed
    assert ops[0].fill == ice_color(ice_intensity(20))


def test_ground_puddles_are_seeded():
    forecast = window(temperature=60, condition='rainy', precipitation=0.1, precipitation_probability=80)
    ops = ground_ops(forecast, 0, 100, 200, 20)
    assert ops and all(isinstance(op, Rect) for op in ops)
    assert ground_ops(forecast, 0, 100, 200, 20) == ops


def test_ground_seasonal_row():
    ops = ground_ops(window(temperature=70, condition='sunny', precipitation_probability=0), 0, 100, 200, 20)
    assert [op.icon for op in ops] == list(SEASON_ICONS[Season.SPRING])
    assert all(isinstance(op, Icon) for op in ops)
    south = ground_ops(window(temperature=70, condition='sunny', precipitation_probability=0), 0, 100, 200, 20,
                       latitude=-34)
    assert [op.icon for op in south] == list(SEASON_ICONS[Season.FALL])


def test_ground_sand_and_nothing():
    sand = ground_ops(window(temperature=100, condition='sunny', precipitation_probability=0), 0, 100, 200, 20)
    assert len(sand) == 1 and isinstance(sand[0], Path)
    assert ground_ops(window(temperature=70, condition='cloudy', precipitation_probability=0), 0, 100, 200, 20) == []
    assert ground_ops([], 0, 100, 200, 20) == []
