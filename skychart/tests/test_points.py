import math

import numpy as np
import pytest

from skychart.core.distribution import (
    DistributionAlgorithm, cached_points, generate_points, relaxation_iterations,
)
from skychart.core.points import Bounds, Point, jittered_grid_points
from skychart.core.poisson import default_min_distance, poisson_disk_points
from skychart.core.rng import create_rng, hash_string, mulberry32
from skychart.core.voronoi import lloyd_iteration, polygon_centroid

BOX = Bounds(10.0, 20.0, 120.0, 80.0)


def take(rng, n):
    return [rng() for _ in range(n)]


def test_hash_string_is_32bit_djb2():
    assert hash_string('') == 0
    assert hash_string('a') == 97
    assert hash_string('ab') == 97 * 31 + 98
    assert 0 <= hash_string('2026-01-26T14:00:00-precip' * 20) < 2 ** 32


def test_same_seed_same_stream():
    a = take(create_rng('2026-01-26T14:00'), 50)
    b = take(create_rng('2026-01-26T14:00'), 50)
    assert a == b
    assert all(0.0 <= v < 1.0 for v in a)
    assert take(create_rng('2026-01-26T15:00'), 50) != a


def test_mulberry_spread():
    values = take(mulberry32(12345), 2000)
    assert 0.45 < sum(values) / len(values) < 0.55
    assert len(set(values)) == len(values)


def test_algorithm_parse():
    assert DistributionAlgorithm.parse('Poisson') is DistributionAlgorithm.POISSON
    assert DistributionAlgorithm.parse(DistributionAlgorithm.JITTERED) is DistributionAlgorithm.JITTERED
    with pytest.raises(ValueError):
        DistributionAlgorithm.parse('hexgrid')


def test_relaxation_iterations_capped():
    assert relaxation_iterations(1) == 1
    assert relaxation_iterations(3) == 1
    assert relaxation_iterations(4) == 2
    assert relaxation_iterations(100) == 5


@pytest.mark.parametrize('algorithm', list(DistributionAlgorithm))
def test_points_stay_inside_bounds(algorithm):
    pts = generate_points(40, BOX, algorithm, create_rng('inside'))
    assert pts
    assert all(BOX.contains(p) for p in pts)


@pytest.mark.parametrize('algorithm', list(DistributionAlgorithm))
def test_nothing_requested_nothing_returned(algorithm):
    assert generate_points(0, BOX, algorithm) == []
    assert generate_points(-3, BOX, algorithm) == []
    assert generate_points(10, Bounds(0, 0, 0, 50), algorithm) == []


def test_jittered_grid_roughly_count():
    pts = jittered_grid_points(50, BOX, create_rng('grid'))
    assert 35 <= len(pts) <= 60


def test_poisson_respects_min_distance():
    d = 9.0
    pts = poisson_disk_points(60, BOX, create_rng('poisson'), min_distance=d)
    assert 0 < len(pts) <= 60
    for i, a in enumerate(pts):
        for b in pts[i + 1:]:
            assert math.hypot(a.x - b.x, a.y - b.y) >= d - 1e-9


def min_gap(pts):
    return min(math.hypot(a.x - b.x, a.y - b.y) for i, a in enumerate(pts) for b in pts[i + 1:])


def test_poisson_default_spacing():
    d = default_min_distance(40, BOX)
    assert d == pytest.approx(math.sqrt(BOX.area / 40) * 0.8)
    pts = poisson_disk_points(40, BOX, create_rng('poisson-default'))
    assert 1 < len(pts) <= 40
    assert min_gap(pts) >= d - 1e-9
    via_front_door = generate_points(40, BOX, DistributionAlgorithm.POISSON, create_rng('poisson-default'))
    assert via_front_door == pts


@pytest.mark.parametrize('algorithm', [DistributionAlgorithm.POISSON, DistributionAlgorithm.JITTERED])
def test_same_seed_same_points(algorithm):
    seed = '2026-01-26T14:00'
    a = generate_points(30, BOX, algorithm, create_rng(seed))
    b = generate_points(30, BOX, algorithm, create_rng(seed))
    assert a and a == b
    other = generate_points(30, BOX, algorithm, create_rng('2026-01-26T15:00'))
    assert other != a


def test_voronoi_exact_count_and_deterministic():
    a = generate_points(25, BOX, DistributionAlgorithm.VORONOI, create_rng('vor'), iterations=3)
    b = generate_points(25, BOX, DistributionAlgorithm.VORONOI, create_rng('vor'), iterations=3)
    assert len(a) == 25
    assert a == b


def spread(ps):
    return np.std([p.x for p in ps]) + np.std([p.y for p in ps])


def test_lloyd_spreads_a_cluster():
    cluster = [Point(60.0 + i * 0.5, 50.0 + (i % 3) * 0.5) for i in range(8)]
    relaxed = cluster
    for _ in range(5):
        relaxed = lloyd_iteration(relaxed, BOX)
    assert spread(relaxed) > spread(cluster)
    assert all(BOX.contains(p) for p in relaxed)


def test_single_point_is_clamped():
    assert lloyd_iteration([Point(500.0, -5.0)], BOX) == [Point(BOX.right, BOX.y)]


def test_polygon_centroid_square_and_degenerate():
    square = np.array([(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)])
    assert polygon_centroid(square) == pytest.approx((2.0, 2.0))
    flat = np.array([(0.0, 0.0), (2.0, 0.0), (4.0, 0.0)])
    assert polygon_centroid(flat) == pytest.approx((2.0, 0.0))


def test_cached_points_memoised():
    a = cached_points(12, BOX, 'memo', DistributionAlgorithm.POISSON)
    b = cached_points(12, BOX, 'memo', DistributionAlgorithm.POISSON)
    assert a is b
    assert isinstance(a, tuple)
