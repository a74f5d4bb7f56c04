import itertools
import math
import random

import pytest

from voxelcore.octahedron import Zone, distance, zone

CENTER = (10.0, -5.0, 3.0)


def _random_offsets(count, seed):
    rng = random.Random(seed)
    return [
        tuple(rng.uniform(-3.0, 3.0) for _ in range(3)) for _ in range(count)
    ]


def _at(offset):
    return tuple(c + o for c, o in zip(CENTER, offset))


def test_center_is_inside():
    assert distance(CENTER, 4.0, CENTER) == 0.0


@pytest.mark.parametrize(
    "offset", [(0.5, 0.5, 0.0), (1 / 3, 1 / 3, 1 / 3), (0.0, 0.0, -1.0)]
)
def test_surface_points_are_inside(offset):
    radius = 2.0
    point = _at(tuple(o * radius for o in offset))
    assert distance(CENTER, radius, point) == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("extra", [0.25, 1.0, 7.5])
def test_along_axis_distance_to_vertex(extra):
    radius = 3.0
    for axis in range(3):
        for sign in (1.0, -1.0):
            offset = [0.0, 0.0, 0.0]
            offset[axis] = sign * (radius + extra)
            assert distance(CENTER, radius, _at(offset)) == pytest.approx(extra)


def test_zero_radius_is_euclidean():
    point = (1.0, 2.0, 3.0)
    assert distance(CENTER, 0.0, point) == pytest.approx(math.dist(point, CENTER))
    assert distance(CENTER, -1.0, point) == pytest.approx(math.dist(point, CENTER))


def test_symmetry_under_sign_and_permutation():
    radius = 1.5
    for offset in _random_offsets(40, 1):
        reference = distance(CENTER, radius, _at(offset))
        for perm in itertools.permutations(offset):
            for signs in itertools.product((1, -1), repeat=3):
                flipped = tuple(s * o for s, o in zip(signs, perm))
                assert distance(CENTER, radius, _at(flipped)) == pytest.approx(
                    reference
                )


def test_scaling():
    for offset in _random_offsets(50, 2):
        base = distance(CENTER, 1.0, _at(offset))
        scaled = distance(CENTER, 4.0, _at(tuple(o * 4.0 for o in offset)))
        assert scaled == pytest.approx(base * 4.0)


def test_bounds():
    radius = 1.0
    vertices = [
        _at(v)
        for v in [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]
    ]
    for offset in _random_offsets(300, 3):
        point = _at(offset)
        d = distance(CENTER, radius, point)
        l1 = sum(abs(o) for o in offset)
        assert d >= 0.0
        assert d <= min(math.dist(point, v) for v in vertices) + 1e-9
        assert d >= (l1 - radius) / math.sqrt(3) - 1e-9
        if l1 <= radius:
            assert d == 0.0
        else:
            assert d > 0.0


def test_moving_outward_increases_distance():
    for offset in _random_offsets(50, 4):
        if sum(abs(o) for o in offset) <= 1.0:
            continue
        near = distance(CENTER, 1.0, _at(offset))
        far = distance(CENTER, 1.0, _at(tuple(o * 2.0 for o in offset)))
        assert far > near


def test_zone_classification():
    assert zone((0.0, 0.0, 0.0)) is Zone.PILLAR
    assert zone((5.0, 0.0, 0.0)) is Zone.PYRAMID_X
    assert zone((0.0, 5.0, 0.0)) is Zone.PYRAMID_Y
    assert zone((0.0, 0.0, 5.0)) is Zone.PYRAMID_Z
    assert zone((2.0, 2.0, 0.0)) is Zone.CORNER_Z
    assert zone((0.0, 2.0, 2.0)) is Zone.CORNER_X
    assert zone((2.0, 0.0, 2.0)) is Zone.CORNER_Y


def test_zone_rejects_negative():
    with pytest.raises(ValueError):
        zone((-0.1, 0.0, 0.0))