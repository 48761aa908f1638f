import random

import pytest

from hullserver.geometry import Point, build_hull, format_number, polygon_area


def _cross(a, b, c):
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def test_square_with_interior_point():
    pts = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2), Point(1, 1)]
    assert build_hull(pts) == [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]


def test_hull_starts_at_lowest_then_leftmost():
    pts = [Point(3, 1), Point(2, 5), Point(1, 1)]
    assert build_hull(pts)[0] == Point(1, 1)


@pytest.mark.parametrize("pts", [[], [Point(1, 2)]])
def test_small_inputs_returned_unchanged(pts):
    assert build_hull(pts) == pts


def test_collinear_points_keep_endpoints():
    hull = build_hull([Point(0, 0), Point(1, 0), Point(2, 0)])
    assert hull == [Point(0, 0), Point(2, 0)]
    assert polygon_area(hull) == 0.0


def test_duplicate_points_collapse():
    pts = [(0, 0), (0, 0), (2, 0), (2, 2), (2, 2), (0, 2)]
    assert build_hull(pts) == [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]


def test_accepts_tuples():
    assert build_hull([(0, 0), (1, 0), (0, 1)]) == [Point(0, 0), Point(1, 0), Point(0, 1)]


def test_input_not_modified():
    pts = [Point(2, 2), Point(0, 0), Point(2, 0)]
    snapshot = list(pts)
    build_hull(pts)
    assert pts == snapshot


def test_triangle_area():
    assert polygon_area([Point(0, 0), Point(4, 0), Point(0, 3)]) == 6.0


def test_area_independent_of_orientation():
    square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
    assert polygon_area(square) == polygon_area(list(reversed(square))) == 4.0


@pytest.mark.parametrize("poly", [[], [Point(1, 1)], [Point(0, 0), Point(3, 4)]])
def test_degenerate_area_is_zero(poly):
    assert polygon_area(poly) == 0.0


@pytest.mark.parametrize("seed", range(6))
def test_random_hull_invariants(seed):
    rng = random.Random(seed)
    pts = [Point(rng.randint(-20, 20), rng.randint(-20, 20)) for _ in range(40)]
    hull = build_hull(pts)
    assert set(hull) <= set(pts)
    n = len(hull)
    for i in range(n):
        a, b, c = hull[i], hull[(i + 1) % n], hull[(i + 2) % n]
        assert _cross(a, b, c) > 0
    for i in range(n):
        a, b = hull[i], hull[(i + 1) % n]
        for p in pts:
            assert _cross(a, b, p) >= 0


@pytest.mark.parametrize("seed", range(3))
def test_area_independent_of_input_order(seed):
    rng = random.Random(seed)
    pts = [Point(rng.uniform(-5, 5), rng.uniform(-5, 5)) for _ in range(25)]
    shuffled = list(pts)
    rng.shuffle(shuffled)
    assert polygon_area(build_hull(pts)) == pytest.approx(polygon_area(build_hull(shuffled)))


@pytest.mark.parametrize(
    "value, text",
    [(1.0, "1"), (0.5, "0.5"), (1 / 3, "0.333333"), (1234567.0, "1.23457e+06"), (-2.0, "-2")],
)
def test_format_number(value, text):
    assert format_number(value) == text


def test_point_str():
    assert str(Point(1.5, -2)) == "(1.5, -2)"