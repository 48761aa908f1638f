import io
import re

import pytest

from hullserver.geometry import Point, build_hull, format_number, polygon_area
from hullserver.state import Impl, State

SQUARE = [(0, 0), (2, 0), (2, 2), (0, 2), (1, 1)]


def _fill(state, impl, pts=SQUARE):
    for x, y in pts:
        state.add_point(impl, x, y)


@pytest.mark.parametrize("impl", list(Impl))
def test_fewer_than_three_points_gives_zero(impl):
    state = State()
    _fill(state, impl, [(1, 1), (2, 2)])
    assert state.compute_hull(impl) == "0.000000\n"


@pytest.mark.parametrize("impl", list(Impl))
def test_compute_hull_lists_points_and_area(impl):
    state = State()
    _fill(state, impl)
    lines = state.compute_hull(impl).splitlines()
    hull = build_hull(state.points(impl))
    assert lines[0] == "Hull points:"
    assert lines[1:-1] == [str(p) for p in hull]
    assert "(1, 1)" not in lines
    assert lines[-1] == format_number(polygon_area(hull))
    assert lines[-1] == "4"


def test_vector_remove_drops_every_copy():
    state = State()
    _fill(state, Impl.VECTOR, [(1, 1), (1, 1), (2, 2)])
    assert state.remove_point(Impl.VECTOR, 1, 1) is True
    assert state.points(Impl.VECTOR) == (Point(2, 2),)


def test_list_remove_drops_first_copy():
    state = State()
    _fill(state, Impl.LIST, [(1, 1), (1, 1), (2, 2)])
    assert state.remove_point(Impl.LIST, 1, 1) is True
    assert state.points(Impl.LIST) == (Point(1, 1), Point(2, 2))


@pytest.mark.parametrize("impl", list(Impl))
def test_remove_missing_point(impl):
    state = State()
    _fill(state, impl, [(1, 1)])
    assert state.remove_point(impl, 9, 9) is False
    assert state.points(impl) == (Point(1, 1),)


def test_containers_are_independent():
    state = State()
    _fill(state, Impl.VECTOR)
    assert state.points(Impl.LIST) == ()
    _fill(state, Impl.LIST, [(5, 5)])
    state.new_graph(Impl.LIST, 10)
    assert state.points(Impl.LIST) == ()
    assert len(state.points(Impl.VECTOR)) == len(SQUARE)


def test_new_graph_clears_vector():
    state = State()
    _fill(state, Impl.VECTOR)
    state.new_graph(Impl.VECTOR, 3)
    assert state.points(Impl.VECTOR) == ()


def test_negative_capacity_rejected_for_vector_only():
    state = State()
    with pytest.raises(ValueError):
        state.new_graph(Impl.VECTOR, -1)
    state.new_graph(Impl.LIST, -1)
    assert state.points(Impl.LIST) == ()


def test_hull_size_empty():
    assert State().hull_size() == 0


def test_hull_size_falls_back_to_list():
    state = State()
    _fill(state, Impl.LIST)
    assert state.hull_size() == len(build_hull(state.points(Impl.LIST)))


def test_hull_size_prefers_vector():
    state = State()
    _fill(state, Impl.LIST)
    _fill(state, Impl.VECTOR, [(0, 0), (1, 0), (0, 1)])
    assert state.hull_size() == len(build_hull(state.points(Impl.VECTOR)))
    assert state.hull_size() < len(build_hull(state.points(Impl.LIST)))


def test_plain_log_reports_added_point():
    log = io.StringIO()
    State(log=log, timing=False).add_point(Impl.VECTOR, 1, 2)
    assert log.getvalue() == "Vector: Added point (1, 2)\n"


def test_plain_log_reports_missing_point():
    log = io.StringIO()
    State(log=log, timing=False).remove_point(Impl.LIST, 5, 5)
    assert log.getvalue() == "List: Point (5, 5) not found.\n"


def test_new_graph_log():
    log = io.StringIO()
    State(log=log).new_graph(Impl.LIST, 7)
    assert log.getvalue() == "List: New graph created with capacity 7\n"


def test_timing_log_for_add():
    log = io.StringIO()
    state = State(log=log)
    state.add_point(Impl.VECTOR, 1, 2)
    assert state.points(Impl.VECTOR) == (Point(1, 2),)
    assert re.fullmatch(r"Vector: addPoint took \d+ us\n", log.getvalue())


def test_timing_log_for_remove_and_hull():
    log = io.StringIO()
    state = State(log=log)
    _fill(state, Impl.LIST)
    log.seek(0)
    log.truncate()
    state.remove_point(Impl.LIST, 1, 1)
    state.compute_hull(Impl.LIST)
    lines = log.getvalue().splitlines()
    assert lines[0] == "List: Removed point (1, 1)"
    assert lines[1].startswith("List: removePoint took ")
    assert lines[2].startswith("List: computeCH took ")