"""A point store with two interchangeable backing containers."""

from __future__ import annotations

import time
from collections import deque
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, MutableSequence, TextIO

from .geometry import Point, build_hull, format_number, polygon_area

EMPTY_HULL = "0.000000\n"


class Impl(Enum):
    """Which container a command operates on."""

    VECTOR = "vector"
    LIST = "list"

    @property
    def label(self) -> str:
        return "Vector" if self is Impl.VECTOR else "List"


class State:
    """Holds points in an array-backed and a linked container.

    ``log`` receives diagnostic lines (nothing is logged when it is None).
    With ``timing`` the operations report their duration; without it they
    report each added point and each point that could not be found.
    """

    def __init__(self, log: TextIO | None = None, timing: bool = True) -> None:
        self._log = log
        self._timing = timing
        self._vector: list[Point] = []
        self._list: deque[Point] = deque()

    def _container(self, impl: Impl) -> MutableSequence[Point]:
        return self._vector if impl is Impl.VECTOR else self._list

    def _emit(self, message: str) -> None:
        if self._log is not None:
            self._log.write(message + "\n")

    @contextmanager
    def _timed(self, impl: Impl, operation: str) -> Iterator[None]:
        start = time.perf_counter_ns()
        yield
        if self._timing:
            elapsed_us = (time.perf_counter_ns() - start) // 1000
            self._emit(f"{impl.label}: {operation} took {elapsed_us} us")

    def new_graph(self, impl: Impl, capacity: int) -> None:
        """Discard the points of ``impl``; ``capacity`` is only a size hint."""
        if impl is Impl.VECTOR:
            if capacity < 0:
                raise ValueError(f"capacity must not be negative: {capacity}")
            self._vector = []
        else:
            self._list.clear()
        self._emit(f"{impl.label}: New graph created with capacity {capacity}")

    def add_point(self, impl: Impl, x: float, y: float) -> None:
        """Append the point (x, y) to ``impl``."""
        with self._timed(impl, "addPoint"):
            self._container(impl).append(Point(float(x), float(y)))
        if not self._timing:
            self._emit(f"{impl.label}: Added point {Point(x, y)}")

    def remove_point(self, impl: Impl, x: float, y: float) -> bool:
        """Remove (x, y) from ``impl`` and report whether it was present.

        The vector container drops every copy; the list drops the first one.
        """
        with self._timed(impl, "removePoint"):
            if impl is Impl.VECTOR:
                kept = [p for p in self._vector if not (p.x == x and p.y == y)]
                removed = len(kept) != len(self._vector)
                self._vector = kept
            else:
                match = next((p for p in self._list if p.x == x and p.y == y), None)
                removed = match is not None
                if removed:
                    self._list.remove(match)
            if removed:
                self._emit(f"{impl.label}: Removed point {Point(x, y)}")
        if not removed and not self._timing:
            self._emit(f"{impl.label}: Point {Point(x, y)} not found.")
        return removed

    def compute_hull(self, impl: Impl) -> str:
        """Return the hull vertices of ``impl`` and its area as text."""
        pts = list(self._container(impl))
        if len(pts) < 3:
            return EMPTY_HULL
        with self._timed(impl, "computeCH"):
            hull = build_hull(pts)
            area = polygon_area(hull)
        lines = ["Hull points:", *(str(p) for p in hull), format_number(area)]
        return "\n".join(lines) + "\n"

    def hull_size(self) -> int:
        """Number of hull vertices, taken from the vector points if any, else the list."""
        if self._vector:
            return len(build_hull(self._vector))
        if self._list:
            return len(build_hull(self._list))
        return 0

    def points(self, impl: Impl) -> tuple[Point, ...]:
        """The points currently held by ``impl``, in insertion order."""
        return tuple(self._container(impl))