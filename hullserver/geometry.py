"""Planar points, convex hulls (Graham scan) and polygon areas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Sequence, Tuple, Union

ANGLE_EPS = 1e-9


def format_number(value: float) -> str:
    """Format a float with six significant digits and trailing zeros trimmed."""
    return f"{value:g}"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in the plane."""

    x: float
    y: float

    def __str__(self) -> str:
        return f"({format_number(self.x)}, {format_number(self.y)})"


PointLike = Union[Point, Tuple[float, float]]


def _as_point(value: PointLike) -> Point:
    return value if isinstance(value, Point) else Point(*value)


def _cross(a: Point, b: Point, c: Point) -> float:
    """Cross product of (b - a) and (c - a)."""
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def build_hull(points: Iterable[PointLike]) -> list[Point]:
    """Return the convex hull in counter-clockwise order, starting at the lowest point.

    Collinear points on the hull boundary are dropped. Inputs of at most one
    point are returned unchanged.
    """
    pts = [_as_point(p) for p in points]
    if len(pts) <= 1:
        return pts

    pivot = min(pts, key=lambda p: (p.y, p.x))

    def angle(p: Point) -> float:
        return math.atan2(p.y - pivot.y, p.x - pivot.x)

    def distance(p: Point) -> float:
        return math.hypot(p.x - pivot.x, p.y - pivot.y)

    def compare(a: Point, b: Point) -> int:
        angle_a, angle_b = angle(a), angle(b)
        if abs(angle_a - angle_b) < ANGLE_EPS:
            dist_a, dist_b = distance(a), distance(b)
            return (dist_a > dist_b) - (dist_a < dist_b)
        return -1 if angle_a < angle_b else 1

    pts.sort(key=cmp_to_key(compare))

    hull: list[Point] = []
    for p in pts:
        while len(hull) >= 2 and _cross(hull[-2], hull[-1], p) <= 0:
            hull.pop()
        hull.append(p)
    return hull


def polygon_area(polygon: Sequence[PointLike]) -> float:
    """Return the area of a simple polygon given its vertices in order."""
    vertices = [_as_point(p) for p in polygon]
    if not vertices:
        return 0.0
    following = vertices[1:] + vertices[:1]
    doubled = sum(a.x * b.y - b.x * a.y for a, b in zip(vertices, following))
    return abs(doubled) / 2.0