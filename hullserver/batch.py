"""Command-line front ends: hull area of a point list, and a command script runner."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterator, TextIO, TypeVar

from .geometry import Point, build_hull, polygon_area
from .state import Impl, State

T = TypeVar("T")


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _take(tokens: Iterator[str], convert: Callable[[str], T], count: int) -> list[T] | None:
    """Read ``count`` values, or None when the input ends or does not parse."""
    try:
        return [convert(next(tokens)) for _ in range(count)]
    except (StopIteration, ValueError):
        return None


def run_area(stream: TextIO, out: TextIO) -> float:
    """Read a count and that many points, print the hull and its area.

    Raises ValueError when the input is incomplete or malformed.
    """
    tokens = _tokens(stream)
    header = _take(tokens, int, 1)
    if header is None or header[0] < 0:
        raise ValueError("expected a non-negative point count")
    count = header[0]
    coords = _take(tokens, float, 2 * count)
    if coords is None:
        raise ValueError(f"expected {count} points")
    points = [Point(x, y) for x, y in zip(coords[::2], coords[1::2])]

    hull = build_hull(points)
    if len(points) > 1:
        out.write("Hull points:\n")
        out.writelines(f"{p}\n" for p in hull)
    area = polygon_area(hull)
    out.write(f"{area:.6f}\n")
    return area


def main_area(argv: list[str] | None = None) -> int:
    """Read points from standard input and print their hull area."""
    argparse.ArgumentParser(
        description="Print the convex hull and its area for points read from stdin."
    ).parse_args(argv)
    try:
        run_area(sys.stdin, sys.stdout)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def run_commands(stream: TextIO, out: TextIO, err: TextIO) -> State | None:
    """Run a hull command script and return the resulting state.

    The first word selects the container ("list", anything else meaning
    vector); then come Newgraph n, Newpoint x y, Removepoint x y and CH.
    Processing stops at the first argument that fails to parse. Returns
    None when the input is empty.
    """
    tokens = _tokens(stream)
    first = next(tokens, None)
    if first is None:
        return None
    impl = Impl.LIST if first == "list" else Impl.VECTOR
    state = State(log=err)

    for cmd in tokens:
        if cmd == "Newgraph":
            args = _take(tokens, int, 1)
            if args is None:
                break
            state.new_graph(impl, *args)
        elif cmd in ("Newpoint", "Removepoint"):
            args = _take(tokens, float, 2)
            if args is None:
                break
            if cmd == "Newpoint":
                state.add_point(impl, *args)
            else:
                state.remove_point(impl, *args)
        elif cmd == "CH":
            out.write(state.compute_hull(impl))
        else:
            err.write(f"Unknown command: {cmd}\n")
    return state


def main(argv: list[str] | None = None) -> int:
    """Run a command script read from standard input."""
    argparse.ArgumentParser(
        description="Run convex hull commands read from stdin."
    ).parse_args(argv)
    try:
        run_commands(sys.stdin, sys.stdout, sys.stderr)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0