# hullserver

Convex hulls of 2D point sets, computed with a Graham scan, with the hull's
area worked out by the shoelace formula. The package offers the geometry as a
library, two batch tools that read standard input, and several TCP servers
through which clients add and remove points in a shared set and ask for its
hull.

## Installing

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Library use

    from hullserver.geometry import Point, build_hull, polygon_area

    square = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4), Point(2, 2)]
    hull = build_hull(square)      # counter-clockwise, starting at the lowest point
    print(polygon_area(hull))      # 16.0

`build_hull` and `polygon_area` also accept `(x, y)` tuples. Interior points
and points lying on a hull edge are left out of the hull; an input of at most
one point is returned as it is. `format_number` formats a float the way hull
output does (six significant digits, trailing zeros dropped).

Other building blocks:

* `hullserver.state.State` holds points in two containers, chosen per call
  with `Impl.VECTOR` or `Impl.LIST`: `new_graph`, `add_point`,
  `remove_point` (the vector drops every copy, the list only the first),
  `compute_hull` (the hull as text) and `hull_size`. Diagnostic lines go to the
  `log` stream given to it.
* `hullserver.commands` turns text lines into operations on a `State`:
  `process_command`, `process_legacy_command` and `process_open_command`, each
  with a per-connection `Session`.
* `hullserver.reactor.Reactor` calls a handler whenever a registered file
  object becomes readable (`add_handler`, `remove_handler`, `run`, `stop`,
  `close`; also usable as a context manager).
* `hullserver.proactor.start_proactor(arg, func)` runs `func(arg)` on a
  daemon thread. `stop_proactor` only sets the thread's `cancel_event`; the
  function has to check it, as a running thread cannot be cancelled forcibly.
* `hullserver.monitor.HullMonitor` prints a line whenever the hull's vertex
  count reaches or falls below a threshold.

## Batch tools

`hullserver-area` reads a point count followed by that many `x y` pairs,
prints the hull points (when there is more than one point) and then the area
of the hull with six decimals:

    printf '4\n0 0\n4 0\n4 4\n0 4\n' | hullserver-area

Incomplete or malformed input is reported on standard error with exit
status 1.

`hullserver-batch` reads a stream of commands. The first word picks the
storage (`list`; any other word means `vector`); then come any of:

    Newgraph <n>          start an empty point set
    Newpoint <x> <y>      add a point
    Removepoint <x> <y>   remove a point
    CH                    print the hull points and the area

Unknown commands are reported on standard error and skipped; processing stops
at the first argument that is not a number. Timings of each operation are
written to standard error. A set with fewer than three points prints
`0.000000`.

## Servers

Each server speaks a line-based text protocol over TCP and keeps one point set
shared by every connected client. All take `--host` and `--port`.

`hullserver-serve` (port 9034 by default) runs single-threaded servers,
chosen with `--mode`:

* `select` – a select loop;
* `reactor` (the default) – the `Reactor` event loop;
* `open` – the reactor with a looser protocol, described below.

In `select` and `reactor` mode the first `vector` or `list` sent by any client
chooses the storage for everyone, and the choice cannot be changed. Then come
`Newgraph`, `Newpoint`, `Removepoint` and `CH` as above, each answered with a
reply line (`CH` with the hull points and the area); `quit` closes the
connection.

In `open` mode `vector` and `list` may switch the shared storage at any time,
vector is used until then, and `quit` shuts the whole server down.

`hullserver-threaded` (port 9034 by default) serves each client on its own
thread, either directly (`--mode threaded`, the default) or through
`start_proactor` (`--mode proactor`). The point set is guarded by a lock, and
each client makes its own `vector` / `list` choice before the commands above.

`hullserver-monitored` (port 9035 by default, `--mode reactor` or
`--mode proactor`) uses the commands `use vector` / `use list`, `new <n>`,
`add <x> <y>`, `remove <x> <y>`, `ch` and `quit`; each client must choose with
`use` first. A background monitor prints `At Least 100 units belongs to CH` on
standard output once the hull has at least 100 vertices, and
`At Least 100 units no longer belongs to CH` when it drops below that again.
`--threshold` changes the number.

Any TCP client that sends text lines will do, for example:

    printf 'vector\nNewpoint 0 0\nNewpoint 4 0\nNewpoint 0 4\nCH\nquit\n' | nc localhost 9034

## What it does not do

The point set lives in memory only: nothing is saved, and it is lost when a
server stops. The servers have no authentication and no encryption.