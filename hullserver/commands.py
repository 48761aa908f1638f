"""Text command protocols that drive a shared hull state."""

from __future__ import annotations

import re
import threading
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Callable, Union

from .state import Impl, State

QUIT = "quit"

_WORD = re.compile(r"\s*(\S*)")
_SPACE = re.compile(r"\s*")
_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_IMPLS = {impl.value: impl for impl in Impl}

# Command words mapped to the operation they perform.
_COMMANDS = {"new": "new", "add": "add", "remove": "remove", "ch": "ch"}
_LEGACY = {"Newgraph": "new", "Newpoint": "add", "Removepoint": "remove", "CH": "ch"}

Guard = Union[AbstractContextManager, threading.Condition]


@dataclass
class Session:
    """Per-connection choice of container."""

    impl: Impl = Impl.VECTOR
    chosen: bool = False


class _Arguments:
    """Reads words and numbers from a command line, stream style.

    A number that does not parse reads as zero, and so does every number
    after it.
    """

    def __init__(self, line: str) -> None:
        self._text = line
        self._pos = 0
        self._failed = False

    def word(self) -> str:
        match = _WORD.match(self._text, self._pos)
        self._pos = match.end()
        return match.group(1)

    def _number(self, pattern: re.Pattern[str], convert: Callable[[str], float]):
        if self._failed:
            return convert("0")
        start = _SPACE.match(self._text, self._pos).end()
        match = pattern.match(self._text, start)
        if match is None:
            self._failed = True
            return convert("0")
        self._pos = match.end()
        return convert(match.group())

    def integer(self) -> int:
        return self._number(_INT, int)

    def real(self) -> float:
        return self._number(_FLOAT, float)


def _run_operation(operation: str, args: _Arguments, state: State, impl: Impl) -> str:
    if operation == "new":
        capacity = args.integer()
        state.new_graph(impl, capacity)
        return f"New graph created with capacity {capacity}.\n"
    if operation in ("add", "remove"):
        x = args.real()
        y = args.real()
        if operation == "add":
            state.add_point(impl, x, y)
            return f"Added point ({x:f}, {y:f}).\n"
        state.remove_point(impl, x, y)
        return f"Removed point ({x:f}, {y:f}).\n"
    return state.compute_hull(impl)


def _choose(session: Session, impl: Impl) -> str:
    session.impl = impl
    session.chosen = True
    return f"Using {impl.value} implementation.\n"


def process_command(
    line: str,
    state: State,
    session: Session,
    lock: Guard | None = None,
    changed: threading.Condition | None = None,
) -> str:
    """Apply one ``use``/``new``/``add``/``remove``/``ch``/``quit`` command.

    The whole command runs while holding ``lock``. ``changed``, which must be
    built on ``lock``, is notified after points change or a hull is computed.
    Returns the reply text, or ``QUIT`` for the quit command.
    """
    args = _Arguments(line)
    cmd = args.word()
    guard = lock if lock is not None else (changed if changed is not None else nullcontext())
    with guard:
        if cmd == "use":
            impl = _IMPLS.get(args.word())
            if impl is None:
                return "Invalid implementation type.\n"
            return _choose(session, impl)

        if not session.chosen:
            return "Please choose implementation first using 'use vector' or 'use list'.\n"

        operation = _COMMANDS.get(cmd)
        if operation is not None:
            response = _run_operation(operation, args, state, session.impl)
            if operation != "new" and changed is not None:
                changed.notify()
            return response
        if cmd == QUIT:
            return QUIT
        return "Unknown command.\n"


def process_legacy_command(
    line: str, state: State, session: Session, lock: Guard | None = None
) -> str:
    """Apply one ``Newgraph``/``Newpoint``/``Removepoint``/``CH`` command.

    The first command must be ``vector`` or ``list``; the choice cannot be
    changed afterwards. Operations on ``state`` run while holding ``lock``.
    Returns the reply text, or ``QUIT`` for the quit command.
    """
    args = _Arguments(line)
    cmd = args.word()
    if cmd == QUIT:
        return QUIT

    if not session.chosen:
        impl = _IMPLS.get(cmd)
        if impl is None:
            return "Please choose 'vector' or 'list' first.\n"
        return _choose(session, impl)

    with lock if lock is not None else nullcontext():
        operation = _LEGACY.get(cmd)
        if operation is None:
            return f"Unknown command: {cmd}\n"
        return _run_operation(operation, args, state, session.impl)


def process_open_command(
    line: str,
    state: State,
    session: Session,
    on_quit: Callable[[], None] | None = None,
) -> str:
    """Apply one command where ``vector``/``list`` may switch at any time.

    No choice is needed before other commands (vector is the default).
    ``quit`` calls ``on_quit`` and answers with a shutdown notice.
    """
    args = _Arguments(line)
    cmd = args.word()

    impl = _IMPLS.get(cmd)
    if impl is not None:
        return _choose(session, impl)

    operation = _LEGACY.get(cmd)
    if operation is not None:
        return _run_operation(operation, args, state, session.impl)

    if cmd == QUIT:
        if on_quit is not None:
            on_quit()
        return "Server shutting down...\n"
    return f"Unknown command: {cmd}\n"