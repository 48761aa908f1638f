"""Hull servers whose shared state is watched by a hull-size monitor."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from .commands import QUIT, Session, process_command
from .monitor import HullMonitor
from .proactor import start_proactor
from .servers import BUFFER_SIZE, open_listener, split_lines
from .state import State

DEFAULT_PORT = 9035
_POLL_INTERVAL = 0.2


@dataclass
class SharedHull:
    """A state shared by all clients, guarded by a condition the monitor waits on."""

    state: State = field(default_factory=State)
    condition: threading.Condition = field(default_factory=threading.Condition)
    threshold: int = 100
    out: TextIO | None = None

    def process(self, line: str, session: Session) -> str:
        """Apply one command for ``session``, waking the monitor on changes."""
        return process_command(line, self.state, session, changed=self.condition)

    @contextmanager
    def monitoring(self) -> Iterator[HullMonitor]:
        """Run a hull monitor on a background thread for the duration of the block."""
        monitor = HullMonitor(self.state, self.condition, self.threshold, self.out)
        thread = threading.Thread(target=monitor.run, daemon=True)
        thread.start()
        try:
            yield monitor
        finally:
            monitor.stop()
            thread.join()


def _answer(conn: socket.socket, data: bytes, shared: SharedHull, session: Session) -> bool:
    """Answer every non-empty line; False once the client quits or cannot be written to."""
    for line in split_lines(data):
        if not line:
            continue
        response = shared.process(line, session)
        if response == QUIT:
            return False
        try:
            conn.sendall(response.encode())
        except OSError:
            return False
    return True


def run_monitored_reactor(listener: socket.socket, shared: SharedHull) -> None:
    """Serve all clients from one poll loop, with a monitor, until ``listener`` is closed.

    Each connection keeps its own container choice, forgotten when it closes.
    """
    sessions: dict[socket.socket, Session] = {}
    with shared.monitoring(), selectors.DefaultSelector() as selector:
        selector.register(listener, selectors.EVENT_READ)
        try:
            while listener.fileno() != -1:
                try:
                    ready = selector.select(timeout=_POLL_INTERVAL)
                except (OSError, ValueError):
                    if listener.fileno() == -1:
                        break
                    raise
                for key, _events in ready:
                    sock = key.fileobj
                    if sock is listener:
                        try:
                            conn, address = listener.accept()
                        except OSError:
                            continue
                        selector.register(conn, selectors.EVENT_READ)
                        sessions[conn] = Session()
                        print(f"New client connected from {address[0]}", flush=True)
                        continue
                    try:
                        data = sock.recv(BUFFER_SIZE - 1)
                    except OSError:
                        data = b""
                    if not data or not _answer(sock, data, shared, sessions[sock]):
                        selector.unregister(sock)
                        sessions.pop(sock, None)
                        sock.close()
        finally:
            for conn in sessions:
                conn.close()
            sessions.clear()


def _serve_connection(conn: socket.socket, shared: SharedHull) -> None:
    session = Session()
    with conn:
        while True:
            try:
                data = conn.recv(BUFFER_SIZE - 1)
            except OSError:
                return
            if not data or not _answer(conn, data, shared, session):
                return


def run_monitored_proactor(listener: socket.socket, shared: SharedHull) -> None:
    """Serve each client on a proactor thread, with a monitor, until ``listener`` is closed."""
    with shared.monitoring(), selectors.DefaultSelector() as selector:
        selector.register(listener, selectors.EVENT_READ)
        while listener.fileno() != -1:
            try:
                ready = selector.select(timeout=_POLL_INTERVAL)
            except (OSError, ValueError):
                if listener.fileno() == -1:
                    break
                raise
            if not ready:
                continue
            try:
                conn, address = listener.accept()
            except OSError:
                if listener.fileno() == -1:
                    break
                continue
            print(f"New client connected from {address[0]}", flush=True)
            start_proactor(conn, lambda client: _serve_connection(client, shared))


_RUNNERS = {"reactor": run_monitored_reactor, "proactor": run_monitored_proactor}


def main(argv: list[str] | None = None) -> int:
    """Start a monitored hull server."""
    parser = argparse.ArgumentParser(
        description="Serve convex hull commands and announce when the hull crosses a size."
    )
    parser.add_argument("--mode", choices=sorted(_RUNNERS), default="reactor")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--threshold", type=int, default=100)
    args = parser.parse_args(argv)

    try:
        listener = open_listener(args.host, args.port)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    shared = SharedHull(state=State(log=sys.stderr), threshold=args.threshold)
    with listener:
        try:
            _RUNNERS[args.mode](listener, shared)
        except KeyboardInterrupt:
            pass
    return 0