"""Thread-per-client TCP front ends for a hull state shared under one lock."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
import threading
from typing import Callable

from .commands import QUIT, Guard, Session, process_legacy_command
from .proactor import start_proactor
from .servers import BUFFER_SIZE, DEFAULT_PORT, open_listener, split_lines
from .state import State

_POLL_INTERVAL = 0.2


def handle_client(conn: socket.socket, state: State, lock: Guard | None) -> None:
    """Serve one client until it disconnects or sends ``quit``, then close it.

    The client makes its own ``vector``/``list`` choice; operations on
    ``state`` run while holding ``lock``.
    """
    session = Session()
    with conn:
        while True:
            try:
                data = conn.recv(BUFFER_SIZE - 1)
            except OSError:
                return
            if not data:
                return
            for line in split_lines(data):
                if not line:
                    continue
                response = process_legacy_command(line, state, session, lock)
                if response == QUIT:
                    return
                try:
                    conn.sendall(response.encode())
                except OSError:
                    return


def _accept_clients(listener: socket.socket, serve: Callable[[socket.socket], None]) -> None:
    """Accept connections and pass each to ``serve`` until ``listener`` is closed."""
    with selectors.DefaultSelector() as selector:
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
            serve(conn)


def run_threaded_server(listener: socket.socket, state: State, lock: Guard | None) -> None:
    """Serve every client on its own thread until ``listener`` is closed."""

    def serve(conn: socket.socket) -> None:
        threading.Thread(target=handle_client, args=(conn, state, lock), daemon=True).start()

    _accept_clients(listener, serve)


def run_proactor_server(listener: socket.socket, state: State, lock: Guard | None) -> None:
    """Serve every client through a proactor thread until ``listener`` is closed."""

    def serve(conn: socket.socket) -> None:
        start_proactor(conn, lambda client: handle_client(client, state, lock))

    _accept_clients(listener, serve)


_RUNNERS = {"threaded": run_threaded_server, "proactor": run_proactor_server}
_BANNERS = {
    "threaded": "Threaded server running on port {port}...",
    "proactor": "Proactor-based threaded server running on port {port}...",
}


def main(argv: list[str] | None = None) -> int:
    """Start a thread-per-client hull server."""
    parser = argparse.ArgumentParser(description="Serve convex hull commands, one thread per client.")
    parser.add_argument("--mode", choices=sorted(_RUNNERS), default="threaded")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        listener = open_listener(args.host, args.port)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    state = State(log=sys.stderr, timing=args.mode == "proactor")
    lock = threading.Lock()
    with listener:
        print(_BANNERS[args.mode].format(port=listener.getsockname()[1]), flush=True)
        try:
            _RUNNERS[args.mode](listener, state, lock)
        except KeyboardInterrupt:
            pass
    return 0