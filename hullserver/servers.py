"""Single-threaded TCP front ends for the hull state: select, reactor and open protocol."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
from typing import Callable

from .commands import QUIT, Session, process_legacy_command, process_open_command
from .reactor import Reactor
from .state import State

DEFAULT_PORT = 9034
BUFFER_SIZE = 1024
BACKLOG = 10
_POLL_INTERVAL = 0.2


def split_lines(data: bytes | str) -> list[str]:
    """Split received data into lines the way a line reader would.

    Text after a NUL byte is ignored, and a trailing newline does not
    produce an empty final line.
    """
    if isinstance(data, (bytes, bytearray)):
        text = bytes(data).decode("utf-8", errors="replace")
    else:
        text = data
    text = text.split("\0", 1)[0]
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def open_listener(host: str = "", port: int = DEFAULT_PORT) -> socket.socket:
    """Return a TCP socket bound to (host, port) with address reuse, listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock


def _reply_to(conn: socket.socket, data: bytes, handle: Callable[[str], str]) -> bool:
    """Answer every non-empty line; False once the client quits or cannot be written to."""
    for line in split_lines(data):
        if not line:
            continue
        response = handle(line)
        if response == QUIT:
            return False
        try:
            conn.sendall(response.encode())
        except OSError:
            return False
    return True


def _announce(conn: socket.socket, address: tuple) -> None:
    print(f"New connection from {address[0]} on socket {conn.fileno()}", flush=True)


def run_select_server(listener: socket.socket, state: State) -> None:
    """Serve all clients from one select loop until ``listener`` is closed.

    Every client shares one choice of container, made by the first
    ``vector`` or ``list`` command received from any of them.
    """
    session = Session()

    def handle(line: str) -> str:
        return process_legacy_command(line, state, session)

    clients: set[socket.socket] = set()
    with selectors.DefaultSelector() as selector:
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
                        clients.add(conn)
                        _announce(conn, address)
                        continue
                    try:
                        data = sock.recv(BUFFER_SIZE)
                    except OSError:
                        data = b""
                    if not data or not _reply_to(sock, data, handle):
                        selector.unregister(sock)
                        clients.discard(sock)
                        sock.close()
        finally:
            for conn in clients:
                conn.close()


def run_reactor_server(listener: socket.socket, state: State) -> None:
    """Serve clients through a reactor; runs until the process ends.

    As with the select server, all clients share one container choice.
    """
    session = Session()

    def handle(line: str) -> str:
        return process_legacy_command(line, state, session)

    with Reactor() as reactor:

        def drop(conn: socket.socket) -> None:
            reactor.remove_handler(conn)
            conn.close()

        def handle_client(conn: socket.socket) -> None:
            try:
                data: bytes | None = conn.recv(BUFFER_SIZE - 1)
            except OSError as exc:
                print(f"recv: {exc}", file=sys.stderr)
                data = None
            if not data:
                if data == b"":
                    print(f"Client disconnected on socket {conn.fileno()}", flush=True)
                drop(conn)
                return
            if not _reply_to(conn, data, handle):
                drop(conn)

        def accept_client(sock: socket.socket) -> None:
            try:
                conn, address = sock.accept()
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
                return
            _announce(conn, address)
            reactor.add_handler(conn, handle_client)

        reactor.add_handler(listener, accept_client)
        reactor.run()


def run_open_reactor_server(listener: socket.socket, state: State) -> None:
    """Serve the open protocol through a reactor until a client sends ``quit``.

    ``vector`` and ``list`` may switch the shared container at any time;
    every line, including an empty one, gets an answer.
    """
    session = Session()
    clients: set[socket.socket] = set()

    with Reactor() as reactor:

        def handle(line: str) -> str:
            return process_open_command(line, state, session, on_quit=reactor.stop)

        def drop(conn: socket.socket) -> None:
            reactor.remove_handler(conn)
            clients.discard(conn)
            conn.close()

        def handle_client(conn: socket.socket) -> None:
            try:
                data = conn.recv(BUFFER_SIZE - 1)
            except OSError:
                data = b""
            if not data:
                drop(conn)
                return
            for line in split_lines(data):
                if line.endswith("\r"):
                    line = line[:-1]
                response = handle(line)
                if response:
                    try:
                        conn.sendall(response.encode())
                    except OSError:
                        drop(conn)
                        return

        def accept_client(sock: socket.socket) -> None:
            try:
                conn, _address = sock.accept()
            except OSError:
                return
            clients.add(conn)
            reactor.add_handler(conn, handle_client)

        reactor.add_handler(listener, accept_client)
        try:
            reactor.run()
        finally:
            for conn in clients:
                conn.close()
            clients.clear()


_RUNNERS = {
    "select": run_select_server,
    "reactor": run_reactor_server,
    "open": run_open_reactor_server,
}


def main(argv: list[str] | None = None) -> int:
    """Start one of the single-threaded hull servers."""
    parser = argparse.ArgumentParser(description="Serve convex hull commands over TCP.")
    parser.add_argument("--mode", choices=sorted(_RUNNERS), default="reactor")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        listener = open_listener(args.host, args.port)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    state = State(log=sys.stderr, timing=args.mode != "select")
    with listener:
        print(f"Server running on port {listener.getsockname()[1]}...", flush=True)
        try:
            _RUNNERS[args.mode](listener, state)
        except KeyboardInterrupt:
            pass
    return 0