"""A single-threaded read-event loop that dispatches to callbacks."""

from __future__ import annotations

import selectors
import socket
from typing import Any, Callable

Callback = Callable[[Any], None]


class Reactor:
    """Watches file objects for readability and calls their handlers.

    Each handler is called with the file object it was registered for.
    ``stop`` may be called from a handler or from another thread.
    """

    def __init__(self) -> None:
        self._selector = selectors.DefaultSelector()
        self._handlers: dict[Any, Callback] = {}
        self._running = False
        self._wake_reader, self._wake_writer = socket.socketpair()
        self._wake_reader.setblocking(False)
        self._wake_writer.setblocking(False)
        self._selector.register(self._wake_reader, selectors.EVENT_READ)

    def __enter__(self) -> Reactor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add_handler(self, fileobj: Any, callback: Callback) -> None:
        """Call ``callback(fileobj)`` whenever ``fileobj`` becomes readable.

        Raises ValueError if ``fileobj`` is already registered or invalid.
        """
        try:
            self._selector.register(fileobj, selectors.EVENT_READ)
        except KeyError as exc:
            raise ValueError(f"Failed to add handler: {fileobj!r} is already registered") from exc
        self._handlers[fileobj] = callback

    def remove_handler(self, fileobj: Any) -> None:
        """Stop watching ``fileobj``; unknown objects are ignored."""
        try:
            self._selector.unregister(fileobj)
        except (KeyError, ValueError):
            pass
        self._handlers.pop(fileobj, None)

    def run(self) -> None:
        """Dispatch events until ``stop`` is called."""
        self._running = True
        while self._running:
            for key, _events in self._selector.select():
                if key.fileobj is self._wake_reader:
                    self._drain_wakeups()
                    continue
                callback = self._handlers.get(key.fileobj)
                if callback is not None:
                    callback(key.fileobj)

    def stop(self) -> None:
        """Make ``run`` return after the events it is handling."""
        self._running = False
        try:
            self._wake_writer.send(b"\0")
        except OSError:
            pass

    def close(self) -> None:
        """Release the selector and internal sockets."""
        self._selector.close()
        self._wake_reader.close()
        self._wake_writer.close()
        self._handlers.clear()

    def _drain_wakeups(self) -> None:
        try:
            while self._wake_reader.recv(4096):
                pass
        except OSError:
            pass