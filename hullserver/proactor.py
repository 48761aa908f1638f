"""Run a handler on its own thread, with cooperative cancellation."""

from __future__ import annotations

import threading
from typing import Any, Callable


class ProactorThread(threading.Thread):
    """A daemon thread running ``func(arg)``.

    ``result`` holds the return value once the thread has finished.
    ``cancel_event`` is set when a stop is requested; the function is
    expected to check it, since threads cannot be cancelled forcibly.
    """

    def __init__(self, func: Callable[[Any], Any], arg: Any) -> None:
        super().__init__(daemon=True)
        self._func = func
        self._arg = arg
        self.cancel_event = threading.Event()
        self.result: Any = None

    def run(self) -> None:
        self.result = self._func(self._arg)


def start_proactor(arg: Any, func: Callable[[Any], Any]) -> ProactorThread:
    """Start ``func(arg)`` on a new thread and return its handle.

    Raises RuntimeError if the thread cannot be started.
    """
    thread = ProactorThread(func, arg)
    try:
        thread.start()
    except RuntimeError as exc:
        raise RuntimeError("Failed to create proactor thread") from exc
    return thread


def stop_proactor(handle: ProactorThread) -> bool:
    """Request the thread to stop; False if it had already finished."""
    if not handle.is_alive():
        return False
    handle.cancel_event.set()
    return True