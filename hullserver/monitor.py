"""Announces when the hull grows to, or falls below, a vertex count."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from .state import State


class HullMonitor:
    """Watches a state and prints a line whenever the hull crosses ``threshold``.

    ``condition`` guards ``state`` and is notified by whoever changes it.
    After each announcement ``run`` pauses for ``interval`` seconds.
    """

    def __init__(
        self,
        state: State,
        condition: threading.Condition,
        threshold: int = 100,
        out: TextIO | None = None,
        interval: float = 0.1,
    ) -> None:
        self.state = state
        self.condition = condition
        self.threshold = threshold
        self.interval = interval
        self.above_threshold = False
        self._out = out if out is not None else sys.stdout
        self._stopping = threading.Event()

    def _pending(self) -> bool:
        return (self.state.hull_size() >= self.threshold) != self.above_threshold

    def _transition(self) -> str | None:
        if not self._pending():
            return None
        self.above_threshold = not self.above_threshold
        if self.above_threshold:
            message = f"At Least {self.threshold} units belongs to CH"
        else:
            message = f"At Least {self.threshold} units no longer belongs to CH"
        self._out.write(message + "\n")
        self._out.flush()
        return message

    def check(self) -> str | None:
        """Announce a crossing if one happened; return the message or None."""
        with self.condition:
            return self._transition()

    def run(self) -> None:
        """Wait for crossings and announce them until ``stop`` is called."""
        while not self._stopping.is_set():
            with self.condition:
                self.condition.wait_for(lambda: self._stopping.is_set() or self._pending())
                if self._stopping.is_set():
                    break
                self._transition()
            if self._stopping.wait(self.interval):
                break

    def stop(self) -> None:
        """Make ``run`` return."""
        self._stopping.set()
        with self.condition:
            self.condition.notify_all()