"""
Output sinks that receive dispatch results.
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, TextIO

from cmdctl.core.datamodels import CommandResult

Sink = Callable[[CommandResult], None]


class StreamSink:
    """Writes rendered results, successes to `out` and the rest to `err`.

    Unset streams resolve to sys.stdout / sys.stderr at write time.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None):
        self.out = out
        self.err = err

    def __call__(self, result: CommandResult) -> None:
        if result.ok:
            stream = self.out or sys.stdout
        else:
            stream = self.err or sys.stderr
        text = result.render()
        if text:
            print(text, file=stream, flush=True)


class CollectingSink:
    """Thread-safe sink that keeps every result it receives."""

    def __init__(self):
        self.results: list[CommandResult] = []
        self._cond = threading.Condition()

    def __call__(self, result: CommandResult) -> None:
        with self._cond:
            self.results.append(result)
            self._cond.notify_all()

    def wait_for(self, count: int, timeout: float | None = None) -> bool:
        """Block until at least `count` results arrived. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: len(self.results) >= count, timeout=timeout)

    def by_command(self, command: str) -> list[CommandResult]:
        with self._cond:
            return [r for r in self.results if r.command == command]

    def __len__(self) -> int:
        with self._cond:
            return len(self.results)
