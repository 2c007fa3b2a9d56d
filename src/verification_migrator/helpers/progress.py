"""Progress side channel for batch migrations.

Reporters only observe: the orchestrator shields results from anything a
reporter raises.
"""

import os
import sys
import threading
import time
from typing import Optional, TextIO

from verification_migrator.migration.types import MigrationResult


def _short_addr(addr: str, *, head: int = 6, tail: int = 4) -> str:
    a = (addr or "").strip()
    if len(a) <= head + tail + 3:
        return a
    return f"{a[:head]}…{a[-tail:]}"


class ProgressReporter:
    """No-op reporter; subclasses override the hooks they need."""

    def begin(self, total: int) -> None:
        pass

    def started(self, address: str) -> None:
        pass

    def finished(self, address: str, result: MigrationResult) -> None:
        pass

    def end(self) -> None:
        pass


class ConsoleProgress(ProgressReporter):
    """One line per contract on stderr, coloured when attached to a terminal."""

    def __init__(self, stream: Optional[TextIO] = None, label: str = "migrate"):
        self.stream = stream if stream is not None else sys.stderr
        self.label = label
        self.total = 0
        self.done = 0
        self.start_s = time.time()
        self._lock = threading.Lock()
        is_tty = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_color = is_tty and os.environ.get("NO_COLOR") is None

    def _c(self, s: str, code: str) -> str:
        if not self.use_color:
            return s
        return f"\x1b[{code}m{s}\x1b[0m"

    def _write(self, line: str) -> None:
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()

    def begin(self, total: int) -> None:
        self.total = total
        self.done = 0
        self.start_s = time.time()

    def started(self, address: str) -> None:
        self._write(f"[{self.label}] {address} - {self._c('Copying', '1;33')}")

    def finished(self, address: str, result: MigrationResult) -> None:
        with self._lock:
            self.done += 1
            count = f"{self.done}/{self.total}"
        if result.ok:
            status = self._c(f"{result.describe()} ✔", "1;32")
        else:
            status = self._c(result.describe(), "1;31")
        self._write(f"[{self.label}] {count} {_short_addr(address)} - {status}")

    def end(self) -> None:
        elapsed = time.time() - self.start_s
        self._write(f"[{self.label}] done {self.done}/{self.total} in {elapsed:.1f}s")
