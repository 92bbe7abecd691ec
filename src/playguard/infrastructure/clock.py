from __future__ import annotations

import time

from playguard.domain.clock import Clock


class SystemClock(Clock):
    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock(Clock):
    """Clock pinned to a given instant; tests and replays move it by hand."""

    def __init__(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def set(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def advance(self, delta_ms: int) -> int:
        self._now_ms += int(delta_ms)
        return self._now_ms
