"""Fixed-step timing driven by a millisecond clock."""

from __future__ import annotations

import time
from typing import Callable, Optional

TICK_MS = 20
DELTA_TIME = 0.02


def _milliseconds() -> int:
    return int(time.monotonic() * 1000)


class TickSystem:
    """Accumulates elapsed time and runs whole fixed steps of 20 ms."""

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        on_step: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._clock = clock if clock is not None else _milliseconds
        self._on_step = on_step
        self.tick_count = self._clock()
        self.tick_accum = 0

    def tick(self) -> int:
        """Advance to the clock's current time and return the number of steps run."""
        now = self._clock()
        self.tick_accum += now - self.tick_count
        self.tick_count = now

        steps = 0
        while self.tick_accum >= TICK_MS:
            if self._on_step is not None:
                self._on_step(DELTA_TIME)
            self.tick_accum -= TICK_MS
            steps += 1
        return steps