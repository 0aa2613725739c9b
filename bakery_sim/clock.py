from __future__ import annotations

# Simulation clock.
#
# Timestamps are whole simulation units elapsed since the run started, shifted by
# the earliest arrival of the batch so printed times line up with the input.

import threading
import time
from typing import Callable


class SimClock:
    def __init__(
        self,
        *,
        time_unit_seconds: float = 1.0,
        offset: int = 0,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if time_unit_seconds <= 0:
            raise ValueError("time_unit_seconds must be > 0")
        self.time_unit_seconds = time_unit_seconds
        self.offset = offset
        self._monotonic = monotonic
        self._t0 = monotonic()
        self._last = 0
        self._lock = threading.Lock()

    def restart(self, *, offset: int | None = None) -> None:
        """Reset the origin to now (and optionally the printing offset)."""
        with self._lock:
            self._t0 = self._monotonic()
            self._last = 0
            if offset is not None:
                self.offset = offset

    def elapsed(self) -> int:
        """Whole simulation units since the origin. Never goes backwards."""
        units = int((self._monotonic() - self._t0) / self.time_unit_seconds)
        with self._lock:
            if units > self._last:
                self._last = units
            return self._last

    def now(self) -> int:
        return self.elapsed() + self.offset

    def sleep(self, units: float) -> None:
        """Block the calling thread for `units` simulation units."""
        if units < 0:
            raise ValueError("units must be >= 0")
        if units:
            time.sleep(units * self.time_unit_seconds)
