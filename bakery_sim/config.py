from __future__ import annotations

# Fixed configuration of a bakery run.
#
# All durations are in simulation time units. One unit lasts
# `time_unit_seconds` of wall-clock time (1 second by default), so tests can run
# the very same protocol a hundred times faster.

from dataclasses import dataclass


@dataclass(frozen=True)
class BakeryConfig:
    store_capacity: int = 25
    seating_capacity: int = 4
    num_chefs: int = 4
    think_time: float = 1
    bake_duration: float = 2
    payment_duration: float = 2
    time_unit_seconds: float = 1.0

    def validate(self) -> None:
        """Reject values the protocol cannot run with."""
        if self.store_capacity <= 0:
            raise ValueError("store_capacity must be > 0")
        if self.seating_capacity <= 0:
            raise ValueError("seating_capacity must be > 0")
        if self.num_chefs <= 0:
            raise ValueError("num_chefs must be > 0")
        for name in ("think_time", "bake_duration", "payment_duration"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.time_unit_seconds <= 0:
            raise ValueError("time_unit_seconds must be > 0")
