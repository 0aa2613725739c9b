from __future__ import annotations

# Shared resource gates.
#
# - `CapacityPool`: counted permits (store occupancy, seating). Acquire blocks
#   while no permit is left.
# - `CashRegister`: the single payment station. At most one chef holds it.
#
# Both keep counters so tests can check the invariants after a run.

import threading

from .errors import CapacityError, RegisterError


class CapacityPool:
    """Counting permit pool that refuses to be released past its capacity."""

    def __init__(self, name: str, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self.name = name
        self.capacity = capacity
        self._available = capacity
        self._peak_in_use = 0
        self._acquired_total = 0
        self._cond = threading.Condition()

    def acquire(self) -> None:
        with self._cond:
            while self._available == 0:
                self._cond.wait()
            self._available -= 1
            self._acquired_total += 1
            in_use = self.capacity - self._available
            if in_use > self._peak_in_use:
                self._peak_in_use = in_use

    def release(self) -> None:
        with self._cond:
            if self._available >= self.capacity:
                raise CapacityError(f"{self.name}: release without matching acquire")
            self._available += 1
            self._cond.notify()

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    @property
    def in_use(self) -> int:
        with self._cond:
            return self.capacity - self._available

    @property
    def peak_in_use(self) -> int:
        with self._cond:
            return self._peak_in_use

    @property
    def acquired_total(self) -> int:
        with self._cond:
            return self._acquired_total


class CashRegister:
    """The one payment station.

    `try_acquire` never blocks: chefs call it while holding the work-queue lock
    and go back to waiting on that lock's condition when the register is busy.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._holder: int | None = None
        self._payments = 0
        # (chef_id, "hold" | "free") in the order the register changed hands
        self._history: list[tuple[int, str]] = []

    def try_acquire(self, chef_id: int) -> bool:
        with self._lock:
            if self._holder is not None:
                return False
            self._holder = chef_id
            self._payments += 1
            self._history.append((chef_id, "hold"))
            return True

    def release(self, chef_id: int) -> None:
        with self._lock:
            if self._holder is None:
                raise RegisterError(f"chef {chef_id} released a free register")
            if self._holder != chef_id:
                raise RegisterError(
                    f"chef {chef_id} released the register held by chef {self._holder}"
                )
            self._holder = None
            self._history.append((chef_id, "free"))

    @property
    def holder(self) -> int | None:
        with self._lock:
            return self._holder

    @property
    def is_free(self) -> bool:
        with self._lock:
            return self._holder is None

    def history(self) -> list[tuple[int, str]]:
        with self._lock:
            return list(self._history)

    @property
    def payments(self) -> int:
        with self._lock:
            return self._payments
