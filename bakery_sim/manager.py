from __future__ import annotations

# Work queues shared by customers and chefs.
#
# One lock + one condition guard both FIFO queues ("bake" and "pay") and the
# decision of who takes the cash register. Chefs never hold this lock while
# they bake or take a payment: `next_task()` returns with the lock released and
# only `finish_payment()` takes it again to hand the register back.

import threading
from collections import deque
from dataclasses import dataclass

from .resources import CashRegister

BAKE = "bake"
PAY = "pay"


@dataclass(frozen=True)
class Task:
    """One unit of chef work taken from a queue."""

    kind: str  # BAKE or PAY
    customer_id: int


class WorkQueueManager:
    """Dual work queue with a static priority rule (testable without threads)."""

    def __init__(self, register: CashRegister | None = None) -> None:
        self.register = register or CashRegister()
        self._cond = threading.Condition(threading.Lock())
        self._queues: dict[str, deque[int]] = {BAKE: deque(), PAY: deque()}
        self._dequeued: dict[str, list[int]] = {BAKE: [], PAY: []}
        self._closed = False

    # -------------------- customer side --------------------

    def request_bake(self, customer_id: int) -> None:
        self._enqueue(BAKE, customer_id)

    def request_payment(self, customer_id: int) -> None:
        self._enqueue(PAY, customer_id)

    def _enqueue(self, kind: str, customer_id: int) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("work queues are closed")
            q = self._queues[kind]
            if customer_id in q:
                raise ValueError(f"customer {customer_id} already waiting in {kind} queue")
            q.append(customer_id)
            self._cond.notify_all()

    # -------------------- chef side --------------------

    def next_task(self, chef_id: int) -> Task | None:
        """Block until there is work this chef can take, then take it.

        Priority: a waiting payment wins whenever the register is free, even
        over bake requests that queued earlier. A chef that finds only payments
        while the register is busy goes back to sleep until the register is
        handed back or new work arrives.

        Returns None once the queues are closed and nothing is left.
        """
        with self._cond:
            while True:
                pay_q = self._queues[PAY]
                bake_q = self._queues[BAKE]

                if pay_q and self.register.try_acquire(chef_id):
                    cid = pay_q.popleft()
                    self._dequeued[PAY].append(cid)
                    return Task(PAY, cid)

                if bake_q:
                    cid = bake_q.popleft()
                    self._dequeued[BAKE].append(cid)
                    return Task(BAKE, cid)

                if self._closed and not pay_q:
                    return None

                self._cond.wait()

    def finish_payment(self, chef_id: int) -> None:
        """Hand the register back and wake chefs waiting for it."""
        with self._cond:
            self.register.release(chef_id)
            self._cond.notify_all()

    # -------------------- lifecycle --------------------

    def close(self) -> None:
        """Tell idle chefs to stop once the queues are drained."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    # -------------------- introspection --------------------

    def status(self) -> dict[str, object]:
        """Snapshot of queue contents and register holder."""
        with self._cond:
            return {
                "bake": list(self._queues[BAKE]),
                "pay": list(self._queues[PAY]),
                "register_holder": self.register.holder,
                "closed": self._closed,
            }

    def dequeue_order(self, kind: str) -> list[int]:
        """Customer ids in the order chefs took them from one queue."""
        with self._cond:
            return list(self._dequeued[kind])
