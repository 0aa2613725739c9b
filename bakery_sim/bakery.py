from __future__ import annotations

# Run coordinator.
#
# `Bakery.run(batch)`:
# 1) open the shop (pools, work queues, register, signal board)
# 2) start the chef threads (ids 1..N), then one thread per customer
# 3) wait for every customer to depart, watching for failed threads
# 4) close the work queues so idle chefs exit, then join every chef
#
# A failure in any thread (e.g. a dequeued id with no signal slot) aborts the
# run with `RunAborted`. Customers blocked on signals that will never come are
# daemon threads and are left behind.

import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TextIO

from .arrival import ArrivalBatch
from .chef import ChefStats, run_chef
from .clock import SimClock
from .config import BakeryConfig
from .customer import CustomerActor
from .errors import RunAborted
from .events import Event, EventLog, EventSink
from .manager import BAKE, PAY
from .shop import Shop


@dataclass
class RunReport:
    events: list[Event] = field(default_factory=list)
    customers_served: int = 0
    chefs: list[ChefStats] = field(default_factory=list)
    peak_store: int = 0
    peak_seating: int = 0
    payments: int = 0
    register_history: list[tuple[int, str]] = field(default_factory=list)
    bake_order: list[int] = field(default_factory=list)
    pay_order: list[int] = field(default_factory=list)
    start_offset: int = 0
    elapsed: int = 0
    signals_settled: bool = True
    actors: list[CustomerActor] = field(default_factory=list)

    def lines(self) -> list[str]:
        return [e.line() for e in self.events]

    @property
    def peak_register_holders(self) -> int:
        """Most chefs holding the register at once, replayed from its history."""
        holders = peak = 0
        for _chef, change in self.register_history:
            holders += 1 if change == "hold" else -1
            peak = max(peak, holders)
        return peak

    def summary(self) -> dict[str, Any]:
        return {
            "type": "run_summary",
            "customers_served": self.customers_served,
            "payments": self.payments,
            "peak_register_holders": self.peak_register_holders,
            "peak_store": self.peak_store,
            "peak_seating": self.peak_seating,
            "chef_tasks": {s.chef_id: s.tasks for s in self.chefs},
            "start_offset": self.start_offset,
            "elapsed": self.elapsed,
        }


class Bakery:
    def __init__(
        self,
        config: BakeryConfig | None = None,
        *,
        stream: TextIO | None = sys.stdout,
        sinks: Iterable[EventSink] = (),
        verbose: bool = False,
        poll_seconds: float = 0.05,
    ) -> None:
        self.config = config or BakeryConfig()
        self.config.validate()
        self.stream = stream
        self.sinks = list(sinks)
        self.verbose = verbose
        self.poll_seconds = poll_seconds

        self._failures: list[tuple[str, Exception]] = []
        self._failures_lock = threading.Lock()
        self.chef_threads: list[threading.Thread] = []

    def _say(self, msg: str) -> None:
        if self.verbose:
            print(f"[bakery] {msg}", file=sys.stderr, flush=True)

    def _guard(self, name: str, target: Callable[[], Any]) -> Callable[[], None]:
        def runner() -> None:
            try:
                target()
            except Exception as e:
                # Handed to the coordinator, which re-raises it as RunAborted.
                with self._failures_lock:
                    self._failures.append((name, e))

        return runner

    def _first_failure(self) -> tuple[str, Exception] | None:
        with self._failures_lock:
            return self._failures[0] if self._failures else None

    def run(self, batch: ArrivalBatch) -> RunReport:
        clock = SimClock(time_unit_seconds=self.config.time_unit_seconds, offset=batch.start_offset)
        log = EventLog(clock, stream=self.stream)
        for sink in self.sinks:
            log.add_sink(sink)

        if not batch.customers:
            self._say("no customers, nothing to do")
            return RunReport(start_offset=batch.start_offset)

        shop = Shop.open(self.config, batch.customer_ids(), clock=clock, log=log)
        self._failures.clear()

        chef_stats = [ChefStats(i) for i in range(1, self.config.num_chefs + 1)]
        chef_threads = [
            threading.Thread(
                target=self._guard(f"chef {s.chef_id}", lambda s=s: run_chef(s.chef_id, shop, s)),
                name=f"chef-{s.chef_id}",
                daemon=True,
            )
            for s in chef_stats
        ]
        self.chef_threads = chef_threads
        for t in chef_threads:
            t.start()
        self._say(f"{len(chef_threads)} chefs started")

        actors = [CustomerActor(c, shop) for c in batch.customers]
        customer_threads = [
            threading.Thread(
                target=self._guard(f"customer {a.customer.customer_id}", a.run),
                name=f"customer-{a.customer.customer_id}",
                daemon=True,
            )
            for a in actors
        ]

        clock.restart()
        for t in customer_threads:
            t.start()
        self._say(f"{len(customer_threads)} customers started, offset={batch.start_offset}")

        # Wait until every customer departs or some thread dies.
        for t in customer_threads:
            while t.is_alive():
                self._check_failures(shop)
                t.join(timeout=self.poll_seconds)
        self._check_failures(shop)

        shop.queues.close()
        for t in chef_threads:
            t.join()
        self._check_failures(shop)
        self._say("all customers left, chefs stopped")

        return RunReport(
            events=log.events(),
            customers_served=sum(1 for a in actors if a.departed),
            chefs=chef_stats,
            peak_store=shop.store.peak_in_use,
            peak_seating=shop.seating.peak_in_use,
            payments=shop.register.payments,
            register_history=shop.register.history(),
            bake_order=shop.queues.dequeue_order(BAKE),
            pay_order=shop.queues.dequeue_order(PAY),
            start_offset=batch.start_offset,
            elapsed=clock.elapsed(),
            signals_settled=shop.signals.all_settled(),
            actors=actors,
        )

    def _check_failures(self, shop: Shop) -> None:
        failure = self._first_failure()
        if failure is None:
            return
        name, exc = failure
        shop.queues.close()
        self._say(f"{name} failed: {exc}")
        raise RunAborted(f"{name} failed: {exc}") from exc
