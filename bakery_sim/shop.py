from __future__ import annotations

# Everything customers and chefs share during one run.
#
# Built once per run from the configuration and the customer ids; nothing in
# here is global.

from dataclasses import dataclass
from typing import Iterable

from .clock import SimClock
from .config import BakeryConfig
from .events import EventLog
from .manager import WorkQueueManager
from .resources import CapacityPool, CashRegister
from .signals import SignalBoard


@dataclass
class Shop:
    config: BakeryConfig
    clock: SimClock
    log: EventLog
    store: CapacityPool
    seating: CapacityPool
    queues: WorkQueueManager
    signals: SignalBoard

    @classmethod
    def open(
        cls,
        config: BakeryConfig,
        customer_ids: Iterable[int],
        *,
        clock: SimClock,
        log: EventLog,
    ) -> Shop:
        return cls(
            config=config,
            clock=clock,
            log=log,
            store=CapacityPool("store", config.store_capacity),
            seating=CapacityPool("seating", config.seating_capacity),
            queues=WorkQueueManager(CashRegister()),
            signals=SignalBoard(customer_ids),
        )

    @property
    def register(self) -> CashRegister:
        return self.queues.register
