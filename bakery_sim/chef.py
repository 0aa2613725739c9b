from __future__ import annotations

# Chef worker.
#
# Each chef loops:
# - wait for work it can take (payment first if the register is free, else baking)
# - log the task, "work" for its fixed duration without holding the queue lock
# - post the served customer's completion signal
# - after a payment, hand the register back
# It exits once the work queues are closed and drained.

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import events
from .manager import BAKE, PAY, Task

if TYPE_CHECKING:
    from .shop import Shop


@dataclass
class ChefStats:
    chef_id: int
    baked: list[int] = field(default_factory=list)
    payments: list[int] = field(default_factory=list)

    @property
    def tasks(self) -> int:
        return len(self.baked) + len(self.payments)


def run_chef(chef_id: int, shop: Shop, stats: ChefStats | None = None) -> ChefStats:
    """Serve tasks until the shop closes. Returns what this chef did."""
    stats = stats or ChefStats(chef_id)
    while True:
        task = shop.queues.next_task(chef_id)
        if task is None:
            return stats
        serve(chef_id, task, shop, stats)


def serve(chef_id: int, task: Task, shop: Shop, stats: ChefStats) -> None:
    cid = task.customer_id
    if task.kind == PAY:
        try:
            # Unknown ids are fatal; look up before doing the work.
            done = shop.signals.payment_done(cid)
            shop.log.chef(chef_id, events.ACCEPTS_PAYMENT_FOR, cid)
            shop.clock.sleep(shop.config.payment_duration)
            done.post()
            stats.payments.append(cid)
        finally:
            shop.queues.finish_payment(chef_id)
        return

    if task.kind == BAKE:
        ready = shop.signals.cake_ready(cid)
        shop.log.chef(chef_id, events.BAKES_FOR, cid)
        shop.clock.sleep(shop.config.bake_duration)
        ready.post()
        stats.baked.append(cid)
        return

    raise ValueError(f"unknown task kind: {task.kind}")
