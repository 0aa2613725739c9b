from __future__ import annotations

# Customer actor.
#
# One thread per customer, walking a fixed lifecycle:
#   dormant -> active -> inside -> seated -> requested_cake -> cake_received
#   -> paying -> payment_accepted -> departed
# Every step either takes a resource or waits on a signal. Nothing can fail;
# a step can only block until a chef (or a departing customer) unblocks it.

from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import events

if TYPE_CHECKING:
    from .shop import Shop

DORMANT = "dormant"
ACTIVE = "active"
INSIDE = "inside"
SEATED = "seated"
REQUESTED_CAKE = "requested_cake"
CAKE_RECEIVED = "cake_received"
PAYING = "paying"
PAYMENT_ACCEPTED = "payment_accepted"
DEPARTED = "departed"

LIFECYCLE = (
    DORMANT,
    ACTIVE,
    INSIDE,
    SEATED,
    REQUESTED_CAKE,
    CAKE_RECEIVED,
    PAYING,
    PAYMENT_ACCEPTED,
    DEPARTED,
)


@dataclass(frozen=True)
class Customer:
    """One arrival record.

    `arrival` is relative to the earliest arrival of the batch; `slot` is the
    position in the arrival-sorted batch.
    """

    customer_id: int
    arrival: int
    slot: int = 0


class CustomerActor:
    def __init__(self, customer: Customer, shop: Shop) -> None:
        self.customer = customer
        self.shop = shop
        self.state = DORMANT
        self.history: list[str] = [DORMANT]

    def _enter(self, state: str) -> None:
        self.state = state
        self.history.append(state)

    def run(self) -> None:
        shop = self.shop
        cid = self.customer.customer_id
        signals = shop.signals.slot(cid)

        shop.clock.sleep(self.customer.arrival)
        self._enter(ACTIVE)

        shop.store.acquire()
        self._enter(INSIDE)
        shop.log.customer(cid, events.ENTERS)

        shop.seating.acquire()
        self._enter(SEATED)
        shop.log.customer(cid, events.SITS)

        shop.clock.sleep(shop.config.think_time)
        shop.log.customer(cid, events.REQUESTS_CAKE)
        self._enter(REQUESTED_CAKE)
        shop.queues.request_bake(cid)

        signals.cake_ready.wait()
        self._enter(CAKE_RECEIVED)

        shop.clock.sleep(shop.config.think_time)
        shop.log.customer(cid, events.PAYS)
        self._enter(PAYING)
        shop.queues.request_payment(cid)

        signals.payment_done.wait()
        self._enter(PAYMENT_ACCEPTED)

        shop.log.customer(cid, events.LEAVES)
        shop.seating.release()
        shop.store.release()
        self._enter(DEPARTED)

    @property
    def departed(self) -> bool:
        return self.state == DEPARTED
