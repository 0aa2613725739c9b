from __future__ import annotations

# Per-customer completion signals.
#
# Every customer owns two one-shot signals: "cake ready" and "payment done".
# A chef posts the signal for the customer it just served; that customer is the
# only waiter. The board mapping customer id -> signals is built once before the
# run starts and never changes afterwards.

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable

from .errors import SignalError, UnknownCustomerError


class CompletionSignal:
    """One-shot binary semaphore: posted at most once, waited at most once."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._sem = threading.Semaphore(0)
        self._lock = threading.Lock()
        self._posted = False
        self._waited = False

    def post(self) -> None:
        with self._lock:
            if self._posted:
                raise SignalError(f"{self.name} posted twice")
            self._posted = True
        self._sem.release()

    def wait(self) -> None:
        with self._lock:
            if self._waited:
                raise SignalError(f"{self.name} waited on twice")
            self._waited = True
        self._sem.acquire()

    @property
    def posted(self) -> bool:
        with self._lock:
            return self._posted

    @property
    def waited(self) -> bool:
        with self._lock:
            return self._waited


@dataclass(frozen=True)
class SignalPair:
    cake_ready: CompletionSignal
    payment_done: CompletionSignal


class SignalBoard:
    """Immutable customer id -> SignalPair mapping."""

    def __init__(self, customer_ids: Iterable[int]) -> None:
        slots: dict[int, SignalPair] = {}
        for cid in customer_ids:
            if cid in slots:
                raise SignalError(f"customer {cid} already has a signal slot")
            slots[cid] = SignalPair(
                cake_ready=CompletionSignal(f"cake-ready[{cid}]"),
                payment_done=CompletionSignal(f"payment-done[{cid}]"),
            )
        self._slots = MappingProxyType(slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._slots

    def slot(self, customer_id: int) -> SignalPair:
        try:
            return self._slots[customer_id]
        except KeyError:
            raise UnknownCustomerError(customer_id) from None

    def cake_ready(self, customer_id: int) -> CompletionSignal:
        return self.slot(customer_id).cake_ready

    def payment_done(self, customer_id: int) -> CompletionSignal:
        return self.slot(customer_id).payment_done

    def all_settled(self) -> bool:
        """True when every signal was posted and waited on exactly once."""
        return all(
            s.posted and s.waited
            for pair in self._slots.values()
            for s in (pair.cake_ready, pair.payment_done)
        )
