from __future__ import annotations

"""Arrival input and arrival models.

Input protocol, one record per line:
    <arrival-time> Customer <id>
terminated by a line starting with `<EOF>` (or by the end of input). Lines in
any other shape are dropped.

The batch handed to the simulation is sorted by arrival time and normalized so
the earliest arrival is 0; that earliest time is kept as the printing offset.

For generated load we use a Poisson arrival process with rate λ
(customers/time unit): the *inter-arrival times* are i.i.d. Exponential(λ).
"""

import random
import re
from dataclasses import dataclass, field
from typing import Iterable

from .customer import Customer
from .errors import DuplicateCustomerError

EOF_SENTINEL = "<EOF>"

_LINE_RE = re.compile(r"^\s*(\d+)\s+Customer\s+(\d+)\s*$")


@dataclass(frozen=True)
class ArrivalBatch:
    customers: list[Customer] = field(default_factory=list)
    start_offset: int = 0

    def __len__(self) -> int:
        return len(self.customers)

    def customer_ids(self) -> list[int]:
        return [c.customer_id for c in self.customers]


def parse_arrival_line(line: str) -> tuple[int, int] | None:
    """Parse one record into `(arrival, customer_id)`; None if malformed."""
    m = _LINE_RE.match(line)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2))


def read_arrivals(lines: Iterable[str]) -> ArrivalBatch:
    """Build a sorted, normalized batch from input lines.

    Raises:
        DuplicateCustomerError: the same id appears twice.
    """
    records: list[tuple[int, int]] = []
    seen: set[int] = set()
    for line in lines:
        if line.startswith(EOF_SENTINEL):
            break
        parsed = parse_arrival_line(line)
        if parsed is None:
            continue
        arrival, cid = parsed
        if cid in seen:
            raise DuplicateCustomerError(cid)
        seen.add(cid)
        records.append((arrival, cid))

    if not records:
        return ArrivalBatch()

    # Stable sort: equal arrival times keep input order.
    records.sort(key=lambda r: r[0])
    start = records[0][0]
    customers = [
        Customer(customer_id=cid, arrival=arrival - start, slot=i)
        for i, (arrival, cid) in enumerate(records)
    ]
    return ArrivalBatch(customers=customers, start_offset=start)


def sample_exponential_interarrival(*, rate_per_sec: float, rng: random.Random | None = None) -> float:
    """Sample the next inter-arrival time for a Poisson process.

    Args:
        rate_per_sec: λ, the arrival rate in customers per time unit. Must be > 0.
        rng: optional RNG (useful for deterministic tests).

    Returns:
        A positive float representing time units until the next arrival.
    """
    if rate_per_sec <= 0:
        raise ValueError("rate_per_sec must be > 0")

    r = rng or random
    return float(r.expovariate(rate_per_sec))
