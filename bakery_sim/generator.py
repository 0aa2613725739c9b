from __future__ import annotations

# Arrival generator.
#
# Produces an input batch in the same text protocol `run` reads, so a generated
# stream can be piped straight into the simulation:
#   python -m bakery_sim.app generate --count 20 --rate 0.5 | python -m bakery_sim.app run
#
# Poisson arrival model:
# - Customers arrive according to a Poisson process with rate λ (customers/unit)
# - Inter-arrival times are exponential with mean 1/λ
# - Arrival times are rounded down to whole time units

import random
from typing import Iterator

from .arrival import EOF_SENTINEL, sample_exponential_interarrival


def generate_arrival_lines(
    *,
    count: int,
    rate: float,
    start: int = 0,
    seed: int | None = None,
    first_id: int = 1,
) -> Iterator[str]:
    """Yield `count` arrival lines followed by the `<EOF>` sentinel.

    Args:
        count: number of customers (>= 0).
        rate: λ, customers per time unit.
        start: arrival time of the first customer.
        seed: if provided, makes the stream deterministic.
        first_id: id of the first customer; ids are consecutive.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if rate <= 0:
        raise ValueError("rate must be > 0")
    if start < 0:
        raise ValueError("start must be >= 0")

    rng = random.Random(seed) if seed is not None else None

    t = float(start)
    for i in range(count):
        if i > 0:
            t += sample_exponential_interarrival(rate_per_sec=rate, rng=rng)
        yield f"{int(t)} Customer {first_id + i}"
    yield EOF_SENTINEL
