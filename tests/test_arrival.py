import random

import pytest

from bakery_sim.arrival import parse_arrival_line, read_arrivals, sample_exponential_interarrival
from bakery_sim.errors import DuplicateCustomerError


def test_parse_arrival_line():
    assert parse_arrival_line("3 Customer 17") == (3, 17)
    assert parse_arrival_line("  0   Customer 2 \n") == (0, 2)
    assert parse_arrival_line("3 Chef 1") is None
    assert parse_arrival_line("-1 Customer 2") is None
    assert parse_arrival_line("") is None


def test_read_arrivals_sorts_and_normalizes():
    batch = read_arrivals(["7 Customer 3\n", "5 Customer 1\n", "9 Customer 2\n", "<EOF>\n"])
    assert batch.start_offset == 5
    assert [(c.customer_id, c.arrival, c.slot) for c in batch.customers] == [
        (1, 0, 0),
        (3, 2, 1),
        (2, 4, 2),
    ]


def test_read_arrivals_keeps_input_order_for_ties():
    batch = read_arrivals(["2 Customer 9", "2 Customer 4", "2 Customer 6"])
    assert batch.customer_ids() == [9, 4, 6]


def test_read_arrivals_stops_at_eof_and_drops_malformed_lines():
    batch = read_arrivals(["1 Customer 1", "garbage", "2 Customer x", "<EOF>", "3 Customer 3"])
    assert batch.customer_ids() == [1]


def test_read_arrivals_empty_batch():
    batch = read_arrivals(["<EOF>"])
    assert len(batch) == 0
    assert batch.start_offset == 0


def test_read_arrivals_rejects_duplicate_ids():
    with pytest.raises(DuplicateCustomerError) as exc:
        read_arrivals(["1 Customer 4", "2 Customer 4"])
    assert exc.value.customer_id == 4


def test_exponential_interarrival_requires_positive_rate():
    with pytest.raises(ValueError):
        sample_exponential_interarrival(rate_per_sec=0)


def test_exponential_interarrival_deterministic_with_rng():
    rng = random.Random(123)
    a = sample_exponential_interarrival(rate_per_sec=2.0, rng=rng)
    rng = random.Random(123)
    b = sample_exponential_interarrival(rate_per_sec=2.0, rng=rng)
    assert a == b
    assert a > 0
