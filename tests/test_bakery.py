import io

import pytest

from bakery_sim import events
from bakery_sim.arrival import read_arrivals
from bakery_sim.bakery import Bakery, RunReport
from bakery_sim.config import BakeryConfig
from bakery_sim.customer import LIFECYCLE
from bakery_sim.errors import RunAborted, UnknownCustomerError
from bakery_sim.signals import SignalBoard

FAST = 0.005


def run(lines, **config):
    config.setdefault("time_unit_seconds", FAST)
    out = io.StringIO()
    bakery = Bakery(BakeryConfig(**config), stream=out)
    report = bakery.run(read_arrivals(lines))
    return bakery, report, out.getvalue().splitlines()


def index_of(lines, text):
    return next(i for i, line in enumerate(lines) if line.endswith(text))


def test_two_customers_ordering():
    _, report, lines = run(
        ["0 Customer 1", "0 Customer 2", "<EOF>"],
        store_capacity=25,
        seating_capacity=4,
        num_chefs=4,
        think_time=1,
        bake_duration=2,
        payment_duration=2,
        time_unit_seconds=0.05,
    )
    assert lines == report.lines()
    assert len(lines) == 14

    first_request = min(index_of(lines, f"Customer {c} requests cake") for c in (1, 2))
    for c in (1, 2):
        assert index_of(lines, f"Customer {c} enters") < first_request
        assert index_of(lines, f"Customer {c} sits") < first_request

        leaves = index_of(lines, f"Customer {c} leaves")
        assert leaves > index_of(lines, f"Customer {c} pays")
        assert leaves > index_of(lines, f"accepts payment for Customer {c}")
        assert index_of(lines, f"bakes for Customer {c}") < index_of(lines, f"Customer {c} pays")


def test_every_customer_walks_the_whole_lifecycle_once():
    _, report, _ = run([f"0 Customer {i}" for i in range(1, 9)], num_chefs=3)
    assert report.customers_served == 8
    assert report.signals_settled
    for actor in report.actors:
        assert actor.history == list(LIFECYCLE)
    assert sorted(report.bake_order) == list(range(1, 9))
    assert sorted(report.pay_order) == list(range(1, 9))
    assert report.payments == 8
    assert sum(s.tasks for s in report.chefs) == 16


def test_capacity_never_exceeded():
    _, report, _ = run(
        [f"{i % 3} Customer {i}" for i in range(1, 21)],
        store_capacity=3,
        seating_capacity=2,
        num_chefs=2,
    )
    assert report.customers_served == 20
    assert report.peak_store <= 3
    assert report.peak_seating <= 2

    inside = seated = 0
    for e in report.events:
        if e.actor != events.CUSTOMER:
            continue
        if e.action == events.ENTERS:
            inside += 1
        elif e.action == events.SITS:
            seated += 1
        elif e.action == events.LEAVES:
            inside -= 1
            seated -= 1
        assert inside <= 3
        assert seated <= 2


def test_register_changes_hands_cleanly():
    _, report, _ = run([f"0 Customer {i}" for i in range(1, 7)], num_chefs=4)
    history = report.register_history
    assert len(history) == 12
    for hold, free in zip(history[::2], history[1::2]):
        assert hold[1] == "hold"
        assert free == (hold[0], "free")
    assert report.peak_register_holders == 1
    assert report.summary()["peak_register_holders"] == 1


def test_peak_register_holders_replays_history():
    assert RunReport().peak_register_holders == 0
    overlapping = RunReport(register_history=[(1, "hold"), (2, "hold"), (1, "free"), (2, "free")])
    assert overlapping.peak_register_holders == 2


def test_single_chef_single_seat_still_finishes():
    bakery, report, _ = run(
        [f"0 Customer {i}" for i in range(1, 6)],
        store_capacity=1,
        seating_capacity=1,
        num_chefs=1,
    )
    assert report.customers_served == 5
    assert report.peak_store == 1
    assert report.chefs[0].tasks == 10


def test_chefs_stop_after_last_customer_leaves():
    bakery, report, _ = run(["0 Customer 1", "1 Customer 2"], num_chefs=4)
    assert report.customers_served == 2
    assert len(bakery.chef_threads) == 4
    assert not any(t.is_alive() for t in bakery.chef_threads)


def test_timestamps_carry_the_earliest_arrival():
    _, report, lines = run(["12 Customer 5", "10 Customer 4"], time_unit_seconds=0.05)
    assert report.start_offset == 10
    assert lines[0] == "10 Customer 4 enters"
    enters_5 = next(e for e in report.events if e.customer_id == 5 and e.action == events.ENTERS)
    assert enters_5.timestamp >= 12


def test_empty_batch_does_nothing():
    _, report, lines = run(["<EOF>"])
    assert lines == []
    assert report.customers_served == 0


def test_unknown_slot_aborts_run(monkeypatch):
    def missing(self, customer_id):
        raise UnknownCustomerError(customer_id)

    monkeypatch.setattr(SignalBoard, "cake_ready", missing)
    with pytest.raises(RunAborted) as exc:
        run(["0 Customer 1"], num_chefs=1)
    assert isinstance(exc.value.__cause__, UnknownCustomerError)
