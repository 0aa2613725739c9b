import pytest

from bakery_sim.config import BakeryConfig


def test_defaults_match_reference_constants():
    c = BakeryConfig()
    assert (c.store_capacity, c.seating_capacity, c.num_chefs) == (25, 4, 4)
    assert (c.think_time, c.bake_duration, c.payment_duration) == (1, 2, 2)
    c.validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"store_capacity": 0},
        {"seating_capacity": 0},
        {"num_chefs": 0},
        {"bake_duration": -1},
        {"time_unit_seconds": 0},
    ],
)
def test_validate_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        BakeryConfig(**kwargs).validate()
