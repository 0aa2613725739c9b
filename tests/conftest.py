import io

import pytest

from bakery_sim.clock import SimClock
from bakery_sim.config import BakeryConfig
from bakery_sim.events import EventLog
from bakery_sim.shop import Shop

# 1 simulation unit = 5 ms keeps full runs short.
FAST = 0.005


@pytest.fixture
def fast_config():
    return BakeryConfig(time_unit_seconds=FAST)


@pytest.fixture
def make_shop(fast_config):
    def factory(customer_ids, config=None):
        config = config or fast_config
        clock = SimClock(time_unit_seconds=config.time_unit_seconds)
        log = EventLog(clock, stream=io.StringIO())
        return Shop.open(config, customer_ids, clock=clock, log=log)

    return factory
