"""MQTT topic helpers.

We keep topic construction in one place so publisher and watcher agree on naming.

Topic layout under a configurable namespace (default: `bakery/v0`):

Streaming (one message per event line):
- `<ns>/events/customers/<customer_id>`
- `<ns>/events/chefs/<chef_id>`

Per run:
- `<ns>/runs/summary`
    Published once when a run finishes (counts and peaks from the run report).

Observers subscribe to `<ns>/events/#` to follow a run live. Several runs can
share a broker by changing the `namespace` parameter (e.g. `--namespace demo/alice`).
"""

from __future__ import annotations


def customer_events(customer_id: int, namespace: str = "bakery/v0") -> str:
    return f"{namespace}/events/customers/{customer_id}"


def chef_events(chef_id: int, namespace: str = "bakery/v0") -> str:
    return f"{namespace}/events/chefs/{chef_id}"


def all_events(namespace: str = "bakery/v0") -> str:
    """Wildcard subscription covering every event topic."""
    return f"{namespace}/events/#"


def run_summary(namespace: str = "bakery/v0") -> str:
    return f"{namespace}/runs/summary"
