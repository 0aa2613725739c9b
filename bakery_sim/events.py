from __future__ import annotations

# Timestamped event log.
#
# Output protocol (one line per event, flushed immediately):
#   "<ts> Customer <id> <action>"
#   "<ts> Chef <chef-id> <action> Customer <id>"
#
# Emission is serialized by a lock, so `seq` order is the order lines appear on
# the stream. Events are also kept in memory (run report, tests) and forwarded
# to optional sinks such as the MQTT publisher below.

import sys
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, TextIO, TYPE_CHECKING

from .clock import SimClock
from .mqtt_topics import chef_events, customer_events

if TYPE_CHECKING:
    from .mqtt_client import MqttClient

CUSTOMER = "Customer"
CHEF = "Chef"

# Customer actions
ENTERS = "enters"
SITS = "sits"
REQUESTS_CAKE = "requests cake"
PAYS = "pays"
LEAVES = "leaves"

# Chef actions
BAKES_FOR = "bakes for"
ACCEPTS_PAYMENT_FOR = "accepts payment for"


@dataclass(frozen=True)
class Event:
    seq: int
    timestamp: int
    actor: str
    actor_id: int
    action: str
    customer_id: int

    def line(self) -> str:
        if self.actor == CHEF:
            return f"{self.timestamp} Chef {self.actor_id} {self.action} Customer {self.customer_id}"
        return f"{self.timestamp} Customer {self.customer_id} {self.action}"

    def to_message(self) -> dict[str, Any]:
        msg = asdict(self)
        msg["type"] = "event"
        msg["line"] = self.line()
        return msg


EventSink = Callable[[Event], None]


class EventLog:
    def __init__(self, clock: SimClock, *, stream: TextIO | None = sys.stdout) -> None:
        self.clock = clock
        self.stream = stream
        self._lock = threading.Lock()
        self._events: list[Event] = []
        self._sinks: list[EventSink] = []

    def add_sink(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def customer(self, customer_id: int, action: str) -> Event:
        return self._emit(CUSTOMER, customer_id, action, customer_id)

    def chef(self, chef_id: int, action: str, customer_id: int) -> Event:
        return self._emit(CHEF, chef_id, action, customer_id)

    def _emit(self, actor: str, actor_id: int, action: str, customer_id: int) -> Event:
        with self._lock:
            event = Event(
                seq=len(self._events),
                timestamp=self.clock.now(),
                actor=actor,
                actor_id=actor_id,
                action=action,
                customer_id=customer_id,
            )
            self._events.append(event)
            if self.stream is not None:
                self.stream.write(event.line() + "\n")
                self.stream.flush()
            for sink in self._sinks:
                sink(event)
        return event

    def events(self) -> list[Event]:
        with self._lock:
            return list(self._events)

    def lines(self) -> list[str]:
        return [e.line() for e in self.events()]


class MqttEventSink:
    """Publish every event as JSON on its per-actor topic."""

    def __init__(self, *, mqtt: MqttClient, namespace: str = "bakery/v0") -> None:
        self.mqtt = mqtt
        self.namespace = namespace

    def topic_for(self, event: Event) -> str:
        if event.actor == CHEF:
            return chef_events(event.actor_id, self.namespace)
        return customer_events(event.customer_id, self.namespace)

    def __call__(self, event: Event) -> None:
        self.mqtt.publish(self.topic_for(event), event.to_message())
