"""Small MQTT helper built on top of paho-mqtt.

Why this exists:
- paho-mqtt is callback-based and speaks bytes.
- The bakery only needs JSON publish (event stream) and JSON subscribe (watcher).

Design:
- `MqttClient` manages connection + a background network loop.
- Incoming payloads are decoded to dicts and handed to registered handlers.

QoS is kept at 0: the event stream is for observers, the simulation never waits
on the broker.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import paho.mqtt.client as mqtt


MessageHandler = Callable[[str, dict[str, Any]], None]


class MqttClient:
    """Thin wrapper around paho-mqtt with JSON convenience APIs."""

    def __init__(
        self,
        *,
        client_id: str,
        host: str,
        port: int,
        keepalive: int = 30,
    ) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port
        self.keepalive = keepalive

        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2, client_id=client_id, clean_session=True
        )
        self._client.on_message = self._on_message

        # External subscribers. Called with (topic, json_message).
        self._handlers: list[MessageHandler] = []

        self._started = False

    def start(self) -> None:
        """Connect and start the background network loop."""
        if self._started:
            return
        self._client.connect(self.host, self.port, keepalive=self.keepalive)
        self._client.loop_start()
        self._started = True

    def stop(self) -> None:
        """Stop and disconnect."""
        if not self._started:
            return
        # Disconnect first so the loop still flushes queued publishes.
        self._client.disconnect()
        self._client.loop_stop()
        self._started = False

    def add_handler(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def subscribe(self, topic: str) -> None:
        self._client.subscribe(topic, qos=0)

    def publish(self, topic: str, message: dict[str, Any]) -> None:
        payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
        self._client.publish(topic, payload=payload, qos=0)

    # -------------------- internal callbacks --------------------

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage) -> None:
        data = decode_payload(msg.payload)
        if data is None:
            return
        for h in list(self._handlers):
            h(msg.topic, data)


def decode_payload(raw: bytes | str) -> dict[str, Any] | None:
    """Decode a JSON object payload; None for anything else.

    Depending on paho-mqtt version / type stubs, payload may be `bytes` (typical)
    or a `str`. We normalize to text before JSON parsing.
    """
    try:
        payload = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        data = json.loads(payload)
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data
