from bakery_sim.mqtt_client import MqttClient


class RecordingPaho:
    def __init__(self):
        self.calls = []

    def connect(self, host, port, keepalive=60):
        self.calls.append("connect")

    def loop_start(self):
        self.calls.append("loop_start")

    def disconnect(self):
        self.calls.append("disconnect")

    def loop_stop(self):
        self.calls.append("loop_stop")


def test_stop_disconnects_before_stopping_the_loop():
    client = MqttClient(client_id="test", host="127.0.0.1", port=1883)
    fake = RecordingPaho()
    client._client = fake

    client.start()
    client.stop()
    client.stop()

    assert fake.calls == ["connect", "loop_start", "disconnect", "loop_stop"]


def test_handlers_receive_decoded_messages():
    client = MqttClient(client_id="test", host="127.0.0.1", port=1883)
    got = []
    client.add_handler(lambda topic, msg: got.append((topic, msg)))

    class Msg:
        topic = "bakery/v0/events/chefs/1"
        payload = b'{"type":"event","line":"0 Chef 1 bakes for Customer 2"}'

    client._on_message(None, None, Msg())
    Msg.payload = b"junk"
    client._on_message(None, None, Msg())

    assert got == [("bakery/v0/events/chefs/1", {"type": "event", "line": "0 Chef 1 bakes for Customer 2"})]
