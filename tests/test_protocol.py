from bakery_sim.mqtt_client import decode_payload
from bakery_sim.mqtt_topics import all_events, chef_events, customer_events, run_summary


def test_topic_helpers():
    ns = "demo/v0"
    assert customer_events(3, ns) == "demo/v0/events/customers/3"
    assert chef_events(1, ns) == "demo/v0/events/chefs/1"
    assert all_events(ns) == "demo/v0/events/#"
    assert run_summary(ns) == "demo/v0/runs/summary"


def test_decode_payload():
    assert decode_payload(b'{"type":"event"}') == {"type": "event"}
    assert decode_payload('{"a":1}') == {"a": 1}
    assert decode_payload(b"[1,2]") is None
    assert decode_payload(b"not json") is None
    assert decode_payload(b"\xff\xfe") is None
