from __future__ import annotations

# Single-entrypoint runner.
#
#   python -m bakery_sim.app run [--input FILE] [options]   < arrivals
#   python -m bakery_sim.app generate --count N --rate LAMBDA
#   python -m bakery_sim.app watch [--namespace NS]
#
# `run` prints one event line per simulation event on stdout. Diagnostics
# (with --verbose) go to stderr so the event stream stays clean.

import argparse
import sys
import time
from typing import Any, TextIO

from .arrival import read_arrivals
from .bakery import Bakery
from .config import BakeryConfig
from .errors import BakeryError
from .events import MqttEventSink
from .generator import generate_arrival_lines

DEFAULTS = BakeryConfig()


def add_mqtt_args(p: argparse.ArgumentParser, *, host_default: str | None = "127.0.0.1") -> None:
    p.add_argument("--mqtt-host", default=host_default)
    p.add_argument("--mqtt-port", type=int, default=1883)
    p.add_argument("--namespace", default="bakery/v0")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bakery simulation - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # ---- Normal operation ----
    p_run = sub.add_parser("run", help="Run the simulation on an arrival batch")
    p_run.add_argument("--input", default=None, help="arrival file (default: stdin)")
    p_run.add_argument("--store-capacity", type=int, default=DEFAULTS.store_capacity)
    p_run.add_argument("--seating-capacity", type=int, default=DEFAULTS.seating_capacity)
    p_run.add_argument("--chefs", type=int, default=DEFAULTS.num_chefs)
    p_run.add_argument("--think-time", type=float, default=DEFAULTS.think_time)
    p_run.add_argument("--bake-duration", type=float, default=DEFAULTS.bake_duration)
    p_run.add_argument("--payment-duration", type=float, default=DEFAULTS.payment_duration)
    p_run.add_argument(
        "--time-unit",
        type=float,
        default=DEFAULTS.time_unit_seconds,
        help="wall-clock seconds per simulation time unit",
    )
    # MQTT publishing is opt-in for `run`: no host, no broker connection.
    add_mqtt_args(p_run, host_default=None)
    p_run.add_argument("--verbose", action="store_true", help="diagnostics on stderr")

    p_gen = sub.add_parser("generate", help="Print a Poisson arrival batch")
    p_gen.add_argument("--count", type=int, required=True)
    p_gen.add_argument("--rate", type=float, required=True, help="λ customers/time unit")
    p_gen.add_argument("--start", type=int, default=0)
    p_gen.add_argument("--seed", type=int, default=None)

    # ---- Observer ----
    p_watch = sub.add_parser("watch", help="Print events published by a running `run`")
    add_mqtt_args(p_watch)

    return parser


def config_from_args(args: argparse.Namespace) -> BakeryConfig:
    return BakeryConfig(
        store_capacity=args.store_capacity,
        seating_capacity=args.seating_capacity,
        num_chefs=args.chefs,
        think_time=args.think_time,
        bake_duration=args.bake_duration,
        payment_duration=args.payment_duration,
        time_unit_seconds=args.time_unit,
    )


def cmd_run(args: argparse.Namespace, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    config = config_from_args(args)

    if args.input:
        with open(args.input, encoding="utf-8") as f:
            batch = read_arrivals(f)
    else:
        batch = read_arrivals(stdin)

    mqtt = None
    sinks: list[Any] = []
    if args.mqtt_host:
        # Import MQTT dependencies only when publishing.
        from .mqtt_client import MqttClient

        mqtt = MqttClient(client_id=f"bakery-{int(time.time() * 1000)}", host=args.mqtt_host, port=args.mqtt_port)
        mqtt.start()
        sinks.append(MqttEventSink(mqtt=mqtt, namespace=args.namespace))

    try:
        report = Bakery(config, stream=stdout, sinks=sinks, verbose=args.verbose).run(batch)
        if mqtt is not None:
            from .mqtt_topics import run_summary

            mqtt.publish(run_summary(args.namespace), report.summary())
    finally:
        if mqtt is not None:
            mqtt.stop()

    if args.verbose:
        print(f"[bakery] summary: {report.summary()}", file=sys.stderr)
    return 0


def cmd_generate(args: argparse.Namespace, *, stdout: TextIO | None = None) -> int:
    stdout = stdout or sys.stdout
    for line in generate_arrival_lines(count=args.count, rate=args.rate, start=args.start, seed=args.seed):
        stdout.write(line + "\n")
    stdout.flush()
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    from .mqtt_client import MqttClient
    from .mqtt_topics import all_events, run_summary

    mqtt = MqttClient(client_id=f"watch-{int(time.time() * 1000)}", host=args.mqtt_host, port=args.mqtt_port)

    def on_message(topic: str, msg: dict[str, Any]) -> None:
        if msg.get("type") == "event" and isinstance(msg.get("line"), str):
            print(msg["line"], flush=True)
        elif msg.get("type") == "run_summary":
            print(f"[watch] run finished: {msg}", file=sys.stderr, flush=True)

    mqtt.add_handler(on_message)
    mqtt.start()
    mqtt.subscribe(all_events(args.namespace))
    mqtt.subscribe(run_summary(args.namespace))
    print(f"[watch] connected to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}", file=sys.stderr)

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        mqtt.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.cmd == "run":
            return cmd_run(args)
        if args.cmd == "generate":
            return cmd_generate(args)
        if args.cmd == "watch":
            return cmd_watch(args)
    except (BakeryError, ValueError, OSError) as e:
        print(f"[bakery] error: {e}", file=sys.stderr)
        return 1

    parser.error(f"unknown command {args.cmd}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
