#!/usr/bin/env python3
"""YAML config-driven example -- load the simulator configuration from a YAML
file and run it in real time with the sink factory.

Usage::

    python examples/yaml_config_example.py

Equivalent CLI::

    fridge-telemetry run --config examples/configs/fridge.yaml
"""

from __future__ import annotations

import logging
import random
from pathlib import Path


def main() -> None:
    print("=== YAML Config-Driven Example ===\n")

    config_path = Path(__file__).parent / "configs" / "fridge.yaml"

    from fridge_telemetry.config import load_yaml_config
    cfg = load_yaml_config(config_path)

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(name)-30s %(levelname)-7s %(message)s",
        datefmt="%H:%M:%S",
    )

    print(f"  Interval:  {cfg.simulator.tick_interval_ms} ms")
    print(f"  Seed:      {cfg.seed}")
    print(f"  Duration:  {cfg.duration_s} s")
    print(f"  Sinks:     {len(cfg.sink_configs)}\n")

    from fridge_telemetry.simulator import TelemetrySimulator
    from fridge_telemetry.sinks import create_sink

    sinks = [create_sink(sc) for sc in cfg.sink_configs]
    sim = TelemetrySimulator(rng=random.Random(cfg.seed))
    handle = sim.run(cfg.simulator, duration_s=cfg.duration_s, consumers=sinks)
    for sink in sinks:
        sink.close()

    if handle is not None:
        print(f"\n  Produced {handle.tick_count} readings; last: {handle.current_reading().to_json()}")


if __name__ == "__main__":
    main()
