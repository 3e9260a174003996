#!/usr/bin/env python3
"""Virtual clock example -- drive a simulator without waiting on real timers.

Runs a simulated hour of the dashboard preset in a few milliseconds and
prints min/max per field.

Usage::

    python examples/virtual_clock_example.py
"""

from __future__ import annotations

import random


def main() -> None:
    from fridge_telemetry import TelemetrySimulator, VirtualScheduler, get_preset

    print("=== Virtual Clock Example ===\n")

    clock = VirtualScheduler(start=1_700_000_000.0)
    sim = TelemetrySimulator(scheduler=clock, rng=random.Random(2024))
    handle = sim.start(get_preset("dashboard"))

    readings = []
    handle.on_reading(readings.append)
    clock.advance(60 * 60 * 1000)
    handle.stop()

    temps = [r.temperature_c for r in readings]
    humidity = [r.humidity_percent for r in readings]
    power = [r.power_watts for r in readings]
    online = sum(r.connected for r in readings)

    print(f"  Readings:     {len(readings)}")
    print(f"  Temperature:  {min(temps):.1f} .. {max(temps):.1f} °C")
    print(f"  Humidity:     {min(humidity)} .. {max(humidity)} %")
    print(f"  Power:        {min(power)} .. {max(power)} W")
    print(f"  Connected:    {online}/{len(readings)} ticks")


if __name__ == "__main__":
    main()
