"""Fridge telemetry simulator - synthetic temperature, humidity, power and
connectivity readings produced on a fixed cadence.

Quick start::

    import random

    from fridge_telemetry import TelemetrySimulator, VirtualScheduler, get_preset

    clock = VirtualScheduler()
    sim = TelemetrySimulator(scheduler=clock, rng=random.Random(42))
    handle = sim.start(get_preset("fridge"))
    sim.on_reading(handle, print)
    clock.advance(3000)
"""

from __future__ import annotations

from fridge_telemetry.config import (
    PRESETS,
    Connectivity,
    InvalidConfig,
    SimulatorConfig,
    ValueRange,
    get_preset,
    load_yaml_config,
)
from fridge_telemetry.models import Reading
from fridge_telemetry.scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from fridge_telemetry.simulator import SubscriptionHandle, TelemetrySimulator

__all__ = [
    "PRESETS",
    "AsyncioScheduler",
    "Connectivity",
    "InvalidConfig",
    "Reading",
    "Scheduler",
    "SimulatorConfig",
    "SubscriptionHandle",
    "TelemetrySimulator",
    "ValueRange",
    "VirtualScheduler",
    "get_preset",
    "load_yaml_config",
]

__version__ = "0.1.0"
