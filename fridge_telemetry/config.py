"""Simulator configuration, named presets and the YAML loader.

A YAML file has the following top-level sections::

    simulator:        # SimulatorConfig fields, optionally based on a preset
    sinks:            # list of sink configs

Example:

.. code-block:: yaml

    simulator:
      preset: fridge
      tick_interval_ms: 1000
      temperature_range: [2, 8]
      initial_temperature_c: 4.2
      seed: 42
      duration_s: 30
      log_level: INFO

    sinks:
      - type: console
        fmt: json
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

__all__ = [
    "PRESETS",
    "Connectivity",
    "InvalidConfig",
    "SimulatorConfig",
    "SimulatorYAMLConfig",
    "ValueRange",
    "get_preset",
    "load_yaml_config",
]

logger = logging.getLogger("fridge_telemetry.config")


class InvalidConfig(ValueError):
    """Raised when a simulator configuration cannot produce valid readings."""


class Connectivity(StrEnum):
    """How the ``connected`` flag evolves from one tick to the next."""

    RANDOM = "random"
    ALTERNATE = "alternate"


class ValueRange(BaseModel):
    """Closed ``[min_value, max_value]`` interval.

    Accepts a two-item list/tuple or a ``{"min": .., "max": ..}`` mapping,
    which is what YAML files naturally produce.
    """

    model_config = {"frozen": True}

    min_value: float
    max_value: float

    @model_validator(mode="before")
    @classmethod
    def _coerce_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"range needs exactly two values, got {len(data)}")
            return {"min_value": data[0], "max_value": data[1]}
        if isinstance(data, dict) and "min" in data and "max" in data:
            return {"min_value": data["min"], "max_value": data["max"]}
        return data

    @property
    def midpoint(self) -> float:
        return (self.min_value + self.max_value) / 2

    def clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, value))

    def int_bounds(self) -> tuple[int, int]:
        """Smallest and largest integers inside the range."""
        return math.ceil(self.min_value), math.floor(self.max_value)

    def contains(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value


class SimulatorConfig(BaseModel):
    """Configuration for one simulated device.

    Field types are coerced by pydantic; the semantic checks (ordered ranges,
    positive interval, seeds inside their ranges) run in :meth:`validate_ranges`,
    which :meth:`TelemetrySimulator.start` calls before scheduling anything.

    Attributes:
        tick_interval_ms: Milliseconds between two readings.
        temperature_range: Bounds for ``temperature_c``.
        humidity_range: Bounds for ``humidity_percent``.
        power_range: Bounds for ``power_watts``.
        initial_temperature_c: Seeded temperature.
        initial_humidity_percent: Seeded humidity; range midpoint when ``None``.
        initial_power_watts: Seeded power draw; range midpoint when ``None``.
        temperature_step: Full width of the uniform perturbation per tick.
        humidity_step: Same, for humidity.
        power_step: Same, for power.
        connectivity: ``random`` draws the flag every tick, ``alternate``
            flips it.
        initially_connected: Seeded connectivity flag.
    """

    model_config = {"frozen": True}

    tick_interval_ms: int = 3000
    temperature_range: ValueRange = Field(default_factory=lambda: ValueRange(min_value=2.0, max_value=8.0))
    humidity_range: ValueRange = Field(default_factory=lambda: ValueRange(min_value=40, max_value=60))
    power_range: ValueRange = Field(default_factory=lambda: ValueRange(min_value=160, max_value=210))
    initial_temperature_c: float = 4.2
    initial_humidity_percent: int | None = None
    initial_power_watts: int | None = None
    temperature_step: float = 0.5
    humidity_step: float = 4.0
    power_step: float = 10.0
    connectivity: Connectivity = Connectivity.RANDOM
    initially_connected: bool = False

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_ranges(self) -> None:
        """Raise :class:`InvalidConfig` unless every reading can stay in bounds."""
        if self.tick_interval_ms <= 0:
            raise InvalidConfig(f"tick_interval_ms must be > 0, got {self.tick_interval_ms}")

        numbers = {
            "temperature_range.min_value": self.temperature_range.min_value,
            "temperature_range.max_value": self.temperature_range.max_value,
            "humidity_range.min_value": self.humidity_range.min_value,
            "humidity_range.max_value": self.humidity_range.max_value,
            "power_range.min_value": self.power_range.min_value,
            "power_range.max_value": self.power_range.max_value,
            "initial_temperature_c": self.initial_temperature_c,
            "temperature_step": self.temperature_step,
            "humidity_step": self.humidity_step,
            "power_step": self.power_step,
        }
        for name, value in numbers.items():
            if not math.isfinite(value):
                raise InvalidConfig(f"{name} must be a finite number, got {value}")

        ranges = {
            "temperature_range": self.temperature_range,
            "humidity_range": self.humidity_range,
            "power_range": self.power_range,
        }
        for name, rng in ranges.items():
            if rng.min_value > rng.max_value:
                raise InvalidConfig(f"{name}: min {rng.min_value} is greater than max {rng.max_value}")

        for name in ("humidity_range", "power_range"):
            lo, hi = ranges[name].int_bounds()
            if lo > hi:
                raise InvalidConfig(f"{name}: no whole number lies inside {ranges[name].min_value}..{ranges[name].max_value}")

        for name in ("temperature_step", "humidity_step", "power_step"):
            if getattr(self, name) < 0:
                raise InvalidConfig(f"{name} must be >= 0, got {getattr(self, name)}")

        if not self.temperature_range.contains(self.initial_temperature_c):
            raise InvalidConfig(
                f"initial_temperature_c {self.initial_temperature_c} is outside temperature_range"
            )
        if self.initial_humidity_percent is not None and not self.humidity_range.contains(self.initial_humidity_percent):
            raise InvalidConfig(
                f"initial_humidity_percent {self.initial_humidity_percent} is outside humidity_range"
            )
        if self.initial_power_watts is not None and not self.power_range.contains(self.initial_power_watts):
            raise InvalidConfig(f"initial_power_watts {self.initial_power_watts} is outside power_range")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0

    def seed_humidity(self) -> int:
        if self.initial_humidity_percent is not None:
            return self.initial_humidity_percent
        return _int_midpoint(self.humidity_range)

    def seed_power(self) -> int:
        if self.initial_power_watts is not None:
            return self.initial_power_watts
        return _int_midpoint(self.power_range)


def _int_midpoint(rng: ValueRange) -> int:
    lo, hi = rng.int_bounds()
    return max(lo, min(hi, round(rng.midpoint)))


# ---------------------------------------------------------------------------
# Presets - one per original front-end view
# ---------------------------------------------------------------------------

PRESETS: dict[str, SimulatorConfig] = {
    "fridge": SimulatorConfig(
        tick_interval_ms=3000,
        temperature_range=(2.0, 8.0),
        initial_temperature_c=4.2,
        temperature_step=0.5,
        connectivity=Connectivity.ALTERNATE,
        initially_connected=False,
    ),
    "dashboard": SimulatorConfig(
        tick_interval_ms=10000,
        temperature_range=(-3.0, -1.0),
        humidity_range=(40, 59),
        power_range=(160, 209),
        initial_temperature_c=-2.5,
        initial_humidity_percent=45,
        initial_power_watts=185,
        temperature_step=2.0,
        humidity_step=20.0,
        power_step=50.0,
        connectivity=Connectivity.RANDOM,
    ),
}


def get_preset(name: str) -> SimulatorConfig:
    """Return the named preset config."""
    key = name.lower().strip()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'.  Available: {sorted(PRESETS)}")
    return PRESETS[key]


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


class SimulatorYAMLConfig(BaseModel):
    """Parsed representation of the full YAML configuration.

    Attributes:
        simulator: The device configuration.
        sink_configs: Raw dicts passed to the sink factory.
        seed: Optional seed for the random source.
        duration_s: Optional run duration (seconds).
        log_level: Logging level string.
    """

    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    sink_configs: list[dict[str, Any]] = Field(default_factory=list)
    seed: int | None = None
    duration_s: float | None = None
    log_level: str = "INFO"


def load_yaml_config(path: str | Path) -> SimulatorYAMLConfig:
    """Load and validate a YAML configuration file.

    Values missing from the ``simulator`` section come from ``preset`` when
    one is named, otherwise from the :class:`SimulatorConfig` defaults.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    sim_section = dict(raw.get("simulator") or {})
    preset_name = sim_section.pop("preset", None)
    seed = sim_section.pop("seed", None)
    duration_s = sim_section.pop("duration_s", None)
    log_level = str(sim_section.pop("log_level", "INFO")).upper()

    base: dict[str, Any] = get_preset(preset_name).model_dump() if preset_name else {}
    try:
        simulator = SimulatorConfig.model_validate({**base, **sim_section})
        config = SimulatorYAMLConfig(
            simulator=simulator,
            sink_configs=raw.get("sinks") or [],
            seed=seed,
            duration_s=duration_s,
            log_level=log_level,
        )
    except ValidationError as exc:
        raise InvalidConfig(f"{path}: {exc}") from exc

    config.simulator.validate_ranges()

    logger.info(
        "Loaded config from %s: preset=%s, interval=%d ms, %d sinks",
        path,
        preset_name or "-",
        config.simulator.tick_interval_ms,
        len(config.sink_configs),
    )
    return config
