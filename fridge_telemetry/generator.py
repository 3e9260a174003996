"""Reading generator - the perturb-and-clamp step behind every tick.

Each numeric field moves by a uniform draw in ``[-step/2, +step/2]`` around
its previous value and is clamped back into its configured range.  This is
presentation-grade noise, not a physical model.
"""

from __future__ import annotations

from typing import Protocol

from fridge_telemetry.config import Connectivity, SimulatorConfig, ValueRange
from fridge_telemetry.models import Reading

__all__ = ["RandomSource", "ReadingGenerator"]


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the generator draws from."""

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


class ReadingGenerator:
    """Produces successive :class:`Reading` objects for one config.

    Parameters:
        config: A config that already passed ``validate_ranges``.
        rng: Random source; pass a seeded ``random.Random`` for
             reproducible sequences.
    """

    def __init__(self, config: SimulatorConfig, rng: RandomSource) -> None:
        self.config = config
        self._rng = rng

    def initial(self, captured_at: float) -> Reading:
        """Return the seeded reading, before any tick."""
        cfg = self.config
        return Reading(
            temperature_c=cfg.initial_temperature_c,
            humidity_percent=cfg.seed_humidity(),
            power_watts=cfg.seed_power(),
            connected=cfg.initially_connected,
            captured_at=captured_at,
        )

    def next(self, previous: Reading, captured_at: float) -> Reading:
        """Return the reading that follows *previous*."""
        cfg = self.config
        temperature = self._perturb(previous.temperature_c, cfg.temperature_step, cfg.temperature_range)
        humidity = self._perturb_int(previous.humidity_percent, cfg.humidity_step, cfg.humidity_range)
        power = self._perturb_int(previous.power_watts, cfg.power_step, cfg.power_range)

        if cfg.connectivity is Connectivity.ALTERNATE:
            connected = not previous.connected
        else:
            connected = self._rng.random() < 0.5

        return Reading(
            temperature_c=temperature,
            humidity_percent=humidity,
            power_watts=power,
            connected=connected,
            captured_at=captured_at,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _perturb(self, value: float, step: float, bounds: ValueRange) -> float:
        half = step / 2
        return bounds.clamp(value + self._rng.uniform(-half, half))

    def _perturb_int(self, value: int, step: float, bounds: ValueRange) -> int:
        half = step / 2
        lo, hi = bounds.int_bounds()
        return max(lo, min(hi, round(value + self._rng.uniform(-half, half))))
