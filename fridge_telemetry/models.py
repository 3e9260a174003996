"""Value objects for the fridge telemetry simulator.

Defines the Reading - the immutable snapshot every consumer receives - and
the TenantStatus payload served by the status endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

__all__ = ["Reading", "TenantStatus"]


class Reading(BaseModel):
    """One synthetic telemetry snapshot.

    A new ``Reading`` replaces the previous one on every tick; instances are
    frozen so consumers can keep references without copying.

    Attributes:
        temperature_c: Cabinet temperature in degrees Celsius.
        humidity_percent: Relative humidity, whole percent.
        power_watts: Instantaneous power draw, whole watts.
        connected: Simulated connectivity flag.
        captured_at: Unix epoch seconds (float) taken from the scheduler clock.
    """

    model_config = {"frozen": True}

    temperature_c: float
    humidity_percent: int
    power_watts: int
    connected: bool = False
    captured_at: float

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` representation (JSON-safe types)."""
        return self.model_dump()

    def to_json(self) -> str:
        """Return a compact JSON string."""
        return self.model_dump_json()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reading:
        """Construct a ``Reading`` from a plain dict."""
        return cls.model_validate(data)


class TenantStatus(BaseModel):
    """Body of ``GET /api/tenant/status``."""

    tenant: str
    name: str
    status: str
    architecture: str
