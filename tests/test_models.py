"""Tests for fridge_telemetry.models - Reading and TenantStatus."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from fridge_telemetry.models import Reading, TenantStatus


def _reading(**overrides) -> Reading:
    fields = {
        "temperature_c": 4.2,
        "humidity_percent": 50,
        "power_watts": 185,
        "connected": True,
        "captured_at": 1_700_000_000.0,
    }
    fields.update(overrides)
    return Reading(**fields)


class TestReading:
    """Reading construction, immutability and serialisation."""

    def test_construction(self) -> None:
        r = _reading()
        assert r.temperature_c == 4.2
        assert r.humidity_percent == 50
        assert r.power_watts == 185
        assert r.connected is True

    def test_connected_defaults_to_false(self) -> None:
        r = Reading(temperature_c=1.0, humidity_percent=40, power_watts=160, captured_at=0.0)
        assert r.connected is False

    def test_frozen(self) -> None:
        r = _reading()
        with pytest.raises(ValidationError, match="frozen"):
            r.temperature_c = 9.9  # type: ignore[misc]

    def test_to_json_is_compact_json(self) -> None:
        data = json.loads(_reading().to_json())
        assert data == {
            "temperature_c": 4.2,
            "humidity_percent": 50,
            "power_watts": 185,
            "connected": True,
            "captured_at": 1_700_000_000.0,
        }

    def test_from_dict(self) -> None:
        r = _reading(temperature_c=3.3)
        assert Reading.from_dict(r.to_dict()) == r


class TestTenantStatus:
    def test_fields(self) -> None:
        status = TenantStatus(tenant="t", name="n", status="s", architecture="a")
        assert status.model_dump() == {"tenant": "t", "name": "n", "status": "s", "architecture": "a"}
