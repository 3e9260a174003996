"""Tests for fridge_telemetry.sinks - console, callback and the factory."""

from __future__ import annotations

import io
import json
import random

import pytest

from fridge_telemetry.config import SimulatorConfig
from fridge_telemetry.models import Reading
from fridge_telemetry.scheduler import VirtualScheduler
from fridge_telemetry.simulator import TelemetrySimulator
from fridge_telemetry.sinks import CallbackSink, ConsoleSink, Sink, create_sink, register_sink
from fridge_telemetry.sinks.factory import available_sinks


def _reading(connected: bool = True) -> Reading:
    return Reading(
        temperature_c=4.2,
        humidity_percent=45,
        power_watts=185,
        connected=connected,
        captured_at=1_700_000_000.0,
    )


class _ListSink(Sink):
    def __init__(self) -> None:
        super().__init__()
        self.items: list[Reading] = []
        self.flushed = 0

    def write(self, reading: Reading) -> None:
        self.items.append(reading)

    def flush(self) -> None:
        self.flushed += 1


# -----------------------------------------------------------------------
# Sink base
# -----------------------------------------------------------------------


class TestSinkBase:
    def test_call_writes_and_counts(self) -> None:
        sink = _ListSink()
        sink(_reading())
        sink(_reading())
        assert len(sink.items) == 2
        assert sink.written == 2

    def test_close_flushes_once_and_drops_later_readings(self) -> None:
        sink = _ListSink()
        sink.close()
        sink.close()
        sink(_reading())
        assert sink.closed
        assert sink.flushed == 1
        assert sink.items == []

    def test_usable_as_simulator_callback(self) -> None:
        clock = VirtualScheduler()
        sim = TelemetrySimulator(scheduler=clock, rng=random.Random(1))
        sink = _ListSink()
        handle = sim.start(SimulatorConfig(tick_interval_ms=1000))
        sim.on_reading(handle, sink)
        clock.advance(5000)
        assert sink.written == 5


# -----------------------------------------------------------------------
# ConsoleSink
# -----------------------------------------------------------------------


class TestConsoleSink:
    def test_text_format(self) -> None:
        buf = io.StringIO()
        sink = ConsoleSink(stream=buf, label="NU Fridge")
        sink(_reading(connected=False))
        line = buf.getvalue()
        assert line.startswith("[NU Fridge] ")
        assert "4.2 °C" in line
        assert "45 %" in line
        assert "185 W" in line
        assert line.rstrip().endswith("disconnected")

    def test_json_format(self) -> None:
        buf = io.StringIO()
        sink = ConsoleSink(fmt="json", stream=buf)
        sink(_reading())
        sink(_reading(connected=False))
        lines = buf.getvalue().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["temperature_c"] == 4.2
        assert json.loads(lines[1])["connected"] is False

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="Unknown console format"):
            ConsoleSink(fmt="xml")

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        ConsoleSink(fmt="json")(_reading())
        assert '"power_watts":185' in capsys.readouterr().out


# -----------------------------------------------------------------------
# CallbackSink
# -----------------------------------------------------------------------


class TestCallbackSink:
    def test_forwards_reading(self) -> None:
        seen: list[Reading] = []
        sink = CallbackSink(seen.append)
        sink(_reading())
        assert seen == [_reading()]

    def test_requires_callable(self) -> None:
        with pytest.raises(TypeError):
            CallbackSink(42)  # type: ignore[arg-type]


# -----------------------------------------------------------------------
# Factory
# -----------------------------------------------------------------------


class TestFactory:
    def test_create_console(self) -> None:
        sink = create_sink({"type": "Console", "fmt": "json"})
        assert isinstance(sink, ConsoleSink)

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="'type'"):
            create_sink({"fmt": "json"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown sink type"):
            create_sink({"type": "mqtt"})

    def test_unknown_option_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Bad options for 'console' sink"):
            create_sink({"type": "console", "format": "json"})

    def test_register_custom_sink(self) -> None:
        register_sink("Listing", _ListSink)
        try:
            sink = create_sink({"type": "listing"})
            assert isinstance(sink, _ListSink)
            assert "listing" in available_sinks()
        finally:
            from fridge_telemetry.sinks import factory

            factory._SINK_TYPES.pop("listing", None)
