"""Console sink - prints readings to stdout.

Useful for demos and for checking a config before wiring a real consumer.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import IO

from fridge_telemetry.models import Reading
from fridge_telemetry.sinks.base import Sink

__all__ = ["ConsoleSink"]


class ConsoleSink(Sink):
    """Writes readings to the console (stdout by default).

    Parameters:
        fmt: Output format - ``"text"`` (human-readable) or ``"json"``
             (one JSON object per reading).
        stream: Writable file-like object (defaults to ``sys.stdout``).
        label: Prefix for text lines, typically the tenant name.
    """

    def __init__(self, *, fmt: str = "text", stream: IO[str] | None = None, label: str = "fridge") -> None:
        if fmt not in ("text", "json"):
            raise ValueError(f"Unknown console format '{fmt}' - expected 'text' or 'json'")
        super().__init__()
        self._fmt = fmt
        self._stream = stream or sys.stdout
        self._label = label

    def write(self, reading: Reading) -> None:
        if self._fmt == "json":
            self._stream.write(reading.to_json() + "\n")
        else:
            stamp = datetime.fromtimestamp(reading.captured_at).strftime("%H:%M:%S")
            self._stream.write(
                f"[{self._label}] {stamp} "
                f"{reading.temperature_c:>6.1f} °C "
                f"{reading.humidity_percent:>3d} % "
                f"{reading.power_watts:>4d} W "
                f"{'connected' if reading.connected else 'disconnected'}\n"
            )
        self._stream.flush()

    def flush(self) -> None:
        self._stream.flush()
