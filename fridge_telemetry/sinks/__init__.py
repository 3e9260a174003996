"""Sinks - consumers that can be registered as reading callbacks.

    from fridge_telemetry.sinks import ConsoleSink
"""

from __future__ import annotations

from fridge_telemetry.sinks.base import Sink
from fridge_telemetry.sinks.callback import CallbackSink
from fridge_telemetry.sinks.console import ConsoleSink
from fridge_telemetry.sinks.factory import create_sink, register_sink

__all__ = [
    "CallbackSink",
    "ConsoleSink",
    "Sink",
    "create_sink",
    "register_sink",
]
