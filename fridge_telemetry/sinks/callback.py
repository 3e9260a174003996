"""Callback sink - delegates writes to a user-provided Python callable.

Mostly useful to give a plain function the ``flush``/``close`` lifecycle of
a :class:`Sink`, e.g. when mixing it with other sinks in one list.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fridge_telemetry.models import Reading
from fridge_telemetry.sinks.base import Sink

__all__ = ["CallbackSink"]


class CallbackSink(Sink):
    """Wraps ``callback(reading)`` as a sink."""

    def __init__(self, callback: Callable[[Reading], Any]) -> None:
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        super().__init__()
        self._callback = callback

    def write(self, reading: Reading) -> None:
        self._callback(reading)
