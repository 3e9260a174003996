"""Sink abstraction - consumers that can be registered as reading callbacks.

A ``Sink`` is callable, so ``simulator.on_reading(handle, sink)`` works for
any concrete sink just like it does for a plain function.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from fridge_telemetry.models import Reading

__all__ = ["Sink"]

logger = logging.getLogger("fridge_telemetry.sinks")


class Sink(ABC):
    """Abstract base class for all sinks.

    Concrete sinks implement ``write``; ``flush`` and ``close`` default to
    no-ops.  After ``close`` further readings are ignored.
    """

    def __init__(self) -> None:
        self.written = 0
        self._closed = False

    def __call__(self, reading: Reading) -> None:
        if self._closed:
            logger.debug("%s is closed - dropping reading", type(self).__name__)
            return
        self.write(reading)
        self.written += 1

    @property
    def closed(self) -> bool:
        return self._closed

    @abstractmethod
    def write(self, reading: Reading) -> None:
        """Deliver one reading to the destination."""

    def flush(self) -> None:
        """Flush any internal buffers the sink may hold."""

    def close(self) -> None:
        """Flush and release resources."""
        if not self._closed:
            self.flush()
            self._closed = True
