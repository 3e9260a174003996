"""Timer capability used by the simulator.

Provides:
- ``Scheduler``          - abstract base: repeating timers plus a clock.
- ``VirtualScheduler``   - manually advanced clock for tests and replays.
- ``AsyncioScheduler``   - real-time timers on the running asyncio loop.

Intervals are expressed in milliseconds, like ``SimulatorConfig.tick_interval_ms``.
A timer never runs twice at the same time: the next run is only armed by the
scheduler itself, and a cancelled timer never fires again.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

__all__ = ["AsyncioScheduler", "Scheduler", "Timer", "VirtualScheduler"]

logger = logging.getLogger("fridge_telemetry.scheduler")


class Timer:
    """Handle on a repeating timer returned by :meth:`Scheduler.call_every`."""

    def __init__(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the timer.  Safe to call more than once."""
        self._cancelled = True


class Scheduler(ABC):
    """Abstract timer source."""

    @abstractmethod
    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> Timer:
        """Run *callback* every *interval_ms*, first run one interval from now."""

    @abstractmethod
    def time(self) -> float:
        """Current time as Unix epoch seconds."""


# -----------------------------------------------------------------------
# Virtual clock
# -----------------------------------------------------------------------


class VirtualScheduler(Scheduler):
    """Scheduler whose clock only moves when :meth:`advance` is called.

    Due timers fire in due-time order; timers due at the same instant fire
    in the order they were registered.

    Parameters:
        start: Epoch seconds reported by :meth:`time` before any advance.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._start = start
        self._now_ms = 0.0
        self._queue: list[tuple[float, int, Timer]] = []
        self._seq = itertools.count()
        self._advancing = False

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> Timer:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        timer = Timer(interval_ms, callback)
        heapq.heappush(self._queue, (self._now_ms + interval_ms, next(self._seq), timer))
        return timer

    def time(self) -> float:
        return self._start + self._now_ms / 1000.0

    @property
    def elapsed_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of timers that have not been cancelled."""
        return sum(1 for _due, _seq, timer in self._queue if not timer.cancelled)

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms*, firing every timer that falls due.

        Returns the number of callbacks that ran.
        """
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        if self._advancing:
            raise RuntimeError("advance() called from inside a timer callback")

        target = self._now_ms + ms
        fired = 0
        self._advancing = True
        try:
            while self._queue and self._queue[0][0] <= target:
                due, _seq, timer = heapq.heappop(self._queue)
                if timer.cancelled:
                    continue
                self._now_ms = due
                # Re-arm before running, as _AsyncioTimer does.
                heapq.heappush(self._queue, (due + timer.interval_ms, next(self._seq), timer))
                fired += 1
                timer.callback()
            self._now_ms = target
        finally:
            self._advancing = False
        return fired


# -----------------------------------------------------------------------
# asyncio
# -----------------------------------------------------------------------


class _AsyncioTimer(Timer):
    def __init__(self, loop: asyncio.AbstractEventLoop, interval_ms: float, callback: Callable[[], None]) -> None:
        super().__init__(interval_ms, callback)
        self._loop = loop
        self._due = loop.time() + interval_ms / 1000.0
        self._handle: asyncio.TimerHandle | None = loop.call_at(self._due, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Arm from the previous due time so the cadence does not drift.
        self._due += self.interval_ms / 1000.0
        self._handle = self._loop.call_at(self._due, self._fire)
        self.callback()

    def cancel(self) -> None:
        super().cancel()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler(Scheduler):
    """Timers on the running asyncio event loop.

    ``call_every`` must be called from inside the loop (e.g. within
    ``asyncio.run``).  Callbacks run on the loop thread, one at a time.
    """

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> Timer:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        loop = asyncio.get_running_loop()
        logger.debug("Arming %.0f ms timer on %r", interval_ms, loop)
        return _AsyncioTimer(loop, interval_ms, callback)

    def time(self) -> float:
        return time.time()
