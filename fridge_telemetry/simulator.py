"""TelemetrySimulator - produces Readings on a fixed cadence and hands them
to registered callbacks.

Each :meth:`TelemetrySimulator.start` call returns a
:class:`SubscriptionHandle` that owns one Reading slot, one timer and its
callbacks.  Timing and randomness are injected so tests can drive a
:class:`VirtualScheduler` with a seeded random source.
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging
import random
import signal
import threading
from collections.abc import Callable, Iterable
from typing import Any

from fridge_telemetry.config import SimulatorConfig
from fridge_telemetry.generator import RandomSource, ReadingGenerator
from fridge_telemetry.models import Reading
from fridge_telemetry.scheduler import AsyncioScheduler, Scheduler, Timer

__all__ = ["ReadingCallback", "SubscriptionHandle", "TelemetrySimulator"]

logger = logging.getLogger("fridge_telemetry.simulator")

ReadingCallback = Callable[[Reading], Any]

_handle_ids = itertools.count(1)


class SubscriptionHandle:
    """One active (or stopped) simulated device.

    Returned by :meth:`TelemetrySimulator.start`; pass it back to the
    simulator, or use the convenience methods on the handle itself.
    """

    def __init__(
        self,
        owner: TelemetrySimulator,
        config: SimulatorConfig,
        generator: ReadingGenerator,
        initial: Reading,
    ) -> None:
        self.id = next(_handle_ids)
        self.config = config
        self.tick_count = 0
        self._owner = owner
        self._generator = generator
        self._callbacks: list[ReadingCallback] = []
        self._reading = initial
        self._timer: Timer | None = None
        self._active = False

    def __repr__(self) -> str:
        state = "active" if self._active else "stopped"
        return f"<SubscriptionHandle #{self.id} {state} ticks={self.tick_count}>"

    @property
    def active(self) -> bool:
        return self._active

    # -- conveniences --

    def on_reading(self, callback: ReadingCallback) -> None:
        self._owner.on_reading(self, callback)

    def current_reading(self) -> Reading:
        return self._owner.current_reading(self)

    def stop(self) -> None:
        self._owner.stop(self)

    # -- internal --

    def _tick(self) -> None:
        if not self._active:
            return
        reading = self._generator.next(self._reading, self._owner.scheduler.time())
        self._reading = reading
        self.tick_count += 1
        logger.debug(
            "Tick %d on #%d: %.2f °C, %d %%, %d W, connected=%s",
            self.tick_count,
            self.id,
            reading.temperature_c,
            reading.humidity_percent,
            reading.power_watts,
            reading.connected,
        )
        for callback in list(self._callbacks):
            if not self._active:
                # A callback stopped the subscription mid-delivery.
                break
            try:
                callback(reading)
            except Exception:
                logger.exception("Reading callback %r failed on #%d", callback, self.id)


class TelemetrySimulator:
    """Synthetic fridge telemetry source.

    Example::

        from fridge_telemetry import TelemetrySimulator, VirtualScheduler, get_preset

        clock = VirtualScheduler()
        sim = TelemetrySimulator(scheduler=clock, rng=random.Random(7))
        handle = sim.start(get_preset("fridge"))
        sim.on_reading(handle, print)
        clock.advance(9000)   # three readings
        sim.stop(handle)

    Parameters:
        scheduler:
            Timer source.  Defaults to :class:`AsyncioScheduler`, in which
            case :meth:`start` must be called from inside a running loop.
        rng:
            Random source shared by every subscription of this simulator.
            Defaults to a fresh, unseeded ``random.Random``.
    """

    def __init__(self, *, scheduler: Scheduler | None = None, rng: RandomSource | None = None) -> None:
        self.scheduler: Scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._handles: list[SubscriptionHandle] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, config: SimulatorConfig) -> SubscriptionHandle:
        """Validate *config*, seed the initial Reading and schedule ticks.

        Raises:
            InvalidConfig: when a range is inverted, a seed lies outside its
                range, a step is negative or the interval is not positive.
                Nothing is scheduled in that case.
        """
        config.validate_ranges()

        generator = ReadingGenerator(config, self._rng)
        handle = SubscriptionHandle(self, config, generator, generator.initial(self.scheduler.time()))
        handle._active = True
        handle._timer = self.scheduler.call_every(config.tick_interval_ms, handle._tick)
        self._handles.append(handle)

        logger.info(
            "Started #%d: every %d ms, temperature %.1f..%.1f °C seeded at %.1f",
            handle.id,
            config.tick_interval_ms,
            config.temperature_range.min_value,
            config.temperature_range.max_value,
            config.initial_temperature_c,
        )
        return handle

    def stop(self, handle: SubscriptionHandle) -> None:
        """Halt production for *handle*.  Idempotent."""
        self._check_owner(handle)
        if not handle._active:
            return
        handle._active = False
        if handle._timer is not None:
            handle._timer.cancel()
            handle._timer = None
        self._handles.remove(handle)
        logger.info("Stopped #%d after %d ticks", handle.id, handle.tick_count)

    def stop_all(self) -> None:
        for handle in list(self._handles):
            self.stop(handle)

    @property
    def active_count(self) -> int:
        return len(self._handles)

    # ------------------------------------------------------------------
    # Consumers
    # ------------------------------------------------------------------

    def on_reading(self, handle: SubscriptionHandle, callback: ReadingCallback) -> None:
        """Register *callback* to receive every new Reading of *handle*.

        No ordering is guaranteed between callbacks.  Registering on a
        stopped handle is accepted but the callback never runs.
        """
        self._check_owner(handle)
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        if not handle._active:
            logger.debug("Callback registered on stopped #%d will never run", handle.id)
        handle._callbacks.append(callback)

    def current_reading(self, handle: SubscriptionHandle) -> Reading:
        """Most recent Reading, or the seeded one before the first tick."""
        self._check_owner(handle)
        return handle._reading

    # ------------------------------------------------------------------
    # Real-time drivers
    # ------------------------------------------------------------------

    def run(
        self,
        config: SimulatorConfig,
        duration_s: float | None = None,
        consumers: Iterable[ReadingCallback] = (),
    ) -> SubscriptionHandle | None:
        """Blocking entry point - runs one subscription on its own event loop.

        Inside an environment that already runs a loop (Jupyter, IPython)
        the loop is started on a dedicated thread.

        Returns the stopped handle, or ``None`` when interrupted by Ctrl-C.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None and loop.is_running():
            result: list[SubscriptionHandle | None] = [None]
            exc: list[BaseException | None] = [None]

            def _target() -> None:
                try:
                    result[0] = asyncio.run(self.run_async(config, duration_s=duration_s, consumers=consumers))
                except KeyboardInterrupt:
                    logger.info("Interrupted by user")
                except BaseException as e:
                    exc[0] = e

            t = threading.Thread(target=_target, daemon=True)
            t.start()
            t.join()
            if exc[0] is not None:
                raise exc[0]
            return result[0]

        try:
            return asyncio.run(self.run_async(config, duration_s=duration_s, consumers=consumers))
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            return None

    async def run_async(
        self,
        config: SimulatorConfig,
        duration_s: float | None = None,
        consumers: Iterable[ReadingCallback] = (),
    ) -> SubscriptionHandle:
        """Start a subscription, feed *consumers* until the duration elapses
        or SIGINT/SIGTERM arrives, then stop it."""
        if not isinstance(self.scheduler, AsyncioScheduler):
            raise RuntimeError("run_async() needs an AsyncioScheduler")

        handle = self.start(config)
        for consumer in consumers:
            self.on_reading(handle, consumer)

        # NotImplementedError: Windows has no loop signal handlers.
        # RuntimeError: not running in the main thread.
        loop = asyncio.get_running_loop()
        stop_event = asyncio.Event()
        installed: list[signal.Signals] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                loop.add_signal_handler(sig, stop_event.set)
                installed.append(sig)

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=duration_s)
            logger.info("Stop signal received - shutting down")
        except TimeoutError:
            logger.info("Duration reached (%.1fs) - stopping", duration_s)
        finally:
            self.stop(handle)
            for sig in installed:
                loop.remove_signal_handler(sig)
        return handle

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_owner(self, handle: SubscriptionHandle) -> None:
        if not isinstance(handle, SubscriptionHandle):
            raise TypeError(f"expected a SubscriptionHandle, got {type(handle).__name__}")
        if handle._owner is not self:
            raise ValueError(f"{handle!r} belongs to another simulator")
