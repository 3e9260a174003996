"""Tests for fridge_telemetry.scheduler - virtual and asyncio timers."""

from __future__ import annotations

import asyncio

import pytest

from fridge_telemetry.scheduler import AsyncioScheduler, VirtualScheduler

# -----------------------------------------------------------------------
# VirtualScheduler
# -----------------------------------------------------------------------


class TestVirtualScheduler:
    """Manual clock: due-time ordering, cancellation, re-entrancy."""

    def test_time_starts_at_epoch(self) -> None:
        clock = VirtualScheduler(start=100.0)
        assert clock.time() == 100.0
        clock.advance(2500)
        assert clock.time() == 102.5
        assert clock.elapsed_ms == 2500

    def test_fires_once_per_interval(self) -> None:
        clock = VirtualScheduler()
        calls: list[float] = []
        clock.call_every(1000, lambda: calls.append(clock.elapsed_ms))
        assert clock.advance(999) == 0
        assert clock.advance(1) == 1
        assert clock.advance(3000) == 3
        assert calls == [1000, 2000, 3000, 4000]

    def test_time_inside_callback_is_due_time(self) -> None:
        clock = VirtualScheduler(start=0.0)
        seen: list[float] = []
        clock.call_every(250, lambda: seen.append(clock.time()))
        clock.advance(1000)
        assert seen == [0.25, 0.5, 0.75, 1.0]

    def test_due_order_across_timers(self) -> None:
        clock = VirtualScheduler()
        order: list[str] = []
        clock.call_every(300, lambda: order.append("slow"))
        clock.call_every(200, lambda: order.append("fast"))
        clock.advance(600)
        assert order == ["fast", "slow", "fast", "slow", "fast"]

    def test_cancel_stops_firing(self) -> None:
        clock = VirtualScheduler()
        calls: list[int] = []
        timer = clock.call_every(100, lambda: calls.append(1))
        clock.advance(250)
        timer.cancel()
        timer.cancel()
        clock.advance(1000)
        assert len(calls) == 2
        assert timer.cancelled
        assert clock.pending == 0

    def test_cancel_from_own_callback(self) -> None:
        clock = VirtualScheduler()
        calls: list[int] = []

        def once() -> None:
            calls.append(1)
            timer.cancel()

        timer = clock.call_every(100, once)
        clock.advance(1000)
        assert calls == [1]

    def test_raising_callback_keeps_timer(self) -> None:
        clock = VirtualScheduler()
        calls: list[float] = []

        def flaky() -> None:
            calls.append(clock.elapsed_ms)
            if len(calls) == 1:
                raise RuntimeError("first run fails")

        clock.call_every(100, flaky)
        with pytest.raises(RuntimeError, match="first run fails"):
            clock.advance(100)
        assert clock.pending == 1
        clock.advance(200)
        assert calls == [100, 200, 300]

    def test_rejects_bad_arguments(self) -> None:
        clock = VirtualScheduler()
        with pytest.raises(ValueError):
            clock.call_every(0, lambda: None)
        with pytest.raises(ValueError):
            clock.advance(-1)

    def test_advance_not_reentrant(self) -> None:
        clock = VirtualScheduler()
        clock.call_every(10, lambda: clock.advance(10))
        with pytest.raises(RuntimeError, match="inside a timer callback"):
            clock.advance(10)


# -----------------------------------------------------------------------
# AsyncioScheduler
# -----------------------------------------------------------------------


class TestAsyncioScheduler:
    """Real timers on the running loop."""

    @pytest.mark.asyncio
    async def test_repeats_until_cancelled(self) -> None:
        scheduler = AsyncioScheduler()
        calls: list[int] = []
        timer = scheduler.call_every(10, lambda: calls.append(1))
        await asyncio.sleep(0.08)
        timer.cancel()
        seen = len(calls)
        assert seen >= 2
        await asyncio.sleep(0.05)
        assert len(calls) == seen

    @pytest.mark.asyncio
    async def test_cancel_from_callback(self) -> None:
        scheduler = AsyncioScheduler()
        calls: list[int] = []

        def once() -> None:
            calls.append(1)
            timer.cancel()

        timer = scheduler.call_every(5, once)
        await asyncio.sleep(0.05)
        assert calls == [1]

    def test_requires_running_loop(self) -> None:
        with pytest.raises(RuntimeError):
            AsyncioScheduler().call_every(10, lambda: None)

    def test_time_is_wall_clock(self) -> None:
        assert AsyncioScheduler().time() > 1_600_000_000
