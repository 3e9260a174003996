"""Shared fixtures for the fridge telemetry tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterable

import pytest

from fridge_telemetry.scheduler import VirtualScheduler

START_EPOCH = 1_700_000_000.0


class ScriptedRandom:
    """Random source replaying a fixed list of fractions in [0, 1).

    ``uniform(a, b)`` maps the next fraction onto ``[a, b]`` and
    ``random()`` returns it as-is.  The script repeats when exhausted.
    """

    def __init__(self, fractions: Iterable[float]) -> None:
        self._fractions = itertools.cycle(list(fractions))
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._fractions)

    def uniform(self, a: float, b: float) -> float:
        self.calls += 1
        return a + next(self._fractions) * (b - a)


@pytest.fixture()
def clock() -> VirtualScheduler:
    return VirtualScheduler(start=START_EPOCH)


@pytest.fixture()
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for :class:`ScriptedRandom` sources."""
    return ScriptedRandom
