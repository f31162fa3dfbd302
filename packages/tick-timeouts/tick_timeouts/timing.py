"""Time source protocols and a manually driven implementation."""
from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from tick_timeouts.types import as_timedelta, from_nanoseconds, to_nanoseconds

_NS_PER_SECOND = 1_000_000_000


class TimeSource(Protocol):
    """Monotonic clock returning integer nanoseconds, like time.monotonic_ns."""

    def __call__(self) -> int: ...


class Sleeper(Protocol):
    """Blocks the calling thread for the given number of seconds, like time.sleep."""

    def __call__(self, seconds: float, /) -> None: ...


class ManualTime:
    """Deterministic time source for tests and simulations.

    Calling the instance reads the current time. Time only moves when
    ``advance`` or ``sleep`` is called, so a Clock wired to it can be
    driven through exact schedules without real waiting.

    Args:
        start: Initial timestamp in nanoseconds (default 0).
    """

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self.sleeps: list[float] = []

    def __call__(self) -> int:
        return self._now

    @property
    def now(self) -> timedelta:
        return from_nanoseconds(self._now)

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> int:
        """Move time forward and return the new timestamp."""
        delta = as_timedelta(delta, **kwargs)
        if delta < timedelta(0):
            raise ValueError("time cannot move backwards")
        self._now += to_nanoseconds(delta)
        return self._now

    def sleep(self, seconds: float) -> None:
        """Advance by ``seconds`` instead of blocking."""
        if seconds < 0:
            raise ValueError("sleep length must be non-negative")
        self.sleeps.append(seconds)
        self._now += round(seconds * _NS_PER_SECOND)
