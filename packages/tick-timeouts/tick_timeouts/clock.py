"""Clock - registry of pending actions, the tick driver and loop pacing."""
from __future__ import annotations

import logging
import time
from collections import deque
from datetime import timedelta
from typing import Callable

from tick_timeouts.actions import Action
from tick_timeouts.timing import Sleeper, TimeSource
from tick_timeouts.types import (
    After,
    Callback,
    Delay,
    Every,
    as_timedelta,
    from_nanoseconds,
)

logger = logging.getLogger(__name__)

_ZERO = timedelta(0)


class Clock:
    """Owns pending one-shot and repeating actions and fires them on tick().

    Nothing runs in the background: the caller drives the clock by calling
    ``tick()`` and paces its loop with ``pace()``.
    """

    def __init__(
        self,
        time_fn: TimeSource = time.monotonic_ns,
        sleep_fn: Sleeper = time.sleep,
    ) -> None:
        self._time_fn = time_fn
        self._sleep_fn = sleep_fn
        self._timeouts: deque[Action] = deque()
        self._incoming: list[Action] = []
        self._ticking = False
        self._intervals: list[Action] = []
        self.reset()

    # --- Measurement window ---

    def reset(self) -> None:
        """Restart the measurement window at the current time."""
        self.start_time = self._time_fn()
        self.lap_time = self.start_time
        self.elapsed = _ZERO

    def start(self) -> None:
        """Mark the start of the measurement window without sleeping."""
        self.start_time = self._time_fn()

    def lap(self) -> timedelta:
        self.lap_time = self._time_fn()
        self.elapsed = from_nanoseconds(self.lap_time - self.start_time)
        return self.elapsed

    # --- Registration ---

    def add(self, action: Action) -> Action:
        """Append an action to the one-shot or repeating collection."""
        if not isinstance(action, Action):
            raise TypeError(f"expected an Action, got {type(action).__name__}")
        if action.repeating:
            self._intervals.append(action)
        elif self._ticking:
            self._incoming.append(action)
        else:
            self._timeouts.append(action)
        logger.debug("registered %r", action)
        return action

    def schedule(self, callback: Callback, delay: Delay) -> Action:
        return self.add(Action(callback, delay, self._time_fn))

    def schedule_in(
        self,
        callback: Callback,
        delta: timedelta | None = None,
        *,
        repeat: bool = False,
        **kwargs: float,
    ) -> Action:
        """Register ``callback`` from a plain timedelta and a fire-mode flag."""
        return self.add(
            Action.create(callback, delta, repeat=repeat, time_fn=self._time_fn, **kwargs)
        )

    def run(self, delay: Delay) -> Callable[[Callback], Callback]:
        """Decorator registering the decorated function with ``delay``.

        The function is returned unchanged::

            @clock.run(Every(seconds=1))
            def heartbeat():
                ...
        """

        def decorator(fn: Callback) -> Callback:
            self.schedule(fn, delay)
            return fn

        return decorator

    def after(self, delta: timedelta | None = None, **kwargs: float) -> Callable[[Callback], Callback]:
        """Decorator for a one-shot action: ``@clock.after(milliseconds=500)``."""
        return self.run(After.of(as_timedelta(delta, **kwargs)))

    def every(self, delta: timedelta | None = None, **kwargs: float) -> Callable[[Callback], Callback]:
        """Decorator for a repeating action: ``@clock.every(seconds=1)``."""
        return self.run(Every.of(as_timedelta(delta, **kwargs)))

    # --- Inspection ---

    @property
    def timeouts(self) -> tuple[Action, ...]:
        return (*self._timeouts, *self._incoming)

    @property
    def intervals(self) -> tuple[Action, ...]:
        return tuple(self._intervals)

    @property
    def pending(self) -> int:
        return len(self._timeouts) + len(self._incoming) + len(self._intervals)

    def __len__(self) -> int:
        return self.pending

    # --- Driving ---

    def tick(self) -> int:
        """Fire every due action once. Returns how many fired.

        One-shot actions pending at the start of the tick are each checked
        once, newest first: the action at the back is dropped if it fired and
        rotated to the front otherwise. After a full pass the survivors are
        back in registration order. Actions registered by callbacks during
        the tick are first checked on the next one. Callback exceptions
        propagate.
        """
        self.lap()
        self._ticking = True
        try:
            fired = self._tick_timeouts() + self._tick_intervals()
        finally:
            self._ticking = False
            self._timeouts.extend(self._incoming)
            self._incoming.clear()
        if fired:
            logger.debug(
                "tick fired %d action(s), %d pending", fired, self.pending
            )
        return fired

    def _tick_timeouts(self) -> int:
        timeouts = self._timeouts
        fired = 0
        for _ in range(len(timeouts)):
            action = timeouts.pop()
            try:
                done = action.tick()
            except BaseException:
                timeouts.append(action)
                raise
            if done:
                fired += 1
            else:
                timeouts.appendleft(action)
        return fired

    def _tick_intervals(self) -> int:
        fired = 0
        for i in range(len(self._intervals)):
            if self._intervals[i].tick():
                fired += 1
        return fired

    # --- Pacing ---

    def sleep(self, delay: timedelta | None = None, **kwargs: float) -> None:
        """Block for ``delay`` with no compensation."""
        delay = as_timedelta(delay, **kwargs)
        if delay < _ZERO:
            raise ValueError("sleep length must be non-negative")
        self._sleep_fn(delay.total_seconds())

    def pace(self, period: timedelta | None = None, **kwargs: float) -> timedelta:
        """Sleep out the rest of ``period`` measured from the last reset/start.

        Time already spent since the window opened is subtracted; when it
        meets or exceeds ``period`` no sleep happens at all. The window is
        reset afterwards. Returns the time slept.
        """
        period = as_timedelta(period, **kwargs)
        if period < _ZERO:
            raise ValueError("period must be non-negative")
        spent = self.lap()
        remaining = max(period - spent, _ZERO)
        if remaining:
            self._sleep_fn(remaining.total_seconds())
        elif spent > period:
            logger.debug("loop overran period %s by %s", period, spent - period)
        self.reset()
        return remaining
