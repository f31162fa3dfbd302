"""Scheduled action: a callback bound to a tagged delay."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta

from tick_timeouts.timing import TimeSource
from tick_timeouts.types import After, Callback, Delay, Every, as_timedelta, from_nanoseconds


@dataclass(eq=False)
class Action:
    """A callback that fires once ``delay`` has passed since its last fire.

    Both timestamps are taken from ``time_fn`` when the action is built, so
    time spent before registration counts toward the first fire. An ``After``
    delay makes a one-shot action, an ``Every`` delay a repeating one.
    """

    callback: Callback
    delay: Delay
    time_fn: TimeSource = field(default=time.monotonic_ns, repr=False)
    last_fired: int = field(init=False)
    last_checked: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.delay, Delay):
            raise TypeError(
                f"delay must be After or Every, got {type(self.delay).__name__}; "
                "use Action.create() for a plain timedelta"
            )
        now = self.time_fn()
        self.last_fired = now
        self.last_checked = now

    @classmethod
    def create(
        cls,
        callback: Callback,
        delta: timedelta | None = None,
        *,
        repeat: bool = False,
        time_fn: TimeSource = time.monotonic_ns,
        **kwargs: float,
    ) -> Action:
        """Build an action from a plain timedelta and an explicit fire mode."""
        kind = Every if repeat else After
        return cls(callback, kind.of(as_timedelta(delta, **kwargs)), time_fn)

    @property
    def repeating(self) -> bool:
        return self.delay.repeating

    def elapsed(self, now: int | None = None) -> timedelta:
        """Time since the last fire (or since construction if never fired)."""
        if now is None:
            now = self.time_fn()
        return from_nanoseconds(now - self.last_fired)

    def is_due(self, now: int | None = None) -> bool:
        if now is None:
            now = self.time_fn()
        return now - self.last_fired >= self.delay.nanoseconds

    def tick(self) -> bool:
        """Fire the callback if due. Returns True when it fired.

        The fire timestamp is taken after the callback returns, so a slow
        callback pushes its own next fire back by its runtime. A raising
        callback propagates and the action is not marked as fired.
        """
        self.last_checked = self.time_fn()
        if not self.is_due(self.last_checked):
            return False
        self.callback()
        self.last_fired = self.time_fn()
        return True
