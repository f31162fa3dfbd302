"""Loop - drives a Clock with a fixed cadence and lifecycle hooks."""
from __future__ import annotations

import logging
from typing import Callable

from tick_timeouts.clock import Clock
from tick_timeouts.config import LoopConfig

logger = logging.getLogger(__name__)

Hook = Callable[[Clock], None]


class Loop:
    def __init__(self, clock: Clock | None = None, config: LoopConfig | None = None) -> None:
        self._clock = clock if clock is not None else Clock()
        self._config = config if config is not None else LoopConfig()
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False
        self._tick_number = 0

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def config(self) -> LoopConfig:
        return self._config

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def _sleep(self) -> None:
        if self._config.compensate:
            self._clock.pace(self._config.period)
        else:
            self._clock.sleep(self._config.period)

    def _iterate(self) -> None:
        self._clock.tick()
        self._tick_number += 1
        if not self._stop_requested:
            self._sleep()

    def step(self) -> None:
        """Run one iteration: tick the clock, then sleep out the period."""
        self._stop_requested = False
        self._iterate()

    def run(self, n: int) -> None:
        """Run at most ``n`` iterations, fewer if a stop is requested."""
        self._stop_requested = False
        self._begin()
        try:
            for _ in range(n):
                self._iterate()
                if self._stop_requested:
                    break
        finally:
            self._end()

    def run_forever(self) -> None:
        self._stop_requested = False
        self._begin()
        try:
            while not self._stop_requested:
                self._iterate()
        finally:
            self._end()

    def _begin(self) -> None:
        for hook in self._start_hooks:
            hook(self._clock)
        logger.debug("loop started, period=%s", self._config.period)
        self._clock.start()

    def _end(self) -> None:
        logger.debug("loop stopped after %d tick(s)", self._tick_number)
        for hook in self._stop_hooks:
            hook(self._clock)
