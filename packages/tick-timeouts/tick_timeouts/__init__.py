"""tick-timeouts - Poll-driven one-shot and repeating callbacks."""
from __future__ import annotations

from tick_timeouts.actions import Action
from tick_timeouts.clock import Clock
from tick_timeouts.config import LoopConfig
from tick_timeouts.engine import Loop
from tick_timeouts.timing import ManualTime, Sleeper, TimeSource
from tick_timeouts.types import After, Callback, Delay, Every, Kind, as_timedelta

__all__ = [
    "Action",
    "After",
    "Callback",
    "Clock",
    "Delay",
    "Every",
    "Kind",
    "Loop",
    "LoopConfig",
    "ManualTime",
    "Sleeper",
    "TimeSource",
    "as_timedelta",
]
