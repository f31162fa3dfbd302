"""Loop configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class LoopConfig:
    """Immutable configuration for the polling loop.

    Attributes:
        period: Target wall time of one loop iteration.
        compensate: Subtract the time spent ticking from each sleep. When
            False the loop sleeps the full period after every tick.
    """

    period: timedelta = field(default_factory=lambda: timedelta(milliseconds=20))
    compensate: bool = True

    def __post_init__(self) -> None:
        if self.period < timedelta(0):
            raise ValueError("period must be non-negative")
