"""Tagged durations and shared type aliases for the timeout clock."""
from __future__ import annotations

import enum
from datetime import timedelta
from typing import Any, Callable

Callback = Callable[[], Any]

_ZERO = timedelta(0)
_MICROSECOND = timedelta(microseconds=1)


class Kind(enum.Enum):
    ONCE = "once"
    REPEATING = "repeating"


class Delay(timedelta):
    """A timedelta tagged with how often the action it drives should fire.

    The tag lives on the type, not the value: equality and hashing are plain
    timedelta semantics, so ``After(seconds=1) == Every(seconds=1)``.
    """

    __slots__ = ()
    kind: Kind

    def __new__(cls, *args: Any, **kwargs: Any) -> Delay:
        if cls is Delay:
            raise TypeError("Delay is abstract, use After or Every")
        self = super().__new__(cls, *args, **kwargs)
        if self < _ZERO:
            raise ValueError(f"{cls.__name__} must not be negative, got {self!r}")
        return self

    @classmethod
    def of(cls, delta: timedelta) -> Delay:
        """Tag an existing timedelta."""
        return cls(days=delta.days, seconds=delta.seconds, microseconds=delta.microseconds)

    @property
    def duration(self) -> timedelta:
        return timedelta(days=self.days, seconds=self.seconds, microseconds=self.microseconds)

    @property
    def nanoseconds(self) -> int:
        return to_nanoseconds(self)

    @property
    def repeating(self) -> bool:
        return self.kind is Kind.REPEATING

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.duration!s})"


class After(Delay):
    """Fire once, this long after registration."""

    __slots__ = ()
    kind = Kind.ONCE


class Every(Delay):
    """Fire repeatedly, this long after the previous fire."""

    __slots__ = ()
    kind = Kind.REPEATING


def to_nanoseconds(delta: timedelta) -> int:
    return (delta // _MICROSECOND) * 1000


def from_nanoseconds(ns: int) -> timedelta:
    return timedelta(microseconds=ns // 1000)


def as_timedelta(value: timedelta | None = None, **kwargs: float) -> timedelta:
    """Accept either a timedelta or timedelta keyword arguments, not both."""
    if value is not None and kwargs:
        raise TypeError("pass a timedelta or keyword arguments, not both")
    if value is None:
        if not kwargs:
            raise TypeError("a duration is required")
        return timedelta(**kwargs)
    if not isinstance(value, timedelta):
        raise TypeError(f"expected a timedelta, got {type(value).__name__}")
    return value
