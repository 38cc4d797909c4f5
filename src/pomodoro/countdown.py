"""Monotonic countdown bookkeeping for the active section."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RemainingTime:
    """Whole minutes and seconds left, as shown to the user."""
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total_seconds: int) -> "RemainingTime":
        minutes, seconds = divmod(max(0, int(total_seconds)), 60)
        return cls(minutes=minutes, seconds=seconds)


@dataclass
class Countdown:
    """Start/end bookkeeping for one section, in monotonic clock seconds.

    ``end`` is pushed forward by the length of every pause, so ``end - now``
    is always the true remaining work time while running.
    """
    section_duration: float
    start: float
    end: float
    paused_since: Optional[float] = None

    @classmethod
    def begin(cls, duration_seconds: float, now: float) -> "Countdown":
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")
        return cls(
            section_duration=float(duration_seconds),
            start=now,
            end=now + float(duration_seconds),
        )

    @property
    def is_paused(self) -> bool:
        return self.paused_since is not None

    def is_expired(self, now: float) -> bool:
        return not self.is_paused and now >= self.end

    def pause(self, now: float) -> bool:
        if self.is_paused:
            return False
        self.paused_since = now
        return True

    def resume(self, now: float) -> bool:
        paused_since = self.paused_since
        if paused_since is None:
            return False
        self.end += max(0.0, now - paused_since)
        self.paused_since = None
        return True

    def remaining_seconds(self, now: float) -> int:
        # Frozen at the pause instant while paused.
        reference = self.paused_since if self.paused_since is not None else now
        remaining = int(math.ceil(self.end - reference))
        return max(0, remaining)

    def remaining(self, now: float) -> RemainingTime:
        return RemainingTime.from_seconds(self.remaining_seconds(now))
