"""Remaining thinking time per player."""

import math
from dataclasses import dataclass, replace
from typing import Optional, Self

from src.core.config import DEFAULT_TIMER_SECONDS
from src.core.shared_types import Color


@dataclass(frozen=True)
class PlayerTimers:
    """Seconds left on each clock + the moment the clock of the side to move started running."""

    white: int
    black: int
    start_time: Optional[float] = None

    @classmethod
    def default(cls, now: Optional[float] = None) -> Self:
        return cls(DEFAULT_TIMER_SECONDS, DEFAULT_TIMER_SECONDS, now)

    def remaining(self, color: Color) -> int:
        return self.white if color == Color.WHITE else self.black

    def charge(self, color: Color, now: float) -> Self:
        """Deduct the whole seconds spent since the clock started from `color`, then restart the clock for the next player."""
        elapsed = (
            max(0, math.floor(now - self.start_time))
            if self.start_time is not None
            else 0
        )
        remaining = max(0, self.remaining(color) - elapsed)
        if color == Color.WHITE:
            return replace(self, white=remaining, start_time=now)
        return replace(self, black=remaining, start_time=now)
