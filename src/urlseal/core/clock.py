"""Injectable "current time" source."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


class FrozenClock:
    """Clock pinned to a fixed instant; ``advance()`` moves it forward."""

    def __init__(self, now: int) -> None:
        self.now = int(now)

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += int(seconds)
