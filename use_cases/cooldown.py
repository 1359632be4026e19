"""Countdown that throttles the "resend code" action."""

import time
from typing import Callable, Optional

DEFAULT_COOLDOWN_SECONDS = 60


class CooldownTimer:
    """
    Counts down once per second to zero.

    ``tick()`` applies one second. ``sync()`` applies however many whole seconds
    have passed on the monotonic clock since the last applied tick, which is how a
    Streamlit rerun catches up with wall time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.remaining = 0
        self._last_tick_at: Optional[float] = None

    def start(self, seconds: int = DEFAULT_COOLDOWN_SECONDS) -> None:
        # Supersedes a countdown that is still running.
        self.remaining = max(0, int(seconds))
        self._last_tick_at = self._clock() if self.remaining > 0 else None

    def tick(self) -> None:
        if self.remaining <= 0:
            return
        self.remaining -= 1
        if self.remaining == 0:
            self._last_tick_at = None

    def sync(self, now: Optional[float] = None) -> int:
        if self._last_tick_at is None:
            return self.remaining
        now = self._clock() if now is None else now
        elapsed = int(now - self._last_tick_at)
        for _ in range(min(elapsed, self.remaining)):
            self.tick()
        if self._last_tick_at is not None:
            self._last_tick_at += elapsed
        return self.remaining

    def cancel(self) -> None:
        self.remaining = 0
        self._last_tick_at = None

    def is_active(self) -> bool:
        return self.remaining > 0
