"""Per-connection outbound rate limiter."""

from __future__ import annotations

import time
from collections.abc import Callable


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


class RateLimiter:
    """Fixed-window counter that resets once the window has elapsed.

    allow(t):
        if t - window_start > window_ms: window_start = t, count = 0
        if count >= max_per_second: deny
        count += 1, admit

    This is not a true sliding window: a client can be admitted up to
    2 * max_per_second times across a window boundary. Denied sends are
    dropped by the caller, never queued.
    """

    def __init__(
        self,
        max_per_second: int = 50,
        window_ms: int = 1000,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._max = max_per_second
        self._window_ms = window_ms
        self._clock = clock or now_ms
        self._window_start = self._clock()
        self._count = 0

    @property
    def max_per_second(self) -> int:
        return self._max

    @property
    def window_start(self) -> int:
        return self._window_start

    @property
    def count(self) -> int:
        """Admissions in the current window."""
        return self._count

    def allow(self, now: int | None = None) -> bool:
        """Admission check at `now` (epoch ms). Consumes one slot when admitted."""
        t = self._clock() if now is None else now
        if t - self._window_start > self._window_ms:
            self._window_start = t
            self._count = 0
        if self._count >= self._max:
            return False
        self._count += 1
        return True
