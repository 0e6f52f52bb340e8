"""Request throttling for remote services with informal rate limits."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestThrottle(Protocol):
    def acquire(self) -> None:
        """Block until the next remote call is permitted."""
        ...


class NoThrottle:
    """Throttle that never waits."""

    def acquire(self) -> None:
        return None


class FixedIntervalThrottle:
    """
    Keep successive acquire() calls at least `interval` seconds apart.

    The first call never waits. Clock and sleep are injectable for tests.
    """

    def __init__(
        self,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError(f"Throttle interval must not be negative, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    def acquire(self) -> None:
        now = self._clock()
        if self._last is not None:
            wait = self._last + self.interval - now
            if wait > 0:
                logger.debug("Throttling for %.2fs", wait)
                self._sleep(wait)
                now = self._clock()
        self._last = now
