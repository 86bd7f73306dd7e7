"""
TrendSearch - Rate Limiter

Admission control shared by every call made through one client:

- at most `max_concurrent` tasks run at once
- consecutive task starts are at least `min_delay` seconds apart
- waiting tasks are admitted in FIFO submission order

The limiter is thread-safe; queue and counters are only touched while
holding the condition's lock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitPolicy:
    """Concurrency bound and minimum spacing (seconds) between task starts."""

    max_concurrent: int = 1
    min_delay: float = 1.0


class RateLimiter:
    """FIFO limiter bounding concurrency and spacing task starts."""

    def __init__(
        self,
        max_concurrent: int = RateLimitPolicy.max_concurrent,
        min_delay: float = RateLimitPolicy.min_delay,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.max_concurrent = max(1, int(max_concurrent))
        self.min_delay = max(0.0, float(min_delay))

        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._cond = threading.Condition()
        self._queue: Deque[object] = deque()
        self._running = 0
        self._next_start_at = 0.0

    @classmethod
    def from_policy(cls, policy: RateLimitPolicy) -> "RateLimiter":
        return cls(max_concurrent=policy.max_concurrent, min_delay=policy.min_delay)

    @property
    def running(self) -> int:
        with self._cond:
            return self._running

    @property
    def pending(self) -> int:
        with self._cond:
            return len(self._queue)

    def _admit(self) -> float:
        """Block until this caller is at the head and a slot is free; return its start time."""
        ticket = object()
        with self._cond:
            self._queue.append(ticket)
            try:
                while self._queue[0] is not ticket or self._running >= self.max_concurrent:
                    self._cond.wait()
            except BaseException:
                # Interrupted while queued: give up the place in line.
                self._queue.remove(ticket)
                self._cond.notify_all()
                raise

            self._queue.popleft()
            self._running += 1
            start_at = max(self._next_start_at, self._clock())
            self._next_start_at = start_at + self.min_delay
            # Next in line may also fit when max_concurrent > 1.
            self._cond.notify_all()
            return start_at

    def _release(self) -> None:
        with self._cond:
            self._running -= 1
            self._cond.notify_all()

    def schedule(self, task: Callable[[], T]) -> T:
        """Run `task` once admitted and return (or raise) its own outcome."""
        start_at = self._admit()
        try:
            wait = start_at - self._clock()
            if wait > 0:
                logger.debug(f"Rate limiting: sleeping for {wait:.3f}s")
                self._sleep(wait)
            return task()
        finally:
            self._release()
