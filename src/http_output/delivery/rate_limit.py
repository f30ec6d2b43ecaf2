"""
Module: rate_limit.py
Description: Lossy attempt-rate gate for the delivery engine.

The limiter is a throttle, not a queue. Attempts inside the interval
are refused and the engine drops the chunk. Every call records its own
time as the new reference point, refused or not, so a steady stream of
attempts faster than the interval keeps being refused.
"""

import threading
import time
from typing import Callable, Optional

from http_output.models.config import RateLimitConfig


class RateLimiter:
    """
    Per-engine attempt gate.

    Attributes:
        interval_msec: Minimum spacing between attempts; None disables the gate
        last_attempt_msec: Clock reading of the previous attempt, None if never attempted
    """

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Callable[[], float] = time.monotonic
    ):
        self.interval_msec = config.interval_msec
        self.last_attempt_msec: Optional[float] = None
        self._clock = clock
        self._lock = threading.Lock()

    def now_msec(self) -> float:
        return self._clock() * 1000

    def should_send(self, now_msec: Optional[float] = None) -> bool:
        """
        Decide whether an attempt at ``now_msec`` may proceed.

        Always records ``now_msec`` as the last attempt.

        Args:
            now_msec: Attempt time in milliseconds; read from the clock when omitted

        Returns:
            True if the attempt may send, False if it must be dropped
        """
        with self._lock:
            if now_msec is None:
                now_msec = self.now_msec()

            previous = self.last_attempt_msec
            self.last_attempt_msec = now_msec

            if not self.interval_msec:
                return True
            if previous is None:
                return True
            return now_msec - previous >= self.interval_msec
