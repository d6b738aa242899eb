"""Usage tracking and rate limiting for classifier calls."""

from collections import deque
from datetime import datetime, timedelta
from typing import Any, Deque, Dict, Optional

from autothreads.config import CONFIG


class UsageLimitExceeded(Exception):
    """Raised when a usage limit is exceeded"""
    pass


_WINDOWS = (
    ("max_calls_per_minute", 60, "Per-minute"),
    ("max_calls_per_hour", 3600, "Per-hour"),
    ("max_calls_per_day", 86400, "Daily"),
)


class UsageTracker:
    """Sliding-window call counter kept in memory for the process lifetime."""

    def __init__(self, limits: Optional[Dict[str, Any]] = None):
        self.limits = limits if limits is not None else CONFIG["usage_limits"]
        self._calls: Deque[datetime] = deque()
        self.total_calls = 0

    def _prune(self, now: datetime):
        cutoff = now - timedelta(days=1)
        while self._calls and self._calls[0] <= cutoff:
            self._calls.popleft()

    def _calls_since(self, seconds: float, now: datetime) -> int:
        cutoff = now - timedelta(seconds=seconds)
        return sum(1 for ts in self._calls if ts > cutoff)

    def check_limits(self, now: Optional[datetime] = None):
        """Raise UsageLimitExceeded if the next call would break a limit."""
        if self.limits.get("paused", False):
            raise UsageLimitExceeded("Usage is paused by configuration")

        now = now or datetime.now()
        self._prune(now)
        for key, seconds, label in _WINDOWS:
            used = self._calls_since(seconds, now)
            if used >= self.limits[key]:
                raise UsageLimitExceeded(f"{label} limit reached: {used}/{self.limits[key]}")

    def record_call(self, now: Optional[datetime] = None):
        self._calls.append(now or datetime.now())
        self.total_calls += 1
