"""Fixed-window admission control."""

import logging
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from nps_proxy.services.cache import utcnow

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of an admission check."""

    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int


@dataclass
class _Window:
    started_at: datetime
    count: int


@dataclass
class FixedWindowRateLimiter:
    """Allow at most max_requests per client within each window."""

    window_seconds: int = 60
    max_requests: int = 120
    clock: Callable[[], datetime] = utcnow
    _windows: dict[str, _Window] = field(default_factory=dict, init=False)
    _last_sweep: datetime | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def check(self, client_id: str) -> RateLimitDecision:
        """Count a request for client_id and decide whether to admit it."""
        now = self.clock()
        window_length = timedelta(seconds=self.window_seconds)
        with self._lock:
            self._sweep(now, window_length)
            window = self._windows.get(client_id)
            if window is None or now - window.started_at >= window_length:
                window = _Window(started_at=now, count=0)
                self._windows[client_id] = window
            resets_in = window.started_at + window_length - now
            if window.count >= self.max_requests:
                retry_after = max(1, math.ceil(resets_in.total_seconds()))
                _logger.warning(
                    "Rate limit exceeded: client=%s limit=%s",
                    client_id,
                    self.max_requests,
                )
                return RateLimitDecision(
                    allowed=False,
                    limit=self.max_requests,
                    remaining=0,
                    retry_after_seconds=retry_after,
                )
            window.count += 1
            return RateLimitDecision(
                allowed=True,
                limit=self.max_requests,
                remaining=self.max_requests - window.count,
                retry_after_seconds=0,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: datetime, window_length: timedelta) -> None:
        """Drop elapsed windows, at most once per window length."""
        if self._last_sweep is not None and now - self._last_sweep < window_length:
            return
        self._windows = {
            client_id: window
            for client_id, window in self._windows.items()
            if now - window.started_at < window_length
        }
        self._last_sweep = now
