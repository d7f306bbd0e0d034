"""Fixed-window request counter keyed by client address."""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Allow ``max_requests`` per ``window_seconds`` for each key.

    The table is capped at ``max_clients``; the oldest tracked client is
    forgotten first. Lost updates under concurrency only under-count.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        max_clients: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._windows: OrderedDict[str, _Window] = OrderedDict()

    def __len__(self) -> int:
        return len(self._windows)

    def hit(self, key: str) -> bool:
        """Record one request; returns False when the key is over its limit."""
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now > window.reset_at:
            if window is None and len(self._windows) >= self.max_clients:
                self._windows.popitem(last=False)
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return True

        if window.count >= self.max_requests:
            return False

        window.count += 1
        return True

    def reset(self) -> None:
        self._windows.clear()


def client_ip(headers, fallback: str | None = None) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or headers.get("x-real-ip") or fallback or "unknown"
