from __future__ import annotations

import threading
import time
from collections import deque
from functools import wraps
from typing import Callable, Deque, Dict, Optional

from flask import request

from ..core.exceptions import RateLimitError


class SlidingWindowRateLimiter:
    """In-memory per-key sliding window limiter.

    State lives in the process only; a restart clears it.
    """

    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Optional[Callable[[], float]] = None,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self._max = max_requests
        self._window = float(window_seconds)
        self._clock = clock or time.monotonic
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._next_prune = self._clock() + self._window

    def allow(self, key: str) -> bool:
        now = self._clock()
        cutoff = now - self._window
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self._max:
                return False
            hits.append(now)
            if now >= self._next_prune:
                self._prune(cutoff)
                self._next_prune = now + self._window
            return True

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    def _prune(self, cutoff: float) -> None:
        # idle clients are dropped at most once per window
        stale = [k for k, v in self._hits.items() if not v or v[-1] <= cutoff]
        for k in stale:
            del self._hits[k]


def rate_limited(limiter: SlidingWindowRateLimiter):
    """View decorator keyed by the client address."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not limiter.allow(request.remote_addr or "unknown"):
                raise RateLimitError("Too many requests, please try again later")
            return view(*args, **kwargs)

        return wrapper

    return decorator
