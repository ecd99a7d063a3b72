from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

TOO_MANY_REQUESTS = "Too many requests, please try again later."


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the oldest hit leaves the window


class SlidingWindowRateLimiter:
    """
    Counts hits per key over the last `window_seconds`.

    Only accepted hits are recorded, so a client that keeps hammering a full
    window gets its slots back as its own older requests age out.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def _prune(self, key: str, now: float) -> Deque[float]:
        hits = self._hits[key]
        cutoff = now - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        return hits

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        hits = self._prune(key, now)

        if len(hits) >= self.limit:
            return RateLimitDecision(
                allowed=False,
                limit=self.limit,
                remaining=0,
                reset_after=max(0.0, hits[0] + self.window - now),
            )

        hits.append(now)
        return RateLimitDecision(
            allowed=True,
            limit=self.limit,
            remaining=self.limit - len(hits),
            reset_after=max(0.0, hits[0] + self.window - now),
        )

    def sweep(self) -> None:
        """Drop keys whose windows have fully expired."""
        now = self._clock()
        for key in list(self._hits):
            if not self._prune(key, now):
                del self._hits[key]


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _rate_limit_headers(decision: RateLimitDecision) -> Dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(math.ceil(decision.reset_after)),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies one limiter per path prefix, for every method under it."""

    def __init__(self, app, limiters: Dict[str, SlidingWindowRateLimiter]) -> None:
        super().__init__(app)
        self.limiters = limiters
        self._requests_seen = 0

    def _match(self, path: str) -> Optional[Tuple[str, SlidingWindowRateLimiter]]:
        for prefix, limiter in self.limiters.items():
            if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
                return prefix, limiter
        return None

    async def dispatch(self, request: Request, call_next):
        match = self._match(request.url.path)
        if match is None:
            return await call_next(request)
        prefix, limiter = match

        self._requests_seen += 1
        if self._requests_seen % 1000 == 0:
            for each in self.limiters.values():
                each.sweep()

        client = _client_key(request)
        decision = limiter.hit(f"rate_limit:{prefix}:{client}")
        headers = _rate_limit_headers(decision)

        if not decision.allowed:
            logger.warning("Rate limit hit path={} client={}", request.url.path, client)
            headers["Retry-After"] = str(math.ceil(decision.reset_after))
            return JSONResponse(
                status_code=429,
                content={"ok": False, "error": TOO_MANY_REQUESTS},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
