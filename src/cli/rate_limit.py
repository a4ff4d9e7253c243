"""Per-provider token buckets for outbound demand lookups."""

import asyncio
import time
from typing import Awaitable, Callable

import structlog

from cli.config_models import RateLimitConfig
from observability import metrics

logger = structlog.get_logger().bind(source="rate_limit")


class TokenBucketRateLimiter:
    """Token bucket guarding one provider's API.

    Up to `burst` lookups go out immediately; after that callers wait for
    tokens refilled at `requests_per_second`. Each wait is logged and counted
    under rate_limit.waits.
    """

    def __init__(
        self,
        name: str = "default",
        requests_per_second: float = 5.0,
        burst: int = 10,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if requests_per_second <= 0 or burst < 1:
            raise ValueError(f"Invalid rate limit for {name}: {requests_per_second}/s, burst {burst}")
        self.name = name
        self.rate = requests_per_second
        self.max_tokens = burst
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(burst)
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, name: str, config: RateLimitConfig) -> "TokenBucketRateLimiter":
        return cls(name=name, requests_per_second=config.requests_per_second, burst=config.burst)

    def _refill(self) -> None:
        now = self._clock()
        self._tokens = min(self.max_tokens, self._tokens + (now - self._last_refill) * self.rate)
        self._last_refill = now

    async def acquire(self) -> float:
        """Take one token. Returns how long the caller waited, in seconds."""
        waited = 0.0
        async with self._lock:
            self._refill()
            while self._tokens < 1.0:
                wait_time = (1.0 - self._tokens) / self.rate
                logger.debug("rate_limit.waiting", provider=self.name, wait_seconds=round(wait_time, 3))
                metrics.counter("rate_limit.waits")
                await self._sleep(wait_time)
                waited += wait_time
                self._refill()
            self._tokens -= 1.0
        return waited

    @property
    def available_tokens(self) -> float:
        self._refill()
        return self._tokens
