"""In-memory evidence cache with TTL expiry and LRU eviction."""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import structlog
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from errors import ConfigurationError

logger = structlog.get_logger().bind(source="evidence_cache")

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_MS = 12 * 3600 * 1000
DEFAULT_SWEEP_INTERVAL_SECONDS = 3600

KEY_SEPARATOR = "|"


def build_key(prefix: str, params: dict) -> str:
    """Build a cache key from a prefix and params, independent of param order."""
    parts = KEY_SEPARATOR.join(f"{name}:{params[name]}" for name in sorted(params))
    return f"{prefix}:{parts}"


@dataclass
class CacheEntry:
    value: Any
    expiry: float
    created_at: float


@dataclass
class CacheResult:
    """Value returned by get_or_default, tagged with where it came from."""

    data: Any
    from_cache: bool


class EvidenceCache:
    """Thread-safe TTL + LRU cache shared by all demand lookups.

    A single lock guards the map and its recency order. Producers passed to
    get_or_default run outside the lock, so concurrent misses on the same key
    may each call their producer; the last write wins.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        default_ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size <= 0:
            raise ConfigurationError(f"Cache max_size must be > 0, got {max_size}")
        if default_ttl_ms <= 0:
            raise ConfigurationError(f"Cache default_ttl_ms must be > 0, got {default_ttl_ms}")
        self.max_size = max_size
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._scheduler: Optional[BackgroundScheduler] = None

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> Any:
        """Store value with expiry now + ttl, evicting the LRU entry if full."""
        now = self._clock()
        ttl_ms = self.default_ttl_ms if ttl_ms is None else ttl_ms
        expiry = now + ttl_ms / 1000.0
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("cache.evicted", key=evicted)
            self._entries[key] = CacheEntry(value=value, expiry=expiry, created_at=now)
        return value

    def get(self, key: str) -> Any:
        """Return the stored value, or None when absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if now > entry.expiry:
                del self._entries[key]
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._entries)

    async def get_or_default(
        self,
        key: str,
        producer: Callable[[], Awaitable[Any]],
        ttl_ms: Optional[int] = None,
    ) -> CacheResult:
        """Return the cached value, or await producer once and cache its result.

        Exceptions from producer propagate and nothing is stored.
        """
        cached = self.get(key)
        if cached is not None:
            return CacheResult(data=cached, from_cache=True)

        fresh = await producer()
        self.set(key, fresh, ttl_ms)
        return CacheResult(data=fresh, from_cache=False)

    def clean_expired(self) -> int:
        """Delete every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now > entry.expiry]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def stats(self) -> dict:
        now = self._clock()
        with self._lock:
            total = len(self._entries)
            expired = sum(1 for entry in self._entries.values() if now > entry.expiry)
            hits, misses = self._hits, self._misses
        return {
            "total_entries": total,
            "valid_entries": total - expired,
            "expired_entries": expired,
            "max_size": self.max_size,
            "utilization_percent": round(total / self.max_size * 100, 1),
            "hits": hits,
            "misses": misses,
        }

    # --- Background sweep ---

    def _sweep(self):
        removed = self.clean_expired()
        if removed:
            logger.info("cache.swept", removed=removed)

    def start_sweeper(self, interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS):
        """Start periodic removal of expired entries on a background thread."""
        if self._scheduler is not None:
            return
        self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self._sweep,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id="evidence_cache_sweep",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()
        logger.info("cache.sweeper_started", interval_seconds=interval_seconds)

    def stop_sweeper(self):
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("cache.sweeper_stopped")

    @property
    def sweeper_running(self) -> bool:
        return self._scheduler is not None
