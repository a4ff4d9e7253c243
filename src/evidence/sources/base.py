"""Base demand source: cached, rate-limited provider lookups."""

import calendar
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

import httpx
import structlog

from cli.rate_limit import TokenBucketRateLimiter
from cli.retry import http_retry
from errors import EvidenceUnavailable
from evidence.cache import EvidenceCache, build_key
from evidence.models import DemandResult, MonthlyPoint, TrendSeries
from shared_types import DEMAND_WINDOW_MONTHS

logger = structlog.get_logger().bind(source="demand_source")

USER_AGENT = "Skillgap-Evidence/1.0"
DEFAULT_TIMEOUT = 10.0


def shift_month(day: date, months: int) -> date:
    """First day of the month `months` away from `day` (negative = past)."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_windows(count: int, today: Optional[date] = None) -> list[tuple[date, date]]:
    """(first day, last day) of the last `count` months, oldest first, current month last."""
    today = today or date.today()
    windows = []
    for offset in range(count - 1, -1, -1):
        start = shift_month(today, -offset)
        last_day = calendar.monthrange(start.year, start.month)[1]
        windows.append((start, start.replace(day=last_day)))
    return windows


class BaseDemandSource(ABC):
    """Async base class for demand providers.

    Every lookup goes through the shared EvidenceCache. Lookups never raise:
    a failed provider call comes back as a zero count carrying the error.
    """

    def __init__(
        self,
        cache: EvidenceCache,
        credential: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = 2,
        rate_limiter: Optional[TokenBucketRateLimiter] = None,
        client: Optional[httpx.AsyncClient] = None,
        window_months: int = DEMAND_WINDOW_MONTHS,
    ):
        self.cache = cache
        self.credential = credential
        self.window_months = window_months
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(name=self.provider)
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        self._get_with_retry = http_retry(max_attempts=retry_attempts)(self._get)

    @property
    @abstractmethod
    def provider(self) -> str:
        """Unique provider identifier."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Human-readable provider name used in error messages."""
        pass

    @abstractmethod
    async def fetch_count(
        self,
        skill: str,
        track: str,
        credential: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        """Ask the provider for a count. Raises EvidenceUnavailable on failure."""
        pass

    @abstractmethod
    async def status(self, credential: Optional[str] = None) -> Optional[dict]:
        """Provider rate limit / quota status, or None if it can't be read."""
        pass

    def demand_window(self) -> tuple[Optional[date], Optional[date]]:
        """Date range for current demand counts. Unbounded by default."""
        return None, None

    def status_error(self, exc: httpx.HTTPStatusError) -> EvidenceUnavailable:
        """Map an HTTP error status to a provider error."""
        return EvidenceUnavailable(
            self.provider,
            f"{self.label} API error: HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
        )

    async def _get(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> dict:
        await self.rate_limiter.acquire()
        response = await self.client.get(url, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise EvidenceUnavailable(self.provider, f"{self.label} API returned an unexpected response")
        return data

    async def get_json(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> dict:
        """GET a JSON document, retrying transport errors only."""
        try:
            logger.debug("evidence.fetch", provider=self.provider, url=url)
            return await self._get_with_retry(url, params=params, headers=headers)
        except httpx.HTTPStatusError as e:
            raise self.status_error(e) from e
        except httpx.RequestError as e:
            raise EvidenceUnavailable(self.provider, f"{self.label} API error: {e}") from e
        except ValueError as e:
            raise EvidenceUnavailable(self.provider, f"{self.label} API returned invalid JSON") from e

    async def demand(self, skill: str, track: str, credential: Optional[str] = None) -> DemandResult:
        """Current demand for a skill, cached per (provider, skill, track, window)."""
        key = build_key(
            f"{self.provider}:demand",
            {"skill": skill, "track": track, "window": self.window_months},
        )

        async def produce() -> DemandResult:
            start, end = self.demand_window()
            count = await self.fetch_count(skill, track, credential, start=start, end=end)
            return DemandResult(provider=self.provider, skill=skill, track=track, count=count)

        try:
            result = await self.cache.get_or_default(key, produce)
            return result.data
        except Exception as e:
            logger.warning(
                "evidence.demand_failed",
                provider=self.provider,
                skill=skill,
                track=track,
                error=str(e),
            )
            return DemandResult(
                provider=self.provider,
                skill=skill,
                track=track,
                count=0,
                error=str(e),
            )

    async def demand_over_time(
        self, skill: str, track: str, credential: Optional[str] = None
    ) -> TrendSeries:
        """Monthly demand for the last window_months months, oldest first.

        A month whose lookup fails is reported as count 0 with error set.
        """
        key = build_key(
            f"{self.provider}:demand-trend",
            {"skill": skill, "track": track, "months": self.window_months},
        )

        async def produce() -> TrendSeries:
            points = []
            for start, end in month_windows(self.window_months):
                month = start.strftime("%Y-%m")
                label = start.strftime("%b %Y")
                try:
                    count = await self.fetch_count(skill, track, credential, start=start, end=end)
                    points.append(MonthlyPoint(month=month, label=label, count=count))
                except Exception as e:
                    logger.warning(
                        "evidence.trend_month_failed",
                        provider=self.provider,
                        skill=skill,
                        month=month,
                        error=str(e),
                    )
                    points.append(MonthlyPoint(month=month, label=label, count=0, error=True))
            return TrendSeries(provider=self.provider, skill=skill, track=track, monthly_data=points)

        result = await self.cache.get_or_default(key, produce)
        return result.data

    async def close(self):
        """Close the async client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
