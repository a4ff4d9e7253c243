"""Shared test fixtures for skillgap."""

import sys
from pathlib import Path
from typing import Optional

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from errors import EvidenceUnavailable  # noqa: E402
from evidence.cache import EvidenceCache  # noqa: E402
from evidence.sources.base import BaseDemandSource  # noqa: E402
from observability import metrics  # noqa: E402
from roadmap.gaps import GapAnalyzer  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float):
        self.now += ms / 1000.0


class FakeDemandSource(BaseDemandSource):
    """In-memory demand source: fixed counts per skill, optional failures."""

    def __init__(self, cache, provider: str, counts: Optional[dict] = None, failing=(), **kwargs):
        self._provider = provider
        self.counts = counts or {}
        self.failing = set(failing)
        self.calls: list[tuple] = []
        super().__init__(cache, **kwargs)

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def label(self) -> str:
        return self._provider.title()

    async def fetch_count(self, skill, track, credential=None, start=None, end=None) -> int:
        self.calls.append((skill, track, credential, start, end))
        if skill in self.failing:
            raise EvidenceUnavailable(self._provider, f"{self.label} API error: HTTP 503", status_code=503)
        return self.counts.get(skill, 0)

    async def status(self, credential=None):
        return {"remaining": 10, "authenticated": bool(credential or self.credential)}


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Fresh cache per test, on a fake clock."""
    return EvidenceCache(max_size=100, default_ttl_ms=12 * 3600 * 1000, clock=clock)


@pytest.fixture
def github_counts():
    return {"HTML": 1500, "CSS": 200, "React": 4000, "Node.js": 900}


@pytest.fixture
def stackoverflow_counts():
    return {"HTML": 400, "CSS": 800, "React": 2000, "Node.js": 100}


@pytest.fixture
def fake_github(cache, github_counts):
    return FakeDemandSource(cache, "github", counts=github_counts)


@pytest.fixture
def fake_stackoverflow(cache, stackoverflow_counts):
    return FakeDemandSource(cache, "stackoverflow", counts=stackoverflow_counts)


@pytest.fixture
def analyzer(fake_github, fake_stackoverflow):
    return GapAnalyzer(fake_github, fake_stackoverflow)


@pytest.fixture
def make_source(cache):
    """Factory for fake sources sharing the test cache."""

    def _make(provider: str, counts: Optional[dict] = None, failing=()) -> FakeDemandSource:
        return FakeDemandSource(cache, provider, counts=counts, failing=failing)

    return _make
