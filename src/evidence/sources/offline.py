"""Demand source that never leaves the process."""

from datetime import date
from typing import Optional

from evidence.sources.base import BaseDemandSource


class OfflineDemandSource(BaseDemandSource):
    """Reports zero demand for every skill; used by `--offline` and in tests.

    Goes through the same cache path as the network sources so cache
    behaviour is identical.
    """

    def __init__(self, cache, provider: str, **kwargs):
        self._provider = provider
        super().__init__(cache, **kwargs)

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def label(self) -> str:
        return f"{self._provider} (offline)"

    async def fetch_count(
        self,
        skill: str,
        track: str,
        credential: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        return 0

    async def status(self, credential: Optional[str] = None) -> Optional[dict]:
        return None
