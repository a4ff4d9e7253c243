"""Result types returned by demand sources."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional


def utc_timestamp() -> str:
    return datetime.now().astimezone().isoformat()


@dataclass
class DemandResult:
    """Current demand count for one skill from one provider.

    A failed lookup is still a DemandResult: count 0 with error set.
    """

    provider: str
    skill: str
    track: str
    count: int
    timestamp: str = field(default_factory=utc_timestamp)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthlyPoint:
    month: str  # YYYY-MM
    label: str  # e.g. "Mar 2026"
    count: int
    error: bool = False


@dataclass
class TrendSeries:
    """Monthly demand counts for one skill, oldest month first."""

    provider: str
    skill: str
    track: str
    monthly_data: list[MonthlyPoint]
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        return asdict(self)
