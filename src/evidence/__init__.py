"""External demand evidence: cache and provider sources."""

from .cache import CacheResult, EvidenceCache, build_key
from .models import DemandResult, MonthlyPoint, TrendSeries

__all__ = [
    "EvidenceCache",
    "CacheResult",
    "build_key",
    "DemandResult",
    "MonthlyPoint",
    "TrendSeries",
]
