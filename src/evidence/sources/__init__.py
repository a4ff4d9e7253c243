"""Demand sources - async only."""

from .base import BaseDemandSource
from .github import GitHubDemandSource
from .offline import OfflineDemandSource
from .stackoverflow import StackOverflowDemandSource

__all__ = [
    "BaseDemandSource",
    "GitHubDemandSource",
    "OfflineDemandSource",
    "StackOverflowDemandSource",
]
