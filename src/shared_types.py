"""Shared enums and constants for skillgap."""

from enum import StrEnum


class Track(StrEnum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"


class Proficiency(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    STRONG = "strong"


class SortStrategy(StrEnum):
    IMPACT = "impact"
    DEMAND = "demand"
    LEARNING_ORDER = "learning_order"
    QUICK_WINS = "quick_wins"


class DemandCategory(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Section(StrEnum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    BOTH = "both"


class DemandProvider(StrEnum):
    GITHUB = "github"
    STACKOVERFLOW = "stackoverflow"


ROADMAP_VERSION = "v1.0"
ROADMAP_LAST_UPDATED = "2026-02-01"
ROADMAP_SOURCE = "roadmap.sh"
ROADMAP_SOURCE_URL = "https://roadmap.sh"

# Months of history behind demand counts and trend series
DEMAND_WINDOW_MONTHS = 6

# Combined score >= HIGH is high demand, >= MEDIUM is medium, else low
DEMAND_THRESHOLDS = {
    DemandCategory.HIGH: 1000,
    DemandCategory.MEDIUM: 300,
}

# Stack Overflow counts weigh half as much as GitHub counts
STACKOVERFLOW_SCORE_FACTOR = 0.5
