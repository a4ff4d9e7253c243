"""Per-request data types for skill validation."""

from dataclasses import asdict, dataclass, field
from typing import Optional

from shared_types import (
    DEMAND_THRESHOLDS,
    STACKOVERFLOW_SCORE_FACTOR,
    DemandCategory,
    Proficiency,
    Section,
)


def categorize_demand(score: float) -> DemandCategory:
    """Map a combined score onto low / medium / high."""
    if score >= DEMAND_THRESHOLDS[DemandCategory.HIGH]:
        return DemandCategory.HIGH
    if score >= DEMAND_THRESHOLDS[DemandCategory.MEDIUM]:
        return DemandCategory.MEDIUM
    return DemandCategory.LOW


def combined_score(github_count: int, stackoverflow_count: int) -> float:
    return github_count + stackoverflow_count * STACKOVERFLOW_SCORE_FACTOR


@dataclass
class UserSkill:
    name: str
    proficiency: Proficiency

    def __post_init__(self):
        # Raises ValueError for anything outside beginner/intermediate/strong
        self.proficiency = Proficiency(self.proficiency)


@dataclass
class ProviderEvidence:
    count: int = 0
    error: Optional[str] = None


@dataclass
class Evidence:
    """Demand signal attached to a gap.

    demand_category is derived from combined_score on every access.
    """

    github: ProviderEvidence
    stackoverflow: ProviderEvidence
    combined_score: float
    timestamp: str
    github_timestamp: Optional[str] = None
    stackoverflow_timestamp: Optional[str] = None

    @property
    def demand_category(self) -> DemandCategory:
        return categorize_demand(self.combined_score)

    @classmethod
    def unavailable(cls, error: str, timestamp: str) -> "Evidence":
        """All-zero evidence for a gap whose lookup failed outright."""
        return cls(
            github=ProviderEvidence(0, error),
            stackoverflow=ProviderEvidence(0, error),
            combined_score=0.0,
            timestamp=timestamp,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["demand_category"] = str(self.demand_category)
        return data


@dataclass
class Gap:
    """A core skill the user hasn't declared."""

    skill: str
    weight: int
    section: Optional[Section] = None
    evidence: Optional[Evidence] = None

    @property
    def score(self) -> float:
        return self.evidence.combined_score if self.evidence else 0.0

    def to_dict(self) -> dict:
        data = {"skill": self.skill, "weight": self.weight}
        if self.section is not None:
            data["section"] = str(self.section)
        if self.evidence is not None:
            data["evidence"] = self.evidence.to_dict()
        return data


@dataclass
class KeepSharp:
    """A core skill the user already rates as strong."""

    skill: str
    weight: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Suggestion:
    skill: str
    reason: str
    prerequisites: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SectionResult:
    gaps: list[Gap]

    @property
    def count(self) -> int:
        return len(self.gaps)

    def to_dict(self) -> dict:
        return {"gaps": [g.to_dict() for g in self.gaps], "count": self.count}


@dataclass
class ValidationResult:
    track: str
    total_core_skills: int
    user_skill_count: int
    gap_count: int
    coverage_percent: float
    gaps: list[Gap]
    keep_sharp: list[KeepSharp]
    learning_order: list[str]
    suggested_next: list[Suggestion]
    sorted_by: str
    timestamp: str
    roadmap_version: str
    sections: Optional[dict[str, SectionResult]] = None

    def to_dict(self) -> dict:
        data = {
            "track": str(self.track),
            "total_core_skills": self.total_core_skills,
            "user_skill_count": self.user_skill_count,
            "gap_count": self.gap_count,
            "coverage_percent": self.coverage_percent,
            "gaps": [g.to_dict() for g in self.gaps],
            "keep_sharp": [k.to_dict() for k in self.keep_sharp],
            "learning_order": list(self.learning_order),
            "suggested_next": [s.to_dict() for s in self.suggested_next],
            "sorted_by": str(self.sorted_by),
            "timestamp": self.timestamp,
            "roadmap_version": self.roadmap_version,
        }
        if self.sections is not None:
            data["sections"] = {name: s.to_dict() for name, s in self.sections.items()}
        return data


@dataclass
class TrendPoint:
    month: str
    label: str
    github: int
    stackoverflow: int
    combined: float


@dataclass
class SkillTrend:
    skill: str
    track: str
    monthly_data: list[TrendPoint]
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)
