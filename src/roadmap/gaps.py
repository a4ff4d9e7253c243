"""Gap analyzer: missing core skills, demand evidence, ranking and learning path."""

import asyncio
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

import structlog

from errors import ConfigurationError
from evidence.models import DemandResult, utc_timestamp
from evidence.sources.base import BaseDemandSource
from observability import metrics
from roadmap.catalog import Skill, core_skills, skill_weight
from roadmap.models import (
    Evidence,
    Gap,
    KeepSharp,
    ProviderEvidence,
    SectionResult,
    SkillTrend,
    TrendPoint,
    UserSkill,
    ValidationResult,
    combined_score,
)
from roadmap.prerequisites import get_learning_order, get_suggested_next
from shared_types import ROADMAP_VERSION, Proficiency, Section, SortStrategy, Track

logger = structlog.get_logger()

DEFAULT_SUGGESTION_COUNT = 3


@dataclass
class Credentials:
    """Per-request provider credentials; None falls back to configured ones."""

    github_token: Optional[str] = None
    stackoverflow_key: Optional[str] = None


def compute_gaps(track: str, skills: Sequence[Skill], user_skills: Iterable[UserSkill]) -> list[Gap]:
    """Core skills the user hasn't declared, compared case-insensitively, in catalog order."""
    declared = {s.name.lower() for s in user_skills}
    return [
        Gap(skill=skill.name, weight=skill_weight(track, skill.name), section=skill.section)
        for skill in skills
        if skill.name.lower() not in declared
    ]


def find_keep_sharp(
    track: str, user_skills: Iterable[UserSkill], skills: Sequence[Skill]
) -> list[KeepSharp]:
    """Strong-proficiency skills that are also core, heaviest first."""
    core_names = {s.name.lower() for s in skills}
    keep = [
        KeepSharp(skill=s.name, weight=skill_weight(track, s.name))
        for s in user_skills
        if s.proficiency == Proficiency.STRONG and s.name.lower() in core_names
    ]
    return sorted(keep, key=lambda k: k.weight, reverse=True)


def sort_gaps(gaps: Sequence[Gap], strategy: str) -> list[Gap]:
    """Stable sort by strategy; ties keep their incoming (catalog) order."""
    strategy = SortStrategy(strategy)
    if strategy == SortStrategy.IMPACT:
        return sorted(gaps, key=lambda g: g.weight, reverse=True)
    if strategy == SortStrategy.DEMAND:
        return sorted(gaps, key=lambda g: g.score, reverse=True)
    if strategy == SortStrategy.QUICK_WINS:
        # High demand relative to difficulty; +1 keeps weight 0 safe
        return sorted(gaps, key=lambda g: g.score / (g.weight + 1), reverse=True)
    # learning_order is applied separately by the prerequisite graph
    return list(gaps)


def coverage_percent(gap_count: int, core_count: int) -> float:
    if core_count == 0:
        raise ConfigurationError("Track has no core skills; coverage is undefined")
    percent = (1 - gap_count / core_count) * 100
    # Exact ties round up (6.25 -> 6.3) instead of to even
    return float(Decimal(percent).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def partition_by_section(gaps: Iterable[Gap]) -> dict[str, list[Gap]]:
    """Split fullstack gaps into frontend / backend / both."""
    sections: dict[str, list[Gap]] = {str(s): [] for s in Section}
    for gap in gaps:
        section = gap.section or Section.BOTH
        sections[str(section)].append(gap)
    return sections


def _provider_evidence(result) -> ProviderEvidence:
    if isinstance(result, DemandResult):
        return ProviderEvidence(count=result.count, error=result.error)
    # An exception gathered from a provider that broke its no-raise contract
    metrics.counter("evidence.provider_errors")
    return ProviderEvidence(count=0, error=str(result) or type(result).__name__)


class GapAnalyzer:
    """Compare declared skills against a track catalog and rank the gaps.

    Demand sources are injected; they carry the shared EvidenceCache.
    """

    def __init__(
        self,
        github: BaseDemandSource,
        stackoverflow: BaseDemandSource,
        suggestion_count: int = DEFAULT_SUGGESTION_COUNT,
    ):
        self.github = github
        self.stackoverflow = stackoverflow
        self.suggestion_count = suggestion_count

    async def _evidence_for(self, gap: Gap, track: str, credentials: Credentials) -> Gap:
        try:
            gh_result, so_result = await asyncio.gather(
                self.github.demand(gap.skill, track, credentials.github_token),
                self.stackoverflow.demand(gap.skill, track, credentials.stackoverflow_key),
                return_exceptions=True,
            )
            github = _provider_evidence(gh_result)
            stackoverflow = _provider_evidence(so_result)
            for provider, result in (("github", gh_result), ("stackoverflow", so_result)):
                if isinstance(result, BaseException):
                    logger.warning(
                        "evidence.provider_failed",
                        provider=provider,
                        skill=gap.skill,
                        error=str(result),
                    )
            evidence = Evidence(
                github=github,
                stackoverflow=stackoverflow,
                combined_score=combined_score(github.count, stackoverflow.count),
                timestamp=utc_timestamp(),
                github_timestamp=getattr(gh_result, "timestamp", None),
                stackoverflow_timestamp=getattr(so_result, "timestamp", None),
            )
        except Exception as e:
            logger.error("evidence.gap_failed", skill=gap.skill, error=str(e))
            metrics.counter("evidence.gap_errors")
            evidence = Evidence.unavailable(str(e), utc_timestamp())
        return replace(gap, evidence=evidence)

    async def enrich_with_evidence(
        self,
        gaps: Sequence[Gap],
        track: str,
        credentials: Optional[Credentials] = None,
    ) -> list[Gap]:
        """Attach demand evidence to every gap, fetching all gaps concurrently.

        Never raises for provider trouble: failures show up as zero counts
        with an error on the affected gap.
        """
        credentials = credentials or Credentials()
        return list(
            await asyncio.gather(*(self._evidence_for(gap, track, credentials) for gap in gaps))
        )

    async def validate(
        self,
        track: str,
        user_skills: Sequence[UserSkill],
        credentials: Optional[Credentials] = None,
        sort_strategy: str = SortStrategy.IMPACT,
    ) -> ValidationResult:
        """Full validation: gaps, evidence, ranking, learning order and suggestions.

        Raises UnknownTrack for tracks outside the catalog. For fullstack, the
        result also carries per-section gap lists.
        """
        with metrics.timer("validate"):
            sort_strategy = SortStrategy(sort_strategy)
            skills = core_skills(track)
            track = Track(track)

            gaps = compute_gaps(track, skills, user_skills)
            keep_sharp = find_keep_sharp(track, user_skills, skills)
            coverage = coverage_percent(len(gaps), len(skills))

            enriched = await self.enrich_with_evidence(gaps, track, credentials)
            sorted_gaps = sort_gaps(enriched, sort_strategy)

            learning_order = get_learning_order(track, [g.skill for g in sorted_gaps])
            declared = [s.name for s in user_skills]
            suggested = get_suggested_next(track, declared, learning_order, self.suggestion_count)

            sections = None
            if track == Track.FULLSTACK:
                sections = {
                    name: SectionResult(gaps=sort_gaps(section_gaps, sort_strategy))
                    for name, section_gaps in partition_by_section(enriched).items()
                }

        logger.info(
            "validation.completed",
            track=str(track),
            gaps=len(gaps),
            coverage=coverage,
            sorted_by=str(sort_strategy),
        )
        return ValidationResult(
            track=track,
            total_core_skills=len(skills),
            user_skill_count=len(user_skills),
            gap_count=len(gaps),
            coverage_percent=coverage,
            gaps=sorted_gaps,
            keep_sharp=keep_sharp,
            learning_order=learning_order,
            suggested_next=suggested,
            sorted_by=sort_strategy,
            timestamp=utc_timestamp(),
            roadmap_version=ROADMAP_VERSION,
            sections=sections,
        )

    async def get_skill_trend(
        self, skill: str, track: str, credentials: Optional[Credentials] = None
    ) -> SkillTrend:
        """Monthly demand for one skill, both providers merged."""
        credentials = credentials or Credentials()
        core_skills(track)  # raises UnknownTrack
        track = Track(track)
        gh_series, so_series = await asyncio.gather(
            self.github.demand_over_time(skill, track, credentials.github_token),
            self.stackoverflow.demand_over_time(skill, track, credentials.stackoverflow_key),
        )
        so_by_month = {p.month: p.count for p in so_series.monthly_data}
        points = []
        for gh_point in gh_series.monthly_data:
            so_count = so_by_month.get(gh_point.month, 0)
            points.append(
                TrendPoint(
                    month=gh_point.month,
                    label=gh_point.label,
                    github=gh_point.count,
                    stackoverflow=so_count,
                    combined=combined_score(gh_point.count, so_count),
                )
            )
        return SkillTrend(skill=skill, track=track, monthly_data=points, timestamp=utc_timestamp())

    async def close(self):
        """Close both demand sources."""
        await asyncio.gather(self.github.close(), self.stackoverflow.close())

    async def provider_status(self, credentials: Optional[Credentials] = None) -> dict:
        credentials = credentials or Credentials()
        github, stackoverflow = await asyncio.gather(
            self.github.status(credentials.github_token),
            self.stackoverflow.status(credentials.stackoverflow_key),
        )
        return {"github": github, "stackoverflow": stackoverflow}
