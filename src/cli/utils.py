"""Shared CLI utilities."""

import asyncio
from typing import Optional

import click
import structlog
from rich.console import Console

from cli.config_models import ValidatorConfig
from cli.rate_limit import TokenBucketRateLimiter
from evidence.cache import EvidenceCache
from evidence.sources import GitHubDemandSource, OfflineDemandSource, StackOverflowDemandSource
from roadmap.gaps import GapAnalyzer
from roadmap.models import UserSkill
from shared_types import DemandProvider, Proficiency

console = Console()
logger = structlog.get_logger()

DEFAULT_PROFICIENCY = Proficiency.INTERMEDIATE


def build_cache(config: ValidatorConfig) -> EvidenceCache:
    return EvidenceCache(
        max_size=config.cache.max_size,
        default_ttl_ms=config.cache.default_ttl_millis,
    )


def build_analyzer(
    config: ValidatorConfig,
    cache: Optional[EvidenceCache] = None,
    offline: bool = False,
) -> GapAnalyzer:
    """Wire the cache and both demand sources into a GapAnalyzer.

    Args:
        config: Loaded configuration.
        cache: Shared cache; a fresh one is built from config if omitted.
        offline: Use zero-count sources instead of the network.
    """
    cache = cache or build_cache(config)
    providers = config.providers

    if offline:
        github = OfflineDemandSource(cache, DemandProvider.GITHUB)
        stackoverflow = OfflineDemandSource(cache, DemandProvider.STACKOVERFLOW)
    else:
        common = {
            "timeout": providers.timeout_seconds,
            "retry_attempts": providers.retry_attempts,
        }
        github = GitHubDemandSource(
            cache,
            credential=providers.github_token,
            rate_limiter=TokenBucketRateLimiter.from_config(DemandProvider.GITHUB, providers.github_rate_limit),
            **common,
        )
        stackoverflow = StackOverflowDemandSource(
            cache,
            credential=providers.stackoverflow_key,
            rate_limiter=TokenBucketRateLimiter.from_config(
                DemandProvider.STACKOVERFLOW, providers.stackoverflow_rate_limit
            ),
            **common,
        )

    return GapAnalyzer(github, stackoverflow, suggestion_count=config.analyzer.suggestion_count)


def parse_skill(value: str) -> UserSkill:
    """Parse 'React' or 'React:strong' into a UserSkill."""
    name, _, level = value.rpartition(":") if ":" in value else (value, "", "")
    name = name.strip()
    if not name:
        raise click.BadParameter(f"Empty skill name in {value!r}")
    try:
        return UserSkill(name=name, proficiency=level.strip().lower() or DEFAULT_PROFICIENCY)
    except ValueError:
        choices = ", ".join(p.value for p in Proficiency)
        raise click.BadParameter(f"Invalid proficiency {level!r} for {name}. Must be one of: {choices}")


def run_analyzer(analyzer: GapAnalyzer, operation):
    """Run `operation(analyzer)` on a fresh event loop, then close the sources."""

    async def _run():
        try:
            return await operation(analyzer)
        finally:
            await analyzer.close()

    return asyncio.run(_run())


def demand_style(category: str) -> str:
    return {"high": "[green]high[/]", "medium": "[yellow]medium[/]"}.get(category, "[dim]low[/]")
