"""Dependency injection for FastAPI routes."""

from functools import lru_cache

from fastapi import Request

from cli.config import load_config_model
from cli.config_models import ValidatorConfig
from evidence.cache import EvidenceCache
from roadmap.gaps import GapAnalyzer


@lru_cache
def get_config() -> ValidatorConfig:
    """Load shared config (./config.yaml or ~/.skillgap/config.yaml plus env)."""
    return load_config_model()


def get_cache(request: Request) -> EvidenceCache:
    """The process-wide evidence cache created at startup."""
    return request.app.state.cache


def get_analyzer(request: Request) -> GapAnalyzer:
    return request.app.state.analyzer
