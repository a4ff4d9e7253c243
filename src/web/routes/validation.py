"""Validation, trend and provider status routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from cli.config_models import ValidatorConfig
from errors import UnknownTrack
from roadmap.gaps import Credentials, GapAnalyzer
from roadmap.models import UserSkill
from web.deps import get_analyzer, get_config
from web.models import Envelope, ValidateRequest

router = APIRouter(prefix="/api", tags=["validation"])


@router.post("/validate", response_model=Envelope)
async def validate_skills(
    body: ValidateRequest,
    analyzer: GapAnalyzer = Depends(get_analyzer),
    config: ValidatorConfig = Depends(get_config),
):
    """Gaps, demand evidence, learning order and suggestions for a track."""
    user_skills = [UserSkill(name=s.name, proficiency=s.proficiency) for s in body.skills]
    credentials = Credentials(github_token=body.github_token, stackoverflow_key=body.so_key)
    try:
        result = await analyzer.validate(
            body.track,
            user_skills,
            credentials=credentials,
            sort_strategy=body.sort_by or config.analyzer.default_sort,
        )
    except UnknownTrack as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Envelope(data=result.to_dict())


@router.get("/trends", response_model=Envelope)
async def get_skill_trends(
    skill: str = Query(..., min_length=1),
    track: str = Query(...),
    github_token: str | None = Query(None, alias="githubToken"),
    so_key: str | None = Query(None, alias="soKey"),
    analyzer: GapAnalyzer = Depends(get_analyzer),
):
    """Six months of demand for one skill."""
    credentials = Credentials(github_token=github_token, stackoverflow_key=so_key)
    try:
        trend = await analyzer.get_skill_trend(skill, track, credentials)
    except UnknownTrack as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Envelope(data=trend.to_dict())


@router.get("/rate-limit-status", response_model=Envelope)
async def rate_limit_status(
    github_token: str | None = Query(None, alias="githubToken"),
    so_key: str | None = Query(None, alias="soKey"),
    analyzer: GapAnalyzer = Depends(get_analyzer),
):
    status = await analyzer.provider_status(
        Credentials(github_token=github_token, stackoverflow_key=so_key)
    )
    return Envelope(data=status)
