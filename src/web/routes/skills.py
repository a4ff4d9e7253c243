"""Catalog routes."""

from fastapi import APIRouter, HTTPException

from errors import UnknownTrack
from roadmap.catalog import all_skills, core_skills
from web.models import Envelope

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.get("", response_model=Envelope)
async def list_skills():
    """Every skill name across all tracks, sorted (for autocomplete)."""
    return Envelope(data=all_skills())


@router.get("/core/{track}", response_model=Envelope)
async def list_core_skills(track: str):
    try:
        skills = core_skills(track)
    except UnknownTrack as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Envelope(data=[s.to_dict() for s in skills])
