"""Pydantic request/response schemas for the web API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared_types import Proficiency, SortStrategy

# --- Validation ---


class SkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    proficiency: Proficiency


class ValidateRequest(BaseModel):
    """Skills to check against a track; camelCase keys are accepted too."""

    model_config = ConfigDict(populate_by_name=True)

    track: str
    skills: list[SkillIn] = Field(..., min_length=1, max_length=200)
    github_token: Optional[str] = Field(None, alias="githubToken")
    so_key: Optional[str] = Field(None, alias="soKey")
    sort_by: Optional[SortStrategy] = Field(None, alias="sortBy")


# --- Responses ---


class Envelope(BaseModel):
    success: bool = True
    data: Any = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
    uptime: float
    python_version: str
    roadmap_version: str
    roadmap_last_updated: str
    roadmap_source: str
