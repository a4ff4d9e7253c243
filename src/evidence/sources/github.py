"""GitHub repository search as a demand signal."""

import re
from datetime import date, datetime, timezone
from typing import Optional

import httpx
import structlog

from errors import EvidenceUnavailable
from evidence.sources.base import BaseDemandSource
from shared_types import DemandProvider, Track

logger = structlog.get_logger()

GITHUB_API = "https://api.github.com"

TRACK_CONTEXT = {
    Track.FRONTEND: "frontend OR client-side OR browser",
    Track.BACKEND: "backend OR server-side OR api",
    Track.FULLSTACK: "fullstack OR full-stack OR web-development",
}


def normalize_search_term(skill: str) -> str:
    """'Node.js' -> 'nodejs', 'ES6+' -> 'es6plus', 'npm/yarn' -> 'npm-yarn'."""
    term = re.sub(r"[/\\]", "-", skill.lower())
    term = term.replace("+", "plus")
    return term.replace(".", "")


def build_query(
    skill: str,
    track: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> str:
    """Repository search query for a skill, scoped to the track and optional creation range."""
    query = f"{normalize_search_term(skill)} in:readme,description"
    context = TRACK_CONTEXT.get(track)
    if context:
        query += f" {context}"
    if start and end:
        query += f" created:{start.isoformat()}..{end.isoformat()}"
    return query


class GitHubDemandSource(BaseDemandSource):
    """Counts repositories mentioning a skill."""

    @property
    def provider(self) -> str:
        return DemandProvider.GITHUB

    @property
    def label(self) -> str:
        return "GitHub"

    def headers(self, credential: Optional[str] = None) -> dict:
        headers = {"Accept": "application/vnd.github.v3+json"}
        token = credential or self.credential
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    def status_error(self, exc: httpx.HTTPStatusError) -> EvidenceUnavailable:
        code = exc.response.status_code
        if code == 403:
            message = "GitHub API rate limit exceeded. Please provide an API token."
        elif code == 401:
            message = "Invalid GitHub token. Please check your credentials."
        else:
            message = f"GitHub API error: HTTP {code}"
        return EvidenceUnavailable(self.provider, message, status_code=code)

    async def fetch_count(
        self,
        skill: str,
        track: str,
        credential: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        params = {
            "q": build_query(skill, track, start, end),
            "sort": "stars",
            "order": "desc",
            "per_page": 1,
        }
        data = await self.get_json(
            f"{GITHUB_API}/search/repositories",
            params=params,
            headers=self.headers(credential),
        )
        return int(data.get("total_count") or 0)

    async def status(self, credential: Optional[str] = None) -> Optional[dict]:
        try:
            data = await self.get_json(f"{GITHUB_API}/rate_limit", headers=self.headers(credential))
            rate = data["rate"]
        except (EvidenceUnavailable, KeyError) as e:
            logger.warning("github.rate_limit_check_failed", error=str(e))
            return None
        return {
            "limit": rate.get("limit"),
            "remaining": rate.get("remaining"),
            "reset": datetime.fromtimestamp(rate.get("reset", 0), tz=timezone.utc).isoformat(),
            "authenticated": bool(credential or self.credential),
        }
