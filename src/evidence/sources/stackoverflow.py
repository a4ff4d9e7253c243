"""Stack Overflow question volume as a demand signal."""

import re
from datetime import date, datetime, time, timezone
from typing import Optional

import httpx
import structlog

from errors import EvidenceUnavailable
from evidence.sources.base import BaseDemandSource, shift_month
from shared_types import DemandProvider

logger = structlog.get_logger()

STACKEXCHANGE_API = "https://api.stackexchange.com/2.3"

# Normalized skill -> tags to query
TAG_ALIASES = {
    "javascript": ["javascript", "js"],
    "typescript": ["typescript", "ts"],
    "nodejs": ["node.js", "nodejs"],
    "reactjs": ["reactjs", "react"],
    "react": ["reactjs", "react"],
    "expressjs": ["express", "expressjs"],
    "mongodb": ["mongodb", "mongo"],
    "postgresql": ["postgresql", "postgres"],
    "css3": ["css", "css3"],
    "html5": ["html", "html5"],
    "es6plus": ["ecmascript-6", "es6"],
    "async-await": ["async-await", "javascript"],
    "jwt": ["jwt", "json-web-token"],
    "oauth": ["oauth", "oauth-2.0"],
}


def build_tags(skill: str) -> list[str]:
    """Stack Overflow tags for a skill name."""
    tag = re.sub(r"\s+", "-", skill.lower())
    tag = tag.replace("/", "-").replace(".", "").replace("+", "plus")
    return list(TAG_ALIASES.get(tag, [tag]))


def _epoch(day: date, end_of_day: bool = False) -> int:
    moment = datetime.combine(day, time.max if end_of_day else time.min, tzinfo=timezone.utc)
    return int(moment.timestamp())


class StackOverflowDemandSource(BaseDemandSource):
    """Counts Stack Overflow questions tagged with a skill."""

    @property
    def provider(self) -> str:
        return DemandProvider.STACKOVERFLOW

    @property
    def label(self) -> str:
        return "Stack Overflow"

    def demand_window(self) -> tuple[Optional[date], Optional[date]]:
        # Current demand only looks at recent questions
        return shift_month(date.today(), -self.window_months), None

    def query_params(self, credential: Optional[str] = None) -> dict:
        params = {"site": "stackoverflow"}
        key = credential or self.credential
        if key:
            params["key"] = key
        return params

    def status_error(self, exc: httpx.HTTPStatusError) -> EvidenceUnavailable:
        code = exc.response.status_code
        message = f"Stack Overflow API error: HTTP {code}"
        if code == 429:
            message = "Stack Overflow API rate limit exceeded."
        elif code == 400:
            try:
                detail = exc.response.json().get("error_message")
            except ValueError:
                detail = None
            if detail:
                message = f"Stack Overflow API error: {detail}"
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
            **self.query_params(credential),
            "tagged": ";".join(build_tags(skill)),
            "sort": "activity",
            "order": "desc",
            "pagesize": 1,
            "filter": "total",
        }
        if start:
            params["fromdate"] = _epoch(start)
        if end:
            params["todate"] = _epoch(end, end_of_day=True)

        data = await self.get_json(
            f"{STACKEXCHANGE_API}/questions",
            params=params,
            headers={"Accept-Encoding": "gzip"},
        )
        return int(data.get("total") or 0)

    async def status(self, credential: Optional[str] = None) -> Optional[dict]:
        try:
            data = await self.get_json(f"{STACKEXCHANGE_API}/info", params=self.query_params(credential))
        except EvidenceUnavailable as e:
            logger.warning("stackoverflow.quota_check_failed", error=str(e))
            return None
        return {
            "quota_remaining": data.get("quota_remaining"),
            "quota_max": data.get("quota_max"),
            "authenticated": bool(credential or self.credential),
        }
