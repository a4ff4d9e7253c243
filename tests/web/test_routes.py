"""HTTP API route tests."""

import pytest
from fastapi.testclient import TestClient

from web.app import app
from web.deps import get_analyzer, get_cache, get_config

ENV_VARS = ("CACHE_MAX_SIZE", "CACHE_TTL_HOURS", "GITHUB_TOKEN", "STACKOVERFLOW_KEY", "PORT")


@pytest.fixture
def client(tmp_path, monkeypatch, analyzer, cache):
    """Test client wired to fake demand sources and the per-test cache."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()

    app.dependency_overrides[get_analyzer] = lambda: analyzer
    app.dependency_overrides[get_cache] = lambda: cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_config.cache_clear()


def _validate_body(**overrides):
    body = {"track": "frontend", "skills": [{"name": "HTML", "proficiency": "strong"}]}
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["roadmap_version"] == "v1.0"
        assert data["uptime"] >= 0


class TestValidateRoute:
    def test_validate(self, client):
        response = client.post("/api/validate", json=_validate_body())

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["gap_count"] == 40
        assert body["data"]["keep_sharp"][0]["skill"] == "HTML"

    def test_camel_case_sort(self, client):
        response = client.post("/api/validate", json=_validate_body(sortBy="demand"))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["sorted_by"] == "demand"
        assert data["gaps"][0]["skill"] == "React"

    def test_fullstack_has_sections(self, client):
        response = client.post("/api/validate", json=_validate_body(track="fullstack"))
        assert set(response.json()["data"]["sections"]) == {"frontend", "backend", "both"}

    def test_unknown_track(self, client):
        response = client.post("/api/validate", json=_validate_body(track="mobile"))

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid track: mobile")

    def test_empty_skills(self, client):
        response = client.post("/api/validate", json=_validate_body(skills=[]))
        assert response.status_code == 422

    def test_bad_proficiency(self, client):
        response = client.post(
            "/api/validate",
            json=_validate_body(skills=[{"name": "HTML", "proficiency": "expert"}]),
        )
        assert response.status_code == 422

    def test_bad_sort(self, client):
        response = client.post("/api/validate", json=_validate_body(sort_by="alphabetical"))
        assert response.status_code == 422


class TestSkillRoutes:
    def test_all_skills(self, client):
        response = client.get("/api/skills")

        assert response.status_code == 200
        assert "React" in response.json()["data"]

    def test_core_skills(self, client):
        response = client.get("/api/skills/core/backend")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 46

    def test_core_skills_unknown_track(self, client):
        assert client.get("/api/skills/core/mobile").status_code == 400


class TestTrendRoutes:
    def test_trends(self, client):
        response = client.get("/api/trends", params={"skill": "React", "track": "frontend"})

        assert response.status_code == 200
        points = response.json()["data"]["monthly_data"]
        assert len(points) == 6
        assert points[0]["combined"] == 5000

    def test_trends_missing_skill(self, client):
        assert client.get("/api/trends", params={"track": "frontend"}).status_code == 422

    def test_trends_unknown_track(self, client):
        response = client.get("/api/trends", params={"skill": "React", "track": "mobile"})
        assert response.status_code == 400

    def test_rate_limit_status(self, client):
        response = client.get("/api/rate-limit-status", params={"githubToken": "ghp_x"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["github"]["authenticated"] is True
        assert data["stackoverflow"]["authenticated"] is False


class TestCacheRoutes:
    def test_stats_and_clear(self, client):
        client.post("/api/validate", json=_validate_body())

        stats = client.get("/api/cache/stats").json()["data"]
        assert stats["total_entries"] > 0
        assert stats["max_size"] == 100

        response = client.post("/api/cache/clear")
        assert response.json()["message"] == "Cache cleared successfully"
        assert client.get("/api/cache/stats").json()["data"]["total_entries"] == 0
