"""API tests for the HTTP surface, with the generator and browser faked."""

import httpx
import pytest
import pytest_asyncio

from hanbok.main import create_app
from hanbok.services.pipeline import get_pipeline

from conftest import make_sentence_analysis


@pytest_asyncio.fixture
async def client(settings, pipeline):
    """HTTP client for an app wired to the fake pipeline. Background jobs finish before each response returns."""
    app = create_app()
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestSystemApi:
    """Test cases for health and discovery endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_languages(self, client):
        response = await client.get("/api/generate/languages")
        assert [lang["id"] for lang in response.json()] == ["korean", "japanese"]

    @pytest.mark.asyncio
    async def test_sentence_themes(self, client):
        response = await client.get("/api/sentence-analysis/themes")
        ids = [theme["id"] for theme in response.json()]
        assert "notebook_dark_overlay" in ids
        assert "paper_light" in ids


class TestGenerationApi:
    """Test cases for the generation endpoints."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"topic": ""}, {"topic": "   "}])
    async def test_lesson_requires_topic(self, client, body):
        response = await client.post("/api/generate", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing topic"

    @pytest.mark.asyncio
    async def test_lesson_rejects_unknown_language(self, client):
        response = await client.post("/api/generate", json={"topic": "Numbers", "language": "klingon"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_lesson_end_to_end(self, client, fake_generator):
        response = await client.post("/api/generate", json={"topic": "Korean Particles", "language": "japanese"})
        assert response.status_code == 202
        assert response.json() == {"id": "korean-particles", "status": "processing"}
        assert fake_generator.calls[0][2].value == "japanese"

        listing = (await client.get("/api/lessons")).json()
        assert [item["id"] for item in listing] == ["korean-particles"]
        assert listing[0]["topic"] == "Korean Particles"
        assert listing[0]["language"] == "japanese"
        assert listing[0]["slides"] == 6

        detail = (await client.get("/api/lessons/korean-particles")).json()
        assert detail["slides"][0] == "/output/korean-particles/slide-1.png"
        assert len(detail["slides"]) == 6

        image = await client.get(detail["slides"][0])
        assert image.status_code == 200
        assert image.headers["content-type"] == "image/png"

        job = (await client.get("/api/jobs/korean-particles")).json()
        assert job["state"] == "complete"
        assert job["slides_done"] == 6

    @pytest.mark.asyncio
    async def test_cheat_sheet(self, client):
        response = await client.post("/api/cheat-sheet", json={"topic": "Food"})
        assert response.status_code == 202
        assert response.json()["id"] == "cheat-sheet-food"

        detail = (await client.get("/api/lessons/cheat-sheet-food")).json()
        assert detail["type"] == "cheat-sheet"
        assert len(detail["slides"]) == 4

    @pytest.mark.asyncio
    async def test_cheat_sheet_requires_topic(self, client):
        response = await client.post("/api/cheat-sheet", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sentence_analysis(self, client):
        sentence = "오늘은 날씨가 좋아서 산책했어요"
        response = await client.post("/api/sentence-analysis", json={"sentence": sentence})
        assert response.status_code == 202
        item_id = response.json()["id"]
        assert item_id.startswith("sentence-")

        detail = (await client.get(f"/api/lessons/{item_id}")).json()
        assert detail["type"] == "sentence-analysis"
        assert detail["topic"] == sentence
        assert len(detail["slides"]) == 4

    @pytest.mark.asyncio
    async def test_sentence_requires_sentence(self, client):
        response = await client.post("/api/sentence-analysis", json={"sentence": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing sentence"

    @pytest.mark.asyncio
    async def test_failed_job_is_visible_only_in_jobs(self, client):
        response = await client.post("/api/generate", json={"topic": "explode now"})
        assert response.status_code == 202
        item_id = response.json()["id"]

        assert (await client.get("/api/lessons")).json() == []
        failed = (await client.get("/api/jobs", params={"state": "failed"})).json()
        assert [job["id"] for job in failed] == [item_id]
        assert "No response" in failed[0]["error"]

        complete = (await client.get("/api/jobs", params={"state": "complete"})).json()
        assert complete == []


class TestLibraryApi:
    """Test cases for the library and job lookup endpoints."""

    @pytest.mark.asyncio
    async def test_unknown_lesson(self, client):
        response = await client.get("/api/lessons/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Lesson not found"

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get("/api/jobs/does-not-exist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_library(self, client):
        response = await client.get("/api/lessons")
        assert response.status_code == 200
        assert response.json() == []


class TestPreviewApi:
    """Test cases for the HTML preview endpoints."""

    @pytest.mark.asyncio
    async def test_sentence_preview(self, client):
        analysis = make_sentence_analysis().model_dump(mode="json")
        response = await client.post("/api/sentence-analysis/preview", json={"analysis": analysis, "index": 1})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert ">날씨가</span>" in response.text
        assert "function fit()" in response.text

    @pytest.mark.asyncio
    async def test_sentence_preview_requires_analysis(self, client):
        response = await client.post("/api/sentence-analysis/preview", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sentence_preview_invalid_analysis(self, client):
        analysis = {"sentence": {"hangul": "안녕"}, "tokens": []}
        response = await client.post("/api/sentence-analysis/preview", json={"analysis": analysis})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sandbox_preview(self, client):
        data = {"headline": "존댓말 basics", "footer": "@hanbokstudy"}
        response = await client.post("/api/sandbox/preview", json={"data": data})
        assert response.status_code == 200
        assert 'class="headline"' in response.text
        assert "@hanbokstudy" in response.text

    @pytest.mark.asyncio
    async def test_sandbox_preview_requires_data(self, client):
        response = await client.post("/api/sandbox/preview", json={"data": None})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sandbox_preview_requires_headline(self, client):
        response = await client.post("/api/sandbox/preview", json={"data": {"lead": "no headline"}})
        assert response.status_code == 400
