"""Global test configuration and fixtures."""

import asyncio
import io
import os
from pathlib import Path

import pytest
from PIL import Image

# Set test environment
os.environ["OPENAI_API_KEY"] = "test-openai-key"

from hanbok.config import get_settings
from hanbok.errors import ContentGenerationError, RasterizationError
from hanbok.models import (
    CheatSheetDocument,
    ContentKind,
    LessonDocument,
    SentenceAnalysisDocument,
)
from hanbok.services import assets as assets_module
from hanbok.services.assets import AssetLibrary
from hanbok.services.pipeline import SlidePipeline


def png_bytes(width: int = 1080, height: int = 1350, color=(20, 20, 20)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


# Settings fixtures
@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing output and assets at a temp directory."""
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setenv("ASSETS_DIR", str(tmp_path / "assets"))
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "0.5")
    get_settings.cache_clear()
    assets_module.reload()

    settings = get_settings()
    settings.output_path.mkdir(parents=True)
    settings.assets_path.mkdir(parents=True)
    yield settings

    get_settings.cache_clear()
    assets_module.reload()


@pytest.fixture
def asset_library(settings) -> AssetLibrary:
    """Asset library with a few distinct images per role and no fonts."""
    root = settings.assets_path
    layout = {
        settings.hook_slides_subdir: 2,
        settings.content_slides_subdir: 5,
        settings.cta_slides_subdir: 1,
        settings.cheat_sheet_hook_subdir: 1,
        settings.cheat_sheet_backgrounds_subdir: 3,
    }
    for subdir, count in layout.items():
        directory = root / subdir
        directory.mkdir(parents=True)
        for i in range(count):
            (directory / f"{subdir}-{i}.png").write_bytes(f"{subdir}-{i}".encode())
    return AssetLibrary(root, settings)


# Document fixtures
def make_lesson(slide_count: int = 6, title: str = "Korean Particles") -> LessonDocument:
    slides = [{"text": "💡 1-Minute Korean: Stop mixing up 은 and 이!", "type": "hook"}]
    slides += [{"text": f"Point {i}: 저는 학생이에요 (jeoneun haksaengieyo)", "type": "content"}
               for i in range(1, slide_count - 1)]
    slides.append({"text": "Need more? Use HanbokStudy for vocab and grammar breakdowns!", "type": "cta"})
    return LessonDocument.model_validate({"title": title, "slides": slides})


def make_cheat_sheet() -> CheatSheetDocument:
    return CheatSheetDocument.model_validate({
        "title": "Korean Vocabulary: Food",
        "slides": [
            {"type": "title", "text": "Korean Vocab of the Day: Food 🍚"},
            {"type": "category", "text": "Staples 🍚"},
            {"type": "vocabulary", "items": [
                {"korean": "밥", "romanization": "bap", "english": "rice"},
                {"korean": "김치", "romanization": "gimchi", "english": "kimchi"},
                {"korean": "국", "romanization": "guk", "english": "soup"},
                {"korean": "빵", "english": "bread"},
                {"korean": "면", "romanization": "myeon", "english": "noodles"},
            ]},
            {"type": "cta", "text": "Follow for more Korean lessons! 📚"},
        ],
    })


def make_sentence_analysis() -> SentenceAnalysisDocument:
    return SentenceAnalysisDocument.model_validate({
        "id": "weather-walk",
        "version": "1",
        "topic": "-아서/어서 cause",
        "sentence": {
            "hangul": "오늘은 날씨가 좋아서 산책했어요",
            "romanization": "oneureun nalssiga joaseo sanchaekaesseoyo",
            "translation": {"natural_en": "The weather was nice today, so I took a walk."},
        },
        "tokens": [
            {"surface": "오늘은", "pos": "noun+topic", "role": "time_adverb", "gloss_en": "today"},
            {"surface": "날씨가", "pos": "noun+subject", "role": "subject", "gloss_en": "weather"},
            {"surface": "좋아서", "role": "cause_connector", "gloss_en": "is good, so",
             "morphology": {"stem": "좋-", "connector": "-아서"}, "notes": "-아서 links a reason to a result."},
            {"surface": "산책했어요", "role": "predicate", "gloss_en": "took a walk"},
        ],
        "render_hints": {
            "theme": "paper_light",
            "highlight_map": {"subject": "#7AD3A8", "connector": "#E58F65"},
        },
    })


DOCUMENTS = {
    ContentKind.LESSON: make_lesson,
    ContentKind.CHEAT_SHEET: make_cheat_sheet,
    ContentKind.SENTENCE_ANALYSIS: make_sentence_analysis,
}


class FakeGenerator:
    """Stands in for the OpenAI-backed generator. Topics containing 'explode' fail."""

    def __init__(self, delay: float = 0):
        self.delay = delay
        self.calls = []
        self.documents = {}

    async def __call__(self, kind, topic, language):
        self.calls.append((kind, topic, language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if "explode" in topic:
            raise ContentGenerationError("No response from content generator", kind=kind.value)
        if topic in self.documents:
            return self.documents[topic]
        return DOCUMENTS[kind]()


class FakeRasterizer:
    """Writes a blank 1080x1350 PNG per slide instead of launching a browser."""

    def __init__(self, fail_at: int | None = None):
        self.fail_at = fail_at
        self.rendered = []

    async def render_to_file(self, html: str, path, slide_index=None) -> Path:
        if slide_index == self.fail_at:
            raise RasterizationError("Screenshot failed: page crashed", slide_index=slide_index)
        path = Path(path)
        path.write_bytes(png_bytes())
        self.rendered.append((slide_index, html))
        return path


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def pipeline(settings, asset_library, fake_generator, fake_rasterizer) -> SlidePipeline:
    return SlidePipeline(
        generate=fake_generator,
        rasterizer=fake_rasterizer,
        assets=asset_library,
        settings=settings,
    )
