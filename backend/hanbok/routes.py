"""
API routes for the lesson slide generator.
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ValidationError

from hanbok.design_templates import list_sentence_themes
from hanbok.errors import InputError, ItemNotFoundError
from hanbok.models import (
    LANGUAGES,
    ContentKind,
    JobState,
    JobStatus,
    Language,
    LibraryItemDetail,
    LibraryItemSummary,
    SandboxSlideData,
    SentenceAnalysisDocument,
    utc_now_iso,
)
from hanbok.rendering.engine import render_document
from hanbok.rendering.page import inject_fit_script
from hanbok.rendering.sandbox import render_sandbox_slide
from hanbok.services.assets import AssetLibrary, get_asset_library
from hanbok.services.identifiers import is_safe_segment
from hanbok.services.job_store import JobStore, get_job_store
from hanbok.services.library import LibraryIndex, get_library
from hanbok.services.pipeline import SlidePipeline, get_pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


def get_assets() -> AssetLibrary:
    return get_asset_library()


# Request/Response Models

class LessonRequest(BaseModel):
    topic: Optional[str] = None
    language: Optional[str] = Language.KOREAN.value


class CheatSheetRequest(BaseModel):
    topic: Optional[str] = None


class SentenceAnalysisRequest(BaseModel):
    sentence: Optional[str] = None


class PreviewRequest(BaseModel):
    analysis: Optional[dict] = None
    index: int = 0


class SandboxPreviewRequest(BaseModel):
    data: Optional[dict] = None


class AcceptedResponse(BaseModel):
    id: str
    status: str = "processing"


class LanguageResponse(BaseModel):
    id: str
    name: str
    flag: str


class ThemeResponse(BaseModel):
    id: str
    name: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


def _accept(
    pipeline: SlidePipeline,
    background_tasks: BackgroundTasks,
    kind: ContentKind,
    text: Optional[str],
    language: Language = Language.KOREAN,
) -> AcceptedResponse:
    try:
        request, status = pipeline.accept(kind, text, language)
    except InputError as e:
        logger.warning(f"Rejected {kind.value} request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    background_tasks.add_task(pipeline.run, request, status.id)
    return AcceptedResponse(id=status.id)


# Health

@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", timestamp=utc_now_iso())


# Generation

@router.get("/generate/languages", response_model=list[LanguageResponse])
async def list_languages():
    """Languages a lesson can be generated for."""
    return [LanguageResponse(**lang) for lang in LANGUAGES]


@router.post("/generate", response_model=AcceptedResponse, status_code=202)
async def generate_lesson(
    body: LessonRequest,
    background_tasks: BackgroundTasks,
    pipeline: SlidePipeline = Depends(get_pipeline),
):
    """
    Start a lesson job.

    Responds immediately; poll /api/lessons (or /api/jobs/{id}) for the result.
    """
    try:
        language = Language(body.language or Language.KOREAN.value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unsupported language: {body.language}")
    return _accept(pipeline, background_tasks, ContentKind.LESSON, body.topic, language)


@router.post("/cheat-sheet", response_model=AcceptedResponse, status_code=202)
async def generate_cheat_sheet(
    body: CheatSheetRequest,
    background_tasks: BackgroundTasks,
    pipeline: SlidePipeline = Depends(get_pipeline),
):
    return _accept(pipeline, background_tasks, ContentKind.CHEAT_SHEET, body.topic)


@router.post("/sentence-analysis", response_model=AcceptedResponse, status_code=202)
async def generate_sentence_analysis(
    body: SentenceAnalysisRequest,
    background_tasks: BackgroundTasks,
    pipeline: SlidePipeline = Depends(get_pipeline),
):
    return _accept(pipeline, background_tasks, ContentKind.SENTENCE_ANALYSIS, body.sentence)


@router.get("/sentence-analysis/themes", response_model=list[ThemeResponse])
async def sentence_themes():
    """Themes accepted in render_hints.theme."""
    return [ThemeResponse(**t) for t in list_sentence_themes()]


@router.post("/sentence-analysis/preview", response_class=HTMLResponse)
async def preview_sentence_analysis(body: PreviewRequest, assets: AssetLibrary = Depends(get_assets)):
    """Render one token slide of an analysis as HTML for the designer iframe."""
    if not body.analysis:
        raise HTTPException(status_code=400, detail="Missing analysis JSON")
    try:
        document = SentenceAnalysisDocument.model_validate(body.analysis)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid analysis: {e.errors(include_url=False)}")

    html = render_document(ContentKind.SENTENCE_ANALYSIS, document, body.index, assets)
    return HTMLResponse(inject_fit_script(html))


@router.post("/sandbox/preview", response_class=HTMLResponse)
async def preview_sandbox(body: SandboxPreviewRequest, assets: AssetLibrary = Depends(get_assets)):
    """Render a free-form single slide."""
    if not body.data:
        raise HTTPException(status_code=400, detail="Missing slide data")
    try:
        data = SandboxSlideData.model_validate(body.data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid slide data: {e.errors(include_url=False)}")

    return HTMLResponse(inject_fit_script(render_sandbox_slide(data, assets.font_css())))


# Library

@router.get("/lessons", response_model=list[LibraryItemSummary])
async def list_lessons(library: LibraryIndex = Depends(get_library)):
    """All generated items, newest first."""
    return library.list()


@router.get("/lessons/{item_id}", response_model=LibraryItemDetail)
async def get_lesson(item_id: str, library: LibraryIndex = Depends(get_library)):
    try:
        return library.get(item_id)
    except ItemNotFoundError:
        raise HTTPException(status_code=404, detail="Lesson not found")


# Jobs

@router.get("/jobs", response_model=list[JobStatus])
async def list_jobs(state: Optional[JobState] = None, store: JobStore = Depends(get_job_store)):
    """Status records, most recently updated first. Filter with ?state=failed."""
    jobs = store.list()
    if state is not None:
        jobs = [job for job in jobs if job.state == state]
    return jobs


@router.get("/jobs/{item_id}", response_model=JobStatus)
async def get_job(item_id: str, store: JobStore = Depends(get_job_store)):
    status = store.get(item_id) if is_safe_segment(item_id) else None
    if status is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return status
