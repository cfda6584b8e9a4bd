"""
Document schemas for generated content, job status records and library items.

The three document kinds mirror what the content generator returns:
lessons (one sentence per slide), vocabulary cheat sheets (typed slides)
and token-by-token sentence analyses.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ContentKind(str, Enum):
    LESSON = "lesson"
    CHEAT_SHEET = "cheat-sheet"
    SENTENCE_ANALYSIS = "sentence-analysis"


class Language(str, Enum):
    KOREAN = "korean"
    JAPANESE = "japanese"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


LANGUAGES = [
    {"id": Language.KOREAN.value, "name": "Korean", "flag": "🇰🇷"},
    {"id": Language.JAPANESE.value, "name": "Japanese", "flag": "🇯🇵"},
]


class GenerationRequest(BaseModel):
    """One unit of work. Not persisted."""
    kind: ContentKind
    topic_or_sentence: str
    language: Language = Language.KOREAN


# ============================================
# LESSON
# ============================================

LESSON_MIN_SLIDES = 5
LESSON_MAX_SLIDES = 12


class LessonSlide(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str = Field(min_length=1)
    type: Optional[str] = None  # hook, content, cta (quiz/answer slides come through as content)


class LessonDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    slides: list[LessonSlide] = Field(min_length=LESSON_MIN_SLIDES, max_length=LESSON_MAX_SLIDES)


# ============================================
# CHEAT SHEET
# ============================================

CHEAT_SHEET_MAX_SLIDES = 8


class VocabItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    korean: str
    romanization: Optional[str] = None
    english: str = ""


class CheatSheetSlide(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Literal["title", "category", "vocabulary", "cta"]
    text: Optional[str] = None
    items: Optional[list[VocabItem]] = None

    @model_validator(mode="after")
    def _heading_needs_text(self):
        if self.type != "vocabulary" and not (self.text or "").strip():
            raise ValueError(f"'{self.type}' slide requires text")
        return self


class CheatSheetDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    slides: list[CheatSheetSlide] = Field(min_length=1, max_length=CHEAT_SHEET_MAX_SLIDES)


# ============================================
# SENTENCE ANALYSIS
# ============================================

class Translation(BaseModel):
    model_config = ConfigDict(extra="allow")

    natural_en: str = ""
    literal_en: Optional[str] = None


class SentenceText(BaseModel):
    model_config = ConfigDict(extra="allow")

    hangul: str = Field(min_length=1)
    romanization: Optional[str] = None
    translation: Translation = Field(default_factory=Translation)

    @field_validator("translation", mode="before")
    @classmethod
    def _plain_translation(cls, value):
        if isinstance(value, str):
            return {"natural_en": value}
        return value


class Token(BaseModel):
    model_config = ConfigDict(extra="allow")

    surface: str = Field(min_length=1)
    romanization: Optional[str] = None
    lemma: Optional[str] = None
    pos: Optional[str] = None
    role: Optional[str] = None
    morphology: Optional[dict[str, str]] = None
    gloss_en: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("morphology", mode="before")
    @classmethod
    def _stringify_morphology(cls, value):
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class RenderHints(BaseModel):
    model_config = ConfigDict(extra="allow")

    theme: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_scale: Optional[float] = None
    highlight_map: dict[str, str] = Field(default_factory=dict)


class SentenceAnalysisDocument(BaseModel):
    """
    Full analysis of one sentence.

    `slides` is the generator's narrative outline and is kept for the
    record only; one slide is rendered per token.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    version: Optional[str] = None
    topic: Optional[str] = None
    sentence: SentenceText
    tokens: list[Token] = Field(min_length=1)
    chunks: list[dict] = Field(default_factory=list)
    quiz: Optional[dict] = None
    slides: list[dict] = Field(default_factory=list)
    render_hints: RenderHints = Field(default_factory=RenderHints)


# ============================================
# SANDBOX (ad-hoc single slide previews)
# ============================================

class SandboxBadge(BaseModel):
    text: str
    align: Literal["left", "center", "right"] = "left"
    color: Optional[str] = None


class SandboxBullet(BaseModel):
    title: str
    body: Optional[str] = None
    accent: Optional[str] = None


class SandboxTheme(BaseModel):
    background: Optional[str] = None
    overlay: Optional[str] = None
    accent: Optional[str] = None
    foreground: Optional[str] = None
    muted: Optional[str] = None
    fontFamily: Optional[str] = None
    panel: Optional[str] = None
    bulletBackground: Optional[str] = None


class SandboxSlideData(BaseModel):
    headline: str = Field(min_length=1)
    lead: Optional[str] = None
    supporting: Optional[str] = None
    badge: Optional[SandboxBadge] = None
    bullets: Optional[list[SandboxBullet]] = None
    footer: Optional[str] = None
    theme: Optional[SandboxTheme] = None


DOCUMENT_MODELS = {
    ContentKind.LESSON: LessonDocument,
    ContentKind.CHEAT_SHEET: CheatSheetDocument,
    ContentKind.SENTENCE_ANALYSIS: SentenceAnalysisDocument,
}


def rendered_slide_count(kind: ContentKind, document) -> int:
    """Number of PNGs a document produces. Sentence analyses render one per token."""
    if kind == ContentKind.SENTENCE_ANALYSIS:
        return len(document.tokens)
    return len(document.slides)


# ============================================
# JOB STATUS
# ============================================

class JobState(str, Enum):
    RECEIVED = "received"
    CONTENT_GENERATED = "content-generated"
    SLIDES_RENDERING = "slides-rendering"
    METADATA_WRITTEN = "metadata-written"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.COMPLETE, JobState.FAILED)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JobStatus(BaseModel):
    id: str
    kind: ContentKind
    topic: str
    state: JobState = JobState.RECEIVED
    slides_total: int = 0
    slides_done: int = 0
    error: Optional[str] = None
    failed_slide_index: Optional[int] = None
    updated_at: str = Field(default_factory=utc_now_iso)


# ============================================
# LIBRARY
# ============================================

class LibraryItemSummary(BaseModel):
    id: str
    topic: str
    title: Optional[str] = None
    slides: int
    language: str = Language.KOREAN.value
    episodeNumber: int = 1
    type: str = ContentKind.LESSON.value
    createdAt: Optional[str] = None


class LibraryItemDetail(BaseModel):
    id: str
    topic: str
    title: Optional[str] = None
    language: str = Language.KOREAN.value
    episodeNumber: int = 1
    type: str = ContentKind.LESSON.value
    slides: list[str]
    assets: list = Field(default_factory=list)
