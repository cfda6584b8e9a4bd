"""
Renderable slide variants and the builders that turn a validated document
into them.

Builders resolve every asset draw up front, so the template functions that
consume these slides are pure.
"""

import logging
import random
from dataclasses import dataclass, field

from hanbok.design_templates import (
    CHEAT_SHEET_STYLE,
    DEFAULT_HIGHLIGHT_COLOR,
    LESSON_STYLE,
    get_sentence_theme,
    highlight_color_for,
)
from hanbok.models import CheatSheetDocument, LessonDocument, SentenceAnalysisDocument
from hanbok.services.assets import AssetLibrary, AssetRole, RoundRobin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlideVisual:
    background: str | None = None  # data URI, URL, gradient or hex color
    overlay_color: str | None = None
    font_family: str | None = None
    text_color: str | None = None
    text_shadow: str | None = None


# ============================================
# LESSON
# ============================================

@dataclass(frozen=True)
class HookSlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


@dataclass(frozen=True)
class ContentSlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


@dataclass(frozen=True)
class CtaSlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


# ============================================
# CHEAT SHEET
# ============================================

@dataclass(frozen=True)
class TitleSlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


@dataclass(frozen=True)
class CategorySlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


@dataclass(frozen=True)
class VocabCard:
    word: str
    gloss: str = ""
    romanization: str | None = None


@dataclass(frozen=True)
class VocabularySlide:
    cards: tuple[VocabCard, ...]
    visual: SlideVisual = field(default_factory=SlideVisual)


@dataclass(frozen=True)
class CheatSheetCtaSlide:
    text: str
    visual: SlideVisual = field(default_factory=SlideVisual)


# ============================================
# SENTENCE ANALYSIS
# ============================================

@dataclass(frozen=True)
class TokenDetailSlide:
    sentence: str
    surfaces: tuple[str, ...]
    token_index: int
    surface: str
    translation: str = ""
    sentence_romanization: str | None = None
    romanization: str | None = None
    pos: str | None = None
    role: str | None = None
    gloss: str | None = None
    morphology: tuple[tuple[str, str], ...] = ()
    notes: str | None = None
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR
    theme_id: str = "notebook_dark_overlay"
    font_scale: float = 1.0
    visual: SlideVisual = field(default_factory=SlideVisual)


LESSON_VARIANTS = (HookSlide, ContentSlide, CtaSlide)
CHEAT_SHEET_VARIANTS = (TitleSlide, CategorySlide, VocabularySlide, CheatSheetCtaSlide)
SENTENCE_VARIANTS = (TokenDetailSlide,)

RenderableSlide = (
    HookSlide | ContentSlide | CtaSlide
    | TitleSlide | CategorySlide | VocabularySlide | CheatSheetCtaSlide
    | TokenDetailSlide
)


def lesson_slides(
    document: LessonDocument,
    assets: AssetLibrary,
    rng: random.Random | None = None,
) -> list[RenderableSlide]:
    """
    First slide is the hook, last is the call to action, the rest are content.

    Hook and CTA backgrounds are picked at random from their own folders.
    Content slides draw from one shuffled pool so no background repeats until
    the pool is exhausted.
    """
    total = len(document.slides)
    content_pool = RoundRobin(assets.shuffled(AssetRole.CONTENT, rng))
    content_drawn = 0

    slides = []
    for index, slide in enumerate(document.slides):
        if index == 0:
            variant, image = HookSlide, assets.pick_one(AssetRole.HOOK, rng)
        elif index == total - 1:
            variant, image = CtaSlide, assets.pick_one(AssetRole.CTA, rng)
        else:
            variant, image = ContentSlide, content_pool.draw(content_drawn)
            content_drawn += 1

        visual = SlideVisual(
            background=assets.data_uri(image),
            overlay_color=LESSON_STYLE["overlay"],
            font_family=LESSON_STYLE["font_family"],
            text_color=LESSON_STYLE["text_color"],
            text_shadow=LESSON_STYLE["text_shadow"],
        )
        logger.debug(f"Lesson slide {index + 1}: {variant.__name__} with {image.name if image else 'gradient'}")
        slides.append(variant(text=slide.text, visual=visual))
    return slides


_CHEAT_SHEET_HEADINGS = {
    "title": TitleSlide,
    "category": CategorySlide,
    "cta": CheatSheetCtaSlide,
}


def cheat_sheet_slides(
    document: CheatSheetDocument,
    assets: AssetLibrary,
    rng: random.Random | None = None,
) -> list[RenderableSlide]:
    """
    One variant per declared slide type.

    The first slide gets a cheat-sheet-hook image; every later slide shares a
    single background drawn from the cheat-sheet-backgrounds pool.
    """
    hook_image = assets.pick_one(AssetRole.CHEAT_SHEET_HOOK, rng)
    backgrounds = assets.shuffled(AssetRole.CHEAT_SHEET_BACKGROUND, rng)
    deck_image = backgrounds[0] if backgrounds else None

    slides = []
    for index, slide in enumerate(document.slides):
        visual = SlideVisual(
            background=assets.data_uri(hook_image if index == 0 else deck_image),
            overlay_color=CHEAT_SHEET_STYLE["overlay"],
            font_family=CHEAT_SHEET_STYLE["font_family"],
            text_color=CHEAT_SHEET_STYLE["heading_color"],
        )
        if slide.type == "vocabulary":
            cards = tuple(
                VocabCard(word=item.korean, gloss=item.english, romanization=item.romanization)
                for item in slide.items or []
            )
            slides.append(VocabularySlide(cards=cards, visual=visual))
        else:
            slides.append(_CHEAT_SHEET_HEADINGS[slide.type](text=slide.text, visual=visual))
    return slides


def sentence_slides(document: SentenceAnalysisDocument) -> list[TokenDetailSlide]:
    """One slide per token, each highlighting that token in the full sentence."""
    hints = document.render_hints
    theme = get_sentence_theme(hints.theme)
    default_color = hints.primary_color or theme["primary"]
    visual = SlideVisual(
        background=theme["background"],
        font_family=None,
        text_color=theme["foreground"],
    )
    surfaces = tuple(token.surface for token in document.tokens)

    return [
        TokenDetailSlide(
            sentence=document.sentence.hangul,
            surfaces=surfaces,
            token_index=index,
            surface=token.surface,
            translation=document.sentence.translation.natural_en,
            sentence_romanization=document.sentence.romanization,
            romanization=token.romanization,
            pos=token.pos,
            role=token.role,
            gloss=token.gloss_en,
            morphology=tuple((token.morphology or {}).items()),
            notes=token.notes,
            highlight_color=highlight_color_for(token.role, hints.highlight_map, default_color),
            theme_id=theme["id"],
            font_scale=hints.font_scale or 1.0,
            visual=visual,
        )
        for index, token in enumerate(document.tokens)
    ]
