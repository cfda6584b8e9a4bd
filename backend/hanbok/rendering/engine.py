"""
Document-level rendering: build the slide variants for a document and turn
each into a self-contained HTML page.
"""

import logging
import random

from hanbok.models import ContentKind
from hanbok.rendering.cheat_sheet import render_cheat_sheet_slide
from hanbok.rendering.lesson import render_lesson_slide
from hanbok.rendering.sentence import render_token_slide
from hanbok.services.assets import AssetLibrary
from hanbok.slides import (
    CategorySlide,
    CheatSheetCtaSlide,
    ContentSlide,
    CtaSlide,
    HookSlide,
    TitleSlide,
    TokenDetailSlide,
    VocabularySlide,
    cheat_sheet_slides,
    lesson_slides,
    sentence_slides,
)

logger = logging.getLogger(__name__)

RENDERERS = {
    HookSlide: render_lesson_slide,
    ContentSlide: render_lesson_slide,
    CtaSlide: render_lesson_slide,
    TitleSlide: render_cheat_sheet_slide,
    CategorySlide: render_cheat_sheet_slide,
    VocabularySlide: render_cheat_sheet_slide,
    CheatSheetCtaSlide: render_cheat_sheet_slide,
    TokenDetailSlide: render_token_slide,
}


def render_slide(slide, position: int, total: int, font_css: str = "") -> str:
    """Render one slide variant at its position in the deck."""
    renderer = RENDERERS.get(type(slide))
    if renderer is None:
        raise TypeError(f"No template for slide type {type(slide).__name__}")
    return renderer(slide, position, total, font_css)


def build_slides(kind: ContentKind, document, assets: AssetLibrary, rng: random.Random | None = None) -> list:
    """Slide variants for a validated document, with backgrounds already drawn."""
    kind = ContentKind(kind)
    if kind == ContentKind.LESSON:
        return lesson_slides(document, assets, rng)
    if kind == ContentKind.CHEAT_SHEET:
        return cheat_sheet_slides(document, assets, rng)
    return sentence_slides(document)


def render_document_slides(
    kind: ContentKind,
    document,
    assets: AssetLibrary,
    rng: random.Random | None = None,
) -> list[str]:
    """HTML for every slide of a document, in order. Fonts are embedded once per batch."""
    slides = build_slides(kind, document, assets, rng)
    font_css = assets.font_css()
    total = len(slides)
    logger.info(f"Rendering {total} {ContentKind(kind).value} slides to HTML")
    return [render_slide(slide, position, total, font_css) for position, slide in enumerate(slides)]


def render_document(
    kind: ContentKind,
    document,
    index: int,
    assets: AssetLibrary,
    rng: random.Random | None = None,
) -> str:
    """HTML for a single slide. Out-of-range indexes are clamped to the deck."""
    slides = build_slides(kind, document, assets, rng)
    position = max(0, min(len(slides) - 1, index))
    return render_slide(slides[position], position, len(slides), assets.font_css())
