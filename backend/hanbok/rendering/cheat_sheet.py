"""
Vocabulary cheat sheet slides: big headings, or a grid of word cards.
"""

from html import escape

from hanbok.design_templates import CHEAT_SHEET_STYLE, vocab_grid_columns
from hanbok.rendering.page import canvas_style, html_document, inline_style, overlay, progress_dots
from hanbok.rendering.text import wrap_asian_text
from hanbok.slides import CategorySlide, CheatSheetCtaSlide, TitleSlide, VocabularySlide

STYLE = CHEAT_SHEET_STYLE

# (tag, font size, line height) per heading variant
HEADINGS = {
    TitleSlide: ("h1", STYLE["title_size"], "1.1"),
    CategorySlide: ("h2", STYLE["category_size"], "1.2"),
    CheatSheetCtaSlide: ("h2", STYLE["cta_size"], "1.2"),
}


def _heading(slide) -> str:
    tag, size, line_height = HEADINGS[type(slide)]
    if isinstance(slide, TitleSlide):
        color = STYLE["title_color"]
    else:
        color = slide.visual.text_color or STYLE["heading_color"]
    heading = inline_style({
        "font-size": size,
        "font-weight": "bold",
        "color": color,
        "margin": "0",
        "line-height": line_height,
        "text-align": "center",
        "text-shadow": None if isinstance(slide, CheatSheetCtaSlide) else STYLE["heading_shadow"],
    })
    return (
        '<div style="padding: 3rem 2.5rem; border-radius: 2rem">'
        f'<{tag} class="heading" style="{heading}">{wrap_asian_text(slide.text)}</{tag}>'
        "</div>"
    )


def _card(card) -> str:
    card_style = inline_style({
        "display": "flex",
        "flex-direction": "column",
        "align-items": "center",
        "padding": "1rem",
        "background-color": STYLE["card_background"],
        "border-radius": "1rem",
        "border": STYLE["card_border"],
    })
    word = inline_style({
        "font-size": STYLE["word_size"],
        "font-weight": "500",
        "color": STYLE["word_color"],
        "margin-bottom": "0.3rem",
        "font-family": STYLE["target_font_family"],
        "text-align": "center",
    })
    parts = [f'<div class="vocab-card" style="{card_style}">', f'<div class="word" style="{word}">{escape(card.word)}</div>']

    if card.romanization:
        romanization = inline_style({
            "font-size": STYLE["romanization_size"],
            "color": STYLE["romanization_color"],
            "opacity": "0.7",
            "font-style": "italic",
            "margin-bottom": "0.4rem",
            "text-align": "center",
        })
        parts.append(f'<div class="romanization" style="{romanization}">{escape(card.romanization)}</div>')

    gloss = inline_style({
        "font-size": STYLE["gloss_size"],
        "color": STYLE["gloss_color"],
        "font-weight": "500",
        "text-align": "center",
    })
    parts.append(f'<div class="gloss" style="{gloss}">{wrap_asian_text(card.gloss)}</div>')
    parts.append("</div>")
    return "".join(parts)


def _vocabulary_grid(slide: VocabularySlide) -> str:
    grid = inline_style({
        "padding": "3rem 2rem",
        "display": "grid",
        "grid-template-columns": f"repeat({vocab_grid_columns(len(slide.cards))}, 1fr)",
        "gap": "1.5rem",
    })
    cards = "".join(_card(card) for card in slide.cards)
    return f'<div class="vocab-grid" style="{grid}">{cards}</div>'


def render_cheat_sheet_slide(slide, position: int, total: int, font_css: str = "") -> str:
    """Render a title, category, vocabulary or CTA slide."""
    visual = slide.visual
    content_style = inline_style({
        "position": "absolute",
        "top": "50%",
        "left": "50%",
        "transform": "translate(-50%, -50%)",
        "width": "85%",
        "max-width": STYLE["max_width"],
        "z-index": "10",
        "text-align": "center",
    })

    if isinstance(slide, VocabularySlide):
        content = _vocabulary_grid(slide)
    else:
        content = _heading(slide)

    body = (
        f'<div class="canvas" style="{canvas_style(visual.background, visual.font_family or STYLE["font_family"])}">'
        f"{overlay(visual.overlay_color or STYLE['overlay'])}"
        f'<div style="{content_style}">{content}</div>'
        f"{progress_dots(position, total, STYLE)}"
        "</div>"
    )
    return html_document(body, font_css, title=f"slide {position + 1}")
