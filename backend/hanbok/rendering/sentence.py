"""
Sentence analysis slide: the full sentence with one token highlighted,
plus a detail panel for that token.
"""

import logging
from html import escape

from hanbok.design_templates import SENTENCE_STYLE, get_sentence_theme
from hanbok.rendering.page import canvas_style, html_document, inline_style, progress_dots
from hanbok.rendering.text import wrap_asian_text
from hanbok.slides import TokenDetailSlide

logger = logging.getLogger(__name__)

STYLE = SENTENCE_STYLE


def split_sentence(sentence: str, surfaces: tuple[str, ...], index: int) -> tuple[str, str, str]:
    """
    (before, token, after) for the token at `index`.

    Surfaces are located left to right so a repeated word highlights the
    right occurrence. If a surface can't be found in the sentence, the
    sentence is rebuilt from the surfaces joined by spaces.
    """
    cursor = 0
    for i, surface in enumerate(surfaces):
        found = sentence.find(surface, cursor)
        if found < 0:
            break
        if i == index:
            return sentence[:found], surface, sentence[found + len(surface):]
        cursor = found + len(surface)
    else:
        return sentence, "", ""

    logger.debug(f"Token surfaces do not match sentence {sentence!r}, joining surfaces")
    before = " ".join(surfaces[:index])
    after = " ".join(surfaces[index + 1:])
    return (before + " " if before else ""), surfaces[index], (" " + after if after else "")


def _scaled(size: str, scale: float) -> str:
    if scale == 1.0 or not size.endswith("rem"):
        return size
    return f"{float(size[:-3]) * scale:g}rem"


def _detail_row(label: str, value: str | None, theme: dict, scale: float) -> str:
    if not value:
        return ""
    label_style = inline_style({
        "font-size": _scaled(STYLE["label_size"], scale),
        "color": theme["muted"],
        "text-transform": "uppercase",
        "letter-spacing": "0.08em",
        "min-width": "11rem",
    })
    value_style = inline_style({
        "font-size": _scaled(STYLE["value_size"], scale),
        "color": theme["foreground"],
    })
    return (
        '<div class="detail-row" style="display: flex; gap: 1.5rem; align-items: baseline; margin-top: 0.8rem">'
        f'<span style="{label_style}">{escape(label)}</span>'
        f'<span class="value" style="{value_style}">{wrap_asian_text(value)}</span>'
        "</div>"
    )


def render_token_slide(slide: TokenDetailSlide, position: int, total: int, font_css: str = "") -> str:
    """Render the slide for one token."""
    theme = get_sentence_theme(slide.theme_id)
    scale = slide.font_scale
    font_family = slide.visual.font_family or STYLE["font_family"]

    before, token, after = split_sentence(slide.sentence, slide.surfaces, slide.token_index)
    highlight = inline_style({
        "background-color": slide.highlight_color,
        "color": "#111",
        "border-radius": "0.6rem",
        "padding": "0.1rem 0.4rem",
    })
    sentence_style = inline_style({
        "font-family": STYLE["target_font_family"],
        "font-size": _scaled(STYLE["sentence_size"], scale),
        "line-height": "1.5",
        "margin": "0",
        "text-align": "center",
        "color": theme["foreground"],
    })
    parts = [
        f'<div class="canvas" style="{canvas_style(slide.visual.background or theme["background"], font_family, color=theme["foreground"])}">',
        '<div style="position: absolute; top: 7rem; left: 6%; right: 6%; z-index: 10; text-align: center">',
    ]

    if slide.translation:
        translation_style = inline_style({
            "font-size": _scaled(STYLE["translation_size"], scale),
            "color": theme["muted"],
            "margin": "0 0 2.5rem",
            "font-style": "italic",
        })
        parts.append(f'<p class="translation" style="{translation_style}">{escape(slide.translation)}</p>')

    parts.append(
        f'<p class="sentence" style="{sentence_style}">{escape(before)}'
        f'<span class="highlight" style="{highlight}">{escape(token)}</span>'
        f"{escape(after)}</p>"
    )

    if slide.sentence_romanization:
        romanization_style = inline_style({
            "font-size": _scaled(STYLE["romanization_size"], scale),
            "color": theme["muted"],
            "margin": "1rem 0 0",
        })
        parts.append(f'<p class="sentence-romanization" style="{romanization_style}">{escape(slide.sentence_romanization)}</p>')
    parts.append("</div>")

    panel = inline_style({
        "position": "absolute",
        "left": "6%",
        "right": "6%",
        "bottom": "7rem",
        "z-index": "10",
        "padding": "3rem",
        "border-radius": "1.75rem",
        "background-color": theme["panel"],
        "border": theme["panel_border"],
    })
    surface_style = inline_style({
        "font-family": STYLE["target_font_family"],
        "font-size": _scaled(STYLE["surface_size"], scale),
        "color": slide.highlight_color,
        "margin": "0",
        "line-height": "1.2",
    })
    parts.append(f'<div class="detail" style="{panel}">')
    parts.append(f'<h2 class="surface" style="{surface_style}">{escape(slide.surface)}</h2>')

    if slide.romanization:
        token_romanization = inline_style({
            "font-size": _scaled(STYLE["romanization_size"], scale),
            "color": theme["muted"],
            "margin": "0.4rem 0 1.2rem",
            "font-style": "italic",
        })
        parts.append(f'<p class="romanization" style="{token_romanization}">{escape(slide.romanization)}</p>')

    parts.append(_detail_row("Meaning", slide.gloss, theme, scale))
    parts.append(_detail_row("Part of speech", slide.pos, theme, scale))
    parts.append(_detail_row("Role", slide.role.replace("_", " ") if slide.role else None, theme, scale))

    if slide.morphology:
        breakdown = STYLE["morphology_separator"].join(f"{key}: {value}" for key, value in slide.morphology)
        parts.append(_detail_row("Breakdown", breakdown, theme, scale))

    if slide.notes:
        note_style = inline_style({
            "font-size": _scaled(STYLE["note_size"], scale),
            "color": theme["foreground"],
            "margin": "1.6rem 0 0",
            "padding-left": "1rem",
            "border-left": f"0.3rem solid {theme['secondary']}",
            "line-height": "1.45",
        })
        parts.append(f'<p class="notes" style="{note_style}">{wrap_asian_text(slide.notes)}</p>')

    parts.append("</div>")
    parts.append(progress_dots(position, total, {
        **STYLE,
        "dot_active": slide.highlight_color,
        "dot_inactive": theme["muted"],
    }))
    parts.append("</div>")

    return html_document("".join(parts), font_css, title=f"token {position + 1}")
