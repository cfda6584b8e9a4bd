"""
Classic lesson slide: one centered sentence over a photo.
"""

from hanbok.design_templates import LESSON_STYLE
from hanbok.rendering.page import canvas_style, html_document, inline_style, overlay, progress_dots
from hanbok.rendering.text import wrap_asian_text


def render_lesson_slide(slide, position: int, total: int, font_css: str = "") -> str:
    """Render a hook, content or CTA slide."""
    style = LESSON_STYLE
    visual = slide.visual

    text_container = inline_style({
        "position": "absolute",
        "top": "50%",
        "left": "50%",
        "transform": "translate(-50%, -50%)",
        "width": "85%",
        "max-width": style["max_width"],
        "z-index": "10",
    })
    sentence = inline_style({
        "font-size": style["font_size"],
        "font-weight": style["font_weight"],
        "text-align": "center",
        "line-height": style["line_height"],
        "margin": "0",
        "color": visual.text_color or style["text_color"],
        "text-shadow": visual.text_shadow or style["text_shadow"],
    })

    body = (
        f'<div class="canvas" style="{canvas_style(visual.background, visual.font_family or style["font_family"])}">'
        f"{overlay(visual.overlay_color or style['overlay'])}"
        f'<div style="{text_container}">'
        f'<div style="padding: 3rem 2.5rem">'
        f'<p class="sentence" style="{sentence}">{wrap_asian_text(slide.text)}</p>'
        "</div></div>"
        f"{progress_dots(position, total, style)}"
        "</div>"
    )
    return html_document(body, font_css, title=f"slide {position + 1}")
