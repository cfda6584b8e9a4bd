"""
Standalone preview card for ad-hoc slide designs. No progress dots.
"""

from hanbok.design_templates import BADGE_JUSTIFY, SANDBOX_DEFAULT_THEME
from hanbok.models import SandboxSlideData
from hanbok.rendering.page import canvas_style, html_document, inline_style, overlay
from hanbok.rendering.text import wrap_asian_text


def _theme(data: SandboxSlideData) -> dict:
    overrides = data.theme.model_dump(exclude_none=True) if data.theme else {}
    return {**SANDBOX_DEFAULT_THEME, **overrides}


def _paragraph(css_class: str, text: str | None, styles: dict) -> str:
    if not text:
        return ""
    return f'<p class="{css_class}" style="{inline_style(styles)}">{wrap_asian_text(text)}</p>'


def render_sandbox_slide(data: SandboxSlideData, font_css: str = "") -> str:
    theme = _theme(data)
    parts = [
        f'<div class="canvas" style="{canvas_style(theme["background"], theme["fontFamily"], color=theme["foreground"])}">',
        overlay(theme["overlay"]),
        '<div style="position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%); width: 85%; max-width: 920px; z-index: 10">',
        '<div class="panel" style="'
        + inline_style({
            "border-radius": "1.75rem",
            "padding": "3.5rem 3rem",
            "backdrop-filter": "blur(14px)",
            "box-shadow": "0 2.5rem 4.5rem rgba(0, 0, 0, 0.4)",
            "background-color": theme["panel"],
        })
        + '">',
    ]

    badge = data.badge
    if badge and badge.text:
        row = inline_style({
            "display": "flex",
            "width": "100%",
            "margin-bottom": "1.5rem",
            "justify-content": BADGE_JUSTIFY[badge.align],
        })
        pill = inline_style({
            "display": "inline-flex",
            "padding": "0.45rem 1.1rem",
            "border-radius": "9999px",
            "font-size": "1.4rem",
            "font-weight": "700",
            "letter-spacing": "0.05em",
            "text-transform": "uppercase",
            "background-color": badge.color or theme["accent"],
            "color": "#0b0f14" if badge.color else "#111827",
        })
        parts.append(f'<div class="badge-row" style="{row}"><span class="badge" style="{pill}">{wrap_asian_text(badge.text)}</span></div>')

    parts.append(
        '<h1 class="headline" style="font-size: 4.8rem; line-height: 1.15; margin: 0; font-weight: 700; text-align: center">'
        f"{wrap_asian_text(data.headline)}</h1>"
    )
    parts.append(_paragraph("lead", data.lead, {
        "font-size": "2.4rem", "line-height": "1.4", "margin": "1.5rem 0 0",
        "text-align": "center", "color": theme["muted"],
    }))
    parts.append(_paragraph("supporting", data.supporting, {
        "font-size": "1.9rem", "line-height": "1.5", "margin": "1.5rem 0 0",
        "text-align": "center", "color": theme["muted"],
    }))

    if data.bullets:
        parts.append('<div class="bullets" style="display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 1.25rem; margin-top: 2.5rem">')
        for bullet in data.bullets:
            accent = bullet.accent or theme["accent"]
            item = inline_style({
                "border-radius": "1.25rem",
                "padding": "1.4rem 1.6rem",
                "display": "flex",
                "flex-direction": "column",
                "gap": "0.6rem",
                "border": f"0.15rem solid {accent}",
                "background-color": theme["bulletBackground"],
            })
            parts.append(f'<div class="bullet" style="{item}">')
            title = inline_style({
                "font-size": "2rem", "font-weight": "650", "line-height": "1.25",
                "margin": "0", "color": accent,
            })
            parts.append(f'<h3 style="{title}">{wrap_asian_text(bullet.title)}</h3>')
            parts.append(_paragraph("bullet-body", bullet.body, {
                "font-size": "1.55rem", "line-height": "1.45", "margin": "0", "color": theme["muted"],
            }))
            parts.append("</div>")
        parts.append("</div>")

    parts.append(_paragraph("footer", data.footer, {
        "font-size": "1.6rem", "line-height": "1.4", "margin": "2.5rem 0 0",
        "text-align": "center", "font-weight": "600", "color": theme["muted"],
    }))
    parts.append("</div></div></div>")

    return html_document("".join(parts), font_css, title="sandbox")
