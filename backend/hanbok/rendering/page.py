"""
HTML assembly helpers shared by every template family.

Every document produced here is self-contained: fonts and background images
arrive as data URIs, so the browser never touches the network or disk.
"""

from html import escape

from hanbok.design_templates import DEFAULT_BACKGROUND, HEIGHT, WIDTH


def inline_style(styles: dict) -> str:
    """Turn a dict of CSS properties into an escaped style attribute value. None values are skipped."""
    return "; ".join(f"{prop}: {escape(str(value))}" for prop, value in styles.items() if value is not None)


def background_css(ref: str | None, fallback: str = DEFAULT_BACKGROUND) -> dict:
    """
    CSS properties for a background reference.

    Gradients pass through as-is, hex colors become a background color,
    anything else (data URI or URL) is wrapped in url(). An empty reference
    falls back to the flat gradient.
    """
    ref = (ref or "").strip() or fallback
    if ref.startswith(("linear-gradient", "radial-gradient")):
        return {"background-image": ref}
    if ref.startswith("#"):
        return {"background-color": ref}
    return {
        "background-image": f"url('{ref}')",
        "background-size": "cover",
        "background-position": "center",
    }


def canvas_style(background: str | None, font_family: str, **extra) -> str:
    """Style for the fixed-size root element of a slide."""
    styles = {
        "width": f"{WIDTH}px",
        "height": f"{HEIGHT}px",
        "position": "relative",
        "overflow": "hidden",
        "display": "flex",
        "flex-direction": "column",
        "justify-content": "center",
        "align-items": "center",
        "font-family": font_family,
    }
    styles.update(background_css(background))
    styles.update({k.replace("_", "-"): v for k, v in extra.items()})
    return inline_style(styles)


def overlay(color: str | None) -> str:
    """Full-canvas tint layer between the background and the content."""
    return (
        '<div class="overlay" style="'
        + inline_style({
            "position": "absolute",
            "top": "0",
            "right": "0",
            "bottom": "0",
            "left": "0",
            "background-color": color,
            "z-index": "1",
        })
        + '"></div>'
    )


def progress_dots(current: int, total: int, style: dict) -> str:
    """One dot per slide, the current one drawn in the active color."""
    container = inline_style({
        "position": "absolute",
        "bottom": "2rem",
        "left": "50%",
        "transform": "translateX(-50%)",
        "display": "flex",
        "gap": style["dot_gap"],
        "z-index": "10",
    })

    dots = []
    for index in range(total):
        active = index == current
        dot = inline_style({
            "width": style["dot_size"],
            "height": style["dot_size"],
            "border-radius": "50%",
            "background-color": style["dot_active"] if active else style["dot_inactive"],
            "border": style.get("dot_border"),
            "box-shadow": style.get("dot_shadow"),
        })
        css_class = "dot dot-active" if active else "dot"
        dots.append(f'<div class="{css_class}" style="{dot}"></div>')

    return f'<div class="progress" style="{container}">{"".join(dots)}</div>'


def html_document(body: str, font_css: str = "", extra_head: str = "", title: str = "slide") -> str:
    """Wrap a slide body in a complete HTML document."""
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8" />'
        f"<title>{escape(title)}</title>"
        f"<style>{font_css}\nhtml, body {{ margin: 0; padding: 0; }}</style>"
        f"{extra_head}"
        "</head>"
        f'<body style="margin: 0; padding: 0">{body}</body>'
        "</html>"
    )


FIT_SCRIPT = f"""<script>(function(){{
  function fit(){{
    var targetW={WIDTH}, targetH={HEIGHT};
    var el=document.body.querySelector('div');
    if(!el) return;
    var scale=Math.min(window.innerWidth/targetW, window.innerHeight/targetH);
    el.style.transformOrigin='center center';
    el.style.transform='scale('+scale+')';
    document.body.style.overflow='hidden';
    document.documentElement.style.overflow='hidden';
    document.body.style.display='flex';
    document.body.style.alignItems='center';
    document.body.style.justifyContent='center';
    document.body.style.background='transparent';
    document.body.style.height='100vh';
  }}
  window.addEventListener('resize', fit);
  fit();
}})();</script>"""

VIEWPORT_META = '<meta name="viewport" content="width=device-width, initial-scale=1" />'


def inject_fit_script(html: str) -> str:
    """Scale a slide document down to fit the iframe it is previewed in."""
    html = html.replace("<head>", "<head>" + VIEWPORT_META, 1)
    return html.replace("</body>", FIT_SCRIPT + "</body>", 1)
