"""
Visual design system for the slide templates.

Every template family draws on a fixed 1080x1350 (4:5) canvas:
1. LESSON - one centered sentence over a photo, heavy outline shadow
2. CHEAT SHEET - heading slides and vocabulary card grids over light art
3. SENTENCE ANALYSIS - one slide per token on a themed gradient
4. SANDBOX - standalone preview card, no progress dots
"""

# Canvas dimensions
WIDTH = 1080
HEIGHT = 1350

DEFAULT_BACKGROUND = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"


# ============================================
# TARGET-SCRIPT CHIP
# ============================================
# Korean/Japanese runs inside Latin text are set apart with their own font
# on a gold chip.
ASIAN_CHIP_STYLE = {
    "font-family": "Hahmlet, serif",
    "background-color": "rgba(255, 215, 0, 0.9)",
    "color": "#000",
    "padding": "0.2rem 0.5rem",
    "border-radius": "0.5rem",
    "font-weight": "400",
    "display": "inline-block",
    "text-shadow": "none",
    "margin": "0 0.2rem",
}


# ============================================
# LESSON
# ============================================
LESSON_STYLE = {
    "font_family": "TikTokSans, Arial Black, Helvetica, sans-serif",
    "overlay": "rgba(0, 0, 0, 0.4)",
    "text_color": "#ffffff",
    "text_shadow": "4px 4px 0px #000000, -4px -4px 0px #000000, 4px -4px 0px #000000, -4px 4px 0px #000000",
    "font_size": "4rem",
    "font_weight": "600",
    "line_height": "1.3",
    "max_width": "900px",
    "dot_size": "16px",
    "dot_gap": "1rem",
    "dot_active": "#ffffff",
    "dot_inactive": "rgba(255, 255, 255, 0.5)",
    "dot_border": "none",
    "dot_shadow": "0 4px 8px rgba(0, 0, 0, 0.3)",
}


# ============================================
# CHEAT SHEET
# ============================================
CHEAT_SHEET_STYLE = {
    "font_family": "Fredoka, Arial, Helvetica, sans-serif",
    "target_font_family": "Jua, serif",
    "overlay": "transparent",
    "title_size": "4.5rem",
    "title_color": "#1a1a1a",
    "category_size": "4.1rem",
    "cta_size": "3.8rem",
    "heading_color": "#000000",
    "heading_shadow": "2px 2px 4px rgba(0,0,0,0.1)",
    "card_background": "rgba(249, 250, 251, 0.8)",
    "card_border": "2px solid rgba(229, 231, 235, 0.6)",
    "word_size": "3rem",
    "word_color": "#1f2937",
    "romanization_size": "1.4rem",
    "romanization_color": "#7f8999",
    "gloss_size": "2rem",
    "gloss_color": "#6b7280",
    "max_width": "900px",
    "dot_size": "12px",
    "dot_gap": "0.5rem",
    "dot_active": "#ffffff",
    "dot_inactive": "rgba(255, 255, 255, 0.5)",
    "dot_border": "2px solid rgba(255, 255, 255, 0.8)",
    "dot_shadow": "none",
}

# Cards per row for a vocabulary grid, by item count
VOCAB_GRID_COLUMNS = [
    (4, 1),
    (12, 2),
]
VOCAB_GRID_MAX_COLUMNS = 3


def vocab_grid_columns(item_count: int) -> int:
    """Column count for a vocabulary grid so the cards fit the canvas."""
    for limit, columns in VOCAB_GRID_COLUMNS:
        if item_count <= limit:
            return columns
    return VOCAB_GRID_MAX_COLUMNS


# ============================================
# SENTENCE ANALYSIS THEMES
# ============================================
SENTENCE_THEMES = {
    "notebook_dark_overlay": {
        "id": "notebook_dark_overlay",
        "name": "Notebook Dark",
        "background": "linear-gradient(160deg, #1f2433 0%, #0f131c 100%)",
        "panel": "rgba(255, 255, 255, 0.06)",
        "panel_border": "1px solid rgba(255, 255, 255, 0.12)",
        "foreground": "#f5f5f0",
        "muted": "rgba(245, 245, 240, 0.72)",
        "primary": "#F2C14E",
        "secondary": "#8FA3BF",
    },
    "paper_light": {
        "id": "paper_light",
        "name": "Paper Light",
        "background": "linear-gradient(160deg, #fdfbf5 0%, #efe9dc 100%)",
        "panel": "rgba(0, 0, 0, 0.04)",
        "panel_border": "1px solid rgba(0, 0, 0, 0.1)",
        "foreground": "#1f2937",
        "muted": "rgba(31, 41, 55, 0.7)",
        "primary": "#C2410C",
        "secondary": "#4B5563",
    },
    "midnight_blue": {
        "id": "midnight_blue",
        "name": "Midnight Blue",
        "background": "linear-gradient(160deg, #0b1f3a 0%, #050b16 100%)",
        "panel": "rgba(120, 170, 255, 0.08)",
        "panel_border": "1px solid rgba(120, 170, 255, 0.2)",
        "foreground": "#eef4ff",
        "muted": "rgba(238, 244, 255, 0.7)",
        "primary": "#7AD3A8",
        "secondary": "#8FA3BF",
    },
}

SENTENCE_STYLE = {
    "font_family": "Fredoka, Arial, Helvetica, sans-serif",
    "target_font_family": "Hahmlet, serif",
    "translation_size": "2.2rem",
    "sentence_size": "3.6rem",
    "romanization_size": "1.6rem",
    "surface_size": "5rem",
    "label_size": "1.5rem",
    "value_size": "2rem",
    "note_size": "1.7rem",
    "morphology_separator": " · ",
    "dot_size": "14px",
    "dot_gap": "0.75rem",
    "dot_border": "none",
    "dot_shadow": "0 2px 6px rgba(0, 0, 0, 0.3)",
}

DEFAULT_HIGHLIGHT_COLOR = "#F2C14E"


def get_sentence_theme(theme_id: str | None) -> dict:
    """Get a sentence analysis theme by ID."""
    return SENTENCE_THEMES.get(theme_id or "", SENTENCE_THEMES["notebook_dark_overlay"])


def list_sentence_themes():
    """List all sentence analysis themes."""
    return [{"id": t["id"], "name": t["name"]} for t in SENTENCE_THEMES.values()]


def highlight_color_for(role: str | None, highlight_map: dict, default: str) -> str:
    """
    Color for a grammatical role.

    Exact key first, then the first map key contained in the role
    ("connector" matches "cause_connector").
    """
    if not role:
        return default
    if role in highlight_map:
        return highlight_map[role]
    for key, color in highlight_map.items():
        if key and key in role:
            return color
    return default


# ============================================
# SANDBOX
# ============================================
SANDBOX_DEFAULT_THEME = {
    "background": "linear-gradient(135deg, #312e81 0%, #0f172a 100%)",
    "overlay": "rgba(8, 16, 32, 0.58)",
    "accent": "#f2c14e",
    "foreground": "#ffffff",
    "muted": "rgba(255, 255, 255, 0.78)",
    "fontFamily": "TikTokSans, Arial Black, Helvetica, sans-serif",
    "panel": "rgba(8, 14, 28, 0.75)",
    "bulletBackground": "rgba(15, 23, 42, 0.64)",
}

BADGE_JUSTIFY = {
    "left": "flex-start",
    "center": "center",
    "right": "flex-end",
}
