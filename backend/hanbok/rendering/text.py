"""
Korean/Japanese run detection in mixed-script text.
"""

import re
from dataclasses import dataclass
from html import escape

from hanbok.design_templates import ASIAN_CHIP_STYLE
from hanbok.rendering.page import inline_style

# Hangul syllables, Hangul Jamo, Hangul compatibility Jamo, Hiragana, Katakana, CJK ideographs
TARGET_SCRIPT_RANGES = (
    (0xAC00, 0xD7AF),
    (0x1100, 0x11FF),
    (0x3130, 0x318F),
    (0x3040, 0x309F),
    (0x30A0, 0x30FF),
    (0x4E00, 0x9FAF),
)

_TARGET_RUN = re.compile(
    "[" + "".join(f"{chr(lo)}-{chr(hi)}" for lo, hi in TARGET_SCRIPT_RANGES) + "]+"
)


@dataclass(frozen=True)
class Segment:
    text: str
    tagged: bool


def segment_asian_text(text: str) -> list[Segment]:
    """
    Split text into alternating plain and target-script segments.

    Joining the segment texts in order gives back the input exactly.
    Empty segments are never produced.
    """
    segments = []
    position = 0
    for match in _TARGET_RUN.finditer(text):
        if match.start() > position:
            segments.append(Segment(text[position:match.start()], False))
        segments.append(Segment(match.group(), True))
        position = match.end()
    if position < len(text):
        segments.append(Segment(text[position:], False))
    return segments


def contains_target_script(text: str | None) -> bool:
    return bool(text) and _TARGET_RUN.search(text) is not None


def wrap_asian_text(text: str | None, chip_style: dict | None = None) -> str:
    """Escape text for HTML, putting each target-script run in a chip span."""
    if not text:
        return ""
    style = inline_style(chip_style or ASIAN_CHIP_STYLE)
    parts = []
    for segment in segment_asian_text(text):
        if segment.tagged:
            parts.append(f'<span class="asian" style="{style}">{escape(segment.text)}</span>')
        else:
            parts.append(escape(segment.text))
    return "".join(parts)
