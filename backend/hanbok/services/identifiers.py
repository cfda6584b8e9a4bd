"""
Folder-safe identifiers derived from user input.

The identifier returned to the client in the 202 response is the name of
the output directory, so it must be computed once per request and be
stable for the same input.
"""

import logging
import re
import time
from typing import Optional

from hanbok.models import ContentKind, GenerationRequest

logger = logging.getLogger(__name__)

MAX_ID_LENGTH = 50
MIN_CORE_LENGTH = 2
SENTENCE_SOURCE_CHARS = 40

# Hangul compatibility Jamo, enclosed CJK, Hangul syllables, halfwidth/fullwidth
# forms, Hiragana, Katakana, CJK unified ideographs
_KEPT_SCRIPTS = (
    "\u3130-\u318F"
    "\u3200-\u32FF"
    "\uAC00-\uD7AF"
    "\uFF00-\uFFEF"
    "\u3040-\u309F"
    "\u30A0-\u30FF"
    "\u4E00-\u9FAF"
)

_SEPARATORS = re.compile(r"[\s\-_]+")
_DISALLOWED = re.compile(rf"[^A-Za-z0-9{_KEPT_SCRIPTS}\-]")
_HYPHEN_RUNS = re.compile(r"-+")
_SAFE_SEGMENT = re.compile(rf"^[A-Za-z0-9_{_KEPT_SCRIPTS}\-]+$")

_PREFIXES = {
    ContentKind.LESSON: None,
    ContentKind.CHEAT_SHEET: "cheat-sheet",
    ContentKind.SENTENCE_ANALYSIS: "sentence",
}


def _clean(text: str) -> str:
    cleaned = text.strip().lower()
    cleaned = _SEPARATORS.sub("-", cleaned)
    cleaned = _DISALLOWED.sub("", cleaned)
    cleaned = _HYPHEN_RUNS.sub("-", cleaned)
    return cleaned.strip("-")


def sanitize_identifier(
    text: str,
    prefix: Optional[str] = None,
    fallback: str = "lesson",
    max_length: int = MAX_ID_LENGTH,
) -> str:
    """
    Turn free text into a single path segment.

    Whitespace, hyphen and underscore runs become one hyphen; anything outside
    ASCII letters/digits, hyphens and the Korean/Japanese ranges is dropped.
    Applying the function to its own output returns it unchanged. When fewer
    than two characters survive, a timestamped name is returned instead.
    """
    core = _clean(text or "")

    if len(core) < MIN_CORE_LENGTH:
        fallback_id = f"{prefix or fallback}-{int(time.time() * 1000)}"
        logger.debug(f"Generated fallback ID: {fallback_id}")
        return fallback_id

    if prefix and not core.startswith(f"{prefix}-"):
        core = f"{prefix}-{core}"

    if len(core) > max_length:
        core = core[:max_length].rstrip("-")

    return core


def item_id_for(request: GenerationRequest) -> str:
    """Output directory name for a generation request."""
    source = request.topic_or_sentence
    if request.kind == ContentKind.SENTENCE_ANALYSIS:
        source = source[:SENTENCE_SOURCE_CHARS]

    item_id = sanitize_identifier(
        source,
        prefix=_PREFIXES[request.kind],
        fallback=request.kind.value,
    )
    logger.debug(f"Sanitized {source!r} to {item_id!r}")
    return item_id


def is_safe_segment(item_id: str) -> bool:
    """True if `item_id` can be joined under the output dir without escaping it."""
    if not item_id or item_id in (".", ".."):
        return False
    return bool(_SAFE_SEGMENT.match(item_id))
