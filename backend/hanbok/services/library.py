"""
Read-side index over the output directory.

Items are rebuilt from their `metadata.json` on every call; directories
without readable metadata (jobs still running, or failed) are skipped.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from hanbok.config import get_settings
from hanbok.errors import ItemNotFoundError
from hanbok.models import ContentKind, Language, LibraryItemDetail, LibraryItemSummary
from hanbok.services.identifiers import is_safe_segment
from hanbok.services.job_store import METADATA_FILE, slide_filename

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = Language.KOREAN.value
DEFAULT_EPISODE = 1
DEFAULT_TYPE = ContentKind.LESSON.value

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _slide_count(metadata: dict) -> int:
    """Rendered slides: one per token for sentence analyses, else one per slide entry."""
    if metadata.get("type") == ContentKind.SENTENCE_ANALYSIS.value:
        entries = metadata.get("tokens")
    else:
        entries = metadata.get("slides")
    return len(entries) if isinstance(entries, list) else 0


def _created_at(value) -> datetime:
    if not isinstance(value, str):
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class LibraryIndex:
    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def _read_metadata(self, item_id: str) -> dict | None:
        path = self.output_dir / item_id / METADATA_FILE
        if not path.is_file():
            return None
        try:
            metadata = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping {item_id}: unreadable metadata ({e})")
            return None
        if not isinstance(metadata, dict):
            logger.warning(f"Skipping {item_id}: metadata is not an object")
            return None
        return metadata

    @staticmethod
    def _common(item_id: str, metadata: dict) -> dict:
        return {
            "id": item_id,
            "topic": str(metadata.get("originalTopic") or metadata.get("title") or item_id),
            "title": metadata.get("title"),
            "language": metadata.get("language") or DEFAULT_LANGUAGE,
            "episodeNumber": metadata.get("episodeNumber") or DEFAULT_EPISODE,
            "type": metadata.get("type") or DEFAULT_TYPE,
        }

    def list(self) -> list[LibraryItemSummary]:
        """Every complete item, newest `createdAt` first."""
        if not self.output_dir.is_dir():
            return []

        items = []
        for entry in self.output_dir.iterdir():
            if not entry.is_dir():
                continue
            metadata = self._read_metadata(entry.name)
            if metadata is None:
                continue
            try:
                items.append(LibraryItemSummary(
                    **self._common(entry.name, metadata),
                    slides=_slide_count(metadata),
                    createdAt=metadata.get("createdAt"),
                ))
            except ValidationError as e:
                logger.warning(f"Skipping {entry.name}: {e}")

        items.sort(key=lambda item: _created_at(item.createdAt), reverse=True)
        return items

    def get(self, item_id: str) -> LibraryItemDetail:
        """
        Detail for one item with its slide image URLs.

        Raises:
            ItemNotFoundError: unknown id, unsafe id, or missing/unreadable metadata
        """
        if not is_safe_segment(item_id):
            raise ItemNotFoundError(item_id)
        metadata = self._read_metadata(item_id)
        if metadata is None:
            raise ItemNotFoundError(item_id)

        slides = [f"/output/{item_id}/{slide_filename(i)}" for i in range(_slide_count(metadata))]
        assets = metadata.get("assets")
        return LibraryItemDetail(
            **self._common(item_id, metadata),
            slides=slides,
            assets=assets if isinstance(assets, list) else [],
        )


def get_library() -> LibraryIndex:
    return LibraryIndex(get_settings().output_path)
