"""
Output directory layout and the filesystem-backed job status records.

Each item lives in `output/<id>/`: `slide-1.png` .. `slide-N.png`,
`metadata.json` once the job completes, and `status.json` throughout.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from hanbok.config import get_settings
from hanbok.models import JobStatus, utc_now_iso

logger = logging.getLogger(__name__)

STATUS_FILE = "status.json"
METADATA_FILE = "metadata.json"


def slide_filename(position: int) -> str:
    """1-indexed file name for the slide at a 0-based position."""
    return f"slide-{position + 1}.png"


def write_json_atomic(path: Path, data: dict):
    """Write JSON next to `path` and rename it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


class JobStore:
    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def _path(self, item_id: str) -> Path:
        return self.output_dir / item_id / STATUS_FILE

    def save(self, status: JobStatus) -> JobStatus:
        write_json_atomic(self._path(status.id), status.model_dump(mode="json"))
        return status

    def get(self, item_id: str) -> JobStatus | None:
        path = self._path(item_id)
        if not path.is_file():
            return None
        try:
            return JobStatus.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable status record {path}: {e}")
            return None

    def update(self, item_id: str, **fields) -> JobStatus:
        """Merge fields into the stored record and stamp `updated_at`."""
        current = self.get(item_id)
        if current is None:
            raise KeyError(item_id)
        updated = current.model_copy(update={**fields, "updated_at": utc_now_iso()})
        return self.save(updated)

    def list(self) -> list[JobStatus]:
        """Every readable record, most recently updated first."""
        if not self.output_dir.is_dir():
            return []
        records = []
        for entry in self.output_dir.iterdir():
            if entry.is_dir():
                status = self.get(entry.name)
                if status is not None:
                    records.append(status)
        return sorted(records, key=lambda s: s.updated_at, reverse=True)


def get_job_store() -> JobStore:
    return JobStore(get_settings().output_path)
