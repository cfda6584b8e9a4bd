"""
Slide generation pipeline.

One request runs: received -> content-generated -> slides-rendering ->
metadata-written -> complete, or stops at failed. Every transition is
written to the item's status record so clients can tell a failed job from
one that is still running.
"""

import asyncio
import logging
import random
import re
import weakref
from pathlib import Path

from hanbok.config import get_settings
from hanbok.errors import HanbokError, InputError
from hanbok.models import (
    ContentKind,
    GenerationRequest,
    JobState,
    JobStatus,
    Language,
    rendered_slide_count,
    utc_now_iso,
)
from hanbok.rendering.engine import render_document_slides
from hanbok.services.assets import AssetLibrary, get_asset_library
from hanbok.services.content_generator import generate_document
from hanbok.services.identifiers import item_id_for
from hanbok.services.job_store import METADATA_FILE, JobStore, slide_filename, write_json_atomic
from hanbok.services.rasterizer import Rasterizer, get_rasterizer

logger = logging.getLogger(__name__)

_SLIDE_FILE = re.compile(r"^slide-(\d+)\.png$")


class SlidePipeline:
    """
    Runs generation requests end to end.

    Jobs that resolve to the same item id are serialized; jobs for distinct
    ids run concurrently and share the rasterizer's page limit. The status
    record of an id belongs to the most recently accepted request, so a run
    that was superseded while in flight stops updating it.
    """

    def __init__(
        self,
        generate=None,
        rasterizer: Rasterizer | None = None,
        store: JobStore | None = None,
        assets: AssetLibrary | None = None,
        settings=None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or get_settings()
        self.generate = generate or generate_document
        self.rasterizer = rasterizer or get_rasterizer()
        self.output_dir = self.settings.output_path
        self.store = store or JobStore(self.output_dir)
        self.assets = assets or get_asset_library(self.settings.assets_path)
        self.rng = rng
        # Entries vanish once no run holds or waits on the lock
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
        self._latest: dict[str, GenerationRequest] = {}

    def _lock(self, item_id: str) -> asyncio.Lock:
        lock = self._locks.get(item_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[item_id] = lock
        return lock

    def _is_current(self, request: GenerationRequest, item_id: str) -> bool:
        return self._latest.get(item_id, request) is request

    def accept(
        self, kind: ContentKind, text: str | None, language: Language = Language.KOREAN
    ) -> tuple[GenerationRequest, JobStatus]:
        """
        Validate input and record a `received` job.

        Raises:
            InputError: missing or blank topic/sentence
        """
        if not isinstance(text, str) or not text.strip():
            raise InputError("Missing sentence" if kind == ContentKind.SENTENCE_ANALYSIS else "Missing topic")

        request = GenerationRequest(kind=kind, topic_or_sentence=text, language=language)
        item_id = item_id_for(request)
        status = JobStatus(id=item_id, kind=request.kind, topic=text, state=JobState.RECEIVED)
        self.store.save(status)
        self._latest[item_id] = request
        logger.info(f"[Job {item_id}] received {request.kind.value} request for {text!r}")
        return request, status

    async def run(self, request: GenerationRequest, item_id: str) -> JobStatus:
        """
        Run one job to a terminal state. Never raises.
        """
        lock = self._lock(item_id)
        async with lock:
            try:
                await self._run(request, item_id)
            except HanbokError as e:
                logger.error(f"[Job {item_id}] failed: {e}")
                self._fail(request, item_id, e)
            except Exception as e:
                logger.exception(f"[Job {item_id}] failed unexpectedly")
                self._fail(request, item_id, e)
            finally:
                if self._latest.get(item_id) is request:
                    del self._latest[item_id]
        return self.store.get(item_id)

    def _fail(self, request: GenerationRequest, item_id: str, error: Exception):
        self._set_state(
            request,
            item_id,
            state=JobState.FAILED,
            error=str(error) or type(error).__name__,
            failed_slide_index=getattr(error, "slide_index", None),
        )

    def _set_state(self, request: GenerationRequest, item_id: str, **fields) -> JobStatus | None:
        if not self._is_current(request, item_id):
            logger.debug(f"[Job {item_id}] superseded, not recording {fields}")
            return self.store.get(item_id)
        if self.store.get(item_id) is None:
            self.store.save(JobStatus(id=item_id, kind=request.kind, topic=request.topic_or_sentence))
        return self.store.update(item_id, **fields)

    async def _run(self, request: GenerationRequest, item_id: str):
        kind = request.kind
        self._set_state(
            request, item_id,
            state=JobState.RECEIVED, topic=request.topic_or_sentence,
            slides_total=0, slides_done=0, error=None, failed_slide_index=None,
        )

        logger.info(f"[Job {item_id}] generating {kind.value} content")
        document = await self.generate(kind, request.topic_or_sentence, request.language)
        total = rendered_slide_count(kind, document)
        self._set_state(request, item_id, state=JobState.CONTENT_GENERATED, slides_total=total)
        logger.info(f"[Job {item_id}] content generated, {total} slides to render")

        html_slides = render_document_slides(kind, document, self.assets, self.rng)

        output_dir = self.output_dir / item_id
        output_dir.mkdir(parents=True, exist_ok=True)
        self._clear_previous_run(output_dir, len(html_slides))
        self._set_state(request, item_id, state=JobState.SLIDES_RENDERING)

        for position, html in enumerate(html_slides):
            logger.info(f"[Job {item_id}] rendering slide {position + 1}/{len(html_slides)}")
            await self.rasterizer.render_to_file(html, output_dir / slide_filename(position), slide_index=position)
            self._set_state(request, item_id, slides_done=position + 1)

        metadata = document.model_dump(mode="json", exclude_none=True)
        metadata.update({
            "originalTopic": request.topic_or_sentence,
            "language": request.language.value,
            "type": kind.value,
            "createdAt": utc_now_iso(),
        })
        write_json_atomic(output_dir / METADATA_FILE, metadata)
        self._set_state(request, item_id, state=JobState.METADATA_WRITTEN)

        self._set_state(request, item_id, state=JobState.COMPLETE)
        logger.info(f"[Job {item_id}] complete")

    @staticmethod
    def _clear_previous_run(output_dir: Path, slide_count: int):
        """Hide the item until its new metadata lands and drop slides past the new count."""
        (output_dir / METADATA_FILE).unlink(missing_ok=True)
        for path in output_dir.iterdir():
            match = _SLIDE_FILE.match(path.name)
            if match and int(match.group(1)) > slide_count:
                logger.debug(f"Removing stale {path.name}")
                path.unlink()


_pipeline: SlidePipeline | None = None


def get_pipeline() -> SlidePipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = SlidePipeline()
    return _pipeline
