"""
Content generation service using OpenAI to create lesson, cheat sheet and
sentence analysis documents.
"""

import asyncio
import json
import logging
import re

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from hanbok.config import get_settings
from hanbok.errors import ContentGenerationError, DocumentValidationError
from hanbok.models import (
    DOCUMENT_MODELS,
    LESSON_MAX_SLIDES,
    LESSON_MIN_SLIDES,
    CHEAT_SHEET_MAX_SLIDES,
    ContentKind,
    Language,
    LessonDocument,
    LessonSlide,
)
from hanbok.templates import get_prompt

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=get_settings().openai_api_key)
    return _client


def extract_json(content: str) -> dict:
    """
    First well-formed JSON object in a model response.

    A fenced ```json block wins; otherwise every '{' is tried in order until
    one starts a complete object.
    """
    fenced = _FENCED_JSON.search(content)
    if fenced:
        try:
            result = json.loads(fenced.group(1))
            if isinstance(result, dict):
                logger.debug("Found JSON in code block")
                return result
        except json.JSONDecodeError:
            logger.debug("Fenced block is not valid JSON, scanning for objects")

    decoder = json.JSONDecoder()
    start = content.find("{")
    while start >= 0:
        try:
            result, _ = decoder.raw_decode(content, start)
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass
        start = content.find("{", start + 1)

    raise ContentGenerationError(f"No JSON object found in response: {content[:200]!r}")


def validate_document(kind: ContentKind, data: dict):
    """Check generated JSON against the schema for its kind."""
    kind = ContentKind(kind)
    try:
        return DOCUMENT_MODELS[kind].model_validate(data)
    except ValidationError as e:
        raise DocumentValidationError(f"Generated {kind.value} failed validation: {e}", kind=kind.value) from e


def normalize_lesson(document: LessonDocument, language: Language) -> LessonDocument:
    """
    Force the fixed hook prefix onto the first slide and the fixed CTA line
    onto the last.
    """
    settings = get_settings()
    prefix = settings.hook_prefix.format(language=Language(language).display_name)
    cta = settings.cta_text
    slides = [slide.model_copy() for slide in document.slides]

    hook = slides[0]
    if not hook.text.startswith(prefix):
        hook.text = f"{prefix} {hook.text}"
    hook.type = "hook"

    last = slides[-1]
    if last.text != cta:
        if last.type == "cta" or len(slides) >= LESSON_MAX_SLIDES:
            last.text = cta
            last.type = "cta"
        else:
            slides.append(LessonSlide(text=cta, type="cta"))
    else:
        last.type = "cta"

    return document.model_copy(update={"slides": slides})


def _build_messages(kind: ContentKind, topic: str, language: Language) -> list[dict]:
    prompt = get_prompt(kind.value)
    settings = get_settings()
    user = prompt["user"].format(
        topic=topic,
        language=Language(language).display_name,
        hook_prefix=settings.hook_prefix.format(language=Language(language).display_name),
        cta_text=settings.cta_text,
        min_slides=LESSON_MIN_SLIDES,
        max_slides=LESSON_MAX_SLIDES if kind == ContentKind.LESSON else CHEAT_SHEET_MAX_SLIDES,
    )
    messages = []
    if prompt["system"]:
        messages.append({"role": "system", "content": prompt["system"]})
    messages.append({"role": "user", "content": user})
    return messages


async def generate_document(kind: ContentKind, topic: str, language: Language = Language.KOREAN):
    """
    Generate and validate a document with OpenAI.

    Args:
        kind: Which document to produce
        topic: Lesson/cheat sheet topic, or the sentence to analyse
        language: Target language (lessons only)

    Returns:
        The validated pydantic document for `kind`

    Raises:
        ContentGenerationError: on timeout, API failure, missing JSON or schema mismatch
    """
    kind = ContentKind(kind)
    settings = get_settings()
    model = getattr(settings, get_prompt(kind.value)["model_setting"])

    params = {"model": model, "messages": _build_messages(kind, topic, language)}
    if model.startswith("o"):
        params["reasoning_effort"] = "medium"
    else:
        params["temperature"] = settings.llm_temperature

    logger.info(f"Requesting {kind.value} for {topic!r} from {model}")
    try:
        response = await asyncio.wait_for(
            get_client().chat.completions.create(**params),
            timeout=settings.llm_timeout_seconds,
        )
    except asyncio.TimeoutError as e:
        raise ContentGenerationError(
            f"Content generator timed out after {settings.llm_timeout_seconds}s", kind=kind.value
        ) from e
    except OpenAIError as e:
        raise ContentGenerationError(f"Content generator request failed: {e}", kind=kind.value) from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ContentGenerationError("No response from content generator", kind=kind.value)

    document = validate_document(kind, extract_json(content))
    if kind == ContentKind.LESSON:
        document = normalize_lesson(document, language)
    return document
