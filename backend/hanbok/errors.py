"""
Error types for the slide generation pipeline.
"""

from typing import Optional


class HanbokError(Exception):
    """Base class for all pipeline errors."""


class InputError(HanbokError):
    """Missing or empty topic/sentence on a generation request."""


class ContentGenerationError(HanbokError):
    """The content generator failed or returned unusable output."""

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.kind = kind


class DocumentValidationError(ContentGenerationError):
    """Generated JSON was found but does not match the schema for its kind."""


class RasterizationError(HanbokError):
    """Headless browser failed to produce a PNG for one slide."""

    def __init__(self, message: str, slide_index: Optional[int] = None):
        super().__init__(message)
        self.slide_index = slide_index


class ItemNotFoundError(HanbokError):
    """No readable metadata exists for the requested item id."""

    def __init__(self, item_id: str):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id
