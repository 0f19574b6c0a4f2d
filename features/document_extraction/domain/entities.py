"""
Domain entities for the document extraction feature.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

ScriptLang = Literal["ar", "en"]
TextDirection = Literal["rtl", "ltr"]
DocumentFormat = Literal["txt", "pdf", "docx"]


@dataclass(frozen=True)
class UploadedDocument:
    """Raw upload as received at the request boundary."""

    content: bytes
    filename: str = ""
    media_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PositionedGlyphRun:
    """
    A fragment of text emitted by a PDF content stream.

    Coordinates are in PDF user space: ``y`` is the baseline and grows upward,
    ``x`` is the left edge of the run and ``width`` its rendered extent.
    """

    text: str
    x: float
    y: float
    width: float = 0.0


@dataclass
class ReconstructedLine:
    """Glyph runs sharing one baseline bucket, already in reading order."""

    y: float
    direction: TextDirection
    runs: List[PositionedGlyphRun] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    detected_lang: ScriptLang


@dataclass(frozen=True)
class OcrProgress:
    """
    OCR status for one page (1-based).

    ``page_ratio`` is how far recognition of that page has got, when the
    engine reports it; ``percent`` is overall progress across all pages.
    """

    page: int
    total_pages: int
    page_ratio: float = 0.0

    @property
    def percent(self) -> int:
        if self.total_pages <= 0:
            return 100
        done = (self.page - 1) + min(max(self.page_ratio, 0.0), 1.0)
        return int(round(100 * done / self.total_pages))
