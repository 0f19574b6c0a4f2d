"""
DTO for a document extraction response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from features.document_extraction.domain.entities import (
    ExtractionResult,
    ScriptLang,
    TextDirection,
)

ExtractionSource = Literal["txt", "docx", "pdf_text", "ocr"]


@dataclass
class ExtractDocumentResponseDTO:
    """Extracted text plus how it was obtained."""

    result: ExtractionResult
    direction: TextDirection
    source: ExtractionSource
    page_count: int | None = None  # PDFs only
    pages_processed: int | None = None

    @property
    def text(self) -> str:
        return self.result.text

    @property
    def detected_lang(self) -> ScriptLang:
        return self.result.detected_lang
