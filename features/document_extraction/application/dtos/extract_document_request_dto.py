"""
DTO for a document extraction request.
"""

from __future__ import annotations

from dataclasses import dataclass

from features.document_extraction.domain.deadline import Deadline
from features.document_extraction.domain.entities import ScriptLang, UploadedDocument


@dataclass
class ExtractDocumentRequestDTO:
    """
    Input for the extraction pipeline.

    ``max_ocr_pages`` and ``deadline`` override the configured defaults for
    this one request when given.
    """

    document: UploadedDocument
    ui_lang: ScriptLang = "en"  # Language of progress messages
    max_ocr_pages: int | None = None
    deadline: Deadline | None = None

    def __post_init__(self) -> None:
        if self.max_ocr_pages is not None and self.max_ocr_pages < 1:
            raise ValueError(f"max_ocr_pages must be >= 1, got {self.max_ocr_pages}")
