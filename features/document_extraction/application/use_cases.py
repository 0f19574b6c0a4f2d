"""
Application use cases for the document extraction feature.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from features.document_extraction.application.dtos import (
    ExtractDocumentRequestDTO,
    ExtractDocumentResponseDTO,
    ExtractionSource,
    OcrOptionsDTO,
)
from features.document_extraction.application.ocr_fallback import OcrFallbackEngine
from features.document_extraction.application.progress_messages import (
    ProgressCallback,
    ProgressReporter,
)
from features.document_extraction.config import ExtractionSettings
from features.document_extraction.domain.deadline import Deadline
from features.document_extraction.domain.entities import (
    DocumentFormat,
    ExtractionResult,
    ScriptLang,
    UploadedDocument,
)
from features.document_extraction.domain.errors import (
    DocumentTooLargeError,
    UnsupportedFormatError,
)
from features.document_extraction.domain.interfaces import IDocxExtractor, IPdfDecoder
from features.document_extraction.infrastructure.layout_reconstructor import reconstruct_page
from features.document_extraction.infrastructure.utils.arabic_spacing import fix_spaced_arabic
from features.document_extraction.infrastructure.utils.text_utils import (
    detect_script,
    looks_broken,
    normalize_text,
    text_direction,
)

logger = logging.getLogger(__name__)


DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EXTENSION_FORMATS = {
    ".txt": "txt",
    ".pdf": "pdf",
    ".docx": "docx",
}

MEDIA_TYPE_FORMATS = {
    "text/plain": "txt",
    "application/pdf": "pdf",
    DOCX_MEDIA_TYPE: "docx",
}

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file type. Use PDF / DOCX / TXT."


def resolve_document_format(filename: str, media_type: str) -> DocumentFormat:
    """
    Pick TXT / PDF / DOCX from the filename extension, falling back to the
    declared media type (parameters such as ``; charset=`` are ignored).

    Raises:
        UnsupportedFormatError: neither matches a supported format
    """
    ext = os.path.splitext((filename or "").strip().lower())[1]
    if ext in EXTENSION_FORMATS:
        return EXTENSION_FORMATS[ext]

    base_type = (media_type or "").split(";", 1)[0].strip().lower()
    if base_type in MEDIA_TYPE_FORMATS:
        return MEDIA_TYPE_FORMATS[base_type]

    raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE)


@dataclass
class ExtractDocumentUseCase:
    """
    Text extraction for uploaded TXT / DOCX / PDF files.

    PDF policy:
      1. Rebuild each page's text from positioned glyph runs
      2. Collapse letter-by-letter "spaced Arabic" when detected
      3. Normalize and detect the dominant script
      4. Arabic that still looks broken → one OCR pass; the result is always "ar"

    Latin-dominant text is never sent to OCR.
    """

    pdf_decoder: IPdfDecoder
    docx_extractor: IDocxExtractor
    ocr_fallback: OcrFallbackEngine
    settings: ExtractionSettings = field(default_factory=ExtractionSettings)

    async def execute(
        self,
        request: ExtractDocumentRequestDTO,
        progress: Optional[ProgressCallback] = None,
    ) -> ExtractDocumentResponseDTO:
        document = request.document
        reporter = ProgressReporter(progress, request.ui_lang)
        deadline = request.deadline or Deadline.after(self.settings.deadline_seconds)

        if document.size > self.settings.max_file_bytes:
            raise DocumentTooLargeError(
                f"File is {document.size} bytes; limit is {self.settings.max_file_bytes} bytes"
            )

        doc_format = resolve_document_format(document.filename, document.media_type)
        logger.info(f"execute: Extracting '{document.filename}' as {doc_format} ({document.size} bytes)")
        reporter.emit("preparing")

        if doc_format == "txt":
            reporter.emit("reading_txt")
            text = normalize_text(document.content.decode("utf-8-sig", errors="replace"))
            response = self._respond(text, detect_script(text), "txt")
        elif doc_format == "docx":
            reporter.emit("reading_docx")
            raw = await asyncio.to_thread(self.docx_extractor.extract_text, document.content)
            text = normalize_text(raw)
            response = self._respond(text, detect_script(text), "docx")
        else:
            response = await self._extract_pdf(document, request, reporter, deadline)

        reporter.emit("done")
        logger.info(
            f"execute: Done - source={response.source}, lang={response.detected_lang}, "
            f"chars={len(response.text)}"
        )
        return response

    async def _extract_pdf(
        self,
        document: UploadedDocument,
        request: ExtractDocumentRequestDTO,
        reporter: ProgressReporter,
        deadline: Deadline,
    ) -> ExtractDocumentResponseDTO:
        reporter.emit("reading_pages")
        pdf = await asyncio.to_thread(self.pdf_decoder.open, document.content)

        pages: List[str] = []
        try:
            page_count = pdf.page_count
            for index in range(page_count):
                deadline.check(f"text extraction page {index + 1}")
                reporter.emit("extracting_page", page=index + 1, total=page_count)
                runs = await asyncio.to_thread(pdf.glyph_runs, index)
                pages.append(reconstruct_page(runs))
        finally:
            pdf.close()

        text = fix_spaced_arabic("\n\n".join(pages))
        text = normalize_text(text)
        lang = detect_script(text)

        if lang == "ar" and looks_broken(text):
            max_pages = request.max_ocr_pages
            if max_pages is None:
                max_pages = self.settings.ocr_max_pages
            logger.info(
                f"_extract_pdf: Text layer looks like broken Arabic ({len(text)} chars), "
                f"escalating to OCR (max_pages={max_pages})"
            )
            reporter.emit("arabic_broken")

            ocr_text = await self.ocr_fallback.run(
                document,
                OcrOptionsDTO(max_pages=max_pages, script_hint="ar"),
                reporter=reporter,
                deadline=deadline,
            )
            # OCR was asked for Arabic; its output keeps that label whatever it looks like
            return self._respond(ocr_text, "ar", "ocr", page_count, min(page_count, max_pages))

        return self._respond(text, lang, "pdf_text", page_count, page_count)

    @staticmethod
    def _respond(
        text: str,
        lang: ScriptLang,
        source: ExtractionSource,
        page_count: Optional[int] = None,
        pages_processed: Optional[int] = None,
    ) -> ExtractDocumentResponseDTO:
        return ExtractDocumentResponseDTO(
            result=ExtractionResult(text=text, detected_lang=lang),
            direction=text_direction(lang),
            source=source,
            page_count=page_count,
            pages_processed=pages_processed,
        )
