"""
FastAPI routes for the document extraction feature.

Feature: upload a TXT / DOCX / PDF file and get back clean, logically ordered
text plus its dominant script ("ar" / "en"), with OCR fallback for PDFs whose
Arabic text layer is broken.
"""

from __future__ import annotations

import asyncio
import json
import logging
from functools import lru_cache
from typing import Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from features.document_extraction.application.dtos import (
    ExtractDocumentRequestDTO,
    ExtractDocumentResponseDTO,
)
from features.document_extraction.application.ocr_fallback import OcrFallbackEngine
from features.document_extraction.application.use_cases import ExtractDocumentUseCase
from features.document_extraction.config import ExtractionSettings
from features.document_extraction.domain.deadline import Deadline
from features.document_extraction.domain.entities import UploadedDocument
from features.document_extraction.domain.errors import (
    DocumentDecodeError,
    DocumentTooLargeError,
    ExtractionError,
    ExtractionTimeoutError,
    OcrFailedError,
    UnsupportedFormatError,
)
from features.document_extraction.infrastructure.docx_extractor_python_docx import PythonDocxExtractor
from features.document_extraction.infrastructure.ocr_engine_tesseract import TesseractRecognitionEngine
from features.document_extraction.infrastructure.pdf_decoder_pdfplumber import PdfPlumberDecoder
from features.document_extraction.infrastructure.pdf_decoder_pymupdf import PyMuPdfDecoder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


PDF_DECODERS = {
    "pymupdf": PyMuPdfDecoder,
    "pdfplumber": PdfPlumberDecoder,
}

ERROR_STATUS_CODES = {
    UnsupportedFormatError: 400,
    DocumentTooLargeError: 413,
    DocumentDecodeError: 422,
    OcrFailedError: 500,
    ExtractionTimeoutError: 504,
}


class ExtractDocumentResponse(BaseModel):
    text: str
    detectedLang: Literal["ar", "en"]
    direction: Literal["rtl", "ltr"]
    source: Literal["txt", "docx", "pdf_text", "ocr"]
    pageCount: int | None = None
    pagesProcessed: int | None = None


@lru_cache(maxsize=1)
def get_settings() -> ExtractionSettings:
    return ExtractionSettings.from_env()


def build_extract_document_use_case(settings: ExtractionSettings) -> ExtractDocumentUseCase:
    """Build the extraction use case with the configured PDF backend and Tesseract OCR."""
    decoder = PDF_DECODERS[settings.pdf_backend]()

    def engine_factory() -> TesseractRecognitionEngine:
        return TesseractRecognitionEngine(psm=settings.ocr_psm, preprocess=settings.ocr_preprocess)

    ocr_fallback = OcrFallbackEngine(
        decoder=decoder,
        engine_factory=engine_factory,
        scale=settings.ocr_scale,
        concurrency=settings.ocr_concurrency,
    )
    return ExtractDocumentUseCase(
        pdf_decoder=decoder,
        docx_extractor=PythonDocxExtractor(),
        ocr_fallback=ocr_fallback,
        settings=settings,
    )


def get_extract_document_use_case() -> ExtractDocumentUseCase:
    return build_extract_document_use_case(get_settings())


def status_code_for(error: ExtractionError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 500


async def _read_upload(file: UploadFile, max_bytes: int) -> UploadedDocument:
    # One byte past the limit is enough for the use case to reject it
    content = await file.read(max_bytes + 1)
    return UploadedDocument(
        content=content,
        filename=file.filename or "",
        media_type=file.content_type or "",
    )


def _to_response(dto_out: ExtractDocumentResponseDTO) -> ExtractDocumentResponse:
    return ExtractDocumentResponse(
        text=dto_out.text,
        detectedLang=dto_out.detected_lang,
        direction=dto_out.direction,
        source=dto_out.source,
        pageCount=dto_out.page_count,
        pagesProcessed=dto_out.pages_processed,
    )


@router.post("/extract", response_model=ExtractDocumentResponse)
async def extract_document(
    file: UploadFile = File(...),
    ui_lang: Literal["en", "ar"] = Form("en"),
    use_case: ExtractDocumentUseCase = Depends(get_extract_document_use_case),
) -> ExtractDocumentResponse:
    """
    Extract text from an uploaded TXT / DOCX / PDF file.

    Errors:
      - 400 unsupported file type
      - 413 file too large
      - 422 file could not be decoded
      - 500 OCR failed
      - 504 extraction deadline exceeded
    """
    document = await _read_upload(file, use_case.settings.max_file_bytes)
    dto_in = ExtractDocumentRequestDTO(document=document, ui_lang=ui_lang)

    try:
        dto_out = await use_case.execute(dto_in)
    except ExtractionError as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e)) from e

    return _to_response(dto_out)


@router.post("/extract/stream")
async def extract_document_stream(
    file: UploadFile = File(...),
    ui_lang: Literal["en", "ar"] = Form("en"),
    use_case: ExtractDocumentUseCase = Depends(get_extract_document_use_case),
) -> StreamingResponse:
    """
    Same as ``/extract`` but streams NDJSON: one ``progress`` line per status
    update, then a single ``result`` or ``error`` line.
    """
    document = await _read_upload(file, use_case.settings.max_file_bytes)
    deadline = Deadline.after(use_case.settings.deadline_seconds)
    dto_in = ExtractDocumentRequestDTO(document=document, ui_lang=ui_lang, deadline=deadline)
    queue: asyncio.Queue = asyncio.Queue()

    def on_progress(status: str) -> None:
        queue.put_nowait({"type": "progress", "status": status})

    async def run() -> None:
        try:
            dto_out = await use_case.execute(dto_in, progress=on_progress)
            queue.put_nowait({"type": "result", **_to_response(dto_out).model_dump()})
        except ExtractionError as e:
            queue.put_nowait({"type": "error", "status_code": status_code_for(e), "detail": str(e)})
        except Exception as e:
            logger.exception(f"extract_document_stream: Unexpected failure for '{document.filename}'")
            queue.put_nowait({"type": "error", "status_code": 500, "detail": f"Extraction failed: {e}"})
        finally:
            queue.put_nowait(None)

    async def events():
        task = asyncio.create_task(run())
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield json.dumps(event, ensure_ascii=False) + "\n"
        finally:
            if not task.done():
                # Client went away: stop at the next page boundary
                deadline.cancel()

    return StreamingResponse(events(), media_type="application/x-ndjson")
