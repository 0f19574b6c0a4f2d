"""
OCR fallback: rasterize PDF pages and recognize them.

Pages are processed in order up to ``max_pages``; anything past the cap is
skipped on purpose. Any rasterization or recognition failure aborts the whole
run with ``OcrFailedError``: there is no partial-success path.

With ``concurrency > 1`` several pages are recognized at once, but results are
collected by page index and progress is still reported in page order.
Rendering always happens one page at a time because the decoded document is
not safe to share between threads.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from features.document_extraction.application.dtos import OcrOptionsDTO
from features.document_extraction.application.progress_messages import ProgressReporter
from features.document_extraction.domain.deadline import Deadline
from features.document_extraction.domain.entities import OcrProgress, UploadedDocument
from features.document_extraction.domain.errors import ExtractionError, OcrFailedError
from features.document_extraction.domain.interfaces import (
    IPdfDecoder,
    IPdfDocument,
    IRecognitionEngine,
)
from features.document_extraction.infrastructure.utils.ocr_utils import ocr_languages
from features.document_extraction.infrastructure.utils.text_utils import normalize_text

logger = logging.getLogger(__name__)


class _Aborted(Exception):
    """A sibling page failed; this page was never started."""


def _locked(lock: threading.Lock, fn, *args):
    with lock:
        return fn(*args)


@dataclass
class OcrFallbackEngine:
    decoder: IPdfDecoder
    engine_factory: Callable[[], IRecognitionEngine]
    scale: float = 2.0
    concurrency: int = 1

    async def run(
        self,
        document: UploadedDocument,
        options: OcrOptionsDTO,
        reporter: Optional[ProgressReporter] = None,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """
        OCR the first ``options.max_pages`` pages of a PDF.

        Returns:
            Normalized text, pages separated by a blank line

        Raises:
            DocumentDecodeError: the PDF cannot be opened
            OcrFailedError: a page could not be rendered or recognized
            ExtractionTimeoutError: deadline hit between pages
        """
        reporter = reporter or ProgressReporter()
        deadline = deadline or Deadline.never()
        languages = ocr_languages(options.script_hint)

        reporter.emit("preparing_ocr")
        pdf = await asyncio.to_thread(self.decoder.open, document.content)
        render_lock = threading.Lock()

        try:
            total = min(pdf.page_count, options.max_pages)
            if pdf.page_count > total:
                logger.warning(f"run: OCR capped at {total} of {pdf.page_count} pages")
            logger.info(f"run: Starting OCR - {total} pages, lang={languages}, scale={self.scale}")

            async with self.engine_factory() as engine:
                if self.concurrency > 1:
                    texts = await self._recognize_parallel(pdf, engine, total, languages, reporter, deadline, render_lock)
                else:
                    texts = await self._recognize_sequential(pdf, engine, total, languages, reporter, deadline, render_lock)
        finally:
            await asyncio.to_thread(_locked, render_lock, pdf.close)

        logger.info(f"run: OCR complete - {len(texts)} pages recognized")
        return normalize_text("\n\n".join(texts))

    async def _recognize_page(
        self,
        pdf: IPdfDocument,
        engine: IRecognitionEngine,
        index: int,
        languages: str,
        render_lock: threading.Lock,
        on_progress=None,
    ) -> str:
        try:
            image = await asyncio.to_thread(_locked, render_lock, pdf.rasterize, index, self.scale)
        except ExtractionError as e:
            raise OcrFailedError(f"Page {index + 1}: {e}") from e

        try:
            text = await engine.recognize(image, languages, on_progress=on_progress)
        except OcrFailedError:
            raise
        except Exception as e:
            raise OcrFailedError(f"Page {index + 1}: recognition failed: {e}") from e
        finally:
            # Release the bitmap right away; large documents would otherwise pile up
            image.close()

        logger.debug(f"_recognize_page: Page {index + 1}: {len(text or '')} chars")
        return text or ""

    async def _recognize_sequential(self, pdf, engine, total, languages, reporter, deadline, render_lock) -> List[str]:
        texts: List[str] = []

        for index in range(total):
            deadline.check(f"OCR page {index + 1}")
            progress = OcrProgress(page=index + 1, total_pages=total)
            reporter.emit("ocr_page", page=progress.page, total=total, percent=progress.percent)

            def on_progress(ratio: float, page: int = index + 1) -> None:
                sub = OcrProgress(page=page, total_pages=total, page_ratio=ratio)
                reporter.emit("ocr_page", page=page, total=total, percent=sub.percent)

            texts.append(await self._recognize_page(pdf, engine, index, languages, render_lock, on_progress))

        return texts

    async def _recognize_parallel(self, pdf, engine, total, languages, reporter, deadline, render_lock) -> List[str]:
        semaphore = asyncio.Semaphore(self.concurrency)
        abort = asyncio.Event()

        async def worker(index: int) -> str:
            async with semaphore:
                if abort.is_set():
                    raise _Aborted()
                deadline.check(f"OCR page {index + 1}")
                return await self._recognize_page(pdf, engine, index, languages, render_lock)

        tasks = [asyncio.create_task(worker(index)) for index in range(total)]
        texts: List[str] = []

        try:
            for index, task in enumerate(tasks):
                progress = OcrProgress(page=index + 1, total_pages=total)
                reporter.emit("ocr_page", page=progress.page, total=total, percent=progress.percent)
                texts.append(await task)
        except BaseException:
            # Let in-flight pages finish so no worker thread outlives the document
            abort.set()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return texts
