"""
Tesseract adapter for the recognition engine port.

pytesseract shells out to the ``tesseract`` binary per image, so the worker
"lifecycle" is light: ``start()`` verifies the binary once, ``recognize()``
runs each page in a worker thread, ``close()`` marks the engine unusable.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import pytesseract
from PIL import Image

from features.document_extraction.domain.errors import OcrFailedError
from features.document_extraction.domain.interfaces import (
    IRecognitionEngine,
    RecognitionProgressCallback,
)
from features.document_extraction.infrastructure.utils.ocr_utils import preprocess_for_ocr

logger = logging.getLogger(__name__)


class TesseractRecognitionEngine(IRecognitionEngine):
    """
    Args:
        psm: Page segmentation mode
            - 3: Fully automatic page segmentation
            - 4: Assume a single column of text
            - 6: Assume a uniform block of text (default)
            - 11: Sparse text
        oem: OCR engine mode (1 = LSTM only)
        preprocess: Binarize with OpenCV before recognition
    """

    def __init__(self, psm: int = 6, oem: int = 1, preprocess: bool = True) -> None:
        self.config = f"--oem {oem} --psm {psm}"
        self.preprocess = preprocess
        self._started = False

    async def start(self) -> None:
        if self._started:
            return
        try:
            version = await asyncio.to_thread(pytesseract.get_tesseract_version)
        except pytesseract.TesseractNotFoundError as e:
            raise OcrFailedError("Tesseract is not installed or not on PATH") from e
        except Exception as e:
            raise OcrFailedError(f"Tesseract unavailable: {e}") from e

        self._started = True
        logger.info(f"start: Tesseract {version} ready ({self.config})")

    async def recognize(
        self,
        image: Image.Image,
        languages: str,
        on_progress: Optional[RecognitionProgressCallback] = None,
    ) -> str:
        if not self._started:
            raise OcrFailedError("Recognition engine used before start()")

        try:
            return await asyncio.to_thread(self._recognize_sync, image, languages)
        except Exception as e:
            raise OcrFailedError(f"Tesseract recognition failed ({languages}): {e}") from e

    def _recognize_sync(self, image: Image.Image, languages: str) -> str:
        proc = preprocess_for_ocr(image) if self.preprocess else image
        try:
            return pytesseract.image_to_string(proc, lang=languages, config=self.config)
        finally:
            if proc is not image:
                proc.close()

    async def close(self) -> None:
        self._started = False
