"""
pdfplumber adapter for the PDF decoder port.

Text layer: words from ``page.extract_words()``; pdfplumber does not expose a
word baseline, so the bottom edge stands in for it (flipped to y-up).

Rendering: ``page.to_image(resolution=72 * scale)``.
"""

from __future__ import annotations

import io
import logging
from typing import List

import pdfplumber
from PIL import Image

from features.document_extraction.domain.entities import PositionedGlyphRun
from features.document_extraction.domain.errors import DocumentDecodeError
from features.document_extraction.domain.interfaces import IPdfDecoder, IPdfDocument

logger = logging.getLogger(__name__)

PDF_POINTS_PER_INCH = 72


class PdfPlumberDocument(IPdfDocument):
    def __init__(self, pdf: "pdfplumber.PDF") -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def glyph_runs(self, page_index: int) -> List[PositionedGlyphRun]:
        page = self._pdf.pages[page_index]
        try:
            words = page.extract_words(x_tolerance=2, y_tolerance=2) or []
            page_height = float(page.height)
        except Exception as e:
            raise DocumentDecodeError(f"Cannot read text layer of page {page_index + 1}: {e}") from e
        finally:
            page.close()

        runs = [
            PositionedGlyphRun(
                text=w["text"],
                x=float(w["x0"]),
                y=page_height - float(w["bottom"]),
                width=float(w["x1"]) - float(w["x0"]),
            )
            for w in words
            if w.get("text")
        ]
        logger.debug(f"glyph_runs: Page {page_index + 1}: {len(runs)} words")
        return runs

    def rasterize(self, page_index: int, scale: float) -> Image.Image:
        page = self._pdf.pages[page_index]
        try:
            rendered = page.to_image(resolution=PDF_POINTS_PER_INCH * scale).original
            return rendered.convert("RGB")
        except Exception as e:
            raise DocumentDecodeError(f"Cannot render page {page_index + 1}: {e}") from e
        finally:
            page.close()

    def close(self) -> None:
        self._pdf.close()


class PdfPlumberDecoder(IPdfDecoder):
    def open(self, data: bytes) -> PdfPlumberDocument:
        pdf = None
        try:
            pdf = pdfplumber.open(io.BytesIO(data))
            # Page tree is parsed lazily; force it so corrupt files fail here
            page_count = len(pdf.pages)
        except Exception as e:
            if pdf is not None:
                pdf.close()
            raise DocumentDecodeError(f"Cannot open PDF: {e}") from e

        logger.debug(f"open: PDF opened with pdfplumber ({page_count} pages)")
        return PdfPlumberDocument(pdf)
