"""
PyMuPDF adapter for the PDF decoder port.

Text layer: spans from ``page.get_text("dict")``. Each span becomes one glyph
run positioned at its baseline origin; PyMuPDF reports y top-down, so it is
flipped to PDF user space (y up) here.

Rendering: ``page.get_pixmap`` with a uniform zoom matrix, converted to a
Pillow RGB image.
"""

from __future__ import annotations

import logging
from typing import List

import fitz  # PyMuPDF
from PIL import Image

from features.document_extraction.domain.entities import PositionedGlyphRun
from features.document_extraction.domain.errors import DocumentDecodeError
from features.document_extraction.domain.interfaces import IPdfDecoder, IPdfDocument

logger = logging.getLogger(__name__)


class PyMuPdfDocument(IPdfDocument):
    def __init__(self, doc: "fitz.Document") -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def glyph_runs(self, page_index: int) -> List[PositionedGlyphRun]:
        try:
            page = self._doc.load_page(page_index)
            page_height = page.rect.height
            data = page.get_text("dict")
        except Exception as e:
            raise DocumentDecodeError(f"Cannot read text layer of page {page_index + 1}: {e}") from e

        runs: List[PositionedGlyphRun] = []
        for block in data.get("blocks", []):
            # 0 = text block according to PyMuPDF
            if block.get("type") != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text") or ""
                    if not text:
                        continue
                    x0, _y0, x1, _y1 = span["bbox"]
                    _ox, oy = span["origin"]
                    runs.append(
                        PositionedGlyphRun(
                            text=text,
                            x=float(x0),
                            y=float(page_height - oy),
                            width=float(x1 - x0),
                        )
                    )

        logger.debug(f"glyph_runs: Page {page_index + 1}: {len(runs)} spans")
        return runs

    def rasterize(self, page_index: int, scale: float) -> Image.Image:
        try:
            page = self._doc.load_page(page_index)
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except Exception as e:
            raise DocumentDecodeError(f"Cannot render page {page_index + 1}: {e}") from e
        finally:
            pix = None
        return image

    def close(self) -> None:
        self._doc.close()


class PyMuPdfDecoder(IPdfDecoder):
    def open(self, data: bytes) -> PyMuPdfDocument:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentDecodeError(f"Cannot open PDF: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise DocumentDecodeError("Cannot open PDF: document is password protected")

        logger.debug(f"open: PDF opened with PyMuPDF ({doc.page_count} pages)")
        return PyMuPdfDocument(doc)
