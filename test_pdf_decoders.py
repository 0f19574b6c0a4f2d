"""
Tests for the PyMuPDF and pdfplumber decoder adapters, on PDFs built in memory.
"""

import fitz  # PyMuPDF
import pytest

from features.document_extraction.domain.errors import DocumentDecodeError
from features.document_extraction.infrastructure.layout_reconstructor import reconstruct_page
from features.document_extraction.infrastructure.pdf_decoder_pdfplumber import PdfPlumberDecoder
from features.document_extraction.infrastructure.pdf_decoder_pymupdf import PyMuPdfDecoder

DECODERS = [PyMuPdfDecoder, PdfPlumberDecoder]


def _make_pdf(pages):
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page(width=300, height=200)
        for y, text in lines:
            page.insert_text((50, y), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def two_page_pdf():
    return _make_pdf([
        [(50, "First line"), (100, "Second line")],
        [(50, "Other page")],
    ])


@pytest.mark.parametrize("decoder_cls", DECODERS)
def test_page_count_and_runs(decoder_cls, two_page_pdf):
    with decoder_cls().open(two_page_pdf) as pdf:
        assert pdf.page_count == 2
        runs = pdf.glyph_runs(0)

    assert runs
    # PDF user space: the first line (top of the page) has the larger y
    first = [r for r in runs if r.text.startswith("First")][0]
    second = [r for r in runs if r.text.startswith("Second")][0]
    assert first.y > second.y
    assert first.x == pytest.approx(50, abs=1)
    assert all(r.width > 0 for r in runs)


@pytest.mark.parametrize("decoder_cls", DECODERS)
def test_reconstructed_page_text(decoder_cls, two_page_pdf):
    with decoder_cls().open(two_page_pdf) as pdf:
        first = reconstruct_page(pdf.glyph_runs(0))
        second = reconstruct_page(pdf.glyph_runs(1))

    assert first == "First line\nSecond line"
    assert second == "Other page"


@pytest.mark.parametrize("decoder_cls", DECODERS)
def test_rasterize_scales_page(decoder_cls, two_page_pdf):
    with decoder_cls().open(two_page_pdf) as pdf:
        image = pdf.rasterize(0, 2.0)

    try:
        assert image.mode == "RGB"
        width, height = image.size
        assert abs(width - 600) <= 2
        assert abs(height - 400) <= 2
    finally:
        image.close()


@pytest.mark.parametrize("decoder_cls", DECODERS)
def test_empty_page_has_no_runs(decoder_cls):
    data = _make_pdf([[]])
    with decoder_cls().open(data) as pdf:
        assert pdf.glyph_runs(0) == []


@pytest.mark.parametrize("decoder_cls", DECODERS)
def test_garbage_bytes_raise_decode_error(decoder_cls):
    with pytest.raises(DocumentDecodeError):
        decoder_cls().open(b"this is not a pdf at all")
