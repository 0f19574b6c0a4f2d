"""
Tests for the python-docx extractor adapter.
"""

import io

import docx
import pytest

from features.document_extraction.domain.errors import DocumentDecodeError
from features.document_extraction.infrastructure.docx_extractor_python_docx import PythonDocxExtractor


def _docx_bytes(build):
    document = docx.Document()
    build(document)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def test_paragraphs_and_tables_keep_body_order():
    def build(document):
        document.add_paragraph("Scope of work")
        table = document.add_table(rows=2, cols=2)
        table.cell(0, 0).text = "Item"
        table.cell(0, 1).text = "Qty"
        table.cell(1, 0).text = "Servers"
        table.cell(1, 1).text = "4"
        document.add_paragraph("نطاق العمل")

    text = PythonDocxExtractor().extract_text(_docx_bytes(build))

    assert text == "Scope of work\n\nItem\tQty\n\nServers\t4\n\nنطاق العمل"


def test_merged_cells_are_emitted_once():
    def build(document):
        table = document.add_table(rows=1, cols=3)
        merged = table.cell(0, 0).merge(table.cell(0, 1))
        merged.text = "Merged"
        table.cell(0, 2).text = "Merged"

    text = PythonDocxExtractor().extract_text(_docx_bytes(build))

    # Equal text in a distinct cell is kept
    assert text == "Merged\tMerged"


def test_empty_document():
    assert PythonDocxExtractor().extract_text(_docx_bytes(lambda d: None)) == ""


def test_invalid_bytes_raise_decode_error():
    with pytest.raises(DocumentDecodeError):
        PythonDocxExtractor().extract_text(b"PK\x03\x04 not really a zip")
