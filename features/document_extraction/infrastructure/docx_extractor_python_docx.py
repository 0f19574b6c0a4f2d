"""
python-docx adapter for the DOCX extractor port.

Walks the document body in order so paragraphs and tables keep their relative
position. Output mirrors a raw-text conversion: one block per paragraph or
table row, blocks separated by a blank line, table cells tab-separated.
"""

from __future__ import annotations

import io
import logging
from typing import List

import docx
from docx.oxml.table import CT_Tbl
from docx.oxml.text.paragraph import CT_P
from docx.table import Table
from docx.text.paragraph import Paragraph

from features.document_extraction.domain.errors import DocumentDecodeError
from features.document_extraction.domain.interfaces import IDocxExtractor

logger = logging.getLogger(__name__)


def _table_lines(table: Table) -> List[str]:
    lines: List[str] = []
    for row in table.rows:
        cells: List[str] = []
        prev_tc = None
        for cell in row.cells:
            # Merged cells repeat the same underlying <w:tc> across the span
            if cell._tc is prev_tc:
                continue
            prev_tc = cell._tc
            cells.append(cell.text.strip())
        line = "\t".join(cells).strip()
        if line:
            lines.append(line)
    return lines


class PythonDocxExtractor(IDocxExtractor):
    def extract_text(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as e:
            raise DocumentDecodeError(f"Cannot open DOCX: {e}") from e

        blocks: List[str] = []
        for element in document.element.body.iterchildren():
            if isinstance(element, CT_P):
                blocks.append(Paragraph(element, document).text)
            elif isinstance(element, CT_Tbl):
                blocks.extend(_table_lines(Table(element, document)))

        logger.debug(f"extract_text: DOCX body yielded {len(blocks)} blocks")
        return "\n\n".join(blocks)
