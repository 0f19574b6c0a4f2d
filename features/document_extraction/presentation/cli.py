"""
Command-line entry point for ad-hoc runs:

    python -m features.document_extraction.presentation.cli rfp.pdf
    python -m features.document_extraction.presentation.cli rfp.pdf --ui-lang ar --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import mimetypes
import os
import sys

from features.document_extraction.application.dtos import ExtractDocumentRequestDTO
from features.document_extraction.config import ExtractionSettings
from features.document_extraction.domain.entities import UploadedDocument
from features.document_extraction.domain.errors import ExtractionError
from features.document_extraction.presentation.api import build_extract_document_use_case


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract clean text (Arabic-aware, OCR fallback) from a TXT / DOCX / PDF file."
    )
    parser.add_argument("path", type=str, help="File to extract.")
    parser.add_argument("--ui-lang", choices=["en", "ar"], default="en", help="Language of progress messages.")
    parser.add_argument("--max-pages", type=_positive_int, default=None, help="OCR page cap (overrides configuration).")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    args = parser.parse_args(argv)

    if not os.path.exists(args.path):
        raise SystemExit(f"File not found: {args.path}")

    with open(args.path, "rb") as f:
        content = f.read()

    media_type = mimetypes.guess_type(args.path)[0] or ""
    document = UploadedDocument(content=content, filename=os.path.basename(args.path), media_type=media_type)
    use_case = build_extract_document_use_case(ExtractionSettings.from_env())
    dto_in = ExtractDocumentRequestDTO(document=document, ui_lang=args.ui_lang, max_ocr_pages=args.max_pages)

    try:
        dto_out = asyncio.run(
            use_case.execute(dto_in, progress=lambda status: print(status, file=sys.stderr))
        )
    except ExtractionError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(
            {
                "text": dto_out.text,
                "detectedLang": dto_out.detected_lang,
                "direction": dto_out.direction,
                "source": dto_out.source,
                "pageCount": dto_out.page_count,
                "pagesProcessed": dto_out.pages_processed,
            },
            ensure_ascii=False,
            indent=2,
        ))
    else:
        print(dto_out.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
