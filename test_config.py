"""
Tests for ExtractionSettings defaults and environment overrides.
"""

import pytest

from features.document_extraction.config import ExtractionSettings


def test_defaults():
    settings = ExtractionSettings()
    assert settings.max_file_bytes == 20 * 1024 * 1024
    assert settings.ocr_max_pages == 10
    assert settings.ocr_scale == 2.0
    assert settings.ocr_concurrency == 1
    assert settings.ocr_preprocess is True
    assert settings.pdf_backend == "pymupdf"


def test_from_env_overrides():
    settings = ExtractionSettings.from_env({
        "DOC_EXTRACT_OCR_MAX_PAGES": "20",
        "DOC_EXTRACT_OCR_SCALE": "3",
        "DOC_EXTRACT_OCR_PREPROCESS": "false",
        "DOC_EXTRACT_PDF_BACKEND": "PDFPlumber",
        "DOC_EXTRACT_DEADLINE_SECONDS": "",
    })

    assert settings.ocr_max_pages == 20
    assert settings.ocr_scale == 3.0
    assert settings.ocr_preprocess is False
    assert settings.pdf_backend == "pdfplumber"
    assert settings.deadline_seconds == 60.0


def test_from_env_ignores_unrelated_variables():
    assert ExtractionSettings.from_env({"OCR_MAX_PAGES": "99"}) == ExtractionSettings()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"pdf_backend": "poppler"},
        {"ocr_max_pages": 0},
        {"ocr_concurrency": 0},
        {"ocr_scale": 0},
        {"deadline_seconds": -1},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        ExtractionSettings(**kwargs)
