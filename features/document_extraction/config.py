"""
Runtime settings for document extraction.

Defaults live on the dataclass; ``from_env`` lets deployments override them
with ``DOC_EXTRACT_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

PDF_BACKENDS = ("pymupdf", "pdfplumber")

ENV_PREFIX = "DOC_EXTRACT_"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ExtractionSettings:
    max_file_bytes: int = 20 * 1024 * 1024
    ocr_max_pages: int = 10  # OCR is heavy, cap pages to protect latency
    ocr_scale: float = 2.0
    ocr_concurrency: int = 1
    ocr_psm: int = 6
    ocr_preprocess: bool = True
    deadline_seconds: float = 60.0
    pdf_backend: str = "pymupdf"

    def __post_init__(self) -> None:
        if self.pdf_backend not in PDF_BACKENDS:
            raise ValueError(f"pdf_backend must be one of {PDF_BACKENDS}, got {self.pdf_backend!r}")
        for name in ("max_file_bytes", "ocr_max_pages", "ocr_concurrency"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.ocr_scale <= 0:
            raise ValueError("ocr_scale must be > 0")
        if self.deadline_seconds <= 0:
            raise ValueError("deadline_seconds must be > 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExtractionSettings":
        """
        Build settings from the environment, e.g. ``DOC_EXTRACT_OCR_MAX_PAGES=20``.

        Unset variables keep the dataclass defaults.
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            default = f.default
            if isinstance(default, bool):
                overrides[f.name] = _parse_bool(raw)
            elif isinstance(default, int):
                overrides[f.name] = int(raw)
            elif isinstance(default, float):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw.strip().lower()

        return cls(**overrides)
