"""
DTO for OCR fallback options.
"""

from dataclasses import dataclass

from features.document_extraction.domain.entities import ScriptLang


@dataclass
class OcrOptionsDTO:
    max_pages: int = 10  # Pages past the cap are skipped, not failed
    script_hint: ScriptLang = "ar"

    def __post_init__(self) -> None:
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages}")
