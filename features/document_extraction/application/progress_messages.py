"""
Human-readable progress strings, in the caller's UI language.

Callers render these as a linear log, so emit order matters: pages in order,
text extraction before any OCR.
"""

from __future__ import annotations

from typing import Callable, Optional

ProgressCallback = Callable[[str], None]

MESSAGES = {
    "en": {
        "preparing": "Preparing...",
        "reading_txt": "Reading text file...",
        "reading_docx": "Reading DOCX...",
        "reading_pages": "Reading PDF pages...",
        "extracting_page": "Extracting text… page {page}/{total}",
        "arabic_broken": "Arabic looks broken… running OCR",
        "preparing_ocr": "Preparing OCR...",
        "ocr_page": "OCR… page {page}/{total} ({percent}%)",
        "done": "Done",
    },
    "ar": {
        "preparing": "جاري التحضير...",
        "reading_txt": "جاري قراءة الملف النصي...",
        "reading_docx": "جاري قراءة ملف DOCX...",
        "reading_pages": "جاري قراءة صفحات PDF...",
        "extracting_page": "جاري استخراج النص… صفحة {page}/{total}",
        "arabic_broken": "النص العربي ملخبط… جاري OCR",
        "preparing_ocr": "جاري تجهيز OCR...",
        "ocr_page": "OCR… صفحة {page}/{total} ({percent}%)",
        "done": "تم",
    },
}


def progress_message(key: str, lang: str = "en", **params) -> str:
    table = MESSAGES.get(lang, MESSAGES["en"])
    return table[key].format(**params)


class ProgressReporter:
    """Formats and forwards progress to an optional callback."""

    def __init__(self, callback: Optional[ProgressCallback] = None, lang: str = "en") -> None:
        self.callback = callback
        self.lang = lang

    def emit(self, key: str, **params) -> None:
        if self.callback is None:
            return
        self.callback(progress_message(key, self.lang, **params))
