"""
Text Utilities Module

Helpers shared by every extraction path:
- Final-output normalization (control chars, NBSP, blank lines, spacing)
- Arabic-vs-Latin script detection
- Broken-Arabic heuristic used to decide on OCR escalation
"""

from __future__ import annotations

import re

from features.document_extraction.domain.entities import ScriptLang, TextDirection


# Script detection regexes (basic Arabic block only, Latin letters A-Z / a-z)
AR_RE = re.compile(r"[\u0600-\u06FF]")
LETTER_RE = re.compile(r"[A-Za-z\u0600-\u06FF]")

ARABIC_THRESHOLD = 0.25

# Broken-Arabic heuristic thresholds (empirical, keep exact)
MIN_TRUSTED_LENGTH = 80
MIN_SPACE_RATIO = 0.01
MAX_ARABIC_RUN = 25

_SPACE_RE = re.compile(r"[ \t]")
_LONG_ARABIC_RUN_RE = re.compile(r"[\u0600-\u06FF]{%d,}" % MAX_ARABIC_RUN)

# Cc characters other than \t and \n (\r is folded into \n beforehand)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
_NBSP_RE = re.compile(r"[\u00A0\u202F]")
_TRAILING_WS_RE = re.compile(r"[ \t]+\n")
_MULTI_NEWLINE_RE = re.compile(r"\n{3,}")
_MULTI_SPACE_RE = re.compile(r"[ \t]{2,}")


def normalize_text(raw: str) -> str:
    """
    Normalize extracted text for final output.

    - Remove NUL and other control characters (newline and tab survive)
    - Fold CRLF / CR to LF
    - Non-breaking spaces → ordinary space
    - Collapse runs of spaces/tabs to one space
    - Drop trailing whitespace before newlines
    - Collapse 3+ newlines to a single blank line

    Only apply this to page-joined text: per-line strings built by the layout
    reconstructor carry spacing that must survive until the page is assembled.

    Args:
        raw: Text to normalize (None is treated as empty)

    Returns:
        Normalized, stripped text
    """
    if not raw:
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_RE.sub("", text)
    text = _NBSP_RE.sub(" ", text)

    text = _MULTI_SPACE_RE.sub(" ", text)

    text = _TRAILING_WS_RE.sub("\n", text)
    text = _MULTI_NEWLINE_RE.sub("\n\n", text)

    return text.strip()


def detect_script(text: str) -> ScriptLang:
    """
    Classify text as Arabic- or Latin-dominant.

    Arabic wins when Arabic letters are more than 25% of Arabic + Latin letters.
    Text without any letters is "en".
    """
    if not text:
        return "en"

    total = len(LETTER_RE.findall(text))
    if total == 0:
        return "en"

    ar = len(AR_RE.findall(text))
    return "ar" if ar / total > ARABIC_THRESHOLD else "en"


def text_direction(lang: ScriptLang) -> TextDirection:
    """Rendering direction for downstream document generation."""
    return "rtl" if lang == "ar" else "ltr"


def looks_broken(text: str) -> bool:
    """
    Decide whether extracted text is too damaged to trust.

    Rules, in order:
    1. Shorter than 80 chars → broken (too little signal)
    2. Not Arabic-dominant → not broken (heuristic is Arabic-only)
    3. Spaces/tabs under 1% of the length → broken (word spacing lost)
    4. 25+ consecutive Arabic chars → broken (word boundaries lost)

    False positives only cost an OCR pass.
    """
    text = text or ""

    if len(text) < MIN_TRUSTED_LENGTH:
        return True
    if detect_script(text) != "ar":
        return False

    spaces = len(_SPACE_RE.findall(text))
    if spaces / max(1, len(text)) < MIN_SPACE_RATIO:
        return True

    return bool(_LONG_ARABIC_RUN_RE.search(text))
