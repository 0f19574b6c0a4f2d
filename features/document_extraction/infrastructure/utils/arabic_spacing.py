"""
Repair for "spaced Arabic": text-layer output where every letter came out as
its own token ("ا ل س ل ا م") while the real word gaps became 2+ spaces.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


# Arabic, Supplement, Extended-A, Presentation Forms A and B
ARABIC_CHARS = r"\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF"

MIN_ARABIC_LETTERS = 80
MIN_SPACED_PAIR_RATIO = 0.15

_ARABIC_CHAR_RE = re.compile(f"[{ARABIC_CHARS}]")
# Two isolated Arabic letters separated by exactly one space
_SPACED_PAIR_RE = re.compile(
    f"(?<![{ARABIC_CHARS}])[{ARABIC_CHARS}] (?=[{ARABIC_CHARS}](?![{ARABIC_CHARS}]))"
)
_SINGLE_GAP_RE = re.compile(f"([{ARABIC_CHARS}]) ([{ARABIC_CHARS}])")
_WIDE_GAP_RE = re.compile(r" {2,}")
_SPACE_NEWLINE_RE = re.compile(r" *\n *")


def _collapse_letter_gaps(segment: str) -> str:
    while True:
        collapsed = _SINGLE_GAP_RE.sub(r"\1\2", segment)
        if collapsed == segment:
            return collapsed
        segment = collapsed


def looks_like_spaced_arabic(text: str) -> bool:
    """
    True when the text has more than 80 Arabic letters and isolated-letter
    pairs make up more than 15% of them.
    """
    if not text:
        return False

    letters = len(_ARABIC_CHAR_RE.findall(text))
    if letters <= MIN_ARABIC_LETTERS:
        return False

    pairs = len(_SPACED_PAIR_RE.findall(text))
    return pairs / letters > MIN_SPACED_PAIR_RATIO


def repair_spaced_arabic(text: str) -> str:
    """
    Collapse single spaces between Arabic letters, keeping 2+ space gaps as
    one word boundary.

    Collapsing runs until nothing changes: ``re.sub`` consumes the right-hand
    letter of each match, so "ا ل س" needs a second pass for the "ل س" pair.
    """
    if not text:
        return ""

    out = " ".join(_collapse_letter_gaps(segment) for segment in _WIDE_GAP_RE.split(text))
    return _SPACE_NEWLINE_RE.sub("\n", out)


def fix_spaced_arabic(text: str) -> str:
    """Apply ``repair_spaced_arabic`` only when the text looks spaced."""
    if not looks_like_spaced_arabic(text):
        return text

    logger.info(f"fix_spaced_arabic: Spaced Arabic detected ({len(text)} chars), collapsing letter gaps")
    return repair_spaced_arabic(text)
