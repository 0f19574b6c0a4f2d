"""
Glyph-run layout reconstruction.

PDF content streams position glyphs; they do not store reading order. For
Arabic the stream order regularly differs from logical order, so naive
concatenation is the main source of "broken Arabic". This module rebuilds
lines from coordinates instead:

  1. Drop whitespace-only runs
  2. Pick page direction from the script of all runs (Arabic-dominant → RTL)
  3. Bucket runs into lines by baseline, rounded to 0.5 units
  4. Order lines top → bottom (descending y)
  5. Order runs right → left (RTL) or left → right (LTR)
  6. Insert one space where the horizontal gap between runs exceeds 2 units
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

from features.document_extraction.domain.entities import (
    PositionedGlyphRun,
    ReconstructedLine,
    TextDirection,
)
from features.document_extraction.infrastructure.utils.text_utils import detect_script


LINE_BUCKET = 0.5
WORD_GAP = 2.0


def _bucket_y(y: float) -> float:
    """Round half up to the nearest 0.5 so baseline jitter lands in one bucket."""
    return math.floor(y / LINE_BUCKET + 0.5) * LINE_BUCKET


def page_direction(runs: Iterable[PositionedGlyphRun]) -> TextDirection:
    joined = " ".join(run.text for run in runs)
    return "rtl" if detect_script(joined) == "ar" else "ltr"


def group_lines(runs: Iterable[PositionedGlyphRun]) -> List[ReconstructedLine]:
    """
    Group a page's runs into ordered lines.

    Direction is decided once per page and applied to every line, so a line
    is never ordered half one way and half the other.
    """
    visible = [run for run in runs if run.text and run.text.strip()]
    if not visible:
        return []

    direction = page_direction(visible)

    buckets: Dict[float, List[PositionedGlyphRun]] = {}
    for run in visible:
        buckets.setdefault(_bucket_y(run.y), []).append(run)

    lines: List[ReconstructedLine] = []
    for y in sorted(buckets, reverse=True):
        ordered = sorted(buckets[y], key=lambda r: r.x, reverse=(direction == "rtl"))
        lines.append(ReconstructedLine(y=y, direction=direction, runs=ordered))

    return lines


def render_line(line: ReconstructedLine) -> str:
    """Concatenate a line's runs, restoring word gaps the stream left implicit."""
    parts: List[str] = []
    prev = None

    for run in line.runs:
        if prev is not None:
            if line.direction == "rtl":
                gap = prev.x - (run.x + run.width)
            else:
                gap = run.x - (prev.x + prev.width)
            if gap > WORD_GAP:
                parts.append(" ")
        parts.append(run.text)
        prev = run

    return "".join(parts)


def reconstruct_page(runs: Iterable[PositionedGlyphRun]) -> str:
    """One page's text in reading order, lines joined by newline."""
    return "\n".join(render_line(line) for line in group_lines(runs))
