"""
Tests for glyph-run layout reconstruction.
"""

from features.document_extraction.domain.entities import PositionedGlyphRun as Run
from features.document_extraction.infrastructure.layout_reconstructor import (
    group_lines,
    reconstruct_page,
    render_line,
)


def test_rtl_runs_read_right_to_left_with_word_gap():
    runs = [
        Run(text="بالعالم", x=10, y=700, width=60),
        Run(text="مرحبا", x=100, y=700, width=40),
    ]
    assert reconstruct_page(runs) == "مرحبا بالعالم"


def test_rtl_adjacent_runs_are_joined_without_space():
    # Right run starts exactly where the left run ends: gap 0
    runs = [
        Run(text="حبا", x=100, y=500, width=20),
        Run(text="مر", x=120, y=500, width=10),
    ]
    assert reconstruct_page(runs) == "مرحبا"


def test_ltr_runs_read_left_to_right():
    runs = [
        Run(text="world", x=60, y=700, width=30),
        Run(text="Hello", x=10, y=700, width=30),
        Run(text="!", x=91, y=700, width=3),
    ]
    # Hello ends at 40, world starts at 60 (gap 20); world ends at 90, "!" at 91 (gap 1)
    assert reconstruct_page(runs) == "Hello world!"


def test_lines_are_ordered_top_to_bottom():
    runs = [
        Run(text="third", x=10, y=100, width=30),
        Run(text="first", x=10, y=700, width=30),
        Run(text="second", x=10, y=400, width=30),
    ]
    assert reconstruct_page(runs) == "first\nsecond\nthird"


def test_baseline_jitter_shares_a_line():
    runs = [
        Run(text="a", x=10, y=700.1, width=5),
        Run(text="b", x=20, y=699.8, width=5),
        Run(text="c", x=30, y=690.0, width=5),
    ]
    lines = group_lines(runs)
    assert [line.y for line in lines] == [700.0, 690.0]
    assert [r.text for r in lines[0].runs] == ["a", "b"]


def test_half_unit_buckets_round_half_up():
    # 700.25 rounds up to 700.5, 700.24 down to 700.0
    lines = group_lines([Run(text="x", x=0, y=700.25), Run(text="y", x=0, y=700.24)])
    assert [line.y for line in lines] == [700.5, 700.0]


def test_whitespace_runs_are_dropped():
    runs = [
        Run(text="   ", x=50, y=700, width=10),
        Run(text="Hello", x=10, y=700, width=30),
        Run(text="", x=0, y=300, width=0),
    ]
    assert reconstruct_page(runs) == "Hello"
    assert reconstruct_page([]) == ""


def test_page_direction_applies_to_every_line():
    runs = [
        Run(text="مرحبا", x=200, y=700, width=40),
        Run(text="بالعالم", x=100, y=700, width=60),
        # A Latin line on an Arabic page is still ordered RTL
        Run(text="B", x=150, y=600, width=10),
        Run(text="A", x=100, y=600, width=10),
    ]
    lines = group_lines(runs)
    assert {line.direction for line in lines} == {"rtl"}
    assert render_line(lines[1]) == "B A"
