"""
Tests for the spaced-Arabic detector and repair.
"""

from features.document_extraction.infrastructure.utils.arabic_spacing import (
    fix_spaced_arabic,
    looks_like_spaced_arabic,
    repair_spaced_arabic,
)


SPACED_SALAM = "ا ل س ل ا م"
SPACED_ALAYKUM = "ع ل ي ك م"


def test_repair_collapses_single_letter_tokens():
    assert repair_spaced_arabic(SPACED_SALAM) == "السلام"


def test_repair_keeps_wide_gaps_as_word_boundaries():
    text = SPACED_SALAM + "   " + SPACED_ALAYKUM
    assert repair_spaced_arabic(text) == "السلام عليكم"


def test_repair_cleans_space_around_newlines():
    text = SPACED_SALAM + " \n " + SPACED_ALAYKUM
    assert repair_spaced_arabic(text) == "السلام\nعليكم"


def test_repair_handles_presentation_forms():
    # Presentation Forms-B glyphs as emitted by some PDF fonts
    assert repair_spaced_arabic("ﺍ ﻟ ﺴ") == "ﺍﻟﺴ"


def test_long_spaced_passage_is_detected_and_repaired():
    passage = "  ".join([SPACED_SALAM, SPACED_ALAYKUM] * 10)
    assert looks_like_spaced_arabic(passage)

    fixed = fix_spaced_arabic(passage)
    assert fixed == " ".join(["السلام", "عليكم"] * 10)


def test_short_correct_text_bypasses_repair():
    text = "السلام عليكم"
    assert not looks_like_spaced_arabic(text)
    assert fix_spaced_arabic(text) == text


def test_long_correct_text_bypasses_repair():
    # Plenty of Arabic letters, but words are real words, not isolated letters
    text = " ".join(["السلام عليكم ورحمة الله وبركاته"] * 6)
    assert not looks_like_spaced_arabic(text)
    assert fix_spaced_arabic(text) == text


def test_short_spaced_text_below_letter_threshold_is_left_alone():
    assert not looks_like_spaced_arabic(SPACED_SALAM)
    assert fix_spaced_arabic(SPACED_SALAM) == SPACED_SALAM


def test_latin_text_is_never_spaced_arabic():
    assert not looks_like_spaced_arabic("a b c d e f " * 40)


def test_repair_keeps_private_use_glyphs():
    # Custom PDF fonts map some glyphs into the Private Use Area
    assert repair_spaced_arabic(SPACED_SALAM + "  \ue000") == "السلام \ue000"


def test_fix_keeps_private_use_glyphs_in_long_passage():
    passage = "  ".join([SPACED_SALAM, SPACED_ALAYKUM] * 10) + " \ue000 x"

    fixed = fix_spaced_arabic(passage)

    assert fixed.endswith("عليكم \ue000 x")
