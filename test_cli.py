"""
Tests for the command-line entry point.
"""

import json

import pytest

from features.document_extraction.presentation.cli import main


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    monkeypatch.delenv("DOC_EXTRACT_MAX_FILE_BYTES", raising=False)
    monkeypatch.delenv("DOC_EXTRACT_PDF_BACKEND", raising=False)


def test_prints_text_and_progress(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("Hello   world\r\n\n\n\nBye", encoding="utf-8")

    exit_code = main([str(path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == "Hello world\n\nBye\n"
    assert captured.err.splitlines() == ["Preparing...", "Reading text file...", "Done"]


def test_json_output(tmp_path, capsys):
    path = tmp_path / "rfp.txt"
    path.write_text("مرحبا بالعالم", encoding="utf-8")

    exit_code = main([str(path), "--json", "--ui-lang", "ar"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert json.loads(captured.out) == {
        "text": "مرحبا بالعالم",
        "detectedLang": "ar",
        "direction": "rtl",
        "source": "txt",
        "pageCount": None,
        "pagesProcessed": None,
    }
    assert captured.err.splitlines()[-1] == "تم"


def test_unsupported_extension_exits_with_1(tmp_path, capsys):
    path = tmp_path / "scan.png"
    path.write_bytes(b"\x89PNG\r\n")

    exit_code = main([str(path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "UnsupportedFormatError: Unsupported file type. Use PDF / DOCX / TXT." in captured.err


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit, match="File not found"):
        main([str(tmp_path / "missing.txt")])


@pytest.mark.parametrize("value", ["0", "-1"])
def test_non_positive_max_pages_is_rejected(tmp_path, capsys, value):
    path = tmp_path / "notes.txt"
    path.write_text("Hello", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main([str(path), "--max-pages", value])

    assert exc_info.value.code == 2
    assert "--max-pages" in capsys.readouterr().err
