"""Unit tests for the FileContentPrinter class.

Tests both normal operation and the checks that downgrade entries to path-only.
"""

import logging

import pytest

from dirdigest.exclusion_rules.size_rules import SizeExclusionRules
from dirdigest.file_content_printer import FileContentPrinter
from dirdigest.output_strategies.text_strategy import SEPARATOR
from dirdigest.output_strategies.xml_strategy import XMLOutputStrategy
from dirdigest.types import DigestEntry, Verdict


def entry_for(root, name):
    return DigestEntry(name, Verdict.INCLUDE_PATH_AND_CONTENT, size=(root / name).stat().st_size)


@pytest.fixture
def files(make_tree):
    return make_tree(
        {
            "ascii.txt": "Hello, world!",
            "utf8.txt": "Hello, 世界!",
            "latin1.txt": "Hello, é!".encode("latin-1"),
            "binary.dat": b"abc\x00def",
            "exact.txt": b"a" * 1024,
            "over.txt": b"a" * 1025,
        }
    )


def test_load_text(files):
    printer = FileContentPrinter(files)
    loaded = printer.load(entry_for(files, "utf8.txt"))
    assert loaded.content == "Hello, 世界!"
    assert loaded.verdict is Verdict.INCLUDE_PATH_AND_CONTENT


def test_invalid_utf8_is_replaced(files):
    """Test that text which is not valid UTF-8 is decoded with replacement characters."""
    loaded = FileContentPrinter(files).load(entry_for(files, "latin1.txt"))
    assert loaded.content == "Hello, �!"


def test_binary_is_downgraded(files):
    loaded = FileContentPrinter(files).load(entry_for(files, "binary.dat"))
    assert loaded.verdict is Verdict.INCLUDE_PATH_ONLY
    assert loaded.content is None
    assert loaded.error is None


def test_size_boundary(files):
    """Test that a file of exactly the limit is embedded and a larger one is not."""
    printer = FileContentPrinter(files, max_size=1)
    assert printer.load(entry_for(files, "exact.txt")).content == "a" * 1024
    over = printer.load(entry_for(files, "over.txt"))
    assert over.verdict is Verdict.INCLUDE_PATH_ONLY
    assert over.content is None


def test_large_file_is_not_opened(files, monkeypatch):
    printer = FileContentPrinter(files, max_size=SizeExclusionRules(1))

    def fail(entry):
        raise AssertionError("file should not be read")

    monkeypatch.setattr(printer, "_read", fail)
    assert printer.load(entry_for(files, "over.txt")).verdict is Verdict.INCLUDE_PATH_ONLY


def test_file_grown_past_limit(files):
    """Test that a file larger on disk than its recorded size is still rejected."""
    stale = DigestEntry("over.txt", Verdict.INCLUDE_PATH_AND_CONTENT, size=10)
    loaded = FileContentPrinter(files, max_size=1).load(stale)
    assert loaded.verdict is Verdict.INCLUDE_PATH_ONLY


def test_unknown_size_is_downgraded(files):
    entry = DigestEntry("ascii.txt", Verdict.INCLUDE_PATH_AND_CONTENT)
    assert FileContentPrinter(files).load(entry).verdict is Verdict.INCLUDE_PATH_ONLY


def test_read_failure(files, caplog):
    """Test that a read failure is recorded on the entry instead of raised."""
    entry = DigestEntry("vanished.txt", Verdict.INCLUDE_PATH_AND_CONTENT, size=3)
    with caplog.at_level(logging.WARNING):
        loaded = FileContentPrinter(files).load(entry)
    assert loaded.verdict is Verdict.INCLUDE_PATH_ONLY
    assert loaded.error
    assert "Could not read vanished.txt" in caplog.text


def test_path_only_entry_is_unchanged(files):
    entry = DigestEntry("binary.dat", Verdict.INCLUDE_PATH_ONLY, size=7)
    assert FileContentPrinter(files).load(entry) is entry


def test_format_section(files):
    printer = FileContentPrinter(files)
    loaded = printer.load(entry_for(files, "ascii.txt"))
    assert "".join(printer.format_section(loaded)) == f"{SEPARATOR}\nFILE: ascii.txt\n{SEPARATOR}\nHello, world!\n\n\n"


def test_format_section_without_content(files):
    printer = FileContentPrinter(files)
    with pytest.raises(ValueError, match="no content"):
        list(printer.format_section(DigestEntry("ascii.txt", Verdict.INCLUDE_PATH_ONLY)))


def test_yield_file_contents(files):
    """Test that only entries keeping their content are yielded, in order."""
    printer = FileContentPrinter(files, max_size=1)
    entries = [
        entry_for(files, "ascii.txt"),
        entry_for(files, "binary.dat"),
        DigestEntry("logo.png", Verdict.INCLUDE_PATH_ONLY, size=10),
        entry_for(files, "over.txt"),
        entry_for(files, "utf8.txt"),
    ]
    loaded = list(printer.yield_file_contents(entries))
    assert [entry.relative_path for entry in loaded] == ["ascii.txt", "utf8.txt"]


def test_output_format(files):
    assert isinstance(FileContentPrinter(files, output_format="xml").output_strategy, XMLOutputStrategy)
    strategy = XMLOutputStrategy()
    assert FileContentPrinter(files, output_format=strategy).output_strategy is strategy


def test_invalid_output_format(files):
    with pytest.raises(ValueError):
        FileContentPrinter(files, output_format="json")
    with pytest.raises(TypeError):
        FileContentPrinter(files, output_format=42)
