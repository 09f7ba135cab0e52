"""Unit tests for the SafeWriter class in the dirdigest CLI."""

import errno
import sys

import pytest

from dirdigest.cli.safe_writer import SafeWriter


def test_write_to_file(tmp_path):
    output = tmp_path / "digest.txt"
    with SafeWriter(output) as writer:
        writer.write("Directory structure:\n")
        writer.write("project/\n")
    assert output.read_text() == "Directory structure:\nproject/\n"
    assert [path.name for path in tmp_path.iterdir()] == ["digest.txt"]


def test_failure_leaves_destination_untouched(tmp_path):
    """Test that a failed run discards its temporary file and keeps the old output."""
    output = tmp_path / "digest.txt"
    output.write_text("previous")
    with pytest.raises(RuntimeError):
        with SafeWriter(output) as writer:
            writer.write("partial")
            raise RuntimeError("boom")
    assert output.read_text() == "previous"
    assert [path.name for path in tmp_path.iterdir()] == ["digest.txt"]


def test_unicode_content(tmp_path):
    output = tmp_path / "digest.txt"
    with SafeWriter(output) as writer:
        writer.write("├── 世界\n")
    assert output.read_text(encoding="utf-8") == "├── 世界\n"


def test_write_to_stdout(capsys):
    with SafeWriter(None) as writer:
        writer.write("hello\n")
    assert capsys.readouterr().out == "hello\n"


def test_write_after_close(tmp_path):
    with SafeWriter(tmp_path / "digest.txt") as writer:
        writer.write("x")
    with pytest.raises(ValueError, match="closed"):
        writer.write("y")


def test_write_before_enter(tmp_path):
    with pytest.raises(ValueError, match="closed"):
        SafeWriter(tmp_path / "digest.txt").write("x")


def test_epipe_becomes_broken_pipe(monkeypatch):
    """Test that EPIPE from stdout surfaces as BrokenPipeError."""

    class ClosedPipe:
        def write(self, data):
            raise OSError(errno.EPIPE, "Broken pipe")

        def flush(self):
            pass

    monkeypatch.setattr(sys, "stdout", ClosedPipe())
    with pytest.raises(BrokenPipeError):
        with SafeWriter(None) as writer:
            writer.write("x")


def test_missing_directory(tmp_path):
    with pytest.raises(OSError):
        with SafeWriter(tmp_path / "missing" / "digest.txt"):
            pass
