"""Unit tests for the FileIdentifier class."""

import os

import pytest

from dirdigest.file_system_tree.file_identifier import FileIdentifier


def test_file_identifier():
    """Test equality, hashing and repr of identifiers."""
    id1 = FileIdentifier(123, 456)
    id2 = FileIdentifier(123, 456)
    id3 = FileIdentifier(789, 456)

    assert id1 == id2
    assert id1 != id3
    assert hash(id1) == hash(id2)
    assert id2 in {id1, id3}
    assert repr(id1) == "FileIdentifier(device_id=123, inode_number=456)"


def test_for_path_follows_symlinks(tmp_path):
    """Test that a link and its target directory share an identifier."""
    target = tmp_path / "real"
    target.mkdir()
    link = tmp_path / "alias"
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported on this platform")

    assert FileIdentifier.for_path(link) == FileIdentifier.for_path(target)
    assert FileIdentifier.for_path(tmp_path) != FileIdentifier.for_path(target)


def test_for_path_missing(tmp_path):
    with pytest.raises(OSError):
        FileIdentifier.for_path(tmp_path / "missing")
