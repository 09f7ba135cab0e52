"""Test configuration and fixtures for dirdigest."""

from pathlib import Path
from typing import Dict, Union

import pytest


def write_tree(base: Path, layout: Dict[str, Union[str, bytes]]) -> Path:
    """Create files below base from a mapping of relative path to content."""
    for relative_path, content in layout.items():
        path = base / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return base


@pytest.fixture
def make_tree(tmp_path):
    """Factory fixture building a directory tree under a fresh root."""

    def _make(layout: Dict[str, Union[str, bytes]], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        return write_tree(root, layout)

    return _make


@pytest.fixture
def sample_project(make_tree):
    """A small project with nested ignore files and default-excluded content."""
    return make_tree(
        {
            ".gitignore": "*.log\nnode_modules/\n",
            "src/main.x": "x" * 50,
            "src/debug.log": "log line\n",
            "src/.gitignore": "!keep.log\n",
            "src/keep.log": "kept\n",
            "docs/guide.md": "# Guide\n",
            "docs/debug.log": "ignored\n",
            "node_modules/pkg/index.x": "y" * 1024,
            "assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00\x00",
        }
    )
