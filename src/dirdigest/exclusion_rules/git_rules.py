"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from dirdigest.types import PathType

from .pattern import GlobPattern

logger = logging.getLogger(__name__)


class GitIgnoreExclusionRules:
    """Rules read from a single ignore file, anchored at the directory containing it.

    The rules support all standard .gitignore syntax:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-specific patterns (ending in /)
    - Negation patterns (starting with !)
    - Double-asterisk matching (**)
    - Comment lines (starting with #) and blank lines, which are skipped

    Within one file, later lines override earlier ones. Paths passed to match() are
    relative to the anchor directory, not to the digest root.

    Instances are immutable once built so that a set of rules can be shared between the
    traversal of a directory and all of its subdirectories.

    Attributes:
        anchor (str): Directory containing the ignore file, relative to the digest root
            ("" for the root itself).
        patterns (Tuple[GlobPattern, ...]): Compiled patterns in file order.
        source (Optional[str]): Path of the ignore file, for diagnostics.

    Example:
        >>> rules = GitIgnoreExclusionRules.from_lines(["node_modules/", "*.log", "!keep.log"])
        >>> rules.match("node_modules", is_dir=True)
        True
        >>> rules.match("app.log")
        True
        >>> rules.match("keep.log")
        False
        >>> rules.match("main.py") is None
        True
    """

    def __init__(self, patterns: Iterable[GlobPattern] = (), anchor: str = "", source: Optional[str] = None):
        self.patterns: Tuple[GlobPattern, ...] = tuple(patterns)
        self.anchor = anchor
        self.source = source

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], anchor: str = "", source: Optional[str] = None
    ) -> "GitIgnoreExclusionRules":
        """Parse ignore-file lines into rules.

        Blank lines and comments are skipped. A line that cannot be parsed is skipped with
        a warning, as Git does, rather than failing the whole file.

        Args:
            lines: Lines of an ignore file, with or without trailing newlines.
            anchor: Directory the rules are anchored at, relative to the digest root.
            source: Optional description of where the lines came from.

        Returns:
            The parsed rules.
        """
        patterns = []
        for number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.startswith("#"):
                continue
            try:
                patterns.append(GlobPattern.compile(line))
            except ValueError as e:
                logger.warning("Skipping invalid pattern at %s:%d: %s", source or "<rules>", number, e)
        return cls(patterns, anchor=anchor, source=source)

    @classmethod
    def from_file(cls, rules_file: PathType, anchor: str = "") -> "GitIgnoreExclusionRules":
        """Load rules from an ignore file.

        Args:
            rules_file: Path to the ignore file.
            anchor: Directory the rules are anchored at, relative to the digest root.

        Raises:
            FileNotFoundError: If the rules file does not exist.
            OSError: If the rules file cannot be read.
        """
        path = Path(rules_file)
        if not path.exists():
            raise FileNotFoundError(f"Rules file not found: {path}")

        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
        return cls.from_lines(lines, anchor=anchor, source=str(path))

    def match(self, path: str, is_dir: bool = False) -> Optional[bool]:
        """Find the verdict of the last pattern matching a path.

        Args:
            path: Path relative to the anchor directory.
            is_dir: Whether the path names a directory.

        Returns:
            True if the last matching pattern excludes the path, False if it is a negated
            (re-include) pattern, or None if no pattern matches.
        """
        for pattern in reversed(self.patterns):
            if pattern.matches(path, is_dir):
                return not pattern.negated
        return None

    def relative_to_anchor(self, path: str) -> str:
        """Express a root-relative path relative to this file's anchor directory.

        Example:
            >>> GitIgnoreExclusionRules(anchor="src").relative_to_anchor("src/lib/a.py")
            'lib/a.py'
        """
        if not self.anchor:
            return path
        return path[len(self.anchor) + 1 :]  # noqa: E203

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"GitIgnoreExclusionRules(anchor={self.anchor!r}, patterns={len(self.patterns)})"
