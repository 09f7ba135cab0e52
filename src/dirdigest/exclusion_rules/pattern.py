"""Glob pattern matching against relative paths.

Patterns follow .gitignore conventions: ``*`` matches any run of characters except
"/", ``**`` matches across separators, ``?`` matches one character, ``[...]`` is a
character class, and a trailing "/" restricts the pattern to directories. A pattern
with no separator (other than a trailing one) matches the final path component at any
depth; any other pattern is matched against the full path relative to its anchor.
Matching is case-sensitive. Trailing whitespace is ignored unless escaped with a backslash;
leading whitespace is part of the pattern.

The translation to regular expressions is delegated to the pathspec library so that
behavior is identical to Git's own matching.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Pattern

from pathspec.patterns import GitWildMatchPattern  # type: ignore


class PatternKind(str, Enum):
    """How a pattern is anchored.

    Values:
        BASENAME: Pattern has no separator and matches the last component at any depth.
        ANCHORED: Pattern contains a separator and matches the path from its anchor.
    """

    BASENAME = "basename"
    ANCHORED = "anchored"


def _check_character_classes(body: str) -> None:
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            i += 2
            continue
        if char == "[":
            # A "]" directly after "[" (or "[!") is a literal member of the class
            start = i + 2 if body[i + 1 : i + 2] in ("!", "^") else i + 1  # noqa: E203
            close = body.find("]", start + 1)
            if close == -1:
                raise ValueError(f"Unterminated character class in pattern: {body!r}")
            i = close
        i += 1


def _strip_trailing_whitespace(text: str) -> str:
    body = text.rstrip("\r\n")
    end = len(body)
    while end > 0 and body[end - 1] in " \t":
        head = body[: end - 1]  # noqa: E203
        if (len(head) - len(head.rstrip("\\"))) % 2:
            break
        end -= 1
    return body[:end]


@dataclass(frozen=True)
class GlobPattern:
    """A compiled glob pattern.

    Attributes:
        text: The pattern exactly as written, including any leading "!".
        kind: Whether the pattern matches basenames or anchored paths.
        negated: True for a re-include pattern (leading "!").
        dir_only: True if the pattern only applies to directories (trailing "/").
        regex: Compiled regular expression produced by pathspec.

    Example:
        >>> pattern = GlobPattern.compile("*.log")
        >>> pattern.kind
        <PatternKind.BASENAME: 'basename'>
        >>> pattern.matches("logs/app.log")
        True
        >>> GlobPattern.compile("build/").matches("build")
        False
        >>> GlobPattern.compile("build/").matches("build", is_dir=True)
        True
    """

    text: str
    kind: PatternKind
    negated: bool
    dir_only: bool
    regex: Pattern[str]

    @classmethod
    def compile(cls, text: str) -> "GlobPattern":
        """Compile a single pattern.

        Args:
            text: A gitignore-style pattern such as "*.pyc", "src/**/test_*.py" or
                "!keep.log".

        Returns:
            The compiled pattern.

        Raises:
            ValueError: If the pattern is empty, a comment, or otherwise malformed.
        """
        body = _strip_trailing_whitespace(text)
        negated = body.startswith("!")
        if negated:
            body = body[1:]

        stripped = body.rstrip("/")
        if not stripped or stripped.startswith("#"):
            raise ValueError(f"Not a valid pattern: {text!r}")
        _check_character_classes(body)

        # pathspec strips leading whitespace unless it is escaped
        indent = len(body) - len(body.lstrip(" "))
        try:
            regex, include = GitWildMatchPattern.pattern_to_regex("\\ " * indent + body[indent:])
        except ValueError as e:
            raise ValueError(f"Malformed pattern {text!r}: {e}") from e
        if regex is None or include is None:
            raise ValueError(f"Not a valid pattern: {text!r}")

        kind = PatternKind.ANCHORED if "/" in stripped else PatternKind.BASENAME
        return cls(
            text=text,
            kind=kind,
            negated=negated,
            dir_only=body.endswith("/"),
            regex=re.compile(regex),
        )

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check whether a path relative to this pattern's anchor matches.

        Args:
            relative_path: Path using "/" separators, without a leading "/".
            is_dir: Whether the path names a directory.

        Returns:
            True if the pattern matches the path. The negation flag is not applied here.

        Example:
            >>> pattern = GlobPattern.compile("build/")
            >>> pattern.matches("src/build/app.x")
            True
            >>> GlobPattern.compile("src/build/").matches("lib/src/build/app.x")
            False
        """
        if self.kind is PatternKind.ANCHORED:
            candidate = relative_path + "/" if is_dir else relative_path
            return self.regex.match(candidate) is not None

        *parents, name = relative_path.split("/")
        if self.regex.match(name + "/" if is_dir else name) is not None:
            return True
        # A basename pattern that matches a parent directory covers everything beneath it
        return any(self.regex.match(parent + "/") is not None for parent in parents)


@lru_cache(maxsize=1024)
def compile_pattern(text: str) -> GlobPattern:
    return GlobPattern.compile(text)


def matches(pattern: str, relative_path: str, is_dir: bool = False) -> bool:
    """Match a single pattern against a relative path.

    Example:
        >>> matches("src/*.x", "src/a.x")
        True
        >>> matches("src/*.x", "src/sub/a.x")
        False
        >>> matches("**/*.x", "src/sub/a.x")
        True
    """
    return compile_pattern(pattern).matches(relative_path, is_dir)
