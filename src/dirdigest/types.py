import os
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import Optional, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


def display_path(path: str) -> str:
    """Return a path that can be written as UTF-8 text.

    Names that are not valid UTF-8 arrive from the file system with surrogate escapes;
    their undecodable bytes are shown as U+FFFD.

    Example:
        >>> display_path("bad\\udcff.x") == "bad\\ufffd.x"
        True
    """
    return os.fsencode(path).decode("utf-8", errors="replace")


class Verdict(Enum):
    """Selection decision computed for a single path.

    Attributes:
        TRAVERSE: Directory is descended into.
        SKIP_DIRECTORY: Directory and its entire subtree are pruned.
        INCLUDE_PATH_ONLY: File is listed in the tree but its content is not embedded.
        INCLUDE_PATH_AND_CONTENT: File is listed and its content is embedded.
        EXCLUDE: File is omitted entirely (neither path nor content).
    """

    TRAVERSE = "traverse"
    SKIP_DIRECTORY = "skip_directory"
    INCLUDE_PATH_ONLY = "include_path_only"
    INCLUDE_PATH_AND_CONTENT = "include_path_and_content"
    EXCLUDE = "exclude"


class RuleTier(Enum):
    """Source of a selection rule, used for precedence and diagnostics."""

    DEFAULT = "default"
    IGNORE_FILE = "ignore_file"
    USER_EXCLUDE = "user_exclude"
    USER_INCLUDE = "user_include"


@dataclass(frozen=True)
class DigestEntry:
    """One accepted path produced by the directory walker.

    Attributes:
        relative_path: Path relative to the digest root, using "/" as separator.
        verdict: Either INCLUDE_PATH_ONLY or INCLUDE_PATH_AND_CONTENT.
        size: Size in bytes from stat, or None if it could not be determined.
        content: Decoded file content. Only set once content has been loaded and
            accepted by the size and binary checks.
        error: Message describing an access or read failure, if any.
        is_dir: True for an unreadable directory recorded in place of its contents.
    """

    relative_path: str
    verdict: Verdict
    size: Optional[int] = None
    content: Optional[str] = None
    error: Optional[str] = None
    is_dir: bool = False

    @property
    def wants_content(self) -> bool:
        return self.verdict is Verdict.INCLUDE_PATH_AND_CONTENT

    @property
    def display_path(self) -> str:
        """The relative path as shown in the digest; relative_path stays usable for reads."""
        return display_path(self.relative_path)
