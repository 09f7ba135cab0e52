"""Depth-first directory traversal driven by layered selection rules.

This module provides the DirectoryWalker, which visits every path under a root in sorted
order, consults a RuleSet for each one, discovers ignore files as it descends and yields
one DigestEntry per accepted file.
"""

import logging
import os
import stat
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Sequence

from dirdigest.exceptions import ConfigurationError, EntryAccessError
from dirdigest.exclusion_rules.defaults import DEFAULT_IGNORE_FILE_NAMES
from dirdigest.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirdigest.exclusion_rules.rule_set import RuleSet
from dirdigest.file_system_tree.file_identifier import FileIdentifier
from dirdigest.types import DigestEntry, PathType, Verdict

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """Lazy, deterministic traversal of a directory tree.

    Children of each directory are visited in sorted-by-name order, so two walks over an
    unmodified tree produce identical sequences on every platform. Directories produce no
    entries of their own; a pruned directory is never listed, so no ignore file beneath
    it is ever read.

    Ignore files found in a directory extend the RuleSet for that directory's subtree
    only. The extended RuleSet is a new value passed down the recursion, and the parent's
    RuleSet is what siblings see.

    Symbolic Link Behavior:
        A link to a file is treated as a file and its content is read through the link.
        A link to a directory is followed only when follow_symlinks is True and its target
        resolves inside the root; a link back to a directory on the current descent path
        is never followed. Broken links are recorded as path-only entries.

    Error Handling:
        Failures on individual entries (permission denied, broken link, entry removed
        between listing and stat) are recorded on the entry as path-only with an error
        message and traversal continues. Only a root that does not exist, is not a
        directory or cannot be listed raises ConfigurationError.

    Attributes:
        root_path (Path): The directory being walked.
        rule_set (RuleSet): Rules in force at the root, before any ignore file is read.
        follow_symlinks (bool): Whether links to directories inside the root are followed.
        ignore_file_names (Sequence[str]): Ignore file names looked up in every directory.
            When several are present, later names take precedence.

    Example:
        >>> walker = DirectoryWalker("src")  # doctest: +SKIP
        >>> [entry.relative_path for entry in walker.walk()]  # doctest: +SKIP
        ['main.py', 'utils/helpers.py']
    """

    def __init__(
        self,
        root_path: PathType,
        rule_set: Optional[RuleSet] = None,
        follow_symlinks: bool = True,
        ignore_file_names: Sequence[str] = DEFAULT_IGNORE_FILE_NAMES,
    ) -> None:
        self.root_path = Path(root_path)
        self.rule_set = rule_set if rule_set is not None else RuleSet.build()
        self.follow_symlinks = follow_symlinks
        self.ignore_file_names = tuple(ignore_file_names)
        self._resolved_root: Optional[Path] = None

    def resolve_root(self) -> Path:
        """Validate the root and return its absolute, symlink-free form.

        Raises:
            ConfigurationError: If the root does not exist or is not a directory.
        """
        if not self.root_path.exists():
            raise ConfigurationError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise ConfigurationError(f"Root path is not a directory: {self.root_path}")
        return self.root_path.resolve()

    def walk(self) -> Iterator[DigestEntry]:
        """Yield one entry per accepted file, in sorted depth-first order.

        Yields:
            DigestEntry objects with verdict INCLUDE_PATH_ONLY or INCLUDE_PATH_AND_CONTENT.
            Content is never loaded here; only the size from stat is recorded.

        Raises:
            ConfigurationError: If the root is missing, not a directory or unreadable.
        """
        root = self.resolve_root()
        self._resolved_root = root
        try:
            children = self._list_directory(root)
        except OSError as e:
            raise ConfigurationError(f"Cannot read root directory {self.root_path}: {e}") from e

        ancestors = frozenset({FileIdentifier.for_path(root)})
        yield from self._walk_children(root, "", children, self.rule_set, ancestors)

    def __iter__(self) -> Iterator[DigestEntry]:
        return self.walk()

    @staticmethod
    def _list_directory(path: Path) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _load_ignore_files(
        self, path: Path, relative_path: str, children: List[os.DirEntry], rule_set: RuleSet
    ) -> RuleSet:
        names = {child.name: child for child in children}
        for ignore_name in self.ignore_file_names:
            child = names.get(ignore_name)
            if child is None:
                continue
            try:
                if not child.is_file():
                    continue
                layer = GitIgnoreExclusionRules.from_file(path / ignore_name, anchor=relative_path)
            except OSError as e:
                logger.warning("Could not read ignore file %s: %s", path / ignore_name, e)
                continue
            logger.debug("Loaded %d rules from %s", len(layer), path / ignore_name)
            rule_set = rule_set.with_layer(layer)
        return rule_set

    def _walk_children(
        self,
        path: Path,
        relative_path: str,
        children: List[os.DirEntry],
        rule_set: RuleSet,
        ancestors: FrozenSet[FileIdentifier],
    ) -> Iterator[DigestEntry]:
        rule_set = self._load_ignore_files(path, relative_path, children, rule_set)
        for child in children:
            child_relative = f"{relative_path}/{child.name}" if relative_path else child.name
            yield from self._visit(child, child_relative, rule_set, ancestors)

    def _visit(
        self,
        entry: os.DirEntry,
        relative_path: str,
        rule_set: RuleSet,
        ancestors: FrozenSet[FileIdentifier],
    ) -> Iterator[DigestEntry]:
        try:
            is_symlink = entry.is_symlink()
            is_dir = entry.is_dir(follow_symlinks=True)
        except OSError as e:
            yield from self._inaccessible(relative_path, rule_set, str(e))
            return

        if is_dir:
            yield from self._visit_directory(entry, relative_path, rule_set, ancestors, is_symlink)
            return

        verdict = rule_set.resolve(relative_path)
        if verdict is Verdict.EXCLUDE:
            return

        try:
            stat_info = entry.stat(follow_symlinks=True)
        except FileNotFoundError:
            reason = "broken symbolic link" if is_symlink else "file vanished during traversal"
            yield self._failure(relative_path, reason)
            return
        except OSError as e:
            yield self._failure(relative_path, e.strerror or str(e))
            return

        if not stat.S_ISREG(stat_info.st_mode):
            # FIFOs, sockets and devices could block or never end when read
            logger.debug("Skipping content for special file: %s", relative_path)
            verdict = Verdict.INCLUDE_PATH_ONLY

        yield DigestEntry(relative_path, verdict, size=stat_info.st_size)

    def _visit_directory(
        self,
        entry: os.DirEntry,
        relative_path: str,
        rule_set: RuleSet,
        ancestors: FrozenSet[FileIdentifier],
        is_symlink: bool,
    ) -> Iterator[DigestEntry]:
        if rule_set.resolve(relative_path, is_dir=True) is Verdict.SKIP_DIRECTORY:
            return

        path = Path(entry.path)
        if is_symlink:
            if not self.follow_symlinks:
                logger.debug("Not following directory symlink: %s", relative_path)
                return
            if not self._inside_root(path):
                logger.debug("Not following symlink outside the root: %s", relative_path)
                return

        try:
            file_id = FileIdentifier.for_path(path)
            if file_id in ancestors:
                logger.debug("Symlink loop detected at %s", relative_path)
                return
            children = self._list_directory(path)
        except OSError as e:
            logger.warning("%s", EntryAccessError(relative_path, e.strerror or str(e)))
            yield DigestEntry(
                relative_path, Verdict.INCLUDE_PATH_ONLY, error=e.strerror or str(e), is_dir=True
            )
            return

        yield from self._walk_children(path, relative_path, children, rule_set, ancestors | {file_id})

    def _inside_root(self, path: Path) -> bool:
        assert self._resolved_root is not None
        try:
            path.resolve().relative_to(self._resolved_root)
        except (OSError, ValueError):
            return False
        return True

    def _inaccessible(self, relative_path: str, rule_set: RuleSet, reason: str) -> Iterator[DigestEntry]:
        if rule_set.resolve(relative_path) is not Verdict.EXCLUDE:
            yield self._failure(relative_path, reason)

    @staticmethod
    def _failure(relative_path: str, reason: str) -> DigestEntry:
        logger.warning("%s", EntryAccessError(relative_path, reason))
        return DigestEntry(relative_path, Verdict.INCLUDE_PATH_ONLY, error=reason)
