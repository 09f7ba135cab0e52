"""Content loading and section formatting for digest entries.

This module decides whether an entry's content is actually embedded (size threshold and
binary detection) and formats the content sections of the digest through an output
strategy.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from .exceptions import ContentReadError
from .exclusion_rules.size_rules import SizeExclusionRules
from .file_system_tree.binary_detector import looks_binary
from .output_strategies import get_strategy
from .output_strategies.base_strategy import OutputStrategy
from .types import DigestEntry, PathType, Verdict

logger = logging.getLogger(__name__)


class FileContentPrinter:
    """Loads file contents for accepted entries and formats them as digest sections.

    Content-inclusion checks run in this order, each able to downgrade an entry from
    INCLUDE_PATH_AND_CONTENT to INCLUDE_PATH_ONLY:

    1. Size threshold, using the size recorded by the walker (stat before read), so a
       large file is never opened.
    2. Binary detection on a sampled prefix of the bytes read.
    3. Read failures, which are recorded on the entry rather than raised.

    Reads are bounded by the size threshold: at most max_size_bytes + 1 bytes are read,
    so a file that grew after it was stat'ed is still rejected without a large read.

    Content is decoded as UTF-8 with undecodable bytes replaced.

    Attributes:
        root_path (Path): Directory the entries' relative paths are based on.
        size_rules (SizeExclusionRules): The content size threshold.
        output_strategy (OutputStrategy): Strategy formatting the sections.

    Example:
        >>> printer = FileContentPrinter("src", max_size=100)  # doctest: +SKIP
        >>> entry = printer.load(DigestEntry("main.py", Verdict.INCLUDE_PATH_AND_CONTENT, size=50))  # doctest: +SKIP
        >>> print("".join(printer.format_section(entry)))  # doctest: +SKIP
    """

    def __init__(
        self,
        root_path: PathType,
        max_size: Union[str, int, SizeExclusionRules] = 100,
        output_format: Union[str, OutputStrategy] = "text",
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            root_path: Directory the entries' relative paths are based on.
            max_size: Size threshold in KB, a human-readable size, or SizeExclusionRules.
            output_format: Either a format name ("text" or "xml") or an OutputStrategy.

        Raises:
            ValueError: If the size or format name is invalid.
            TypeError: If output_format is neither a string nor an OutputStrategy.
        """
        self.root_path = Path(root_path)
        self.size_rules = max_size if isinstance(max_size, SizeExclusionRules) else SizeExclusionRules(max_size)

        if isinstance(output_format, str):
            self.output_strategy = get_strategy(output_format)
        elif isinstance(output_format, OutputStrategy):
            self.output_strategy = output_format
        else:
            raise TypeError("output_format must be either a string ('text' or 'xml') or an OutputStrategy instance")

    def _downgrade(self, entry: DigestEntry, error: Union[str, None] = None) -> DigestEntry:
        return dataclasses.replace(entry, verdict=Verdict.INCLUDE_PATH_ONLY, content=None, error=error)

    def _read(self, entry: DigestEntry) -> bytes:
        limit = self.size_rules.max_size_bytes
        try:
            with open(self.root_path / entry.relative_path, "rb") as file:
                return file.read(limit + 1)
        except OSError as e:
            raise ContentReadError(entry.relative_path, e.strerror or str(e)) from e

    def load(self, entry: DigestEntry) -> DigestEntry:
        """Attach content to an entry, or downgrade it to path-only.

        Args:
            entry: An entry produced by the walker.

        Returns:
            The entry with content set if it passes every check, otherwise a path-only
            copy. Entries that are already path-only are returned unchanged.
        """
        if not entry.wants_content:
            return entry

        if entry.size is None or self.size_rules.exceeds(entry.size):
            logger.debug(
                "Skipping content for large file: %s (>%s)", entry.relative_path, self.size_rules.describe()
            )
            return self._downgrade(entry)

        try:
            data = self._read(entry)
        except ContentReadError as e:
            logger.warning("%s", e)
            return self._downgrade(entry, error=e.reason)

        if self.size_rules.exceeds(len(data)):
            logger.debug("Skipping content for file that grew past the limit: %s", entry.relative_path)
            return self._downgrade(entry)
        if looks_binary(data):
            logger.debug("Skipping content for binary file: %s", entry.relative_path)
            return self._downgrade(entry)

        return dataclasses.replace(entry, size=len(data), content=data.decode("utf-8", errors="replace"))

    def format_section(self, entry: DigestEntry) -> Iterator[str]:
        """Format one loaded entry as a content section.

        Raises:
            ValueError: If the entry has no loaded content.
        """
        if entry.content is None:
            raise ValueError(f"Entry has no content to format: {entry.relative_path}")
        yield self.output_strategy.format_start(entry.display_path)
        yield self.output_strategy.format_content(entry.content)
        yield self.output_strategy.format_end()

    def yield_file_contents(self, entries: Iterable[DigestEntry]) -> Iterator[DigestEntry]:
        """Load content for each entry in order, yielding only those that keep it.

        Each loaded entry is yielded as soon as it is read and is not retained, so at most
        one file's content is held in memory at a time.
        """
        for entry in entries:
            loaded = self.load(entry)
            if loaded.content is not None:
                yield loaded
