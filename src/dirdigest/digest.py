"""Digest assembly with streaming support.

This module provides classes that turn a walked directory into a digest: a tree listing
of every accepted path followed by labeled content sections for every file whose content
is embedded. It includes both streaming and complete processing implementations.
"""

import logging
from typing import Iterator, List, Optional, Union

from anytree import ContStyle, RenderTree

from dirdigest.config import DigestConfig
from dirdigest.file_content_printer import FileContentPrinter
from dirdigest.file_system_tree.file_system_node import FileSystemNode
from dirdigest.file_system_tree.walker import DirectoryWalker
from dirdigest.types import DigestEntry, display_path

logger = logging.getLogger(__name__)


def build_tree(root_name: str, entries: List[DigestEntry]) -> FileSystemNode:
    """Build the tree view from entries in walker order.

    Directories appear exactly when they contain at least one entry, whether or not any
    of those entries carry content.

    Example:
        >>> from dirdigest.types import Verdict
        >>> entries = [
        ...     DigestEntry("src/main.x", Verdict.INCLUDE_PATH_AND_CONTENT, size=50),
        ...     DigestEntry("src/logo.png", Verdict.INCLUDE_PATH_ONLY, size=900),
        ... ]
        >>> tree = build_tree("project", entries)
        >>> [node.label for node in tree.descendants]
        ['src/', 'main.x', 'logo.png']
    """
    root = FileSystemNode(root_name, is_dir=True)
    for entry in entries:
        parent = root
        *directories, name = entry.display_path.split("/")
        for directory in directories:
            node = parent.child(directory)
            if node is None:
                node = FileSystemNode(directory, parent=parent, is_dir=True)
            parent = node
        FileSystemNode(name, parent=parent, is_dir=entry.is_dir, error=entry.error)
    return root


def render_tree(tree: FileSystemNode) -> Iterator[str]:
    """Render a tree one line at a time, without trailing newlines.

    Example:
        >>> root = FileSystemNode("project", is_dir=True)
        >>> src = FileSystemNode("src", parent=root, is_dir=True)
        >>> _ = FileSystemNode("main.x", parent=src)
        >>> _ = FileSystemNode("readme.md", parent=root)
        >>> print("\\n".join(render_tree(root)))
        project/
        ├── src/
        │   └── main.x
        └── readme.md
    """
    for prefix, _, node in RenderTree(tree, style=ContStyle()):
        yield f"{prefix}{node.label}"


class StreamingDigest:
    """Streaming digest assembler that minimizes memory usage through incremental processing.

    The directory is walked once when the tree is first needed. Only paths and sizes are
    kept from the walk; file contents are read one at a time while the contents are
    streamed and are never retained afterwards.

    Streaming properties:
    - Each streaming operation (tree, contents) can only be performed once
    - The tree is always emitted before the contents; streaming contents first walks the
      directory if the tree has not been streamed
    - Counts are final once streaming_complete is True

    Attributes:
        config (DigestConfig): Configuration for this run.
        streaming_complete (bool): Whether all streaming operations have finished.

    Example:
        >>> digest = StreamingDigest(DigestConfig(root="src"))  # doctest: +SKIP
        >>> for line in digest.stream_tree():  # doctest: +SKIP
        ...     print(line, end='')
        Directory structure:
        src/
        ├── main.py
        └── utils/
            └── helpers.py

    Raises:
        ConfigurationError: If the configuration is invalid. Raised from the constructor,
            before anything below the root is read.
    """

    def __init__(self, config: Optional[DigestConfig] = None, **options: object) -> None:
        """Initialize streaming digest assembly.

        Args:
            config: Run configuration. If None, one is built from the keyword options.
            **options: DigestConfig fields, used when config is None.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self.config = config if config is not None else DigestConfig(**options)  # type: ignore[arg-type]
        self.config.validate()

        self._walker = DirectoryWalker(
            self.config.root,
            self.config.rule_set(),
            follow_symlinks=self.config.follow_symlinks,
            ignore_file_names=self.config.ignore_file_names,
        )
        self._printer = FileContentPrinter(
            self.config.root, self.config.size_rules(), output_format=self.config.output_format
        )

        self._entries: Optional[List[DigestEntry]] = None
        self._tree: Optional[FileSystemNode] = None
        self._tree_complete = False
        self._contents_complete = False
        self._content_file_count = 0

    def discover(self) -> List[DigestEntry]:
        """Walk the directory if it has not been walked yet and return the entries."""
        if self._entries is None:
            logger.info("Discovering files...")
            self._entries = list(self._walker.walk())
            root = self._walker.resolve_root()
            self._tree = build_tree(display_path(root.name or str(root)), self._entries)
            logger.info(
                "Found %d files for tree, %d files for content.",
                self.file_count,
                sum(1 for entry in self._entries if entry.wants_content),
            )
        return self._entries

    @property
    def file_count(self) -> int:
        """Number of entries listed in the tree."""
        return len(self.discover())

    @property
    def directory_count(self) -> int:
        """Number of directories shown in the tree, excluding the root."""
        self.discover()
        assert self._tree is not None
        return sum(1 for node in self._tree.descendants if node.is_dir and node.children)

    @property
    def content_file_count(self) -> int:
        """Number of content sections emitted so far.

        Final once the contents have been streamed.
        """
        return self._content_file_count

    @property
    def skipped_content_count(self) -> int:
        """Number of listed files whose content was not embedded.

        Final once the contents have been streamed.
        """
        return self.file_count - self._content_file_count

    @property
    def streaming_complete(self) -> bool:
        return self._tree_complete and self._contents_complete

    def stream_tree(self) -> Iterator[str]:
        """Stream the tree section line by line.

        Returns:
            Iterator yielding the tree header and tree lines, each ending in a newline.

        Raises:
            RuntimeError: If the tree has already been streamed.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        self.discover()
        assert self._tree is not None
        yield self._printer.output_strategy.format_tree_header()
        for line in render_tree(self._tree):
            yield line + "\n"
        self._tree_complete = True

    def stream_contents(self) -> Iterator[str]:
        """Stream the content sections chunk by chunk, in walker order.

        Returns:
            Iterator yielding the contents header followed by the formatted sections.

        Raises:
            RuntimeError: If contents have already been streamed.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        entries = self.discover()
        logger.info("Reading and concatenating %d files...", sum(1 for e in entries if e.wants_content))
        yield self._printer.output_strategy.format_contents_header()
        for entry in self._printer.yield_file_contents(entries):
            yield from self._printer.format_section(entry)
            self._content_file_count += 1

        self._contents_complete = True

    def stream(self) -> Iterator[str]:
        """Stream the complete digest: tree section, then content sections."""
        yield from self.stream_tree()
        yield from self.stream_contents()


class Digest(StreamingDigest):
    """Complete digest assembler that processes everything immediately.

    This class extends StreamingDigest but renders the whole digest during
    initialization, storing the result for immediate access.

    Memory Usage Note:
        The full digest text, including every embedded file, is held in memory. For large
        trees use the StreamingDigest parent class instead.

    Example:
        >>> digest = Digest(DigestConfig(root="src"))  # doctest: +SKIP
        >>> print(digest.text)  # doctest: +SKIP
    """

    def __init__(self, config: Optional[DigestConfig] = None, **options: object) -> None:
        super().__init__(config, **options)
        self._tree_string = "".join(self.stream_tree())
        self._content_string = "".join(self.stream_contents())

    @property
    def tree_string(self) -> str:
        return self._tree_string

    @property
    def content_string(self) -> str:
        return self._content_string

    @property
    def text(self) -> str:
        return self._tree_string + self._content_string


def generate_digest(config: Union[DigestConfig, None] = None, **options: object) -> str:
    """Produce the digest text for a configuration in one call.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    return Digest(config, **options).text
