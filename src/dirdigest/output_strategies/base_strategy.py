"""Output strategy base class defining the interface for digest formatting.

This module provides the abstract base class that defines how the two parts of a digest,
the directory tree and the per-file content sections, are framed in the output text.
"""

from abc import ABC, abstractmethod


class OutputStrategy(ABC):
    """Abstract base class defining the interface for digest output formatting strategies.

    Each file's content section is produced in three phases:
    1. Start - outputs the opening delimiter naming the file's relative path
    2. Content - formats the file content
    3. End - outputs the closing delimiter

    Strategies also supply the headers placed before the tree and before the first
    content section.

    Example:
        >>> class CustomStrategy(OutputStrategy):
        ...     def format_tree_header(self) -> str:
        ...         return "# tree\\n"
        ...
        ...     def format_contents_header(self) -> str:
        ...         return "# files\\n"
        ...
        ...     def format_start(self, relative_path: str) -> str:
        ...         return f"--- {relative_path}\\n"
        ...
        ...     def format_content(self, content: str) -> str:
        ...         return content
        ...
        ...     def format_end(self) -> str:
        ...         return "\\n"
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".custom"
        >>> CustomStrategy().format_start("a.py")
        '--- a.py\\n'
    """

    @abstractmethod
    def format_tree_header(self) -> str:
        """Return the text placed before the directory tree."""
        pass

    @abstractmethod
    def format_contents_header(self) -> str:
        """Return the text placed between the tree and the first content section."""
        pass

    @abstractmethod
    def format_start(self, relative_path: str) -> str:
        """Format the opening delimiter of a file's content section.

        Args:
            relative_path: The relative path of the file being formatted.

        Returns:
            The formatted opening delimiter.
        """
        pass

    @abstractmethod
    def format_content(self, content: str) -> str:
        """Format a file's content, escaping it as the format requires."""
        pass

    @abstractmethod
    def format_end(self) -> str:
        """Format the closing delimiter of a file's content section."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".txt", ".xml").
        """
        pass
