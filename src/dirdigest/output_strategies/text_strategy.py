"""Plain-text output strategy, the default digest format."""

from .base_strategy import OutputStrategy

SEPARATOR = "=" * 60


class TextOutputStrategy(OutputStrategy):
    """Output strategy that delimits each file with separator lines.

    Each content section has the following structure, with surrounding whitespace
    stripped from the content and two blank lines after it::

        ============================================================
        FILE: relative/path/to/file
        ============================================================
        file content...

    Example:
        >>> strategy = TextOutputStrategy()
        >>> print(strategy.format_start("src/main.py"), end='')
        ============================================================
        FILE: src/main.py
        ============================================================
        >>> strategy.format_content("\\n  x = 1\\n\\n")
        'x = 1'
        >>> strategy.format_end()
        '\\n\\n\\n'
    """

    def format_tree_header(self) -> str:
        return "Directory structure:\n"

    def format_contents_header(self) -> str:
        return "\n\nFiles Content:\n\n"

    def format_start(self, relative_path: str) -> str:
        return f"{SEPARATOR}\nFILE: {relative_path}\n{SEPARATOR}\n"

    def format_content(self, content: str) -> str:
        return content.strip()

    def format_end(self) -> str:
        return "\n\n\n"

    def get_file_extension(self) -> str:
        return ".txt"
