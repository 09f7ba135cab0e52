"""XML output strategy for file content formatting.

This module provides a strategy for formatting file content as XML elements, ensuring
proper escaping of both paths and content.
"""

from xml.sax.saxutils import escape as xml_escape

from .base_strategy import OutputStrategy


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that formats each file's content as an XML element.

    Each content section has the following structure:
    <file path="relative/path/to/file">
    file content...
    </file>

    All content is XML-escaped using xml.sax.saxutils.escape; the path attribute
    additionally escapes quote characters.

    Example:
        >>> strategy = XMLOutputStrategy()
        >>> print(strategy.format_start("test & demo.py"), end='')
        <file path="test &amp; demo.py">
        >>> strategy.format_content('if x < 10 && y > 20:')
        'if x &lt; 10 &amp;&amp; y &gt; 20:\\n'
        >>> print(strategy.format_end(), end='')
        </file>
    """

    def __init__(self) -> None:
        self._attribute_entities = {
            '"': "&quot;",
            "'": "&apos;",
        }

    def format_tree_header(self) -> str:
        return "Directory structure:\n"

    def format_contents_header(self) -> str:
        return "\n\n"

    def format_start(self, relative_path: str) -> str:
        return f'<file path="{xml_escape(relative_path, self._attribute_entities)}">\n'

    def format_content(self, content: str) -> str:
        escaped = xml_escape(content)
        if escaped and not escaped.endswith("\n"):
            escaped += "\n"
        return escaped

    def format_end(self) -> str:
        return "</file>\n"

    def get_file_extension(self) -> str:
        return ".xml"
