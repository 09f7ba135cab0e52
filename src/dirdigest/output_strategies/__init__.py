"""Formats for the per-file content sections of a digest."""

from .base_strategy import OutputStrategy
from .text_strategy import TextOutputStrategy
from .xml_strategy import XMLOutputStrategy

__all__ = ["OutputStrategy", "TextOutputStrategy", "XMLOutputStrategy", "get_strategy"]


def get_strategy(output_format: str) -> OutputStrategy:
    """Look up a strategy by format name.

    Raises:
        ValueError: If the format is not "text" or "xml".
    """
    output_format = output_format.lower()
    if output_format == "text":
        return TextOutputStrategy()
    if output_format == "xml":
        return XMLOutputStrategy()
    raise ValueError(f"Unsupported output format: {output_format}. Must be one of: text, xml")
