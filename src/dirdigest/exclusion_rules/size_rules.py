"""Size-based rules deciding whether a file's content may be embedded."""

from typing import Union

KILOBYTE = 1024


def parse_file_size(size: Union[str, int]) -> int:
    """Convert a size limit to bytes.

    A bare integer (or a string of digits) is a number of kilobytes. Strings with a unit
    are parsed in binary units, so "1MB" and "1MiB" both mean 1048576 bytes.

    Args:
        size: Size such as 100, "100", "512K" or "1MB".

    Returns:
        Size in bytes.

    Raises:
        ValueError: If the size is negative or not a valid size format.

    Example:
        >>> parse_file_size(100)
        102400
        >>> parse_file_size("2")
        2048
        >>> parse_file_size("1MB")
        1048576
    """
    if isinstance(size, bool):
        raise ValueError(f"max_size must be string or int, got {type(size)}")
    if isinstance(size, int):
        if size < 0:
            raise ValueError("Size cannot be negative")
        return size * KILOBYTE
    if not isinstance(size, str):
        raise ValueError(f"max_size must be string or int, got {type(size)}")

    text = size.strip()
    if text.isdigit():
        return int(text) * KILOBYTE

    from humanfriendly import InvalidSize, parse_size

    try:
        return int(parse_size(text, binary=True))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size}': {e}")


class SizeExclusionRules:
    """Content-size threshold.

    Files larger than the limit are still listed in the digest but their content is never
    embedded. A file of exactly the limit is accepted.

    Attributes:
        max_size_bytes (int): Maximum embeddable file size in bytes.

    Example:
        >>> rules = SizeExclusionRules(100)
        >>> rules.max_size_bytes
        102400
        >>> rules.exceeds(102400)
        False
        >>> rules.exceeds(102401)
        True
    """

    def __init__(self, max_size: Union[str, int] = 100):
        """Initialize size exclusion rules.

        Args:
            max_size: Limit in kilobytes, or a human-readable size string ('1MB', '512K').

        Raises:
            ValueError: If max_size format is invalid.
        """
        self.max_size_bytes = parse_file_size(max_size)

    def exceeds(self, size: int) -> bool:
        return size > self.max_size_bytes

    def describe(self) -> str:
        from humanfriendly import format_size

        return format_size(self.max_size_bytes, binary=True)
