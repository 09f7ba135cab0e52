"""Binary content detection."""

SAMPLE_SIZE = 8192

# Control characters other than tab, newline, form feed and carriage return
_CONTROL_BYTES = frozenset(range(32)) - {9, 10, 12, 13}


def looks_binary(data: bytes, sample_size: int = SAMPLE_SIZE) -> bool:
    """Decide whether raw file content looks binary.

    Only a prefix of the data is sampled. A null byte is treated as conclusive; otherwise
    content that is not valid UTF-8 and has more than 1% control characters is binary.

    Args:
        data: File content, or a prefix of it.
        sample_size: Number of leading bytes to inspect.

    Returns:
        True if the content appears to be binary.

    Example:
        >>> looks_binary(b"print('hello')\\n")
        False
        >>> looks_binary(b"\\x89PNG\\r\\n\\x1a\\n\\x00\\x00")
        True
        >>> looks_binary(b"")
        False
    """
    sample = data[:sample_size]
    if not sample:
        return False
    if b"\0" in sample:
        return True

    try:
        sample.decode("utf-8")
        return False
    except UnicodeDecodeError as e:
        # A multi-byte sequence cut off by the sample boundary is still text
        if e.start >= len(sample) - 3 and e.reason == "unexpected end of data":
            return False

    control_chars = sum(1 for byte in sample if byte in _CONTROL_BYTES)
    return control_chars / len(sample) > 0.01
