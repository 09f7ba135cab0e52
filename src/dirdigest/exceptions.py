class DirDigestError(Exception):
    """Base class for all errors raised by dirdigest."""

    pass


class ConfigurationError(DirDigestError):
    """
    Exception raised when a digest run cannot start.

    This covers a root path that does not exist or is not a directory, a malformed
    glob pattern supplied by the user, and an invalid size limit. It is always raised
    before any traversal begins, so no partial digest is ever produced.

    Example:
        >>> error = ConfigurationError("Root path does not exist: /nope")
        >>> str(error)
        'Root path does not exist: /nope'
    """

    pass


class EntryAccessError(DirDigestError):
    """
    Exception describing an individual file or directory that could not be accessed.

    Raised internally by the walker for permission errors, broken symbolic links and
    entries deleted between listing and stat. It never aborts a run: the walker records
    the message on the affected entry and continues.

    Attributes:
        relative_path (str): Path of the entry relative to the digest root.

    Example:
        >>> error = EntryAccessError("src/secret.txt", "Permission denied")
        >>> str(error)
        'Cannot access src/secret.txt: Permission denied'
    """

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Cannot access {relative_path}: {reason}")


class ContentReadError(DirDigestError):
    """
    Exception describing a file whose content read failed after passing all checks.

    The affected entry is downgraded to path-only and traversal continues.

    Attributes:
        relative_path (str): Path of the file relative to the digest root.

    Example:
        >>> error = ContentReadError("src/main.py", "Input/output error")
        >>> str(error)
        'Could not read src/main.py: Input/output error'
    """

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Could not read {relative_path}: {reason}")
