"""Output writing utilities for the dirdigest CLI.

This module provides a writer that either streams to standard output or replaces the
output file atomically, so an interrupted or failed run never leaves a truncated digest
behind.
"""

import errno
import os
import sys
import tempfile
import types
from pathlib import Path
from typing import Optional, TextIO, Type, Union


class SafeWriter:
    """Context manager writing the digest to a file or to stdout.

    When writing to a file, text goes to a temporary file in the destination directory
    which replaces the destination only when the with-block completes without an
    exception. Otherwise the temporary file is removed and the destination is untouched.

    Attributes:
        path: Destination path, or None for stdout.

    Example:
        >>> with SafeWriter("digest.txt") as writer:  # doctest: +SKIP
        ...     writer.write("Directory structure:\\n")
    """

    def __init__(self, path: Union[None, str, os.PathLike]) -> None:
        self.path = Path(path) if path is not None else None
        self._stream: Optional[TextIO] = None
        self._temp_name: Optional[str] = None
        self._closed = False

    def __enter__(self) -> "SafeWriter":
        if self.path is None:
            self._stream = sys.stdout
        else:
            directory = self.path.parent if str(self.path.parent) else Path(".")
            fd, self._temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
            self._stream = os.fdopen(fd, "w", encoding="utf-8", newline="")
        return self

    def write(self, data: str) -> None:
        """Write a chunk of the digest.

        Raises:
            BrokenPipeError: If stdout is a pipe that has been closed.
            ValueError: If the writer is closed.
        """
        if self._closed or self._stream is None:
            raise ValueError("Cannot write to closed SafeWriter")
        try:
            self._stream.write(data)
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def _finish(self, commit: bool) -> None:
        if self._closed:
            return
        self._closed = True
        if self.path is None:
            if commit and self._stream is not None:
                self._stream.flush()
            return

        assert self._stream is not None and self._temp_name is not None
        try:
            self._stream.close()
            if commit:
                os.replace(self._temp_name, self.path)
        finally:
            if os.path.exists(self._temp_name):
                os.unlink(self._temp_name)

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Commit the output if the block succeeded, discard it otherwise."""
        try:
            self._finish(commit=exc_type is None)
        except OSError:
            # Only surface close errors if there was not already an exception
            if exc_type is None:
                raise
