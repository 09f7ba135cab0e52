"""File identifier for uniquely identifying directories by device and inode."""

import os
from dataclasses import dataclass

from dirdigest.types import PathType


@dataclass(frozen=True)
class FileIdentifier:
    """Device and inode pair identifying a directory independently of the path used to reach it.

    The walker keeps the identifiers of the directories on the current descent path, so a
    symbolic link that leads back to one of its own ancestors is detected and not followed.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Note:
        On Windows, inode numbers might be handled differently than on Unix systems,
        but Python's os.stat implementation provides values that can be used
        for uniquely identifying files.
    """

    device_id: int
    inode_number: int

    @classmethod
    def for_path(cls, path: PathType) -> "FileIdentifier":
        """Identify the file a path resolves to, following symbolic links.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        stat_info = os.stat(path)
        return cls(stat_info.st_dev, stat_info.st_ino)
