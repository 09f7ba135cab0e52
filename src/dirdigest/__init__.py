"""Directory digest generation.

This package walks a source tree, decides for every path whether it is traversed,
listed and embedded, and assembles a single text digest (a directory tree followed
by the contents of the selected files) suitable as context for Large Language Models.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirdigest")
except PackageNotFoundError:
    __version__ = "unknown"
