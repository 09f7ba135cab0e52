"""Run configuration for digest generation."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from dirdigest.exceptions import ConfigurationError
from dirdigest.exclusion_rules.defaults import DEFAULT_IGNORE_FILE_NAMES
from dirdigest.exclusion_rules.rule_set import RuleSet
from dirdigest.exclusion_rules.size_rules import SizeExclusionRules
from dirdigest.output_strategies import get_strategy
from dirdigest.types import PathType

DEFAULT_OUTPUT_STEM = "digest"
DEFAULT_OUTPUT = DEFAULT_OUTPUT_STEM + ".txt"
DEFAULT_MAX_SIZE_KB = 100


def default_output_for(output_format: str) -> str:
    """Name of the output file used when none is given.

    Example:
        >>> default_output_for("xml")
        'digest.xml'
    """
    return DEFAULT_OUTPUT_STEM + get_strategy(output_format).get_file_extension()


@dataclass(frozen=True)
class DigestConfig:
    """Everything a digest run needs, validated before traversal begins.

    Attributes:
        root: Directory to summarize.
        include: Patterns a file must match at least one of, if any are given.
        exclude: Patterns whose matches are always excluded.
        max_size: Content size limit in KB, or a human-readable size such as "1MB".
        output: Output file path. When it lies inside the root it is excluded from the
            digest. None means the digest is not written to a file.
        output_format: "text" or "xml".
        follow_symlinks: Follow links to directories whose target is inside the root.
        use_default_excludes: Apply the built-in exclusion table.
        skip_hidden: Exclude dot-files and dot-directories (default). Ignore files still
            apply, and a negated ignore-file rule can re-include a hidden path.
        ignore_file_names: Ignore files read in every directory, lowest precedence first.

    Example:
        >>> config = DigestConfig(root=".", include=("*.py",))
        >>> config.max_size
        100
    """

    root: PathType = "."
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    max_size: Union[str, int] = DEFAULT_MAX_SIZE_KB
    output: Optional[PathType] = DEFAULT_OUTPUT
    output_format: str = "text"
    follow_symlinks: bool = True
    use_default_excludes: bool = True
    skip_hidden: bool = True
    ignore_file_names: Tuple[str, ...] = field(default=DEFAULT_IGNORE_FILE_NAMES)

    def __post_init__(self) -> None:
        for name in ("include", "exclude", "ignore_file_names"):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(value))

    @property
    def root_path(self) -> Path:
        return Path(self.root)

    def validate(self) -> None:
        """Check the configuration without touching anything below the root.

        Raises:
            ConfigurationError: If the root is missing or not a directory, a pattern is
                malformed, or the size or format is invalid.
        """
        if not self.root_path.exists():
            raise ConfigurationError(f"Root path does not exist: {self.root}")
        if not self.root_path.is_dir():
            raise ConfigurationError(f"Root path is not a directory: {self.root}")
        self.size_rules()
        self.rule_set()
        try:
            get_strategy(self.output_format)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def size_rules(self) -> SizeExclusionRules:
        try:
            return SizeExclusionRules(self.max_size)
        except ValueError as e:
            raise ConfigurationError(f"Invalid maximum size {self.max_size!r}: {e}") from e

    def output_exclusion(self) -> Optional[str]:
        """Return an anchored pattern matching the output file, if it lies inside the root.

        Example:
            >>> DigestConfig(root="/project", output="/project/out/digest.txt").output_exclusion()
            '/out/digest.txt'
            >>> DigestConfig(root="/project", output="/tmp/digest.txt").output_exclusion() is None
            True
        """
        if self.output is None:
            return None
        root = os.path.abspath(self.root)
        output = os.path.abspath(self.output)
        try:
            relative = os.path.relpath(output, root)
        except ValueError:
            return None
        if relative == os.curdir or relative == os.pardir or relative.startswith(os.pardir + os.sep):
            return None
        return "/" + re.sub(r"([\[\]*?!#\\])", r"\\\1", relative.replace(os.sep, "/"))

    def rule_set(self) -> RuleSet:
        """Build the initial RuleSet, with the output file added to the user excludes.

        Raises:
            ConfigurationError: If any user pattern is malformed.
        """
        exclude = self.exclude
        output_pattern = self.output_exclusion()
        if output_pattern is not None:
            exclude = exclude + (output_pattern,)
        return RuleSet.build(
            include=self.include,
            exclude=exclude,
            use_default_excludes=self.use_default_excludes,
            skip_hidden=self.skip_hidden,
        )
