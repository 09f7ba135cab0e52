"""Layered selection rules with directory-scoped ignore files.

A RuleSet combines four sources of rules and resolves a single Verdict per path.
Highest precedence first:

1. User include patterns. When any are given, a file matching none of them is excluded.
   Matching an include pattern does not rescue a file from the tiers below.
2. User exclude patterns. Always exclude, regardless of ignore-file state.
3. Ignore files. The file anchored at the deepest ancestor directory with a matching
   pattern decides; within one file the last matching line decides. A negated pattern
   re-includes the path, overriding shallower files and the built-in defaults.
4. Built-in defaults (dependency/build directories, lock files, OS metadata).
5. Otherwise the path is traversed or included.

RuleSet values are immutable. Entering a directory that holds an ignore file produces a
new RuleSet with one more layer; the parent's value is untouched, so rules never leak to
siblings or back up to the parent.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from dirdigest.exceptions import ConfigurationError
from dirdigest.types import RuleTier, Verdict

from .defaults import DEFAULT_PATTERNS, HIDDEN_PATTERN, has_content_excluded_extension
from .git_rules import GitIgnoreExclusionRules
from .pattern import GlobPattern

logger = logging.getLogger(__name__)


def compile_user_patterns(patterns: Iterable[str], tier: RuleTier) -> Tuple[GlobPattern, ...]:
    """Compile user-supplied patterns, failing fast on malformed ones.

    Raises:
        ConfigurationError: If any pattern is malformed.
    """
    compiled = []
    for text in patterns:
        try:
            compiled.append(GlobPattern.compile(text))
        except ValueError as e:
            flag = "--include" if tier is RuleTier.USER_INCLUDE else "--exclude"
            raise ConfigurationError(f"Invalid {flag} pattern {text!r}: {e}") from e
    return tuple(compiled)


class RuleSet:
    """Immutable, layered selection rules.

    Attributes:
        includes (Tuple[GlobPattern, ...]): User include patterns.
        excludes (Tuple[GlobPattern, ...]): User exclude patterns.
        layers (Tuple[GitIgnoreExclusionRules, ...]): Ignore-file rules, shallowest first.
        defaults (Tuple[GlobPattern, ...]): Built-in default exclusions.
        check_extensions (bool): Whether content-excluded extensions downgrade files to path-only.

    Example:
        >>> rules = RuleSet.build(include=["*.x"], exclude=["src/skip.x"])
        >>> rules.resolve("src/a.x")
        <Verdict.INCLUDE_PATH_AND_CONTENT: 'include_path_and_content'>
        >>> rules.resolve("src/skip.x")
        <Verdict.EXCLUDE: 'exclude'>
        >>> rules.resolve("readme.md")
        <Verdict.EXCLUDE: 'exclude'>
        >>> rules.resolve("node_modules", is_dir=True)
        <Verdict.SKIP_DIRECTORY: 'skip_directory'>
    """

    __slots__ = ("includes", "excludes", "layers", "defaults", "check_extensions")

    def __init__(
        self,
        includes: Sequence[GlobPattern] = (),
        excludes: Sequence[GlobPattern] = (),
        layers: Sequence[GitIgnoreExclusionRules] = (),
        defaults: Sequence[GlobPattern] = DEFAULT_PATTERNS,
        check_extensions: bool = True,
    ) -> None:
        self.includes = tuple(includes)
        self.excludes = tuple(excludes)
        self.layers = tuple(layers)
        self.defaults = tuple(defaults)
        self.check_extensions = check_extensions

    @classmethod
    def build(
        cls,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
        use_default_excludes: bool = True,
        skip_hidden: bool = True,
    ) -> "RuleSet":
        """Create the initial RuleSet for a run from user patterns and defaults.

        Args:
            include: User include patterns.
            exclude: User exclude patterns.
            use_default_excludes: Whether the built-in exclusion table applies.
            skip_hidden: Whether dot-files and dot-directories are excluded by default.

        Raises:
            ConfigurationError: If any user pattern is malformed.
        """
        defaults: Tuple[GlobPattern, ...] = DEFAULT_PATTERNS if use_default_excludes else ()
        if skip_hidden:
            defaults += (GlobPattern.compile(HIDDEN_PATTERN),)
        return cls(
            includes=compile_user_patterns(include, RuleTier.USER_INCLUDE),
            excludes=compile_user_patterns(exclude, RuleTier.USER_EXCLUDE),
            defaults=defaults,
            check_extensions=use_default_excludes,
        )

    def with_layer(self, layer: GitIgnoreExclusionRules) -> "RuleSet":
        """Return a new RuleSet extended with one ignore file's rules.

        Empty layers are not added, so directories whose ignore file contains only
        comments share their parent's RuleSet.
        """
        if not layer.patterns:
            return self
        return RuleSet(self.includes, self.excludes, self.layers + (layer,), self.defaults, self.check_extensions)

    def _ignore_file_verdict(self, path: str, is_dir: bool) -> Optional[bool]:
        for layer in reversed(self.layers):
            verdict = layer.match(layer.relative_to_anchor(path), is_dir)
            if verdict is not None:
                return verdict
        return None

    def matching_tier(self, path: str, is_dir: bool = False) -> Optional[RuleTier]:
        """Name the tier that excludes a path, or None if the path is kept."""
        if not is_dir and self.includes and not any(p.matches(path) for p in self.includes):
            return RuleTier.USER_INCLUDE
        if any(p.matches(path, is_dir) for p in self.excludes):
            return RuleTier.USER_EXCLUDE
        ignored = self._ignore_file_verdict(path, is_dir)
        if ignored is not None:
            return RuleTier.IGNORE_FILE if ignored else None
        if any(p.matches(path, is_dir) for p in self.defaults):
            return RuleTier.DEFAULT
        return None

    def resolve(self, path: str, is_dir: bool = False) -> Verdict:
        """Compute the verdict for a path relative to the digest root.

        Args:
            path: Relative path using "/" separators.
            is_dir: Whether the path names a directory.

        Returns:
            TRAVERSE or SKIP_DIRECTORY for directories; EXCLUDE, INCLUDE_PATH_ONLY or
            INCLUDE_PATH_AND_CONTENT for files. Size and binary checks are not applied
            here.
        """
        tier = self.matching_tier(path, is_dir)
        if is_dir:
            if tier is not None:
                logger.debug("Pruning directory %s (%s rule)", path, tier.value)
                return Verdict.SKIP_DIRECTORY
            return Verdict.TRAVERSE

        if tier is not None:
            logger.debug("Excluding %s (%s rule)", path, tier.value)
            return Verdict.EXCLUDE
        if self.check_extensions and has_content_excluded_extension(path):
            logger.debug("Skipping content for excluded extension: %s", path)
            return Verdict.INCLUDE_PATH_ONLY
        return Verdict.INCLUDE_PATH_AND_CONTENT

    def __repr__(self) -> str:
        return (
            f"RuleSet(includes={len(self.includes)}, excludes={len(self.excludes)}, "
            f"layers={[layer.anchor for layer in self.layers]}, defaults={len(self.defaults)})"
        )
