"""Selection rules for filtering files and directories."""

from .git_rules import GitIgnoreExclusionRules
from .pattern import GlobPattern, PatternKind, matches
from .rule_set import RuleSet
from .size_rules import SizeExclusionRules

__all__ = [
    "GitIgnoreExclusionRules",
    "GlobPattern",
    "PatternKind",
    "RuleSet",
    "SizeExclusionRules",
    "matches",
]
