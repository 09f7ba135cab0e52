"""Directory traversal and tree representation.

This module provides the walker that turns a directory and a set of selection rules
into a stream of digest entries, plus the helpers it relies on: symlink loop detection,
binary content detection and the node type used to render the tree view.
"""
