"""Tree-sitter parser wrapper for Swift.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes)
    if tree.root_node.has_error:
        ...
"""

from __future__ import annotations

import tree_sitter
import tree_sitter_swift

LANGUAGE_NAME = "swift"


class TreeSitterParser:
    """Wrapper around a tree-sitter parser bound to the Swift grammar."""

    def __init__(self) -> None:
        # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
        self._language = tree_sitter.Language(tree_sitter_swift.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse(self, code: bytes) -> tree_sitter.Tree:
        """Parse Swift source and return its syntax tree.

        Tree-sitter always produces a tree; syntax errors show up as ERROR
        or MISSING nodes and ``root_node.has_error``.
        """
        return self._parser.parse(code)


def first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Return the first ERROR or MISSING node under ``node`` in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None
