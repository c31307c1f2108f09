"""Sideways ASCII rendering of binary tree shapes.

The right subtree is drawn above its parent and the left subtree below, so the
output reads as the tree rotated a quarter turn counter-clockwise::

    │   ┌── 8
    └── 5
        └── 3
            └── 1
"""

from __future__ import annotations

from typing import List, Optional

from .binary_search_tree import Node

__all__ = ["render_tree"]


def _render(node: Node, prefix: str, is_left: bool, lines: List[str]) -> None:
    if node.right is not None:
        _render(node.right, prefix + ("│   " if is_left else "    "), False, lines)
    lines.append(prefix + ("└── " if is_left else "┌── ") + str(node.value))
    if node.left is not None:
        _render(node.left, prefix + ("    " if is_left else "│   "), True, lines)


def render_tree(root: Optional[Node]) -> str:
    """Render the subtree rooted at *root*, or ``<empty>`` for ``None``."""

    if root is None:
        return "<empty>"
    lines: List[str] = []
    _render(root, "", True, lines)
    return "\n".join(lines)
