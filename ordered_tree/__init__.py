"""Binary search tree with explicit rebalancing and shape rendering."""

from .binary_search_tree import MissingCallbackError, Node, OrderedTree
from .rendering import render_tree

__all__ = [
    "MissingCallbackError",
    "Node",
    "OrderedTree",
    "render_tree",
]
