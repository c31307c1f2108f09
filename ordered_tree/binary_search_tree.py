"""Binary search tree with explicit, on-demand rebalancing.

``OrderedTree`` stores unique, totally-ordered keys.  Construction and
:meth:`OrderedTree.rebalance` produce a minimal-height tree by recursively
splitting the sorted key set at its median, while :meth:`OrderedTree.insert`
and :meth:`OrderedTree.delete` follow the textbook search-and-splice
algorithms and never rebalance on their own.  The tree therefore drifts out of
balance under skewed insertions until the caller asks for a rebuild.

The public API covers:

* ``Node`` – a ``@dataclass`` holding a key and optional left/right children.
  Nodes compare by identity so a specific node can be told apart from another
  node carrying the same key.
* ``OrderedTree`` – build, insert, delete, find, four traversal orders (both as
  visitor callbacks and as lazy generators), height, depth, balance checking
  and rebalancing.
* ``MissingCallbackError`` – raised when a traversal is requested without a
  visitor.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import (
    Any,
    Callable,
    Deque,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)


class SupportsOrdering(Protocol):
    def __lt__(self, other: Any) -> bool: ...

    def __gt__(self, other: Any) -> bool: ...


K = TypeVar("K", bound=SupportsOrdering)

Visitor = Callable[["Node[K]"], Any]

# Distinguishes "use the tree's root" from an explicit empty subtree.
_ROOT: Any = object()


class MissingCallbackError(ValueError):
    """Raised when a traversal is invoked without a callable visitor."""

    def __init__(self, message: str = "A callback function is required.") -> None:
        super().__init__(message)


@dataclass(slots=True, eq=False)
class Node(Generic[K]):
    """A tree node owning at most two children."""

    value: K
    left: Optional["Node[K]"] = None
    right: Optional["Node[K]"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _unique_sorted(values: Iterable[K]) -> List[K]:
    """Return *values* sorted ascending with equal keys collapsed."""

    ordered = sorted(values)
    unique: List[K] = []
    for value in ordered:
        if unique and not unique[-1] < value:
            continue
        unique.append(value)
    return unique


def _require_callback(callback: Optional[Visitor]) -> Visitor:
    if callback is None or not callable(callback):
        raise MissingCallbackError()
    return callback


class OrderedTree(Generic[K]):
    """Binary search tree over unique keys with an explicit rebalance step."""

    __slots__ = ("root", "_size")

    def __init__(self, values: Iterable[K] = ()) -> None:
        unique = _unique_sorted(values)
        self.root: Optional[Node[K]] = self._build_range(unique, 0, len(unique))
        self._size = len(unique)
        logger.debug("Built tree with %d unique keys", self._size)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def build_tree(self, values: Iterable[K]) -> Optional[Node[K]]:
        """Return the root of a minimal-height tree holding *values*.

        Duplicates are dropped and the remaining keys sorted before the median
        split, so the resulting shape depends only on the key set.  The tree
        itself is left untouched; callers decide where to attach the result.
        """

        unique = _unique_sorted(values)
        return self._build_range(unique, 0, len(unique))

    def _build_range(
        self, values: Sequence[K], start: int, end: int
    ) -> Optional[Node[K]]:
        if start >= end:
            return None
        mid = start + (end - start) // 2
        node = Node(values[mid])
        node.left = self._build_range(values, start, mid)
        node.right = self._build_range(values, mid + 1, end)
        return node

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value: K) -> bool:
        """Insert *value* as a new leaf.

        Returns ``False`` without touching the tree when the key is already
        present.
        """

        parent: Optional[Node[K]] = None
        current = self.root
        while current is not None:
            if value < current.value:
                parent, current = current, current.left
            elif value > current.value:
                parent, current = current, current.right
            else:
                return False

        leaf = Node(value)
        if parent is None:
            self.root = leaf
        elif value < parent.value:
            parent.left = leaf
        else:
            parent.right = leaf
        self._size += 1
        return True

    def delete(self, value: K) -> bool:
        """Remove *value* from the tree, returning ``True`` if it was present.

        A node with two children takes over the key of its in-order successor
        (the leftmost node of its right subtree), which is then spliced out in
        its place.
        """

        parent: Optional[Node[K]] = None
        current = self.root
        while current is not None:
            if value < current.value:
                parent, current = current, current.left
            elif value > current.value:
                parent, current = current, current.right
            else:
                break
        if current is None:
            return False

        if current.left is not None and current.right is not None:
            successor_parent = current
            successor = current.right
            while successor.left is not None:
                successor_parent, successor = successor, successor.left
            current.value = successor.value
            parent, current = successor_parent, successor

        # At most one child remains at this point.
        child = current.left if current.left is not None else current.right
        if parent is None:
            self.root = child
        elif parent.left is current:
            parent.left = child
        else:
            parent.right = child
        self._size -= 1
        return True

    def rebalance(self) -> None:
        """Rebuild the tree into minimal height from its current keys."""

        if not logger.isEnabledFor(logging.DEBUG):
            self.root = self.build_tree(self.values())
            return

        before = self.height(self.root)
        self.root = self.build_tree(self.values())
        logger.debug(
            "Rebalanced %d keys: height %d -> %d",
            self._size,
            before,
            self.height(self.root),
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def find(self, value: K) -> Optional[Node[K]]:
        """Return the node holding *value*, or ``None`` when absent."""

        current = self.root
        while current is not None:
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return current
        return None

    @staticmethod
    def find_min_value(node: Optional[Node[K]]) -> K:
        """Return the smallest key in the subtree rooted at *node*."""

        if node is None:
            raise ValueError("find_min_value requires a non-empty subtree")
        current = node
        while current.left is not None:
            current = current.left
        return current.value

    def values(self) -> List[K]:
        """Return all keys in ascending order."""

        return [node.value for node in self.iter_in_order()]

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: K) -> bool:  # type: ignore[override]
        return self.find(value) is not None

    def __iter__(self) -> Iterator[K]:
        return (node.value for node in self.iter_in_order())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.values()!r})"

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def iter_level_order(self) -> Iterator[Node[K]]:
        """Yield nodes breadth-first, left child before right child."""

        if self.root is None:
            return
        queue: Deque[Node[K]] = deque([self.root])
        while queue:
            node = queue.popleft()
            yield node
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)

    def iter_in_order(self) -> Iterator[Node[K]]:
        """Yield nodes with ascending keys."""

        stack: List[Node[K]] = []
        current = self.root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            node = stack.pop()
            yield node
            current = node.right

    def iter_pre_order(self) -> Iterator[Node[K]]:
        """Yield each node before its left and then right subtree."""

        stack: List[Node[K]] = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def iter_post_order(self) -> Iterator[Node[K]]:
        """Yield each node after its left and then right subtree."""

        return _post_order(self.root)

    def level_order(self, callback: Optional[Visitor] = None) -> None:
        visit = _require_callback(callback)
        for node in self.iter_level_order():
            visit(node)

    def in_order(self, callback: Optional[Visitor] = None) -> None:
        visit = _require_callback(callback)
        for node in self.iter_in_order():
            visit(node)

    def pre_order(self, callback: Optional[Visitor] = None) -> None:
        visit = _require_callback(callback)
        for node in self.iter_pre_order():
            visit(node)

    def post_order(self, callback: Optional[Visitor] = None) -> None:
        visit = _require_callback(callback)
        for node in self.iter_post_order():
            visit(node)

    # ------------------------------------------------------------------
    # Shape queries
    # ------------------------------------------------------------------
    def height(self, node: Optional[Node[K]]) -> int:
        """Return the edge count of the longest downward path from *node*.

        An empty subtree has height ``-1`` so a lone leaf has height ``0``.
        """

        if node is None:
            return -1
        heights: Dict[Optional[Node[K]], int] = {}
        for current in _post_order(node):
            heights[current] = (
                max(heights.pop(current.left, -1), heights.pop(current.right, -1)) + 1
            )
        return heights[node]

    def depth(
        self,
        node: Optional[Node[K]],
        start: Optional[Node[K]] = _ROOT,
        accumulated: int = 0,
    ) -> int:
        """Return the number of edges between *start* and *node*.

        The search follows key comparisons from *start* (the root by default)
        and only matches on identity, so a node that is not linked into the
        tree yields ``-1`` even if a live node shares its key.
        """

        current = self.root if start is _ROOT else start
        if node is None:
            return -1
        level = accumulated
        while current is not None:
            if current is node:
                return level
            current = current.left if node.value < current.value else current.right
            level += 1
        return -1

    def is_balanced(self, node: Optional[Node[K]] = _ROOT) -> bool:
        """Return ``True`` when every subtree's heights differ by at most one.

        Stops at the first node whose children differ by more than one level.
        """

        subtree = self.root if node is _ROOT else node
        heights: Dict[Optional[Node[K]], int] = {}
        for current in _post_order(subtree):
            left = heights.pop(current.left, -1)
            right = heights.pop(current.right, -1)
            if abs(left - right) > 1:
                return False
            heights[current] = max(left, right) + 1
        return True


def _post_order(root: Optional[Node[K]]) -> Iterator[Node[K]]:
    if root is None:
        return
    stack: List[Tuple[Node[K], bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))


__all__ = [
    "MissingCallbackError",
    "Node",
    "OrderedTree",
]
