"""Tree traversal for divetreelib.

The traverser walks a tree through a TreeAdapter and threads a context value
from each directory down to its children. The visitor decides, per entry,
which context the children see and whether a directory is entered at all.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar
from .node import TreeNode
from .adapter import TreeAdapter


C = TypeVar("C")

# visitor(node, context) -> child context, or None to prune a directory
Visitor = Callable[[TreeNode, C], Optional[C]]


class TreeTraverser(ABC, Generic[C]):
    """Abstract base class for context-threading traversal strategies."""

    def __init__(self,
                 adapter: TreeAdapter,
                 on_error: Optional[Callable[[TreeNode, Exception], None]] = None):
        """Initialize traverser with an adapter.

        Args:
            adapter: TreeAdapter for navigating the tree
            on_error: Called when the children of a directory cannot be
                listed; the directory is then treated as empty. Without a
                handler the error propagates.
        """
        self.adapter = adapter
        self.on_error = on_error
        self.nodes_visited = 0

    def _list_children(self, node: TreeNode) -> List[TreeNode]:
        try:
            return list(self.adapter.get_children(node))
        except Exception as e:
            if self.on_error is None:
                raise
            self.on_error(node, e)
            return []

    @abstractmethod
    def walk(self,
             root: TreeNode,
             visitor: "Visitor[C]",
             context: C,
             max_depth: Optional[int] = None) -> int:
        """Walk the tree below root, calling visitor for every entry.

        The root itself is not visited; its children receive ``context``.

        Args:
            root: Directory node to start from
            visitor: Callback returning the child context for a directory,
                or None to skip it. Results for files are ignored.
            context: Context handed to the root's children
            max_depth: Maximum depth to visit (None = unlimited)

        Returns:
            Number of entries visited
        """
        pass

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        """Check if children of a node at given depth should be explored."""
        if max_depth is None:
            return True
        return depth < max_depth


class PreOrderTraverser(TreeTraverser[C]):
    """Depth-first pre-order traversal.

    A directory is visited, and its child context computed, before any of
    its children. Siblings are visited in the order the adapter yields them.
    """

    def walk(self,
             root: TreeNode,
             visitor: "Visitor[C]",
             context: C,
             max_depth: Optional[int] = None) -> int:
        self.nodes_visited = 0

        def _walk_recursive(node: TreeNode, ctx: C, depth: int) -> None:
            for child in self._list_children(node):
                self.nodes_visited += 1
                child_ctx = visitor(child, ctx)
                if child.is_leaf() or child_ctx is None:
                    continue
                if self._should_explore(depth + 1, max_depth):
                    _walk_recursive(child, child_ctx, depth + 1)

        if self._should_explore(0, max_depth):
            _walk_recursive(root, context, 0)
        return self.nodes_visited
