"""TreeAdapter abstraction for divetreelib.

The TreeAdapter provides the navigation and content access for one kind of
tree store, decoupling the entry representation from the traversal and from
the dive loading logic built on top of it.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional
from .node import TreeNode


class TreeAdapter(ABC):
    """Abstract adapter for navigating a tree store.

    The loader only ever talks to the store through this interface, which
    lets the same walk run over a git repository or an in-memory tree.
    """

    @abstractmethod
    def create_root_node(self) -> TreeNode:
        """Return the root directory node of the tree."""
        pass

    @abstractmethod
    def get_children(self, node: TreeNode) -> Iterator[TreeNode]:
        """Get an iterator of child nodes for the given node.

        Children must be yielded in the store's own order so that a walk is
        reproducible. Files have no children.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child TreeNode instances
        """
        pass

    @abstractmethod
    def read_content(self, node: TreeNode) -> bytes:
        """Load the content of a file entry.

        Called lazily, only once the caller has decided it needs the payload.

        Args:
            node: A file node

        Returns:
            The raw bytes of the entry

        Raises:
            ContentLoadError: If the content cannot be loaded
        """
        pass

    def get_parent(self, node: TreeNode) -> Optional[TreeNode]:
        """Get the parent node of the given node.

        Tree stores addressed by content do not track parents; adapters that
        can answer cheaply override this.

        Returns:
            Parent TreeNode or None if unknown or node is root
        """
        return None

    def get_depth(self, node: TreeNode) -> int:
        """Depth of a node, root = 0, computed from its path."""
        if not node.path:
            return 0
        return node.path.count("/") + 1

    # Capability flags - adapters declare what they support

    def supports_parent_lookup(self) -> bool:
        """Check if get_parent returns real parents."""
        return False
