"""In-memory tree adapter.

Builds a tree from a mapping of file paths to contents, which is handy for
tests and for callers that already hold the tree data. Directories are
implied by the paths; children keep the order in which they first appear.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..core import EntryKind, TreeAdapter, TreeNode, join_path
from ..errors import ContentLoadError


class MemoryNode(TreeNode):
    """Node of an in-memory tree."""

    def __init__(self, name: str, path: str, kind: EntryKind,
                 parent: Optional["MemoryNode"] = None,
                 content: Optional[bytes] = None):
        self.name = name
        self.path = path
        self.kind = kind
        self.parent = parent
        self.content = content
        self.children: List["MemoryNode"] = []

    def metadata(self) -> Dict[str, Any]:
        metadata = {
            'name': self.name,
            'path': self.path,
            'type': self.kind.value,
        }
        if self.content is not None:
            metadata['size'] = len(self.content)
        return metadata


class MemoryTreeAdapter(TreeAdapter):
    """Adapter over a tree held in memory."""

    def __init__(self, root: Optional[MemoryNode] = None):
        self.root = root or MemoryNode("", "", EntryKind.DIRECTORY)

    @classmethod
    def from_paths(cls, files: Mapping[str, Optional[bytes]]) -> "MemoryTreeAdapter":
        """Build a tree from file paths.

        Args:
            files: Maps slash-separated file paths to their content. A value
                of None makes the file unreadable. A path ending in '/'
                creates an empty directory.

        Example:
            >>> adapter = MemoryTreeAdapter.from_paths({
            ...     "2019/05/12-deep-09:30:00/Dive": b"duration 40:00 min",
            ... })
        """
        adapter = cls()
        for path, content in files.items():
            if path.endswith("/"):
                adapter.add_directory(path.rstrip("/"))
            else:
                adapter.add_file(path, content)
        return adapter

    def add_directory(self, path: str) -> MemoryNode:
        """Create the directory at path and any missing ancestors."""
        node = self.root
        for name in filter(None, path.split("/")):
            child = self._find_child(node, name)
            if child is None:
                child = MemoryNode(name, join_path(node.path, name), EntryKind.DIRECTORY, parent=node)
                node.children.append(child)
            elif not child.is_directory():
                raise ValueError(f"{child.path} is a file, not a directory")
            node = child
        return node

    def add_file(self, path: str, content: Optional[bytes]) -> MemoryNode:
        parent_path, _, name = path.rpartition("/")
        if not name:
            raise ValueError(f"Invalid file path: {path!r}")
        parent = self.add_directory(parent_path)
        if self._find_child(parent, name) is not None:
            raise ValueError(f"Duplicate entry: {path!r}")
        node = MemoryNode(name, join_path(parent.path, name), EntryKind.FILE,
                          parent=parent, content=content)
        parent.children.append(node)
        return node

    @staticmethod
    def _find_child(node: MemoryNode, name: str) -> Optional[MemoryNode]:
        for child in node.children:
            if child.name == name:
                return child
        return None

    def create_root_node(self) -> MemoryNode:
        return self.root

    def get_children(self, node: MemoryNode) -> Iterator[MemoryNode]:
        return iter(node.children)

    def get_parent(self, node: MemoryNode) -> Optional[MemoryNode]:
        return node.parent

    def supports_parent_lookup(self) -> bool:
        return True

    def read_content(self, node: MemoryNode) -> bytes:
        if node.is_directory():
            raise ContentLoadError(f"{node.path} is a directory", path=node.path)
        if node.content is None:
            raise ContentLoadError(f"No content for {node.path}", path=node.path)
        return node.content
