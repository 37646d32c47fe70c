"""TreeNode abstraction for divetreelib.

A TreeNode is a transient description of one entry in a tree store: its name,
its slash-joined path from the tree root, and whether it is a directory.
Reading content is delegated to the TreeAdapter, so a node never holds data
it was not asked for.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict


class EntryKind(Enum):
    """Kind of a tree entry."""
    DIRECTORY = "directory"
    FILE = "file"


class TreeNode(ABC):
    """Abstract base class for entries of a tree store.

    Subclasses provide ``name``, ``path`` and ``kind``. Everything else is
    derived from those three.
    """

    name: str
    path: str
    kind: EntryKind

    def identifier(self) -> str:
        """Return the path of this entry, unique within one tree.

        The path is used rather than a content hash because identical
        subtrees share a hash in content-addressed stores.
        """
        return self.path

    def is_leaf(self) -> bool:
        """Files are leaves, directories are not."""
        return self.kind is EntryKind.FILE

    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """Return lightweight metadata about this entry.

        Common fields:
        - name: entry name
        - path: path from the tree root
        - type: 'directory' or 'file'

        Returns:
            Dict[str, Any]: Metadata dictionary
        """
        pass

    def __str__(self) -> str:
        return self.identifier()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path!r}, kind={self.kind.value})"

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if they have the same identifier."""
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        return hash(self.identifier())


def join_path(parent: str, name: str) -> str:
    """Join a parent path and an entry name with a single slash."""
    return f"{parent}/{name}" if parent else name
