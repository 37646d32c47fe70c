"""Tree adapters: git repositories and in-memory trees."""

from .git import GitRepository, GitTreeAdapter, GitTreeNode
from .memory import MemoryTreeAdapter, MemoryNode

__all__ = [
    'GitRepository',
    'GitTreeAdapter',
    'GitTreeNode',
    'MemoryTreeAdapter',
    'MemoryNode',
]
