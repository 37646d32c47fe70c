"""Core tree abstractions: nodes, adapters and the traverser."""

from .node import TreeNode, EntryKind, join_path
from .adapter import TreeAdapter
from .traverser import TreeTraverser, PreOrderTraverser, Visitor

__all__ = [
    'TreeNode',
    'EntryKind',
    'join_path',
    'TreeAdapter',
    'TreeTraverser',
    'PreOrderTraverser',
    'Visitor',
]
