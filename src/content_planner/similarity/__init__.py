"""Structural similarity between extracted subgraphs."""

from .tree import CanonicalTree, TreeNode
from .tree_edit import TreeEditSimilarity, tree_edit_distance

__all__ = ["CanonicalTree", "TreeEditSimilarity", "TreeNode", "tree_edit_distance"]
