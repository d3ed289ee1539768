"""Ordered tree view of an extracted subgraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

import networkx as nx

from ..structures import Subgraph

ROOT_LABEL = "root"
ROOT_ROLE = "root"


@dataclass
class TreeNode:
    label: str
    role: str
    vertex: Optional[str]
    parent: int = -1
    children: List[int] = field(default_factory=list)


class CanonicalTree:
    """Nodes of an ordered tree stored in a flat arena.

    Node ``0`` is the root. Vertices reached through several incoming edges
    appear once per edge. Only the first copy in preorder carries the
    vertex's own subtree, so a tree never has more nodes than the subgraph
    has edges plus roots (and the artificial root).
    """

    def __init__(self, nodes: Optional[List[TreeNode]] = None) -> None:
        self.nodes: List[TreeNode] = nodes or []

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, label: str, role: str, vertex: Optional[str], parent: int = -1) -> int:
        index = len(self.nodes)
        self.nodes.append(TreeNode(label, role, vertex, parent))
        if parent >= 0:
            self.nodes[parent].children.append(index)
        return index

    def postorder(self) -> List[int]:
        if not self.nodes:
            return []
        order: List[int] = []
        stack: List[Tuple[int, bool]] = [(0, False)]
        while stack:
            index, expanded = stack.pop()
            if expanded:
                order.append(index)
                continue
            stack.append((index, True))
            for child in reversed(self.nodes[index].children):
                stack.append((child, False))
        return order

    def labels(self) -> List[str]:
        return [self.nodes[i].label for i in self.postorder()]

    @classmethod
    def from_subgraph(cls, subgraph: Subgraph) -> "CanonicalTree":
        view = subgraph.view()
        base = subgraph.base

        def label(vertex: str) -> str:
            meaning = base.meaning(vertex)
            return meaning if meaning is not None else vertex

        children: Dict[str, List[Tuple[str, str, str]]] = {}
        for vertex in view.nodes:
            outgoing = [(data["role"], label(target), target) for _, target, data in view.out_edges(vertex, data=True)]
            children[vertex] = sorted(outgoing)

        tree = cls()
        vertices = sorted(view.nodes)
        if not vertices:
            return tree
        roots = [vertex for vertex in vertices if view.in_degree(vertex) == 0]
        reached = set(roots)
        for root in roots:
            reached |= nx.descendants(view, root)
        # purely cyclic components have no in-degree-0 vertex
        for vertex in vertices:
            if vertex not in reached:
                roots.append(vertex)
                reached |= {vertex} | nx.descendants(view, vertex)
        joined = len(roots) != 1 or view.in_degree(roots[0]) != 0
        if joined:
            tree.add(ROOT_LABEL, ROOT_ROLE, None)

        expanded: set = set()

        def unfold(start: str) -> None:
            parent = 0 if joined else -1
            first = tree.add(label(start), ROOT_ROLE, start, parent)
            stack: List[Tuple[int, str, FrozenSet[str]]] = [(first, start, frozenset([start]))]
            while stack:
                index, vertex, path = stack.pop()
                # later copies of a vertex stay leaves
                if vertex in expanded:
                    continue
                expanded.add(vertex)
                added: List[Tuple[int, str, FrozenSet[str]]] = []
                for role, _, target in children[vertex]:
                    if target in path:
                        continue
                    child = tree.add(label(target), role, target, index)
                    added.append((child, target, path | {target}))
                stack.extend(reversed(added))

        for root in roots:
            unfold(root)
        return tree
