# src/bptree_map/db/bplustree.py
from typing import Optional

from bptree_map.comparators import Comparator, natural_order
from bptree_map.config import DEFAULT_ORDER, validate_order
from bptree_map.db.node import BPlusTreeNode


class BPlusTree:
    """
    Agregado del árbol: raíz (None si está vacío), orden m y comparador.
    Un nodo guarda como máximo m - 1 claves; al llegar a m se divide (ver db/split.py).
    """

    def __init__(self, order: int = DEFAULT_ORDER, comparator: Optional[Comparator] = None):
        self._order = validate_order(order)
        self.comparator: Comparator = comparator if comparator is not None else natural_order
        self.root: Optional[BPlusTreeNode] = None

    @property
    def order(self) -> int:
        return self._order

    def set_root(self, root: Optional[BPlusTreeNode]) -> None:
        if root is not None:
            root.parent = None
        self.root = root

    def is_empty(self) -> bool:
        return self.root is None

    def height(self) -> int:
        """Número de niveles desde la raíz hasta las hojas (0 si está vacío)."""
        levels = 0
        node = self.root
        while node is not None:
            levels += 1
            node = None if node.is_leaf else node.children[0]
        return levels

    def to_networkx(self):
        """
        Utility to create a networkx DiGraph from this tree.
        Nodes are numbered in breadth-first order and carry `keys`, `is_leaf` and `depth`;
        edges carry kind="child" (parent -> child) or kind="next" (leaf chain).
        """
        import networkx as nx
        G = nx.DiGraph()
        if self.root is None:
            return G
        ids = {}
        level = [self.root]
        depth = 0
        while level:
            nxt_level = []
            for node in level:
                ids[id(node)] = len(ids)
                G.add_node(ids[id(node)], keys=list(node.keys), is_leaf=node.is_leaf, depth=depth)
                nxt_level.extend(node.children)
            level = nxt_level
            depth += 1

        level = [self.root]
        while level:
            nxt_level = []
            for node in level:
                for child in node.children:
                    G.add_edge(ids[id(node)], ids[id(child)], kind="child")
                if node.is_leaf and node.next is not None:
                    G.add_edge(ids[id(node)], ids[id(node.next)], kind="next")
                nxt_level.extend(node.children)
            level = nxt_level
        return G
