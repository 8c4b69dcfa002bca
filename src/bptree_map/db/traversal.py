# src/bptree_map/db/traversal.py
"""
Recorrido ordenado por la cadena de hojas (next).
Todos los iteradores son perezosos y de un solo uso; un árbol vacío no produce nada.
"""
from typing import Any, Iterator, Optional, Tuple

from .bplustree import BPlusTree
from .node import BPlusTreeNode


def leftmost_leaf(tree: BPlusTree) -> Optional[BPlusTreeNode]:
    node = tree.root
    if node is None:
        return None
    while not node.is_leaf:
        node = node.children[0]
    return node


def iter_leaves(tree: BPlusTree) -> Iterator[BPlusTreeNode]:
    node = leftmost_leaf(tree)
    while node is not None:
        yield node
        node = node.next


def iter_entries(tree: BPlusTree) -> Iterator[Tuple[Any, Any]]:
    for leaf in iter_leaves(tree):
        yield from zip(leaf.keys, leaf.values)


def iter_keys(tree: BPlusTree) -> Iterator[Any]:
    for leaf in iter_leaves(tree):
        yield from leaf.keys


def iter_values(tree: BPlusTree) -> Iterator[Any]:
    for leaf in iter_leaves(tree):
        yield from leaf.values
