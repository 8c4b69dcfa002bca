# src/bptree_map/db/search.py
"""
Búsqueda en el B+ Tree:
- child_index: qué hijo de un nodo interno cubre una clave
- locate_leaf: la hoja que contiene (o debería contener) una clave
- find_in_leaf: posición de la clave dentro de la hoja
"""
from typing import Any, Tuple

from bptree_map.errors import EmptyTreeError
from .bplustree import BPlusTree
from .node import BPlusTreeNode


def child_index(node: BPlusTreeNode, key: Any, comparator) -> int:
    """
    Índice i del hijo cuyo rango contiene `key`:
    claves < keys[0] van a children[0]; claves >= keys[-1] al último hijo;
    en otro caso se busca el par keys[i-1] <= key < keys[i].
    Empates con un separador van siempre a la derecha.
    """
    keys = node.keys
    if comparator(key, keys[0]) < 0:
        return 0
    last = len(keys) - 1
    if comparator(key, keys[last]) >= 0:
        return last + 1
    for i in range(1, last):
        if comparator(key, keys[i]) < 0:
            return i
    return last


def locate_leaf(tree: BPlusTree, key: Any) -> BPlusTreeNode:
    if tree.root is None:
        raise EmptyTreeError("locate_leaf called on an empty tree")
    node = tree.root
    while not node.is_leaf:
        node = node.children[child_index(node, key, tree.comparator)]
    return node


def find_in_leaf(tree: BPlusTree, key: Any) -> Tuple[BPlusTreeNode, int]:
    """Devuelve (hoja, índice) con índice -1 si la clave no está."""
    leaf = locate_leaf(tree, key)
    return leaf, leaf.index_of(key, tree.comparator)

