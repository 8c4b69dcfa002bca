# src/bptree_map/db/split.py
"""
Inserción y división (split) de nodos del B+ Tree.

insert(tree, key, value) devuelve True si la clave es nueva y False si solo se sobreescribió el valor.
Todas las comparaciones ocurren antes de la primera escritura: si el comparador falla, el árbol queda intacto.
"""
import logging
from typing import Any

from .bplustree import BPlusTree
from .node import BPlusTreeNode
from .search import find_in_leaf

logger = logging.getLogger(__name__)


def insert(tree: BPlusTree, key: Any, value: Any) -> bool:
    if tree.root is None:
        root = BPlusTreeNode(leaf=True)
        root.keys.append(key)
        root.values.append(value)
        tree.set_root(root)
        return True

    leaf, idx = find_in_leaf(tree, key)
    if idx >= 0:
        leaf.set_value_for_key(key, value, tree.comparator, index=idx)
        return False

    pos = leaf.insert_key_ordered(key, tree.comparator)
    leaf.set_value_for_key(key, value, tree.comparator, index=pos)
    if leaf.is_full(tree.order):
        split(tree, leaf)
    return True


def split(tree: BPlusTree, node: BPlusTreeNode) -> None:
    """
    Divide un nodo que llegó a `order` claves.
    El propio nodo queda como mitad izquierda (así el `next` de la hoja anterior sigue siendo válido)
    y se crea un nodo nuevo para la mitad derecha. El separador sube al padre;
    si no hay padre se crea una raíz nueva y el árbol crece un nivel.
    """
    if len(node.keys) != tree.order:
        raise AssertionError("split called on a node that is not full")
    h = tree.order // 2
    right = BPlusTreeNode(leaf=node.is_leaf)
    separator = node.keys[h]

    if node.is_leaf:
        # en hojas el separador se copia: sigue siendo right.keys[0]
        right.keys = node.keys[h:]
        right.values = node.values[h:]
        node.keys = node.keys[:h]
        node.values = node.values[:h]
        right.next = node.next
        node.next = right
        logger.debug(f"leaf split at {separator!r}: {len(node.keys)} | {len(right.keys)} keys")
    else:
        # en internos el separador se consume; los hijos se reparten h+1 | resto
        right.keys = node.keys[h + 1:]
        right.children = node.children[h + 1:]
        node.keys = node.keys[:h]
        node.children = node.children[:h + 1]
        for child in right.children:
            child.parent = right
        logger.debug(f"internal split at {separator!r}: {len(node.children)} | {len(right.children)} children")

    parent = node.parent
    if parent is None:
        new_root = BPlusTreeNode(leaf=False)
        new_root.keys = [separator]
        new_root.children = [node, right]
        tree.set_root(new_root)
        node.parent = new_root
        right.parent = new_root
        logger.debug(f"root split, tree height is now {tree.height()}")
        return

    _insert_in_parent(tree, parent, node, separator, right)


def _insert_in_parent(tree: BPlusTree, parent: BPlusTreeNode, left: BPlusTreeNode,
                      separator: Any, right: BPlusTreeNode) -> None:
    for i, c in enumerate(parent.children):
        if c is left:
            pos = i
            break
    else:
        raise AssertionError("split node is not among its parent's children")

    parent.is_leaf = False
    parent.keys.insert(pos, separator)
    parent.children.insert(pos + 1, right)
    right.parent = parent
    if parent.is_full(tree.order):
        split(tree, parent)
