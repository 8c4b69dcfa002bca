# src/bptree_map/db/consistency.py
"""
Chequeo de consistencia del B+ Tree (útil en tests y depuración).
check_consistency recorre el árbol completo y lanza InvariantViolationError en el primer problema.
"""
from typing import Any, List, Optional

from bptree_map.errors import InvariantViolationError
from .bplustree import BPlusTree
from .node import BPlusTreeNode
from .traversal import iter_leaves

_UNBOUNDED = object()


def check_consistency(tree: BPlusTree, expected_size: Optional[int] = None) -> int:
    """
    Verifica:
      - todas las hojas a la misma profundidad
      - como máximo order - 1 claves por nodo
      - claves estrictamente crecientes dentro de cada nodo
      - rutas de los nodos internos (hijos dentro de [keys[i-1], keys[i]))
      - referencias parent coherentes con children
      - la cadena de hojas recorre todas las hojas, en orden, sin repetir
    Devuelve el número de entradas encontradas.
    """
    if tree.root is None:
        if expected_size not in (None, 0):
            raise InvariantViolationError("size", f"empty tree but expected {expected_size} entries")
        return 0
    if tree.root.parent is not None:
        raise InvariantViolationError("root parent", "root has a parent reference")

    leaves: List[BPlusTreeNode] = []
    leaf_depths = set()
    _check_node(tree, tree.root, _UNBOUNDED, _UNBOUNDED, 0, leaves, leaf_depths)
    if len(leaf_depths) != 1:
        raise InvariantViolationError("balanced depth", f"leaves found at depths {sorted(leaf_depths)}")

    chain = list(iter_leaves(tree))
    if len(chain) != len(leaves) or any(a is not b for a, b in zip(chain, leaves)):
        raise InvariantViolationError(
            "leaf chain", f"chain visits {len(chain)} leaves, tree holds {len(leaves)}")

    cmp = tree.comparator
    count = 0
    prev = _UNBOUNDED
    for leaf in chain:
        for k in leaf.keys:
            if prev is not _UNBOUNDED and cmp(prev, k) >= 0:
                raise InvariantViolationError("leaf chain order", f"{prev!r} is not before {k!r}")
            prev = k
            count += 1

    if expected_size is not None and count != expected_size:
        raise InvariantViolationError("size", f"found {count} entries, expected {expected_size}")
    return count


def _check_node(tree: BPlusTree, node: BPlusTreeNode, low: Any, high: Any, depth: int,
                leaves: List[BPlusTreeNode], leaf_depths: set) -> None:
    cmp = tree.comparator
    if not node.keys:
        raise InvariantViolationError("non-empty node", f"{node!r} holds no keys")
    if len(node.keys) > tree.order - 1:
        raise InvariantViolationError(
            "node capacity", f"{node!r} holds {len(node.keys)} keys (max {tree.order - 1})")
    for a, b in zip(node.keys, node.keys[1:]):
        if cmp(a, b) >= 0:
            raise InvariantViolationError("key order", f"{a!r} is not before {b!r} in {node!r}")
    # rango heredado del padre: low <= k < high
    if low is not _UNBOUNDED and cmp(node.keys[0], low) < 0:
        raise InvariantViolationError("routing", f"{node.keys[0]!r} is below separator {low!r}")
    if high is not _UNBOUNDED and cmp(node.keys[-1], high) >= 0:
        raise InvariantViolationError("routing", f"{node.keys[-1]!r} is not below separator {high!r}")

    if node.is_leaf:
        if node.children:
            raise InvariantViolationError("leaf shape", f"{node!r} has children")
        if len(node.values) != len(node.keys):
            raise InvariantViolationError(
                "leaf shape", f"{node!r} has {len(node.values)} values for {len(node.keys)} keys")
        leaves.append(node)
        leaf_depths.add(depth)
        return

    if len(node.children) != len(node.keys) + 1:
        raise InvariantViolationError(
            "internal shape", f"{node!r} has {len(node.children)} children for {len(node.keys)} keys")
    bounds = [low] + list(node.keys) + [high]
    for i, child in enumerate(node.children):
        if child.parent is not node:
            raise InvariantViolationError("parent link", f"{child!r} does not point back to {node!r}")
        _check_node(tree, child, bounds[i], bounds[i + 1], depth + 1, leaves, leaf_depths)
