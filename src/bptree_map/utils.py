# src/bptree_map/utils.py
from typing import Any, Dict

import numpy as np

from bptree_map.db.bplustree import BPlusTree
from bptree_map.db.traversal import iter_leaves


def tree_stats(tree: BPlusTree) -> Dict[str, Any]:
    """
    Estadísticas estructurales del árbol:
      entries, height, nodes, leaves, internal_nodes, order,
      leaf_fill_mean / leaf_fill_min / leaf_fill_max (claves por hoja / (order - 1))
    """
    capacity = tree.order - 1
    leaf_sizes = np.array([len(leaf.keys) for leaf in iter_leaves(tree)], dtype=float)

    internal = 0
    level = [tree.root] if tree.root is not None else []
    while level and not level[0].is_leaf:
        internal += len(level)
        level = [c for node in level for c in node.children]

    if leaf_sizes.size:
        fill = leaf_sizes / capacity
        fill_mean, fill_min, fill_max = float(fill.mean()), float(fill.min()), float(fill.max())
    else:
        fill_mean = fill_min = fill_max = 0.0

    return {
        "entries": int(leaf_sizes.sum()),
        "height": tree.height(),
        "nodes": internal + int(leaf_sizes.size),
        "leaves": int(leaf_sizes.size),
        "internal_nodes": internal,
        "order": tree.order,
        "leaf_fill_mean": fill_mean,
        "leaf_fill_min": fill_min,
        "leaf_fill_max": fill_max,
    }
