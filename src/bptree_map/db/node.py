# src/bptree_map/db/node.py
import weakref
from typing import Any, List, Optional

from bptree_map.comparators import Comparator


class BPlusTreeNode:
    """
    Nodo de B+ Tree.
    - hoja: keys + values (listas paralelas) y enlace `next` a la hoja de la derecha
    - interno: keys (separadores) + children, con len(children) == len(keys) + 1
    `parent` y `next` son referencias débiles: los nodos solo pertenecen a su padre vía children.
    """
    __slots__ = ("is_leaf", "keys", "values", "children", "_parent", "_next", "__weakref__")

    def __init__(self, leaf: bool = True):
        self.is_leaf = leaf
        self.keys: List[Any] = []
        self.values: List[Any] = []
        self.children: List["BPlusTreeNode"] = []
        self._parent: Optional[weakref.ref] = None
        self._next: Optional[weakref.ref] = None

    @property
    def parent(self) -> Optional["BPlusTreeNode"]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional["BPlusTreeNode"]):
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def next(self) -> Optional["BPlusTreeNode"]:
        return self._next() if self._next is not None else None

    @next.setter
    def next(self, node: Optional["BPlusTreeNode"]):
        self._next = weakref.ref(node) if node is not None else None

    def insert_key_ordered(self, key: Any, comparator: Comparator) -> int:
        """
        Inserta `key` antes de la primera clave >= key (o al final).
        La clave no debe estar presente. Devuelve la posición usada.
        """
        idx = 0
        while idx < len(self.keys) and comparator(self.keys[idx], key) < 0:
            idx += 1
        self.keys.insert(idx, key)
        return idx

    def set_value_for_key(self, key: Any, value: Any, comparator: Comparator,
                          index: Optional[int] = None) -> None:
        """
        Asocia `value` a la posición de `key`. Si insert_key_ordered acaba de añadir la clave,
        values tiene un elemento menos que keys y el valor se inserta; si no, se sobreescribe.
        `index` evita volver a comparar cuando la posición ya se conoce.
        """
        idx = index if index is not None else self.index_of(key, comparator)
        if idx < 0:
            raise KeyError(key)
        if len(self.values) < len(self.keys):
            self.values.insert(idx, value)
        else:
            self.values[idx] = value

    def index_of(self, key: Any, comparator: Comparator) -> int:
        for i, k in enumerate(self.keys):
            c = comparator(k, key)
            if c == 0:
                return i
            if c > 0:
                break
        return -1

    def is_full(self, order: int) -> bool:
        return len(self.keys) >= order

    def __repr__(self):
        kind = "leaf" if self.is_leaf else "internal"
        return f"BPlusTreeNode({kind}, keys={self.keys!r})"
