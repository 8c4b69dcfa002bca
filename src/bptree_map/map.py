# src/bptree_map/map.py
"""
BPlusTreeMap: mapa ordenado por comparador sobre un B+ Tree en memoria.

- put / get / contains_key en O(log n)
- key_set / values / entry_set en orden ascendente de claves (recorriendo la cadena de hojas)
- remove, put_all y contains_value NO están soportados: lanzan UnsupportedOperationError

No es thread-safe: si varios hilos lo comparten, quien lo use debe serializar put/clear con su propio lock.
"""
import logging
from collections import namedtuple
from collections.abc import Set
from typing import Any, Iterable, Iterator, List, Optional

from bptree_map.comparators import Comparator
from bptree_map.config import DEFAULT_ORDER
from bptree_map.db.bplustree import BPlusTree
from bptree_map.db.consistency import check_consistency
from bptree_map.db.search import find_in_leaf
from bptree_map.db.split import insert
from bptree_map.db.traversal import iter_entries, iter_keys, iter_values
from bptree_map.errors import NoSuchKeyError, UnsupportedOperationError

logger = logging.getLogger(__name__)

Entry = namedtuple("Entry", ["key", "value"])


def _find(items: List[Any], key: Any, comparator: Comparator) -> int:
    """Búsqueda binaria en una lista ya ordenada por `comparator`; -1 si no está."""
    lo, hi = 0, len(items) - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        c = comparator(items[mid], key)
        if c == 0:
            return mid
        if c < 0:
            lo = mid + 1
        else:
            hi = mid - 1
    return -1


class _ComparatorSet(Set):
    """
    Base de KeySet y EntrySet: igualdad e inclusión usan el comparador del mapa,
    no el == de los elementos del otro conjunto.
    """

    def _index(self, item) -> int:
        raise NotImplementedError

    def __contains__(self, item):
        try:
            return self._index(item) >= 0
        except TypeError:
            # clave de otro tipo que el comparador no sabe comparar
            return False

    def _matched(self, other) -> int:
        # cuántos elementos distintos de self aparecen en other
        seen = set()
        for item in other:
            try:
                idx = self._index(item)
            except TypeError:
                continue
            if idx >= 0:
                seen.add(idx)
        return len(seen)

    def __le__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self._matched(other) == len(self)

    def __lt__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return len(self) < len(other) and self.__le__(other)

    def __ge__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return all(item in self for item in other)

    def __gt__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return len(self) > len(other) and self.__ge__(other)

    def __eq__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return len(self) == len(other) and self.__ge__(other)

    __hash__ = None

    @classmethod
    def _from_iterable(cls, it):
        # &, |, - devuelven un set normal
        return set(it)


class KeySet(_ComparatorSet):
    """
    Conjunto ordenado de claves (copia, no vista viva).
    La pertenencia usa el comparador del mapa, así dos claves que comparan iguales son la misma.
    """

    def __init__(self, keys: Iterable[Any], comparator: Comparator):
        self._keys = list(keys)
        self._comparator = comparator

    def _index(self, key) -> int:
        return _find(self._keys, key, self._comparator)

    def __iter__(self):
        return iter(self._keys)

    def __len__(self):
        return len(self._keys)

    def __repr__(self):
        return f"KeySet({self._keys!r})"


class EntrySet(_ComparatorSet):
    """Conjunto ordenado de Entry(key, value); una entrada pertenece si su clave está y el valor es ==."""

    def __init__(self, entries: Iterable[Entry], comparator: Comparator):
        self._entries = [Entry(k, v) for k, v in entries]
        self._keys = [e.key for e in self._entries]
        self._comparator = comparator

    def _index(self, entry) -> int:
        if not isinstance(entry, tuple) or len(entry) != 2:
            return -1
        key, value = entry
        idx = _find(self._keys, key, self._comparator)
        if idx >= 0 and self._entries[idx].value == value:
            return idx
        return -1

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"EntrySet({self._entries!r})"


class BPlusTreeMap:
    """
    Mapa ordenado. API principal: put(k, v), get(k), contains_key(k), size(), clear(),
    key_set(), values(), entry_set(). También admite m[k], m[k] = v, `k in m`, len(m), iter(m).
    """

    def __init__(self, comparator: Optional[Comparator] = None, order: int = DEFAULT_ORDER):
        self._tree = BPlusTree(order=order, comparator=comparator)
        self._size = 0

    @property
    def order(self) -> int:
        return self._tree.order

    @property
    def comparator(self) -> Comparator:
        return self._tree.comparator

    @property
    def tree(self) -> BPlusTree:
        return self._tree

    # consultas

    def size(self) -> int:
        """Número de pares clave-valor (no la altura del árbol, ver height())."""
        return self._size

    def height(self) -> int:
        return self._tree.height()

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def contains_key(self, key: Any) -> bool:
        if self.is_empty():
            return False
        _, idx = find_in_leaf(self._tree, key)
        return idx >= 0

    def get(self, key: Any) -> Any:
        if self.is_empty():
            raise NoSuchKeyError(key)
        leaf, idx = find_in_leaf(self._tree, key)
        if idx < 0:
            raise NoSuchKeyError(key)
        return leaf.values[idx]

    def get_or_default(self, key: Any, default: Any = None) -> Any:
        try:
            return self.get(key)
        except NoSuchKeyError:
            return default

    # modificación

    def put(self, key: Any, value: Any) -> Any:
        """Inserta o sobreescribe; devuelve el valor ahora asociado a `key`."""
        if insert(self._tree, key, value):
            self._size += 1
        return value

    def clear(self) -> None:
        if not self.is_empty():
            logger.debug(f"clearing map with {self._size} entries")
        self._tree = BPlusTree(order=self._tree.order, comparator=self._tree.comparator)
        self._size = 0

    # colecciones (materializan el recorrido completo)

    def key_set(self) -> KeySet:
        return KeySet(iter_keys(self._tree), self.comparator)

    def values(self) -> List[Any]:
        return list(iter_values(self._tree))

    def entry_set(self) -> EntrySet:
        return EntrySet(iter_entries(self._tree), self.comparator)

    keys = key_set
    items = entry_set

    # operaciones no soportadas

    def contains_value(self, value: Any) -> bool:
        raise UnsupportedOperationError("contains_value", "Please query using a key.")

    def remove(self, key: Any) -> Any:
        raise UnsupportedOperationError("remove", "Key removal is not implemented.")

    def put_all(self, mapping: Any) -> None:
        raise UnsupportedOperationError("put_all", "Insert entries one by one with put().")

    def update(self, *args, **kwargs) -> None:
        raise UnsupportedOperationError("put_all", "Insert entries one by one with put().")

    def pop(self, key: Any, *default) -> Any:
        raise UnsupportedOperationError("remove", "Key removal is not implemented.")

    def popitem(self) -> Entry:
        raise UnsupportedOperationError("remove", "Key removal is not implemented.")

    # diagnóstico

    def check_consistency(self) -> int:
        return check_consistency(self._tree, expected_size=self._size)

    def stats(self) -> dict:
        from bptree_map.utils import tree_stats
        return tree_stats(self._tree)

    def to_networkx(self):
        return self._tree.to_networkx()

    # protocolo de mapping

    def __len__(self):
        return self._size

    def __contains__(self, key):
        return self.contains_key(key)

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.put(key, value)

    def __delitem__(self, key):
        self.remove(key)

    def __iter__(self) -> Iterator[Any]:
        return iter_keys(self._tree)

    def __repr__(self):
        body = ", ".join(f"{k!r}: {v!r}" for k, v in iter_entries(self._tree))
        return f"BPlusTreeMap({{{body}}})"
