# src/bptree_map/comparators.py
"""
Comparadores estilo `cmp`: f(a, b) -> negativo si a < b, 0 si son iguales, positivo si a > b.
El mapa usa el comparador tanto para ordenar como para decidir igualdad de claves.
"""
from typing import Any, Callable

Comparator = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    """Orden natural de Python (usa < y >)."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def reverse_order(a: Any, b: Any) -> int:
    return natural_order(b, a)


def by_key(func: Callable[[Any], Any]) -> Comparator:
    """
    Construye un comparador que ordena por func(clave).
    Ejemplo: by_key(str.lower) -> claves insensibles a mayúsculas.
    """
    def compare(a: Any, b: Any) -> int:
        return natural_order(func(a), func(b))
    return compare
